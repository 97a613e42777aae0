"""
Shared pytest fixtures for the dispatch engine tests.
"""

from pathlib import Path
from typing import Dict, List, Optional

import pytest

from lift_scheduler import Direction
from lift_simulation import BuildingConfig, BuildingState, CarState, Floor, RequestQueue

SCENARIO_DIR = Path(__file__).parent.parent / "scenarios"


def make_building(
    floor_count: int,
    requests: Optional[Dict[int, List[int]]] = None,
    cars: Optional[List[CarState]] = None,
) -> BuildingState:
    """Build a BuildingState directly, bypassing config validation."""
    requests = requests or {}
    floors = [Floor(n, RequestQueue(requests.get(n, ()))) for n in range(floor_count)]
    return BuildingState(floors, cars or [CarState(capacity=4)])


@pytest.fixture
def scenario_dir() -> Path:
    return SCENARIO_DIR


@pytest.fixture
def scenario_a() -> BuildingState:
    """5 floors, one car of capacity 4 at floor 0 going up, floor 1 wants [3, 4]."""
    return BuildingState.from_config(
        BuildingConfig(floor_count=5, capacity_per_car=4, initial_requests={1: [3, 4]})
    )


@pytest.fixture
def two_car_building() -> BuildingState:
    """5 floors, two cars of capacity 2, riders waiting on floors 0 and 4."""
    return BuildingState.from_config(
        BuildingConfig(
            floor_count=5,
            car_count=2,
            capacity_per_car=2,
            initial_requests={0: [3], 4: [1]},
        )
    )


@pytest.fixture
def starving_building() -> BuildingState:
    """Car at floor 3 heading down with a rider for floor 0; floor 4 waits behind it."""
    car = CarState(capacity=4, current_floor=3, direction=Direction.DOWN, occupants=[0])
    return make_building(5, requests={4: [2]}, cars=[car])
