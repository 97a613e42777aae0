from __future__ import annotations

import random
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, Field, ValidationError, model_validator

from lift_scheduler.errors import InvalidConfiguration


class BuildingConfig(BaseModel):
    """Resolved building description: floors, cars and the initial queues."""

    floor_count: int = Field(ge=1)
    car_count: int = Field(default=1, ge=1)
    capacity_per_car: int = Field(ge=1)
    initial_requests: Dict[int, List[int]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_requests(self) -> "BuildingConfig":
        for floor, destinations in self.initial_requests.items():
            if not 0 <= floor < self.floor_count:
                raise ValueError(f"request floor {floor} outside 0..{self.floor_count - 1}")
            for destination in destinations:
                if not 0 <= destination < self.floor_count:
                    raise ValueError(
                        f"destination {destination} on floor {floor} outside "
                        f"0..{self.floor_count - 1}"
                    )
                if destination == floor:
                    raise ValueError(f"floor {floor} requests itself")
        return self

    @property
    def total_requests(self) -> int:
        return sum(len(d) for d in self.initial_requests.values())


def resolve_config(data: Union[BuildingConfig, Mapping[str, Any]]) -> BuildingConfig:
    """Validate a raw mapping into a :class:`BuildingConfig`.

    Validation problems surface as :class:`InvalidConfiguration`.
    """

    if isinstance(data, BuildingConfig):
        return data
    try:
        return BuildingConfig.model_validate(dict(data))
    except ValidationError as exc:
        raise InvalidConfiguration(str(exc)) from exc


def random_config(
    floor_count: int,
    capacity_per_car: int,
    car_count: int = 1,
    max_requests_per_floor: int = 5,
    random_seed: Optional[int] = None,
) -> BuildingConfig:
    """Generate a building with a random number of riders on each floor."""

    rng = random.Random(random_seed)
    requests: Dict[int, List[int]] = {}
    if floor_count > 1:
        for floor in range(floor_count):
            count = rng.randrange(max_requests_per_floor + 1)
            others = [f for f in range(floor_count) if f != floor]
            destinations = [rng.choice(others) for _ in range(count)]
            if destinations:
                requests[floor] = destinations
    return resolve_config(
        {
            "floor_count": floor_count,
            "car_count": car_count,
            "capacity_per_car": capacity_per_car,
            "initial_requests": requests,
        }
    )
