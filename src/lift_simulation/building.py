from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from lift_scheduler.errors import InvalidConfiguration
from lift_scheduler.interface import Action, BuildingView, Direction, Motion

from .config import BuildingConfig, resolve_config
from .elevator import CarState
from .floor import Floor, RequestQueue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepOutcome:
    """What applying one action did to one car."""

    car_index: int
    action: Action
    from_floor: int
    to_floor: int
    alighted: int = 0
    boarded: List[int] = field(default_factory=list)

    @property
    def moved(self) -> bool:
        return self.from_floor != self.to_floor


class BuildingState:
    """Container for floors and cars; the only place either is mutated."""

    def __init__(self, floors: Sequence[Floor], cars: Sequence[CarState], tick: int = 0) -> None:
        self.floors: List[Floor] = list(floors)
        self.cars: List[CarState] = list(cars)
        self.tick = tick
        self.validate()

    @classmethod
    def from_config(cls, config: BuildingConfig) -> "BuildingState":
        config = resolve_config(config)
        floors = [
            Floor(number, RequestQueue(config.initial_requests.get(number, ())))
            for number in range(config.floor_count)
        ]
        cars = [
            CarState(
                capacity=config.capacity_per_car,
                current_floor=i % config.floor_count,
                direction=Direction.UP if i % 2 == 0 else Direction.DOWN,
            )
            for i in range(config.car_count)
        ]
        return cls(floors, cars)

    @property
    def floor_count(self) -> int:
        return len(self.floors)

    @property
    def car_count(self) -> int:
        return len(self.cars)

    def validate(self) -> None:
        if not self.floors:
            raise InvalidConfiguration("building needs at least one floor")
        if not self.cars:
            raise InvalidConfiguration("building needs at least one car")
        for index, car in enumerate(self.cars):
            if car.capacity < 1:
                raise InvalidConfiguration(f"car {index} capacity must be >= 1")
            if not 0 <= car.current_floor < self.floor_count:
                raise InvalidConfiguration(
                    f"car {index} at floor {car.current_floor} outside the building"
                )
            if len(car.occupants) > car.capacity:
                raise InvalidConfiguration(f"car {index} is over capacity")
            for destination in car.occupants:
                self._check_floor(destination)
        for floor in self.floors:
            for destination in floor.requests:
                self._check_floor(destination)

    def car(self, car_index: int) -> CarState:
        if not 0 <= car_index < len(self.cars):
            raise InvalidConfiguration(
                f"car index {car_index} out of range for {len(self.cars)} cars"
            )
        return self.cars[car_index]

    def floor(self, floor_number: int) -> Floor:
        self._check_floor(floor_number)
        return self.floors[floor_number]

    def add_request(self, floor_number: int, destination: int) -> None:
        self._check_floor(destination)
        if destination == floor_number:
            raise InvalidConfiguration(f"floor {floor_number} requests itself")
        self.floor(floor_number).requests.enqueue(destination)

    def is_at_top(self, car_index: int) -> bool:
        return self.car(car_index).current_floor == self.floor_count - 1

    def is_at_bottom(self, car_index: int) -> bool:
        return self.car(car_index).current_floor == 0

    def move_up(self, car_index: int) -> None:
        if not self.is_at_top(car_index):
            self.cars[car_index].current_floor += 1

    def move_down(self, car_index: int) -> None:
        if not self.is_at_bottom(car_index):
            self.cars[car_index].current_floor -= 1

    def continue_in_direction(self, car_index: int) -> None:
        """Move one floor the way the car faces, turning around at the end of the shaft."""

        car = self.car(car_index)
        if car.direction is Direction.UP and self.is_at_top(car_index):
            car.direction = Direction.DOWN
        elif car.direction is Direction.DOWN and self.is_at_bottom(car_index):
            car.direction = Direction.UP
        if car.direction is Direction.UP:
            self.move_up(car_index)
        else:
            self.move_down(car_index)

    def stop_and_exchange(self, car_index: int, board: bool = True) -> StepOutcome:
        car = self.car(car_index)
        here = car.current_floor
        alighted = car.alight()
        boarded = self.floors[here].board_riders(car.available_capacity) if board else []
        car.board(boarded)
        return StepOutcome(
            car_index=car_index,
            action=Action(exchange=True, board=board),
            from_floor=here,
            to_floor=here,
            alighted=alighted,
            boarded=boarded,
        )

    def apply(self, car_index: int, action: Action) -> StepOutcome:
        """Carry out a policy's action for one car.

        The index is checked before anything changes; the action then runs as
        exchange, heading, motion.
        """

        car = self.car(car_index)
        start = car.current_floor
        alighted, boarded = 0, []
        if action.exchange:
            exchanged = self.stop_and_exchange(car_index, board=action.board)
            alighted, boarded = exchanged.alighted, exchanged.boarded
        if action.heading is not None:
            car.direction = action.heading
        if action.motion is Motion.UP:
            car.direction = Direction.UP
            self.move_up(car_index)
        elif action.motion is Motion.DOWN:
            car.direction = Direction.DOWN
            self.move_down(car_index)
        elif action.motion is Motion.CONTINUE:
            self.continue_in_direction(car_index)

        outcome = StepOutcome(
            car_index=car_index,
            action=action,
            from_floor=start,
            to_floor=car.current_floor,
            alighted=alighted,
            boarded=boarded,
        )
        logger.debug(
            "tick %d car %d: %s %d->%d (%s)",
            self.tick,
            car_index,
            action.motion.value,
            start,
            car.current_floor,
            action.reason or "-",
        )
        return outcome

    def advance_tick(self) -> int:
        self.tick += 1
        return self.tick

    def view(self) -> BuildingView:
        return BuildingView(
            tick=self.tick,
            waiting=tuple(tuple(floor.requests) for floor in self.floors),
            cars=tuple(car.snapshot(i) for i, car in enumerate(self.cars)),
        )

    def is_complete(self) -> bool:
        return all(not floor.has_waiting() for floor in self.floors)

    def count_pending(self) -> int:
        return sum(len(floor.requests) for floor in self.floors)

    def count_onboard(self) -> int:
        return sum(car.occupancy for car in self.cars)

    def count_delivered(self) -> int:
        return sum(car.delivered for car in self.cars)

    def positions(self) -> tuple:
        return tuple(car.current_floor for car in self.cars)

    def snapshot(self) -> dict:
        return {
            "tick": self.tick,
            "floors": [list(floor.requests) for floor in self.floors],
            "cars": [
                {
                    "index": index,
                    "floor": car.current_floor,
                    "direction": car.direction.name,
                    "capacity": car.capacity,
                    "occupants": list(car.occupants),
                    "delivered": car.delivered,
                }
                for index, car in enumerate(self.cars)
            ],
        }

    def _check_floor(self, floor_number: int) -> None:
        if not 0 <= floor_number < self.floor_count:
            raise InvalidConfiguration(
                f"floor {floor_number} out of range for {self.floor_count} floors"
            )

    def __repr__(self) -> str:
        return (
            f"BuildingState(floors={self.floor_count}, cars={self.car_count}, "
            f"tick={self.tick})"
        )
