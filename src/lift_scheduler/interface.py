from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import List, Optional, Protocol, Tuple

from .errors import InvalidConfiguration


class Direction(IntEnum):
    """Travel direction of a car or a request; +1 for up, -1 for down."""

    UP = 1
    DOWN = -1

    @property
    def opposite(self) -> "Direction":
        return Direction.DOWN if self is Direction.UP else Direction.UP

    @classmethod
    def of_trip(cls, origin: int, destination: int) -> "Direction":
        return cls.UP if destination > origin else cls.DOWN

    @classmethod
    def toward(cls, here: int, target: int) -> "Direction":
        return cls.UP if target > here else cls.DOWN


class Motion(Enum):
    HOLD = "hold"
    UP = "up"
    DOWN = "down"
    CONTINUE = "continue"


@dataclass(frozen=True)
class CarSnapshot:
    """Lightweight view of a car for scheduling decisions."""

    index: int
    current_floor: int
    direction: Direction
    capacity: int
    occupants: Tuple[int, ...] = ()

    @property
    def load(self) -> int:
        return len(self.occupants)

    @property
    def available_capacity(self) -> int:
        return max(0, self.capacity - self.load)

    def alighting_at(self, floor: int) -> int:
        return sum(1 for destination in self.occupants if destination == floor)


@dataclass(frozen=True)
class ExchangePreview:
    """What a stop at the car's current floor would do, without doing it."""

    floor: int
    alighting: int
    boarding: Tuple[int, ...]
    left_waiting: Tuple[int, ...]

    @property
    def has_work(self) -> bool:
        return bool(self.alighting or self.boarding)


@dataclass(frozen=True)
class BuildingView:
    """Immutable snapshot of the building handed to motion policies.

    ``waiting[f]`` holds the destinations queued on floor ``f`` in FIFO order.
    """

    tick: int
    waiting: Tuple[Tuple[int, ...], ...]
    cars: Tuple[CarSnapshot, ...]

    @property
    def floor_count(self) -> int:
        return len(self.waiting)

    @property
    def top_floor(self) -> int:
        return len(self.waiting) - 1

    def car(self, car_index: int) -> CarSnapshot:
        if not 0 <= car_index < len(self.cars):
            raise InvalidConfiguration(
                f"car index {car_index} out of range for {len(self.cars)} cars"
            )
        return self.cars[car_index]

    def has_waiting(self, floor: int) -> bool:
        return bool(self.waiting[floor])

    def waiting_floors(self) -> List[int]:
        return [floor for floor, queue in enumerate(self.waiting) if queue]

    def preview_exchange(self, car_index: int, board: bool = True) -> ExchangePreview:
        car = self.car(car_index)
        here = car.current_floor
        alighting = car.alighting_at(here)
        free = car.capacity - (car.load - alighting) if board else 0
        queue = self.waiting[here]
        return ExchangePreview(
            floor=here,
            alighting=alighting,
            boarding=queue[:free],
            left_waiting=queue[free:],
        )

    def after_exchange(self, car_index: int, board: bool = True) -> "BuildingView":
        """Return the view as it would look once the car stops and exchanges."""

        car = self.car(car_index)
        preview = self.preview_exchange(car_index, board=board)
        riders = tuple(d for d in car.occupants if d != preview.floor) + preview.boarding
        cars = list(self.cars)
        cars[car_index] = replace(car, occupants=riders)
        waiting = list(self.waiting)
        waiting[preview.floor] = preview.left_waiting
        return replace(self, waiting=tuple(waiting), cars=tuple(cars))


@dataclass(frozen=True)
class Action:
    """One atomic instruction for a car: exchange, then face ``heading``, then move.

    With ``board`` False the exchange only lets riders off.
    """

    motion: Motion = Motion.HOLD
    exchange: bool = False
    heading: Optional[Direction] = None
    reason: str = ""
    board: bool = True

    @classmethod
    def idle(cls, reason: str = "no pending requests") -> "Action":
        return cls(reason=reason)

    @property
    def moves(self) -> bool:
        return self.motion is not Motion.HOLD


class MotionPolicy(Protocol):
    """Strategy interface for deciding a car's next discrete action."""

    name: str

    def decide(self, view: BuildingView, car_index: int) -> Action:
        """
        Return the action the car at ``car_index`` should take this tick.

        Implementations only read the view; the building applies the action.
        """
        ...
