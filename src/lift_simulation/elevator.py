from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from lift_scheduler.errors import InvalidConfiguration
from lift_scheduler.interface import CarSnapshot, Direction


@dataclass
class CarState:
    """One elevator car: where it is, where it faces, and who is aboard.

    ``occupants`` holds one destination floor per rider.
    """

    capacity: int
    current_floor: int = 0
    direction: Direction = Direction.UP
    occupants: List[int] = field(default_factory=list)
    delivered: int = 0

    def __post_init__(self) -> None:
        if self.capacity < 1:
            raise InvalidConfiguration(f"car capacity must be >= 1, got {self.capacity}")
        if len(self.occupants) > self.capacity:
            raise InvalidConfiguration(
                f"{len(self.occupants)} occupants exceed capacity {self.capacity}"
            )
        self.direction = Direction(self.direction)

    @property
    def occupancy(self) -> int:
        return len(self.occupants)

    @property
    def available_capacity(self) -> int:
        return self.capacity - len(self.occupants)

    def alight(self) -> int:
        """Let off every rider bound for the current floor."""

        staying = [d for d in self.occupants if d != self.current_floor]
        alighted = len(self.occupants) - len(staying)
        self.occupants = staying
        self.delivered += alighted
        return alighted

    def board(self, destinations: List[int]) -> None:
        if len(destinations) > self.available_capacity:
            raise InvalidConfiguration(
                f"boarding {len(destinations)} riders exceeds free capacity "
                f"{self.available_capacity}"
            )
        self.occupants.extend(destinations)

    def snapshot(self, index: int) -> CarSnapshot:
        return CarSnapshot(
            index=index,
            current_floor=self.current_floor,
            direction=self.direction,
            capacity=self.capacity,
            occupants=tuple(self.occupants),
        )
