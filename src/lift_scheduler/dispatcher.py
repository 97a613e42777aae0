from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .errors import InvalidConfiguration
from .interface import BuildingView, Direction

logger = logging.getLogger(__name__)

SAME_DIRECTION_BONUS = 2
LIGHT_LOAD_BONUS = 1


class RequestDispatcher:
    """Assigns each floor with waiting riders to exactly one car.

    Assignments are sticky: once a floor is given to a car it stays with that
    car until ``clear_assignment`` is called for the floor.
    """

    def __init__(self, floor_count: int) -> None:
        if floor_count < 1:
            raise InvalidConfiguration("dispatcher needs at least one floor")
        self.floor_count = floor_count
        self._floor_to_car: List[Optional[int]] = [None] * floor_count

    @property
    def assignments(self) -> Dict[int, int]:
        return {
            floor: car
            for floor, car in enumerate(self._floor_to_car)
            if car is not None
        }

    def assignment_for(self, floor: int) -> Optional[int]:
        self._check_floor(floor)
        return self._floor_to_car[floor]

    def get_best_elevator(
        self, view: BuildingView, request_floor: int, destination_floor: int
    ) -> int:
        self._check_floor(request_floor)
        self._check_floor(destination_floor)
        assigned = self._floor_to_car[request_floor]
        if assigned is not None:
            return assigned
        if not view.cars:
            raise InvalidConfiguration("no cars to dispatch to")

        wanted = Direction.of_trip(request_floor, destination_floor)
        best_car, best_score = 0, None
        for car in view.cars:
            score = abs(car.current_floor - request_floor)
            if car.direction == wanted:
                score -= SAME_DIRECTION_BONUS
            if car.load < car.capacity // 2:
                score -= LIGHT_LOAD_BONUS
            if best_score is None or score < best_score:
                best_car, best_score = car.index, score

        self._floor_to_car[request_floor] = best_car
        return best_car

    def floors_with_requests(self, view: BuildingView) -> List[int]:
        return view.waiting_floors()

    def dispatch_requests(self, view: BuildingView) -> Dict[int, int]:
        """Assign every unassigned floor that has waiting riders.

        A rider's destination is unknown until it boards, so the car is scored
        against a placeholder trip toward the far end of the building.
        """

        new_assignments: Dict[int, int] = {}
        for floor in self.floors_with_requests(view):
            if self._floor_to_car[floor] is not None:
                continue
            placeholder = view.top_floor if floor < view.floor_count // 2 else 0
            car = self.get_best_elevator(view, floor, placeholder)
            new_assignments[floor] = car
            logger.debug("assigned floor %d to car %d", floor, car)
        return new_assignments

    def clear_assignment(self, floor: int) -> None:
        self._check_floor(floor)
        self._floor_to_car[floor] = None

    def assigned_floors(self, car_index: int) -> List[int]:
        return [
            floor
            for floor, car in enumerate(self._floor_to_car)
            if car == car_index
        ]

    def _check_floor(self, floor: int) -> None:
        if not 0 <= floor < self.floor_count:
            raise InvalidConfiguration(
                f"floor {floor} out of range for {self.floor_count} floors"
            )
