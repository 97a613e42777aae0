from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Set

from .interface import Action, BuildingView
from .utils import look_motion, pending_floors

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from .dispatcher import RequestDispatcher

logger = logging.getLogger(__name__)


class LookPolicy:
    """Implements LOOK: sweep only as far as the outermost pending floor.

    With a dispatcher the car only considers the floors assigned to it, plus
    the floors its riders are headed to.
    """

    name = "look"

    def __init__(self, dispatcher: Optional["RequestDispatcher"] = None) -> None:
        self.dispatcher = dispatcher

    def decide(self, view: BuildingView, car_index: int) -> Action:
        car = view.car(car_index)
        here = car.current_floor
        before = self._pending(view, car_index)
        if not before:
            logger.debug("car %d idle at floor %d: no pending requests", car_index, here)
            return Action.idle()

        exchange = self._services_here(view, car_index)
        board = self._may_board(view, car_index)
        after = before
        if exchange:
            preview = view.preview_exchange(car_index, board=board)
            if preview.boarding:
                logger.debug(
                    "car %d stopping at floor %d to board %d",
                    car_index,
                    here,
                    len(preview.boarding),
                )
                return Action(exchange=True, reason="stop")
            after = self._pending(view.after_exchange(car_index, board=board), car_index)

        # An emptied building still turns the car at the bound it was facing.
        heading, motion = look_motion(car.direction, here, after or before)
        if heading is not car.direction:
            logger.debug("car %d reversing at floor %d", car_index, here)
        reason = "sweep" if after else "all requests handled"
        return Action(
            motion=motion, exchange=exchange, heading=heading, reason=reason, board=board
        )

    def _pending(self, view: BuildingView, car_index: int) -> Set[int]:
        if self.dispatcher is None:
            return pending_floors(view, car_index)
        assigned = [
            floor
            for floor in self.dispatcher.assigned_floors(car_index)
            if view.has_waiting(floor)
        ]
        return pending_floors(view, car_index, waiting=assigned)

    def _services_here(self, view: BuildingView, car_index: int) -> bool:
        car = view.car(car_index)
        here = car.current_floor
        if car.alighting_at(here):
            return True
        if not view.has_waiting(here) or car.available_capacity == 0:
            return False
        return self._may_board(view, car_index)

    def _may_board(self, view: BuildingView, car_index: int) -> bool:
        """Riders on a floor assigned to another car are left for that car."""

        if self.dispatcher is None:
            return True
        here = view.car(car_index).current_floor
        return self.dispatcher.assignment_for(here) in (None, car_index)
