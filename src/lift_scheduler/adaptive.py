"""Starvation-aware LOOK.

A LOOK sweep with two overrides, checked in a fixed order each tick:

1. a floor whose wait exceeds ``starvation_threshold`` pulls the car toward
   it, whatever the sweep direction;
2. after ``max_skips`` ticks without a stop the car turns around if more
   requests wait behind it than ahead of it.

Waiting pickups are also tracked in a :class:`PriorityRequestStore`, aged
every tick against the car's direction. When two floors have waited equally
long, the floor holding the more urgent request wins.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, Optional, Tuple

from .interface import Action, BuildingView, Direction
from .priority import DIRECTION_MISMATCH_PENALTY, PriorityRequestStore
from .utils import look_motion, motion_for, pending_floors, requests_by_side

logger = logging.getLogger(__name__)

DEFAULT_STARVATION_THRESHOLD = 10
DEFAULT_MAX_SKIPS = 3


class AdaptiveLookPolicy:
    name = "adaptive"

    def __init__(
        self,
        starvation_threshold: int = DEFAULT_STARVATION_THRESHOLD,
        max_skips: int = DEFAULT_MAX_SKIPS,
        mismatch_penalty: int = DIRECTION_MISMATCH_PENALTY,
    ) -> None:
        if starvation_threshold < 0:
            raise ValueError("starvation_threshold must be >= 0")
        if max_skips < 1:
            raise ValueError("max_skips must be >= 1")
        self.starvation_threshold = starvation_threshold
        self.max_skips = max_skips
        self.store = PriorityRequestStore(mismatch_penalty=mismatch_penalty)
        self.last_serviced: Dict[int, int] = {}
        self.skip_counters: Dict[int, int] = {}
        self._aged_for: Optional[Direction] = None

    def wait_time(self, floor: int, tick: int) -> int:
        return tick - self.last_serviced.get(floor, 0)

    def decide(self, view: BuildingView, car_index: int) -> Action:
        car = view.car(car_index)
        here = car.current_floor
        direction = car.direction
        self._track_requests(view, direction)

        priority_floor, max_wait = self._longest_wait(view)
        if not pending_floors(view, car_index):
            return Action.idle()

        preview = view.preview_exchange(car_index)
        exchange = preview.has_work
        if exchange:
            self.skip_counters[car_index] = 0
            self.last_serviced[here] = view.tick
            self.store.remove_oldest(here, len(preview.boarding))
            view = view.after_exchange(car_index)
            logger.debug(
                "car %d serviced floor %d (%d off, %d on)",
                car_index,
                here,
                preview.alighting,
                len(preview.boarding),
            )
        elif car.available_capacity > 0:
            # Only a floor the car could have stopped at counts as skipped.
            self.skip_counters[car_index] = self.skip_counters.get(car_index, 0) + 1

        remaining = pending_floors(view, car_index)
        if not remaining:
            return Action(exchange=exchange, reason="all requests handled")

        # A full car cannot board at the starved floor; let it deliver first.
        if (
            max_wait > self.starvation_threshold
            and priority_floor is not None
            and priority_floor != here
            and view.car(car_index).available_capacity > 0
        ):
            heading = Direction.toward(here, priority_floor)
            logger.info(
                "floor %d waiting %d ticks; car %d heading %s from floor %d",
                priority_floor,
                max_wait,
                car_index,
                heading.name,
                here,
            )
            return Action(
                motion=motion_for(heading),
                exchange=exchange,
                heading=heading,
                reason="starvation",
            )

        if self.skip_counters.get(car_index, 0) >= self.max_skips:
            above, below = requests_by_side(view, car_index)
            ahead, behind = (above, below) if direction is Direction.UP else (below, above)
            if behind > ahead:
                direction = direction.opposite
                self.skip_counters[car_index] = 0
                logger.info(
                    "car %d skipped %d floors; turning %s (%d behind, %d ahead)",
                    car_index,
                    self.max_skips,
                    direction.name,
                    behind,
                    ahead,
                )

        heading, motion = look_motion(direction, here, remaining)
        return Action(motion=motion, exchange=exchange, heading=heading, reason="sweep")

    def _longest_wait(self, view: BuildingView) -> Tuple[Optional[int], int]:
        priority_floor: Optional[int] = None
        max_wait = 0
        for floor in view.waiting_floors():
            wait = self.wait_time(floor, view.tick)
            if wait > max_wait or (
                wait == max_wait
                and priority_floor is not None
                and self._more_urgent(floor, priority_floor)
            ):
                priority_floor, max_wait = floor, wait
        return priority_floor, max_wait

    def _more_urgent(self, floor: int, other: int) -> bool:
        mine, theirs = self.store.best_priority(floor), self.store.best_priority(other)
        if mine is None or theirs is None:
            return False
        return mine < theirs

    def _track_requests(self, view: BuildingView, direction: Direction) -> None:
        """Bring the store in line with the floor queues, then age it."""

        tracked = Counter(request.floor for request in self.store)
        for floor, queue in enumerate(view.waiting):
            known = tracked.get(floor, 0)
            if known > len(queue):
                self.store.remove_oldest(floor, known - len(queue))
            for destination in queue[known:]:
                self.store.push(floor, Direction.of_trip(floor, destination), view.tick, direction)

        if self._aged_for is not direction:
            self.store.reprioritize(direction, view.tick)
            self._aged_for = direction
        else:
            for floor in self.store.floors():
                self.store.update_priority(floor, direction, view.tick)
