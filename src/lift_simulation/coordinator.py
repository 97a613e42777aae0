from __future__ import annotations

import logging
from typing import List, Optional

from lift_scheduler import InvalidConfiguration, LookPolicy, MotionPolicy, RequestDispatcher

from .building import BuildingState, StepOutcome

logger = logging.getLogger(__name__)


class MultiCarCoordinator:
    """Drives one tick: dispatch once, then move each car in ascending index order.

    Cars later in the order see the building and the assignment table as the
    earlier cars left them; that order is part of the observable behaviour.
    """

    def __init__(
        self, policy: MotionPolicy, dispatcher: Optional[RequestDispatcher] = None
    ) -> None:
        self.policy = policy
        self.dispatcher = dispatcher
        self.last_outcomes: List[StepOutcome] = []

    @classmethod
    def with_dispatch(cls, floor_count: int) -> "MultiCarCoordinator":
        """Look per car, restricted to the floors the dispatcher assigns it."""

        dispatcher = RequestDispatcher(floor_count)
        return cls(LookPolicy(dispatcher=dispatcher), dispatcher)

    def step(self, building: BuildingState) -> BuildingState:
        building.validate()
        if self.dispatcher is not None and self.dispatcher.floor_count != building.floor_count:
            raise InvalidConfiguration(
                f"dispatcher covers {self.dispatcher.floor_count} floors, "
                f"building has {building.floor_count}"
            )
        building.advance_tick()
        if self.dispatcher is not None:
            self.dispatcher.dispatch_requests(building.view())

        outcomes: List[StepOutcome] = []
        for car_index in range(building.car_count):
            action = self.policy.decide(building.view(), car_index)
            outcome = building.apply(car_index, action)
            if self.dispatcher is not None and outcome.boarded:
                self.dispatcher.clear_assignment(outcome.from_floor)
            outcomes.append(outcome)
        self.last_outcomes = outcomes
        return building
