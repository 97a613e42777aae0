from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from lift_scheduler import MotionPolicy, get_policy

from .building import BuildingState, StepOutcome
from .coordinator import MultiCarCoordinator

logger = logging.getLogger(__name__)


@dataclass
class MetricsSnapshot:
    tick: int
    moves: int
    stops: int
    idle_decisions: int
    boarded: int
    delivered: int
    pending: int
    onboard: int


class MetricsTracker:
    def __init__(self) -> None:
        self.moves: int = 0
        self.stops: int = 0
        self.idle_decisions: int = 0
        self.boarded: int = 0

    def record(self, outcome: StepOutcome) -> None:
        if outcome.moved:
            self.moves += 1
        elif not outcome.action.exchange and outcome.action.heading is None:
            self.idle_decisions += 1
        if outcome.action.exchange:
            self.stops += 1
        self.boarded += len(outcome.boarded)

    def snapshot(self, building: BuildingState) -> MetricsSnapshot:
        return MetricsSnapshot(
            tick=building.tick,
            moves=self.moves,
            stops=self.stops,
            idle_decisions=self.idle_decisions,
            boarded=self.boarded,
            delivered=building.count_delivered(),
            pending=building.count_pending(),
            onboard=building.count_onboard(),
        )


def is_complete(building: BuildingState) -> bool:
    return building.is_complete()


class Simulation:
    """Tick-stepped dispatch simulation for scenario runs and comparisons.

    Multi-car buildings run under LOOK get a dispatcher that hands each
    waiting floor to one car; every other combination moves each car by the
    chosen policy alone.
    """

    def __init__(
        self,
        building: BuildingState,
        policy: str = "look",
        policy_options: Optional[dict] = None,
        dispatch: Optional[bool] = None,
        metrics_hook_interval: int = 1,
    ) -> None:
        self.building = building
        self.policy_name = policy.lower()
        self.policy_options = policy_options or {}
        if dispatch is None:
            dispatch = building.car_count > 1 and self.policy_name == "look"
        if dispatch and self.policy_name != "look":
            raise ValueError(f"dispatching is only supported with the look policy, not '{policy}'")
        if dispatch:
            self.coordinator = MultiCarCoordinator.with_dispatch(building.floor_count)
        else:
            self.coordinator = MultiCarCoordinator(
                get_policy(self.policy_name, **self.policy_options)
            )
        self.metrics = MetricsTracker()
        self.history: List[Tuple[int, ...]] = [building.positions()]
        self.event_hooks: Dict[str, List[Callable[[object], None]]] = {}
        self.metrics_hook_interval = max(1, metrics_hook_interval)

    @property
    def policy(self) -> MotionPolicy:
        return self.coordinator.policy

    @property
    def current_tick(self) -> int:
        return self.building.tick

    def step(self) -> BuildingState:
        self.building = self.coordinator.step(self.building)
        for outcome in self.coordinator.last_outcomes:
            self.metrics.record(outcome)
        self.history.append(self.building.positions())
        self._emit("tick", {"tick": self.building.tick, "outcomes": self.coordinator.last_outcomes})
        if self.building.tick % self.metrics_hook_interval == 0:
            self._emit_metrics()
        return self.building

    def run(self, ticks: int) -> BuildingState:
        for _ in range(ticks):
            self.step()
        return self.building

    def run_until_complete(self, max_ticks: int = 1000) -> bool:
        """Step until every floor queue is empty; False if ``max_ticks`` ran out first."""

        for _ in range(max_ticks):
            if self.is_complete():
                break
            self.step()
        done = self.is_complete()
        if done:
            logger.info(
                "%s finished in %d ticks (%d moves)",
                self.policy_name,
                self.building.tick,
                self.metrics.moves,
            )
            self._emit("complete", self.metrics.snapshot(self.building))
        else:
            logger.warning("%s did not finish within %d ticks", self.policy_name, max_ticks)
        return done

    def is_complete(self) -> bool:
        return is_complete(self.building)

    def on_event(self, event: str, callback: Callable[[object], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def _emit_metrics(self) -> None:
        snapshot = self.metrics.snapshot(self.building)
        self._emit("metrics", {"metrics": snapshot, "building": self.building.snapshot()})

    def _emit(self, event: str, payload: object) -> None:
        for callback in self.event_hooks.get(event, []):
            callback(payload)
