from __future__ import annotations

import logging

from .interface import Action, BuildingView, Motion

logger = logging.getLogger(__name__)


class ScanPolicy:
    """Implements the SCAN (elevator) algorithm: full sweeps, boundary to boundary.

    The car never looks ahead; it reverses only at the top or bottom floor.
    """

    name = "scan"

    def decide(self, view: BuildingView, car_index: int) -> Action:
        preview = view.preview_exchange(car_index)
        exchange = view.has_waiting(preview.floor) or preview.alighting > 0
        if exchange:
            logger.debug(
                "car %d stopping at floor %d (%d off, %d on)",
                car_index,
                preview.floor,
                preview.alighting,
                len(preview.boarding),
            )
        return Action(motion=Motion.CONTINUE, exchange=exchange, reason="sweep")
