"""Building state, run loop and configuration for the lift dispatch engine."""

import logging

from lift_scheduler.errors import EmptyQueueUnderflow, InvalidConfiguration

from .building import BuildingState, StepOutcome
from .config import BuildingConfig, random_config, resolve_config
from .coordinator import MultiCarCoordinator
from .elevator import CarState
from .floor import Floor, RequestQueue
from .loader import load_building_file, parse_building_text
from .simulation import MetricsSnapshot, MetricsTracker, Simulation, is_complete

__all__ = [
    "BuildingConfig",
    "BuildingState",
    "CarState",
    "EmptyQueueUnderflow",
    "Floor",
    "InvalidConfiguration",
    "MetricsSnapshot",
    "MetricsTracker",
    "MultiCarCoordinator",
    "RequestQueue",
    "Simulation",
    "StepOutcome",
    "is_complete",
    "load_building_file",
    "parse_building_text",
    "random_config",
    "resolve_config",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
