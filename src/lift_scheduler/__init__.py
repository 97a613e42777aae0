from __future__ import annotations

import logging
from typing import Dict, Type

from .adaptive import AdaptiveLookPolicy
from .dispatcher import RequestDispatcher
from .errors import EmptyQueueUnderflow, InvalidConfiguration
from .interface import (
    Action,
    BuildingView,
    CarSnapshot,
    Direction,
    ExchangePreview,
    Motion,
    MotionPolicy,
)
from .look import LookPolicy
from .priority import PriorityRequestStore, Request
from .scan import ScanPolicy

__all__ = [
    "Action",
    "AdaptiveLookPolicy",
    "BuildingView",
    "CarSnapshot",
    "Direction",
    "EmptyQueueUnderflow",
    "ExchangePreview",
    "InvalidConfiguration",
    "LookPolicy",
    "Motion",
    "MotionPolicy",
    "PriorityRequestStore",
    "Request",
    "RequestDispatcher",
    "ScanPolicy",
    "get_policy",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())


POLICY_REGISTRY: Dict[str, Type[MotionPolicy]] = {
    "scan": ScanPolicy,
    "look": LookPolicy,
    "adaptive": AdaptiveLookPolicy,
}


def get_policy(name: str, **kwargs) -> MotionPolicy:
    cls = POLICY_REGISTRY.get(name.lower())
    if cls is None:
        raise ValueError(f"Unknown policy '{name}'. Available: {', '.join(POLICY_REGISTRY)}")
    return cls(**kwargs)
