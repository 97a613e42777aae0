"""Reader for the plain-text building format.

    # comment
    5,4          <- floors,capacity header
    1:3,4        <- riders on floor 1 headed to floors 3 and 4

Blank lines and ``#`` comments are skipped. A later line for the same floor
replaces an earlier one. A floor line with nothing after the colon, and
any line matching neither form, is ignored.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from lift_scheduler.errors import InvalidConfiguration

from .config import BuildingConfig, resolve_config

logger = logging.getLogger(__name__)


def parse_building_text(text: str, car_count: int = 1) -> BuildingConfig:
    floor_count: Optional[int] = None
    capacity: Optional[int] = None
    requests: Dict[int, List[int]] = {}

    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split(":")
        if len(parts) == 1 and "," in parts[0]:
            values = parts[0].split(",")
            floor_count = _to_int(values[0], line_number)
            capacity = _to_int(values[1], line_number)
        elif len(parts) == 2 and parts[1].strip():
            floor = _to_int(parts[0], line_number)
            if floor in requests:
                logger.warning("line %d: floor %d redefined, replacing", line_number, floor)
            requests[floor] = [
                _to_int(token, line_number) for token in parts[1].split(",") if token.strip()
            ]
        else:
            logger.warning("line %d: ignoring unrecognised line %r", line_number, line)

    if floor_count is None or capacity is None:
        raise InvalidConfiguration("building text has no 'floors,capacity' header")
    return resolve_config(
        {
            "floor_count": floor_count,
            "car_count": car_count,
            "capacity_per_car": capacity,
            "initial_requests": requests,
        }
    )


def load_building_file(path: Union[str, Path], car_count: int = 1) -> BuildingConfig:
    path = Path(path)
    config = parse_building_text(path.read_text(), car_count=car_count)
    logger.info(
        "loaded %s: %d floors, capacity %d, %d requests",
        path.name,
        config.floor_count,
        config.capacity_per_car,
        config.total_requests,
    )
    return config


def _to_int(token: str, line_number: int) -> int:
    try:
        return int(token.strip())
    except ValueError as exc:
        raise InvalidConfiguration(f"line {line_number}: expected an integer, got {token!r}") from exc
