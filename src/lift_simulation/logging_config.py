"""Logging setup for the dispatch engine.

Both packages stay silent by default (NullHandler). Turn output on
explicitly:

    from lift_simulation import logging_config

    logging_config.enable_console_logging(level="DEBUG")
    logging_config.configure_from_env()   # reads LIFT_LOGGING

DEBUG shows every per-tick decision; INFO shows starvation overrides,
direction reconsiderations and run summaries.
"""

from __future__ import annotations

import logging
import os
from typing import List, Literal, Optional, Union

__all__ = [
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "set_level",
]

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOGGER_NAMES = ("lift_scheduler", "lift_simulation")
ENV_VAR = "LIFT_LOGGING"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _get_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def _loggers() -> List[logging.Logger]:
    return [logging.getLogger(name) for name in LOGGER_NAMES]


def enable_console_logging(
    level: Union[LogLevel, int] = "INFO",
    format: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> logging.StreamHandler:
    """Send both packages' log records to stderr.

    Returns:
        The StreamHandler shared by both package loggers.
    """

    handler = logging.StreamHandler()
    handler.setLevel(_get_level(level))
    handler.setFormatter(logging.Formatter(format, date_format))
    for logger in _loggers():
        logger.setLevel(_get_level(level))
        logger.addHandler(handler)
    return handler


def set_level(level: Union[LogLevel, int]) -> None:
    for logger in _loggers():
        logger.setLevel(_get_level(level))
        for handler in logger.handlers:
            handler.setLevel(_get_level(level))


def disable_logging() -> None:
    """Drop every handler except the NullHandler and silence both packages."""

    for logger in _loggers():
        for handler in logger.handlers[:]:
            if not isinstance(handler, logging.NullHandler):
                logger.removeHandler(handler)
                handler.close()
        logger.setLevel(logging.CRITICAL + 1)


def configure_from_env() -> Optional[logging.StreamHandler]:
    """Enable console logging at the level named by ``LIFT_LOGGING``, if set."""

    level = os.environ.get(ENV_VAR, "").strip()
    if not level:
        return None
    return enable_console_logging(level=level.upper())
