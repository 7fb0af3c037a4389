"""
dailylog exception system.

Usage:
    from dailylog.core.exceptions import DispatchError, RotationError

    try:
        scheduler.rotate()
    except RotationError as exc:
        fallback.error("rotation failed: %s", exc.to_dict())
"""
from dailylog.core.exceptions.base import DailyLogError
from dailylog.core.exceptions.errors import (
    ConfigurationError,
    DispatchError,
    FormatError,
    RotationError,
    WriteError,
)

__all__ = [
    "DailyLogError",
    "ConfigurationError",
    "FormatError",
    "WriteError",
    "DispatchError",
    "RotationError",
]
