"""
Built-in exception types for formatting, writing, fanout and rotation.
"""
from __future__ import annotations

from typing import Any, Optional, Sequence

from dailylog.core.exceptions.base import DailyLogError


class ConfigurationError(DailyLogError):
    """Invalid or late configuration."""

    default_code = "CONFIGURATION_ERROR"


class FormatError(DailyLogError):
    """A record could not be rendered to text."""

    default_code = "FORMAT_ERROR"


class WriteError(DailyLogError):
    """A single sink failed to write a record. Never retried."""

    default_code = "WRITE_ERROR"

    def __init__(
        self,
        message: str,
        *,
        sink: Any = None,
        cause: Optional[BaseException] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details, cause=cause)
        self.sink = sink


class DispatchError(DailyLogError):
    """One or more sinks of a fanout failed for the same record."""

    default_code = "DISPATCH_ERROR"

    def __init__(self, failures: Sequence[tuple[Any, BaseException]]) -> None:
        self.failures: list[tuple[Any, BaseException]] = list(failures)
        super().__init__(
            f"{len(self.failures)} sink(s) failed: "
            + "; ".join(str(err) for _, err in self.failures),
            details={"failed_sinks": [repr(sink) for sink, _ in self.failures]},
        )

    @property
    def sinks(self) -> list[Any]:
        return [sink for sink, _ in self.failures]


class RotationError(DailyLogError):
    """Directory creation or file open failed during a rotation."""

    default_code = "ROTATION_ERROR"
