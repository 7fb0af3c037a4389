"""
Base exception type for dailylog.

Every error raised by the logging core derives from DailyLogError. Errors carry
a machine-readable code, optional details and an optional chained cause so the
embedding application can report them through its own fallback path.
"""
from __future__ import annotations

import traceback
from typing import Any, Optional


class DailyLogError(Exception):
    """
    Base exception for all dailylog errors.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable slug (defaults to the class default_code).
        details: Optional dict for extra context (e.g. the failing path).
        cause: Optional chained exception.
    """

    default_code: str = "DAILYLOG_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else getattr(
            self.__class__, "default_code", self.__class__.__name__
        )
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, code={self.code!r})"

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Serialize for fallback reporting."""
        out: dict[str, Any] = {
            "message": self.message,
            "code": self.code,
        }
        if self.details:
            out["details"] = self.details
        if self.cause is not None:
            out["cause"] = str(self.cause)
            out["cause_traceback"] = traceback.format_exception(
                type(self.cause), self.cause, self.cause.__traceback__
            )
        return out
