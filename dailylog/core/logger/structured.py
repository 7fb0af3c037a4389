"""Key/value logging API on top of stdlib loggers."""
from __future__ import annotations

import logging
from typing import Any, Iterable

from dailylog.core.logger.formatters import Attr


class StructuredLogger:
    """Wrap a stdlib logger so calls take attributes as keyword arguments.

        log = StructuredLogger(logging.getLogger("app"))
        log.info("Application started", version="1.0.0")

    Attributes ride on the record as ``record.attrs`` (ordered pairs), which
    RecordFormatter renders as ``key=value``. ``bind()`` returns a new logger
    whose attributes precede every call's own.
    """

    def __init__(self, logger: logging.Logger, attrs: Iterable[Attr] = ()) -> None:
        self._logger = logger
        self._attrs: tuple[Attr, ...] = tuple(attrs)

    def __repr__(self) -> str:
        return f"<StructuredLogger {self._logger.name} attrs={len(self._attrs)}>"

    @property
    def name(self) -> str:
        return self._logger.name

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def bind(self, **attrs: Any) -> StructuredLogger:
        return StructuredLogger(self._logger, self._attrs + tuple(attrs.items()))

    def log(self, level: int, msg: str, *args: Any, exc_info: Any = None, **attrs: Any) -> None:
        self._log(level, msg, args, exc_info, attrs)

    def debug(self, msg: str, *args: Any, **attrs: Any) -> None:
        self._log(logging.DEBUG, msg, args, attrs.pop("exc_info", None), attrs)

    def info(self, msg: str, *args: Any, **attrs: Any) -> None:
        self._log(logging.INFO, msg, args, attrs.pop("exc_info", None), attrs)

    def warning(self, msg: str, *args: Any, **attrs: Any) -> None:
        self._log(logging.WARNING, msg, args, attrs.pop("exc_info", None), attrs)

    def error(self, msg: str, *args: Any, **attrs: Any) -> None:
        self._log(logging.ERROR, msg, args, attrs.pop("exc_info", None), attrs)

    def exception(self, msg: str, *args: Any, **attrs: Any) -> None:
        self._log(logging.ERROR, msg, args, attrs.pop("exc_info", True), attrs)

    def critical(self, msg: str, *args: Any, **attrs: Any) -> None:
        self._log(logging.CRITICAL, msg, args, attrs.pop("exc_info", None), attrs)

    def _log(self, level: int, msg: str, args: tuple, exc_info: Any, attrs: dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        self._logger.log(
            level,
            msg,
            *args,
            exc_info=exc_info,
            extra={"attrs": self._attrs + tuple(attrs.items())},
            stacklevel=3,
        )
