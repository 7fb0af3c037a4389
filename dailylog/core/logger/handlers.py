"""
Handlers: a sink writes one record to one stream, a fanout broadcasts to many sinks.

Both are immutable once built. ``with_attrs()`` / ``with_group()`` return new
instances, so a fanout can be swapped in as the active destination while
records are still being dispatched through the previous one.
"""
from __future__ import annotations

import logging
import sys
from typing import Callable, Iterable, Optional, TextIO

from dailylog.core.exceptions import DailyLogError, DispatchError, WriteError
from dailylog.core.logger.formatters import Attr, RecordFormatter


class SinkHandler(logging.Handler):
    """Format a record with its own color setting and write it to one stream.

    The stream is borrowed: the sink never closes it. Writes are serialized by
    the handler lock, one lock per sink.
    """

    terminator = "\n"

    def __init__(
        self,
        stream: TextIO,
        color: bool = False,
        *,
        formatter: Optional[RecordFormatter] = None,
        level: int = logging.NOTSET,
    ) -> None:
        super().__init__(level)
        self.stream = stream
        self.color = color
        self.setFormatter(formatter or RecordFormatter(color))

    def __repr__(self) -> str:
        name = getattr(self.stream, "name", None) or type(self.stream).__name__
        return f"<{self.__class__.__name__} {name} color={self.color}>"

    def enabled(self, levelno: int) -> bool:
        return levelno >= self.level

    def write(self, record: logging.LogRecord) -> None:
        """Write one line for ``record``. Raises WriteError, never retries."""
        line = self.format(record) + self.terminator
        self.acquire()
        try:
            self.stream.write(line)
            self.stream.flush()
        except (OSError, ValueError) as exc:
            # ValueError: I/O operation on closed file
            raise WriteError(f"write to {self!r} failed: {exc}", sink=self, cause=exc) from exc
        finally:
            self.release()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.write(record)
        except DailyLogError:
            self.handleError(record)

    def with_attrs(self, attrs: Iterable[Attr]) -> SinkHandler:
        return self._copy(self.formatter.with_attrs(attrs))

    def with_group(self, name: str) -> SinkHandler:
        return self._copy(self.formatter.with_group(name))

    def _copy(self, formatter: RecordFormatter) -> SinkHandler:
        return SinkHandler(self.stream, self.color, formatter=formatter, level=self.level)


class FanoutHandler(logging.Handler):
    """
    Forward every record to all sinks, in order, without short-circuiting.

    ``dispatch()`` raises DispatchError naming exactly the sinks that failed.
    ``emit()`` (the logging entry point) never raises: the error is kept on
    ``last_error`` and handed to ``on_error``, or to ``handleError`` when no
    callback is set.
    """

    def __init__(
        self,
        *handlers: SinkHandler,
        on_error: Optional[Callable[[DispatchError], None]] = None,
    ) -> None:
        super().__init__()
        self._handlers: tuple[SinkHandler, ...] = tuple(handlers)
        self.on_error = on_error
        self.last_error: Optional[DispatchError] = None

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {list(self._handlers)!r}>"

    @property
    def handlers(self) -> tuple[SinkHandler, ...]:
        return self._handlers

    def enabled(self, levelno: int) -> bool:
        return any(h.enabled(levelno) for h in self._handlers)

    def dispatch(self, record: logging.LogRecord) -> None:
        failures: list[tuple[SinkHandler, BaseException]] = []
        for handler in self._handlers:
            try:
                handler.write(record)
            except DailyLogError as exc:
                failures.append((handler, exc))
        if failures:
            raise DispatchError(failures)

    def handle(self, record: logging.LogRecord) -> bool:
        # No handler-wide lock here: each sink serializes its own writes.
        rv = self.filter(record)
        if isinstance(rv, logging.LogRecord):
            record = rv
        if rv:
            self.emit(record)
        return bool(rv)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.dispatch(record)
        except DispatchError as exc:
            self.last_error = exc
            if self.on_error is not None:
                self.on_error(exc)
            else:
                self.handleError(record)

    def with_attrs(self, attrs: Iterable[Attr]) -> FanoutHandler:
        attrs = tuple(attrs)
        return FanoutHandler(*(h.with_attrs(attrs) for h in self._handlers), on_error=self.on_error)

    def with_group(self, name: str) -> FanoutHandler:
        return FanoutHandler(*(h.with_group(name) for h in self._handlers), on_error=self.on_error)

    def close(self) -> None:
        for handler in self._handlers:
            handler.close()
        super().close()


def build_console_sink(stream: Optional[TextIO] = None, level: int = logging.NOTSET) -> SinkHandler:
    """Colored sink on the terminal (stdout unless ``stream`` is given)."""
    return SinkHandler(stream if stream is not None else sys.stdout, color=True, level=level)


def build_file_sink(file: TextIO, level: int = logging.NOTSET) -> SinkHandler:
    """Plain sink on an open log file. The file stays owned by the caller."""
    return SinkHandler(file, color=False, level=level)


def build_fanout(
    file: TextIO,
    *,
    console: bool = True,
    console_stream: Optional[TextIO] = None,
    on_error: Optional[Callable[[DispatchError], None]] = None,
) -> FanoutHandler:
    """Terminal (colored) + file (plain) fanout, the standing daily configuration."""
    sinks = []
    if console:
        sinks.append(build_console_sink(console_stream))
    sinks.append(build_file_sink(file))
    return FanoutHandler(*sinks, on_error=on_error)
