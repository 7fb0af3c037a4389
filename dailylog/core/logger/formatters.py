"""
Formatter: one log record -> one line, colored for the terminal or plain for files.

Line shape:
    [2024-03-01 09:15:02.123] INFO Application started version=1.0.0
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterable

from dailylog.core.exceptions import FormatError
from dailylog.core.logger.ansi import CYAN, RED, WHITE, YELLOW, colorize, strip_ansi

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

Attr = tuple[str, Any]

# stdlib name -> canonical label
LEVEL_LABELS = {
    "WARNING": "WARN",
}


def level_label(record: logging.LogRecord) -> str:
    return LEVEL_LABELS.get(record.levelname, record.levelname)


def level_color(levelno: int) -> str:
    if levelno >= logging.ERROR:
        return RED
    if levelno == logging.WARNING:
        return YELLOW
    if levelno == logging.INFO:
        return CYAN
    # custom levels below ERROR stay neutral
    return WHITE


def record_attrs(record: logging.LogRecord) -> list[Attr]:
    """Structured attributes of a record, in emission order.

    ``record.attrs`` may be a sequence of (key, value) pairs (duplicates kept)
    or a mapping.
    """
    raw = getattr(record, "attrs", None)
    if not raw:
        return []
    if isinstance(raw, Mapping):
        return list(raw.items())
    return [(key, value) for key, value in raw]


class RecordFormatter(logging.Formatter):
    """
    Render a record as ``[<timestamp>] <level> <message> key=value ...``.

    With ``color`` the level label is wrapped in a color picked by level and
    everything else is passed through as is. Without it, message and
    attributes are stripped of escape codes and the label stays plain.

    ``bound_attrs`` are rendered before the record's own attributes;
    ``prefix`` qualifies the record's attribute keys (``group.key``).
    """

    def __init__(
        self,
        color: bool = False,
        *,
        bound_attrs: Iterable[Attr] = (),
        prefix: str = "",
    ) -> None:
        super().__init__(datefmt=TIMESTAMP_FORMAT)
        self.color = color
        self.bound_attrs: tuple[Attr, ...] = tuple(bound_attrs)
        self.prefix = prefix

    def with_attrs(self, attrs: Iterable[Attr]) -> RecordFormatter:
        qualified = tuple((f"{self.prefix}{key}", value) for key, value in attrs)
        return RecordFormatter(
            self.color, bound_attrs=self.bound_attrs + qualified, prefix=self.prefix
        )

    def with_group(self, name: str) -> RecordFormatter:
        if not name:
            return self
        return RecordFormatter(
            self.color, bound_attrs=self.bound_attrs, prefix=f"{self.prefix}{name}."
        )

    def format(self, record: logging.LogRecord) -> str:
        try:
            return self._render(record)
        except Exception as exc:
            raise FormatError(
                f"could not format record from {record.name}", cause=exc
            ) from exc

    def _render(self, record: logging.LogRecord) -> str:
        ts = f"{self.formatTime(record, self.datefmt)}.{int(record.msecs):03d}"
        label = level_label(record)
        msg = record.getMessage()

        attrs = list(self.bound_attrs)
        attrs.extend((f"{self.prefix}{key}", value) for key, value in record_attrs(record))
        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            attrs.append(("exc", f"{type(exc).__name__}: {exc}"))

        rendered = ""
        for key, value in attrs:
            key, val = str(key), str(value)
            if not self.color:
                key, val = strip_ansi(key), strip_ansi(val)
            rendered += f" {key}={val}"

        if self.color:
            label = colorize(label, level_color(record.levelno))
        else:
            msg = strip_ansi(msg)
        return f"[{ts}] {label} {msg}{rendered}"


def format_record(record: logging.LogRecord, color: bool) -> str:
    """Render ``record`` as a full line, terminator included."""
    return RecordFormatter(color).format(record) + "\n"
