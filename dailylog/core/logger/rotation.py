"""
Daily rotation: open today's file, install a fresh fanout, sleep until local midnight, repeat.

The first rotation is fatal when it fails: without a writable file there is no
destination. Later rotations only log the failure and keep the previous day's
file installed until the next midnight.
"""
from __future__ import annotations

import logging
import os
import threading
from datetime import datetime, time, timedelta
from typing import Callable, Optional, TextIO

from dailylog.core.exceptions import DispatchError, RotationError
from dailylog.core.logger.destination import ActiveDestination, DatePartition
from dailylog.core.logger.handlers import build_fanout

logger = logging.getLogger(__name__)


def next_midnight(now: datetime) -> datetime:
    return datetime.combine(now.date() + timedelta(days=1), time.min, tzinfo=now.tzinfo)


class RotationScheduler:
    """
    Owns the rotation of an ActiveDestination.

    ``clock`` returns local "now" and ``sleeper(seconds)`` waits, returning True
    when the wait was cancelled. Both default to the real thing (``datetime.now``
    and the scheduler's stop event) and are swapped out in tests.
    """

    def __init__(
        self,
        destination: ActiveDestination,
        *,
        console: bool = True,
        console_stream: Optional[TextIO] = None,
        encoding: str = "utf-8",
        clock: Optional[Callable[[], datetime]] = None,
        sleeper: Optional[Callable[[float], bool]] = None,
        on_error: Optional[Callable[[DispatchError], None]] = None,
    ) -> None:
        self.destination = destination
        self.console = console
        self.console_stream = console_stream
        self.encoding = encoding
        self.on_error = on_error
        self.running = False
        self._clock = clock or datetime.now
        self._stop_event = threading.Event()
        self._sleep = sleeper or self._stop_event.wait
        self._thread: Optional[threading.Thread] = None

    @property
    def root_dir(self) -> str:
        return self.destination.root_dir

    def seconds_until_midnight(self, now: Optional[datetime] = None) -> float:
        now = now or self._clock()
        # timestamps, not wall-clock difference: DST days are 23 or 25 hours long
        return max(next_midnight(now).timestamp() - now.timestamp(), 0.0)

    def rotate(self) -> DatePartition:
        """Open today's file and make it the active destination.

        Raises RotationError when the directory or the file cannot be created;
        the current destination is left untouched in that case.
        """
        partition = DatePartition.of(self._clock())
        directory = partition.directory(self.root_dir)
        path = partition.path(self.root_dir)

        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as exc:
            raise RotationError(
                f"failed to create directory {directory}: {exc}",
                details={"path": directory},
                cause=exc,
            ) from exc
        try:
            # append: a restart on the same day resumes the same file
            file = open(path, "a", encoding=self.encoding)
        except OSError as exc:
            raise RotationError(
                f"error opening file {path}: {exc}", details={"path": path}, cause=exc
            ) from exc

        fanout = build_fanout(
            file,
            console=self.console,
            console_stream=self.console_stream,
            on_error=self.on_error,
        )
        old_fanout, old_file = self.destination.install(fanout, file, partition)
        if old_fanout is not None:
            old_fanout.close()
        if old_file is not None:
            try:
                old_file.close()
            except OSError as exc:
                logger.warning("Error closing log file %s: %s", getattr(old_file, "name", old_file), exc)

        logger.info("Daily logging started", extra={"attrs": [("path", path)]})
        return partition

    def run(self) -> None:
        """Rotate now, then at every local midnight until stopped. Blocks."""
        self.running = True
        try:
            self.rotate()
            self._loop()
        finally:
            self.running = False

    def start(self) -> RotationScheduler:
        """Rotate now in the caller's thread, then keep rotating in a daemon thread."""
        if self._thread is not None and self._thread.is_alive():
            return self
        self._stop_event.clear()
        self.rotate()
        self.running = True
        self._thread = threading.Thread(target=self._run_loop, name="dailylog-rotation", daemon=True)
        self._thread.start()
        logger.debug("Rotation scheduler started")
        return self

    def stop(self, timeout: Optional[float] = 1.0) -> None:
        self._stop_event.set()
        if self._thread and self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout=timeout)
        self.running = False
        logger.debug("Rotation scheduler stopped")

    def _run_loop(self) -> None:
        try:
            self._loop()
        finally:
            self.running = False

    def _loop(self) -> None:
        while not self._stop_event.is_set():
            if self._sleep(self.seconds_until_midnight()) or self._stop_event.is_set():
                break
            # woken early (clock change): same day, wait again
            if DatePartition.of(self._clock()) == self.destination.partition:
                continue
            try:
                self.rotate()
            except RotationError as exc:
                logger.error("Error creating log path: %s", exc, extra={"attrs": exc.details})
