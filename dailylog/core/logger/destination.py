"""
Active destination: the current day's file and the fanout writing into it.

ActiveDestination is the one handler attached to the root logger. Each
rotation installs a new fanout and hands back the previous pair; dispatch
holds a read lock, installation holds the write lock, so a record is written
either fully through the old fanout or fully through the new one, never into
an already-closed file.
"""
from __future__ import annotations

import logging
import os
import threading
from datetime import datetime
from typing import NamedTuple, Optional, TextIO

from dailylog.core.logger.handlers import FanoutHandler

logger = logging.getLogger(__name__)


class DatePartition(NamedTuple):
    """(year, month, day) of local time; decides which file a record lands in."""

    year: int
    month: int
    day: int

    @classmethod
    def of(cls, moment: datetime) -> DatePartition:
        return cls(moment.year, moment.month, moment.day)

    def directory(self, root_dir: str) -> str:
        return os.path.join(root_dir, f"{self.year:04d}", f"{self.month:02d}")

    def path(self, root_dir: str) -> str:
        return os.path.join(self.directory(root_dir), f"{self.day:02d}.txt")


class ReadWriteLock:
    """Many readers or one writer.

    Waiting writers block new readers, except threads that already hold a read
    lock: those re-enter, so logging from inside a dispatch cannot deadlock.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0
        self._local = threading.local()

    def acquire_read(self) -> None:
        depth = getattr(self._local, "depth", 0)
        with self._cond:
            if depth == 0:
                while self._writer or self._writers_waiting:
                    self._cond.wait()
            self._readers += 1
        self._local.depth = depth + 1

    def release_read(self) -> None:
        self._local.depth -= 1
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()


class ActiveDestination(logging.Handler):
    """
    Explicit owner of the (file, fanout) pair that receives every record.

    Before the first ``install()`` there is no destination and records are
    dropped. ``install()`` swaps in the new pair and returns the previous one
    for the caller to close; ``close()`` tears the pair down.
    """

    def __init__(self, root_dir: str = "logs", level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.root_dir = root_dir
        self._rw = ReadWriteLock()
        self._file: Optional[TextIO] = None
        self._fanout: Optional[FanoutHandler] = None
        self._partition: Optional[DatePartition] = None

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.root_dir} partition={self._partition}>"

    @property
    def file(self) -> Optional[TextIO]:
        return self._file

    @property
    def fanout(self) -> Optional[FanoutHandler]:
        return self._fanout

    @property
    def partition(self) -> Optional[DatePartition]:
        return self._partition

    def install(
        self, fanout: FanoutHandler, file: TextIO, partition: DatePartition
    ) -> tuple[Optional[FanoutHandler], Optional[TextIO]]:
        """Make ``fanout``/``file`` current. Returns the replaced pair, not yet closed.

        Once this returns no dispatch can still be using the returned pair.
        """
        self._rw.acquire_write()
        try:
            old_fanout, old_file = self._fanout, self._file
            self._file, self._fanout, self._partition = file, fanout, partition
        finally:
            self._rw.release_write()
        return old_fanout, old_file

    def handle(self, record: logging.LogRecord) -> bool:
        # The read lock replaces the handler lock: dispatches run concurrently.
        rv = self.filter(record)
        if isinstance(rv, logging.LogRecord):
            record = rv
        if rv:
            self.emit(record)
        return bool(rv)

    def emit(self, record: logging.LogRecord) -> None:
        self._rw.acquire_read()
        try:
            if self._fanout is not None:
                self._fanout.handle(record)
        finally:
            self._rw.release_read()

    def enabled(self, levelno: int) -> bool:
        fanout = self._fanout
        return levelno >= self.level and fanout is not None and fanout.enabled(levelno)

    def close(self) -> None:
        """Best-effort teardown: drop the fanout and close the current file."""
        self._rw.acquire_write()
        try:
            file, fanout = self._file, self._fanout
            self._file = self._fanout = self._partition = None
        finally:
            self._rw.release_write()
        if fanout is not None:
            fanout.close()
        if file is not None:
            try:
                file.close()
            except OSError as exc:
                logger.warning("Could not close log file %s: %s", getattr(file, "name", file), exc)
        super().close()
