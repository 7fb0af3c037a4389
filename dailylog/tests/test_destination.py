"""Unit tests for DatePartition, ReadWriteLock and ActiveDestination."""
from __future__ import annotations

import io
import logging
import os
import threading
import time
import unittest
from datetime import datetime

from dailylog.core.logger.destination import ActiveDestination, DatePartition, ReadWriteLock
from dailylog.core.logger.handlers import FanoutHandler, SinkHandler


class TestDatePartition(unittest.TestCase):
    def test_path_layout(self) -> None:
        partition = DatePartition.of(datetime(2024, 3, 1, 15, 30))
        self.assertEqual(partition, (2024, 3, 1))
        self.assertEqual(partition.path("logs"), os.path.join("logs", "2024", "03", "01.txt"))
        self.assertEqual(partition.directory("logs"), os.path.join("logs", "2024", "03"))

    def test_same_day_same_key(self) -> None:
        self.assertEqual(
            DatePartition.of(datetime(2024, 3, 1, 0, 0)),
            DatePartition.of(datetime(2024, 3, 1, 23, 59, 59)),
        )
        self.assertNotEqual(
            DatePartition.of(datetime(2024, 2, 29, 23, 59)),
            DatePartition.of(datetime(2024, 3, 1, 0, 0)),
        )


class TestReadWriteLock(unittest.TestCase):
    def test_readers_share(self) -> None:
        rw = ReadWriteLock()
        rw.acquire_read()
        done = threading.Event()

        def other_reader() -> None:
            rw.acquire_read()
            rw.release_read()
            done.set()

        threading.Thread(target=other_reader).start()
        self.assertTrue(done.wait(2))
        rw.release_read()

    def test_writer_waits_for_readers(self) -> None:
        rw = ReadWriteLock()
        rw.acquire_read()
        acquired = threading.Event()

        def writer() -> None:
            rw.acquire_write()
            acquired.set()
            rw.release_write()

        t = threading.Thread(target=writer)
        t.start()
        self.assertFalse(acquired.wait(0.1))
        rw.release_read()
        self.assertTrue(acquired.wait(2))
        t.join()

    def test_reader_reenters_while_writer_waits(self) -> None:
        rw = ReadWriteLock()
        rw.acquire_read()
        t = threading.Thread(target=lambda: (rw.acquire_write(), rw.release_write()))
        t.start()
        time.sleep(0.05)
        rw.acquire_read()  # must not deadlock behind the waiting writer
        rw.release_read()
        rw.release_read()
        t.join(2)
        self.assertFalse(t.is_alive())


class TestActiveDestination(unittest.TestCase):
    def setUp(self) -> None:
        self.destination = ActiveDestination("logs")
        self.log = logging.getLogger("dailylog.tests.destination")
        self.log.propagate = False
        self.log.setLevel(logging.DEBUG)
        self.log.addHandler(self.destination)

    def tearDown(self) -> None:
        self.log.removeHandler(self.destination)

    def test_drops_records_before_install(self) -> None:
        self.assertIsNone(self.destination.fanout)
        self.log.info("nowhere")  # no error
        self.assertFalse(self.destination.enabled(logging.INFO))

    def test_install_swaps_and_returns_old_pair(self) -> None:
        first, second = io.StringIO(), io.StringIO()
        first_fanout = FanoutHandler(SinkHandler(first))
        self.assertEqual(
            self.destination.install(first_fanout, first, DatePartition(2024, 3, 1)), (None, None)
        )
        self.log.info("one")
        old_fanout, old_file = self.destination.install(
            FanoutHandler(SinkHandler(second)), second, DatePartition(2024, 3, 2)
        )
        self.assertIs(old_fanout, first_fanout)
        self.assertIs(old_file, first)
        self.log.info("two")
        self.assertIn("one", first.getvalue())
        self.assertNotIn("two", first.getvalue())
        self.assertIn("two", second.getvalue())
        self.assertEqual(self.destination.partition, (2024, 3, 2))
        self.assertTrue(self.destination.enabled(logging.DEBUG))

    def test_close_closes_current_file(self) -> None:
        stream = io.StringIO()
        self.destination.install(FanoutHandler(SinkHandler(stream)), stream, DatePartition(2024, 3, 1))
        self.destination.close()
        self.assertTrue(stream.closed)
        self.assertIsNone(self.destination.fanout)
        self.assertIsNone(self.destination.file)
        self.log.info("after close")  # dropped, not raised
