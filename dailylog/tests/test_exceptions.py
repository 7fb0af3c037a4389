"""Unit tests for the dailylog exception hierarchy."""
from __future__ import annotations

import unittest

from dailylog.core.exceptions import (
    ConfigurationError,
    DailyLogError,
    DispatchError,
    FormatError,
    RotationError,
    WriteError,
)


class TestExceptions(unittest.TestCase):
    def test_codes(self) -> None:
        self.assertEqual(ConfigurationError("x").code, "CONFIGURATION_ERROR")
        self.assertEqual(FormatError("x").code, "FORMAT_ERROR")
        self.assertEqual(WriteError("x").code, "WRITE_ERROR")
        self.assertEqual(RotationError("x").code, "ROTATION_ERROR")
        self.assertEqual(DailyLogError("x", code="CUSTOM").code, "CUSTOM")

    def test_to_dict_with_cause(self) -> None:
        cause = PermissionError("denied")
        err = RotationError("error opening file", details={"path": "logs/2024/03/01.txt"}, cause=cause)
        out = err.to_dict()
        self.assertEqual(out["message"], "error opening file")
        self.assertEqual(out["code"], "ROTATION_ERROR")
        self.assertEqual(out["details"], {"path": "logs/2024/03/01.txt"})
        self.assertEqual(out["cause"], "denied")
        self.assertIs(err.__cause__, cause)

    def test_dispatch_error_lists_failing_sinks(self) -> None:
        a, b = object(), object()
        err = DispatchError([(a, WriteError("a broke")), (b, WriteError("b broke"))])
        self.assertEqual(err.sinks, [a, b])
        self.assertIn("2 sink(s) failed", str(err))
        self.assertIn("a broke", str(err))
        self.assertIsInstance(err, DailyLogError)
