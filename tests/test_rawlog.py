from __future__ import annotations

import io
import tempfile
import unittest
from pathlib import Path

from elmnet.rawlog import ConsoleRawLogger, RawLogger, chain_loggers


class RawLoggerTests(unittest.TestCase):
    def test_appends_tx_and_rx_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "logs" / "raw.log"
            logger = RawLogger(str(path))
            logger("TX", "01 0D", [])
            logger("RX", "01 0D", ["41 0D 5A", ">"])

            lines = path.read_text(encoding="utf-8").splitlines()

        self.assertEqual(4, len(lines))
        self.assertTrue(lines[0].endswith("] TX 01 0D"))
        self.assertTrue(lines[1].endswith("] RX 01 0D"))
        self.assertEqual(["  41 0D 5A", "  >"], lines[2:])

    def test_console_logger(self) -> None:
        out = io.StringIO()
        ConsoleRawLogger(out)("RX", "ATZ", ["ELM327 v1.5", ">"])
        self.assertIn("RX ATZ -> ELM327 v1.5 | >", out.getvalue())


class ChainLoggersTests(unittest.TestCase):
    def test_none_when_nothing_active(self) -> None:
        self.assertIsNone(chain_loggers(None, None))

    def test_single_logger_is_returned_as_is(self) -> None:
        logger = ConsoleRawLogger(io.StringIO())
        self.assertIs(logger, chain_loggers(None, logger))

    def test_fans_out(self) -> None:
        first, second = io.StringIO(), io.StringIO()
        chained = chain_loggers(ConsoleRawLogger(first), ConsoleRawLogger(second))
        chained("TX", "ATZ", [])
        self.assertIn("TX ATZ", first.getvalue())
        self.assertIn("TX ATZ", second.getvalue())


if __name__ == "__main__":
    unittest.main()
