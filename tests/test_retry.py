"""
Tests for the retry helper and logging setup.
"""

import logging
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

from course_downloader.errors import FetchFailure
from course_downloader.utils.log import log, setup_logging
from course_downloader.utils.retry import backoff_delay, retry


class TestBackoffDelay(unittest.TestCase):
    def test_exponential(self):
        self.assertEqual(
            [backoff_delay(a, 1.0, 2.0) for a in range(4)], [1.0, 2.0, 4.0, 8.0]
        )

    def test_jitter_bounds(self):
        for _ in range(50):
            d = backoff_delay(2, 1.0, 2.0, jitter=0.5)
            self.assertGreaterEqual(d, 2.0)
            self.assertLessEqual(d, 6.0)


class TestRetry(unittest.TestCase):
    def test_returns_first_success(self):
        fn = MagicMock(side_effect=[FetchFailure("u", "503"), FetchFailure("u", "503"), "ok"])
        sleeps = []
        self.assertEqual(retry(fn, attempts=3, delay=0.5, sleep=sleeps.append), "ok")
        self.assertEqual(fn.call_count, 3)
        self.assertEqual(sleeps, [0.5, 1.0])

    def test_reraises_last_error(self):
        errors = [FetchFailure("u", "first"), FetchFailure("u", "last")]
        fn = MagicMock(side_effect=errors)
        with self.assertRaises(FetchFailure) as ctx:
            retry(fn, attempts=2, delay=0, sleep=lambda s: None)
        self.assertIs(ctx.exception, errors[1])

    def test_other_exceptions_not_retried(self):
        fn = MagicMock(side_effect=KeyError("x"))
        with self.assertRaises(KeyError):
            retry(fn, attempts=5, exceptions=(FetchFailure,), sleep=lambda s: None)
        fn.assert_called_once()

    def test_attempts_must_be_positive(self):
        with self.assertRaises(ValueError):
            retry(lambda: None, attempts=0)


class TestSetupLogging(unittest.TestCase):
    def tearDown(self):
        for handler in list(log.handlers):
            handler.close()
        log.handlers.clear()

    def test_console_only(self):
        setup_logging()
        self.assertEqual(len(log.handlers), 1)
        self.assertEqual(log.level, logging.INFO)

    def test_file_handler_captures_debug(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "logs" / "run.log"
            setup_logging(log_file=str(path))
            self.assertEqual(len(log.handlers), 2)
            log.debug("[SCAN] detail line")
            for handler in log.handlers:
                handler.flush()
            self.assertIn("[SCAN] detail line", path.read_text(encoding="utf-8"))
            for handler in list(log.handlers):
                handler.close()
            log.handlers.clear()


if __name__ == "__main__":
    unittest.main()
