# tests/test_logging_config.py

"""Tests for the per-run logging configuration."""

import io
import logging
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from textual.logging import TextualHandler

from src.config.logging_config import BriefFormatter, setup_logging
from src.config.settings import Settings


def _clear_handlers() -> None:
    root_logger = logging.getLogger("price_banner")
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)
    root_logger.propagate = True


class TestLoggingConfig(unittest.TestCase):
    """Handler wiring for the TUI and CLI modes."""

    def setUp(self) -> None:
        """Log into a scratch directory with a clean logger."""
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        logs_patch = patch.object(Settings, "LOGS_DIR", Path(tmp.name) / "logs")
        logs_patch.start()
        self.addCleanup(logs_patch.stop)
        _clear_handlers()
        self.addCleanup(_clear_handlers)
        self.logger = logging.getLogger("price_banner")

    def _handlers(self, kind: type) -> list[logging.Handler]:
        return [h for h in self.logger.handlers if type(h) is kind]

    def test_log_file_created_in_logs_dir(self) -> None:
        """The run's file exists under logs/ with a timestamped name."""
        log_path = setup_logging()
        self.assertTrue(log_path.exists())
        self.assertEqual(log_path.parent, Settings.LOGS_DIR)
        self.assertRegex(log_path.name, r"^run_\d{8}_\d{6}\.log$")

    def test_file_handler_keeps_everything(self) -> None:
        """The file handler takes DEBUG records and full tracebacks."""
        log_path = setup_logging()
        (file_handler,) = self._handlers(logging.FileHandler)
        self.assertEqual(file_handler.level, logging.DEBUG)

        try:
            raise ConnectionError("curl: (7) Failed to connect")
        except ConnectionError:
            logging.getLogger("price_banner.gateway").error(
                "Error fetching product info", exc_info=True
            )
        file_handler.flush()
        text = log_path.read_text(encoding="utf-8")
        self.assertIn("Traceback (most recent call last)", text)
        self.assertIn("Failed to connect", text)

    def test_cli_mode_stderr_is_critical_only(self) -> None:
        """In CLI mode stderr only receives CRITICAL records."""
        setup_logging(interactive=False)
        (stream_handler,) = self._handlers(logging.StreamHandler)
        self.assertEqual(stream_handler.level, logging.CRITICAL)
        self.assertFalse(self._handlers(TextualHandler))

    def test_cli_mode_error_not_written_to_stderr(self) -> None:
        """A logged gateway error leaves stderr empty."""
        err = io.StringIO()
        with patch("sys.stderr", err):
            setup_logging(interactive=False)
            try:
                raise ConnectionError("curl: (7) Failed to connect")
            except ConnectionError:
                logging.getLogger("price_banner.gateway").error(
                    "Error fetching product info: %s",
                    "curl: (7) Failed to connect",
                    exc_info=True,
                )
        self.assertEqual(err.getvalue(), "")

    def test_tui_mode_uses_textual_handler(self) -> None:
        """In TUI mode nothing writes to the terminal streams."""
        setup_logging(interactive=True)
        self.assertEqual(len(self._handlers(TextualHandler)), 1)
        self.assertFalse(self._handlers(logging.StreamHandler))

    def test_repeated_calls_no_duplicate_handlers(self) -> None:
        """Calling setup_logging twice does not duplicate handlers."""
        setup_logging()
        count_before = len(self.logger.handlers)
        setup_logging(interactive=True)
        self.assertEqual(len(self.logger.handlers), count_before)

    def test_logger_does_not_propagate(self) -> None:
        """Records stay out of the root logger's handlers."""
        setup_logging()
        self.assertEqual(self.logger.level, logging.DEBUG)
        self.assertFalse(self.logger.propagate)


class TestBriefFormatter(unittest.TestCase):
    """BriefFormatter output."""

    def test_traceback_is_dropped(self) -> None:
        """Only the message line survives, even with exc_info set."""
        try:
            raise ValueError("raw detail")
        except ValueError:
            record = logging.LogRecord(
                "price_banner.gateway",
                logging.CRITICAL,
                __file__,
                1,
                "Fatal: %s",
                ("boom",),
                exc_info=sys.exc_info(),
            )
        line = BriefFormatter("%(levelname)s | %(message)s").format(record)
        self.assertEqual(line, "CRITICAL | Fatal: boom")


if __name__ == "__main__":
    unittest.main()
