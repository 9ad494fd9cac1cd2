# src/config/logging_config.py

"""Per-run logging for price_banner.

Every launch writes a timestamped file in ``logs/`` that receives all
``price_banner.*`` records, tracebacks included.  That file is the only
place a failed Gemini call's raw error ends up: the user only ever sees
the short gateway message.

The second handler depends on how the app runs:

* TUI: records go to the Textual devtools console through
  :class:`textual.logging.TextualHandler`, never onto the screen.
* CLI: a stderr handler that only passes ``CRITICAL`` records and strips
  tracebacks, so stderr carries nothing but the runner's own status lines.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from textual.logging import TextualHandler

from src.config.settings import Settings

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s:%(funcName)s:%(lineno)d | "
    "%(message)s"
)

_BRIEF_FORMAT = "%(levelname)s | %(name)s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class BriefFormatter(logging.Formatter):
    """One line per record; exception and stack text are left out."""

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        if self.usesTime():
            record.asctime = self.formatTime(record, self.datefmt)
        return self.formatMessage(record)


def _file_handler(log_file: Path) -> logging.Handler:
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT))
    return handler


def _devtools_handler() -> logging.Handler:
    # Outside a running app the records are dropped, not printed
    handler = TextualHandler(stderr=False, stdout=False)
    handler.setLevel(logging.INFO)
    handler.setFormatter(BriefFormatter(_BRIEF_FORMAT))
    return handler


def _stderr_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.CRITICAL)
    handler.setFormatter(BriefFormatter(_BRIEF_FORMAT))
    return handler


def setup_logging(interactive: bool = False) -> Path:
    """Initialise the ``price_banner`` logger for the current run.

    Args:
        interactive: True when the Textual TUI owns the terminal.

    Returns:
        The :class:`~pathlib.Path` to the log file created for this run.
    """
    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = logs_dir / f"run_{timestamp}.log"

    root_logger = logging.getLogger("price_banner")
    root_logger.setLevel(logging.DEBUG)
    root_logger.propagate = False

    # Repeated calls (tests, CLI + TUI in one process) keep one set
    if root_logger.handlers:
        return log_file

    root_logger.addHandler(_file_handler(log_file))
    root_logger.addHandler(
        _devtools_handler() if interactive else _stderr_handler()
    )

    root_logger.info(
        "Logging initialised (%s mode), log file: %s",
        "tui" if interactive else "cli",
        log_file,
    )
    return log_file
