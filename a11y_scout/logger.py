# === FILE: a11y_scout/logger.py ===
"""Logging setup for **A11yScout**.

Every module logs through the ``A11yScout`` logger::

    from a11y_scout.logger import logger
    logger.info("Crawl started")

Console records go to *stderr* so that stdout stays free for command output
(``a11y-scout config`` prints JSON there). On a terminal the lines are
colored by level, the way the CLI colors its own messages. An optional log
file receives plain records and rotates at 5 MB.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Final, Optional, Union

import click

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "A11yScout"

_LevelT = Union[int, str]

_LEVEL_STYLES: Dict[int, Dict[str, Any]] = {
    logging.DEBUG: {"dim": True},
    logging.WARNING: {"fg": "yellow"},
    logging.ERROR: {"fg": "red"},
    logging.CRITICAL: {"fg": "red", "bold": True},
}


class ConsoleFormatter(logging.Formatter):
    """Formats a record and, when *color* is on, styles the line by its level."""

    def __init__(self, fmt: str, color: bool = False) -> None:
        super().__init__(fmt)
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        style = _LEVEL_STYLES.get(record.levelno)
        if self.color and style:
            return click.style(line, **style)
        return line


class ConsoleHandler(logging.StreamHandler):
    """Stream handler bound to the *current* ``sys.stderr``.

    click's test runner and pytest swap ``sys.stderr`` per invocation; looking
    it up on every record keeps the handler from writing to a closed stream.
    """

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    def emit(self, record: logging.LogRecord) -> None:
        self.stream = sys.stderr
        super().emit(record)


def _is_terminal() -> bool:
    isatty = getattr(sys.stderr, "isatty", None)
    return bool(isatty and isatty())


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
    color: Optional[bool] = None,
) -> logging.Logger:
    """(Re)configure the project logger, replacing any handlers it had.

    Parameters
    ----------
    level
        Numeric or textual logging level (e.g. ``"DEBUG"``).
    log_file
        Path to a rotating logfile. *None* means console only.
    log_format
        Format string for both handlers.
    color
        Force console colors on or off; *None* colors only a terminal.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    for old in list(lg.handlers):
        lg.removeHandler(old)
        old.close()

    console = ConsoleHandler()
    console.setFormatter(ConsoleFormatter(log_format, _is_terminal() if color is None else color))
    lg.addHandler(console)

    if log_file is not None:
        file_handler = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(log_format))
        lg.addHandler(file_handler)

    lg.propagate = False
    return lg


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Entry point used by the CLI group for ``--log-level/--log-file/--log-format``."""
    return configure(level=level, log_file=log_file, log_format=log_format)


logger: logging.Logger = init_logging()

__all__ = [
    "logger",
    "configure",
    "init_logging",
    "ConsoleFormatter",
    "ConsoleHandler",
    "LOGGER_NAME",
    "DEFAULT_FORMAT",
]
