"""Logging helpers for mapseq."""

from __future__ import annotations

import logging
import os
import tempfile
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Callable

_LOGGER_NAME = "mapseq"
_HANDLER_ATTR = "mapseq_handler"


class SinkHandler(logging.Handler):
    """Forward formatted log messages to a callable sink."""

    def __init__(self, sink: Callable[[str], None]) -> None:
        super().__init__()
        self._sink = sink

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
        except Exception:
            msg = record.getMessage()
        try:
            self._sink(msg)
        except Exception:
            self.handleError(record)


def _handlers_of_kind(logger: logging.Logger, kind: str) -> list[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, _HANDLER_ATTR, None) == kind]


def _drop_handlers(logger: logging.Logger, kind: str) -> None:
    for handler in _handlers_of_kind(logger, kind):
        logger.removeHandler(handler)
        handler.close()


def _log_level() -> int:
    level_name = os.environ.get("MAPSEQ_LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def log_path() -> Path:
    """Return the log file location (``MAPSEQ_LOG_PATH`` or the temp dir)."""
    configured = os.environ.get("MAPSEQ_LOG_PATH")
    if configured:
        return Path(configured).expanduser()
    return Path(tempfile.gettempdir()) / "mapseq.log"


def setup_logging(
    sink: Callable[[str], None] | None = None,
    enable_console: bool | None = None,
    level: int | None = None,
) -> Path:
    """Configure mapseq logging.

    Handlers are attached to the ``mapseq`` logger and tagged, so calling this
    repeatedly never duplicates output.

    Args:
        sink: Optional callable receiving each formatted message, for
            applications embedding the sequencer.
        enable_console: Whether to log to stderr. Defaults to True when no
            sink is given.
        level: Logging level (defaults to MAPSEQ_LOG_LEVEL env var or INFO).

    Returns:
        Path to the log file.
    """
    log_level = level if level is not None else _log_level()

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(log_level)

    path = log_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    if not _handlers_of_kind(logger, "file"):
        file_handler = RotatingFileHandler(
            path,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        setattr(file_handler, _HANDLER_ATTR, "file")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s")
        )
        logger.addHandler(file_handler)
        logger.debug("Logging to %s", path)

    if enable_console is None:
        enable_console = sink is None

    if enable_console:
        if not _handlers_of_kind(logger, "console"):
            console_handler = logging.StreamHandler()
            setattr(console_handler, _HANDLER_ATTR, "console")
            console_handler.setLevel(logging.WARNING)
            console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
            logger.addHandler(console_handler)
    else:
        _drop_handlers(logger, "console")

    # A new sink replaces the old one so the callback can be swapped.
    _drop_handlers(logger, "sink")
    if sink is not None:
        sink_handler = SinkHandler(sink)
        setattr(sink_handler, _HANDLER_ATTR, "sink")
        sink_handler.setLevel(log_level)
        sink_handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
        logger.addHandler(sink_handler)

    return path
