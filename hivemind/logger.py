"""
Hivemind logger — levelled logging with a tick column.

Usage
-----
    from hivemind.logger import get_logger

    log = get_logger()
    log.info("Scanned %d offers", 12, tick=1234)
    log.debug("creep %s keeps %s", "worker-1", "harvest", tick=1234)

Records go to the console by default. Call configure_file_logging() once at
startup to also write a rotating log file.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional


LOG_LEVEL        = logging.DEBUG
CONSOLE_LEVEL    = logging.INFO
LOG_BACKUP_COUNT = 10
MAX_BYTES        = 5 * 1024 * 1024


class TickFormatter(logging.Formatter):
    """
    Adds a right-aligned [tick] column when a 'tick' extra field is present.

    Example output:
        2026-10-19 21:14:03.412 | INFO    |       - | Game loop started
        2026-10-19 21:14:05.001 | INFO    |    1280 | W1N1: scanned 14 offers
        2026-10-19 21:14:05.002 | WARNING |    1280 | worker-3 couldn't build: INVALID_TARGET
    """

    BASE_FMT = "%(asctime)s.%(msecs)03d | %(levelname)-7s | %(tick_col)7s | %(message)s"
    DATE_FMT = "%Y-%m-%d %H:%M:%S"

    def format(self, record: logging.LogRecord) -> str:
        tick = getattr(record, "tick", None)
        record.tick_col = "-" if tick is None else str(tick)
        record.levelname = record.levelname[:7]
        return super().format(record)


_logger_instance: Optional["HivemindLogger"] = None


def get_logger(name: str = "hivemind") -> "HivemindLogger":
    """Return the singleton HivemindLogger, creating it on first call."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = HivemindLogger(name)
    return _logger_instance


def configure_file_logging(log_dir: str | Path = "logs", level: int = LOG_LEVEL) -> Path:
    """Attach a rotating file handler to the hivemind logger and return the file path."""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"hivemind_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

    handler = logging.handlers.RotatingFileHandler(
        filename    = log_file,
        maxBytes    = MAX_BYTES,
        backupCount = LOG_BACKUP_COUNT,
        encoding    = "utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(TickFormatter(fmt=TickFormatter.BASE_FMT, datefmt=TickFormatter.DATE_FMT))

    log = get_logger()
    log.raw.addHandler(handler)
    log.info("Logging to %s", log_file.resolve())
    return log_file


class HivemindLogger:
    """Thin wrapper around the standard logger that threads a tick number into every record."""

    def __init__(self, name: str = "hivemind") -> None:
        self._logger = logging.getLogger(name)
        self._logger.setLevel(LOG_LEVEL)

        if self._logger.handlers:
            return

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(CONSOLE_LEVEL)
        console_handler.setFormatter(
            TickFormatter(fmt=TickFormatter.BASE_FMT, datefmt=TickFormatter.DATE_FMT)
        )
        self._logger.addHandler(console_handler)

    @property
    def raw(self) -> logging.Logger:
        return self._logger

    def set_console_level(self, level: int) -> None:
        for handler in self._logger.handlers:
            if not isinstance(handler, logging.FileHandler):
                handler.setLevel(level)

    def debug(self, msg: str, *args, tick: Optional[int] = None, **kwargs) -> None:
        self._logger.debug(msg, *args, extra={"tick": tick}, **kwargs)

    def info(self, msg: str, *args, tick: Optional[int] = None, **kwargs) -> None:
        self._logger.info(msg, *args, extra={"tick": tick}, **kwargs)

    def warning(self, msg: str, *args, tick: Optional[int] = None, **kwargs) -> None:
        self._logger.warning(msg, *args, extra={"tick": tick}, **kwargs)

    def error(self, msg: str, *args, tick: Optional[int] = None, **kwargs) -> None:
        self._logger.error(msg, *args, extra={"tick": tick}, **kwargs)

    def exception(self, msg: str, *args, tick: Optional[int] = None, **kwargs) -> None:
        self._logger.exception(msg, *args, extra={"tick": tick}, **kwargs)
