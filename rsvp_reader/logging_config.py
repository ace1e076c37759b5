"""Logging configuration for the RSVP reader.

The engine modules only ever call ``logging.getLogger(__name__)``; whoever owns
the process (a terminal front end, a test harness) calls :func:`setup_logging`
once. Console output stays human readable, the optional file log is JSON lines
so timing summaries can be analysed afterwards.
"""

import json
import logging
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rsvp_reader.config import get_settings

_LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
_LOG_FILE_BACKUPS = 3


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Structured fields passed via extra={"extra_data": {...}}
        extra_data = getattr(record, "extra_data", None)
        if isinstance(extra_data, dict):
            log_data.update(extra_data)

        return json.dumps(log_data, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """Human-readable console formatter with level colours."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
        reset = self.COLORS["RESET"]

        log_msg = f"{color}[{record.levelname}]{reset} {record.name} - {record.getMessage()}"

        extra_data = getattr(record, "extra_data", None)
        if isinstance(extra_data, dict) and "wpm" in extra_data:
            log_msg += f" (wpm={extra_data['wpm']})"

        if record.exc_info:
            log_msg += f"\n{self.formatException(record.exc_info)}"

        return log_msg


def setup_logging(
    log_level: str | None = None,
    log_file: str | Path | None = None,
    enable_console_logging: bool = True,
) -> None:
    """
    Configure the ``rsvp_reader`` logger hierarchy.

    Args:
        log_level: Logging level name; defaults to ``Settings.log_level``.
        log_file: Path of a rotating JSON log; defaults to ``Settings.log_file``.
            No file handler is installed when neither is set.
        enable_console_logging: Attach a console (stderr) handler.
    """
    settings = get_settings()
    level_name = (log_level or settings.log_level).upper()
    file_path = log_file if log_file is not None else settings.log_file

    logger = logging.getLogger("rsvp_reader")
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    logger.handlers.clear()

    if enable_console_logging:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(ConsoleFormatter())
        logger.addHandler(console_handler)

    if file_path:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path, maxBytes=_LOG_FILE_MAX_BYTES, backupCount=_LOG_FILE_BACKUPS, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)
