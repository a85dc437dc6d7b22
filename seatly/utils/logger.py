"""Structured logging utilities."""

from __future__ import annotations

import logging
import secrets
import sys
from pathlib import Path
from typing import Optional

from seatly.domain.errors import ConfigError
from seatly.utils.config import Settings, get_settings


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | run=%(run_id)s | %(message)s"
RUN_ID = secrets.token_hex(6)

_LOGGER_INITIALIZED = False
_FILE_HANDLERS: dict[Path, logging.Handler] = {}


class RunIdFilter(logging.Filter):
    """Stamp every record with the id of the current process run."""

    def __init__(self, run_id: str) -> None:
        super().__init__()
        self.run_id = run_id

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "run_id"):
            record.run_id = self.run_id
        return True


def configure_logging(
    level: Optional[str] = None,
    log_file: Optional[Path | str] = None,
) -> None:
    """Configure process-wide logging once.

    Records go to stderr because stdout carries allocation output. Later calls
    may still raise or lower the level and attach a log file.
    """

    global _LOGGER_INITIALIZED
    root = logging.getLogger()
    if not _LOGGER_INITIALIZED:
        try:
            settings = get_settings()
        except ConfigError:
            # Reported by the entry point; logging still comes up on defaults.
            settings = Settings()
        resolved_level = (level or settings.log_level).upper()
        logging.basicConfig(
            level=resolved_level,
            format=LOG_FORMAT,
            stream=sys.stderr,
        )
        for handler in root.handlers:
            handler.addFilter(RunIdFilter(RUN_ID))
        _LOGGER_INITIALIZED = True
        log_file = log_file or settings.log_file
    elif level:
        root.setLevel(level.upper())

    if log_file:
        attach_log_file(log_file)


def attach_log_file(log_file: Path | str) -> Optional[logging.Handler]:
    """Append log records to ``log_file``; returns ``None`` if it cannot be opened."""
    path = Path(log_file).expanduser().resolve()
    if path in _FILE_HANDLERS:
        return _FILE_HANDLERS[path]
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    except OSError as exc:
        logging.getLogger(__name__).warning(
            "Log file unavailable, file logging disabled | path=%s | error=%s",
            path,
            exc,
        )
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RunIdFilter(RUN_ID))
    logging.getLogger().addHandler(handler)
    _FILE_HANDLERS[path] = handler
    return handler


def get_logger(name: str) -> logging.Logger:
    """Return a configured logger for the requested module."""
    configure_logging()
    return logging.getLogger(name)
