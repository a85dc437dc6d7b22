"""Runtime settings sourced from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from seatly.domain.errors import ConfigError


_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    app_name: str = "Seatly"
    app_version: str = "1.0.0"
    default_rows: int = 3
    default_columns: int = 11
    not_available_label: str = "Not Available"
    log_level: str = "WARNING"
    log_file: Optional[Path] = None
    log_stack_traces: bool = False


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigError(f"{name} must be a boolean flag, got {raw!r}")


def _env_log_level(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().upper()
    if value not in LOG_LEVELS:
        raise ConfigError(f"{name} must be one of {', '.join(LOG_LEVELS)}, got {raw!r}")
    return value


def _env_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return Path(raw.strip()).expanduser().resolve()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once per process; call ``get_settings.cache_clear()`` to reload."""
    defaults = Settings()
    return Settings(
        app_name=os.getenv("SEATLY_APP_NAME", defaults.app_name),
        app_version=os.getenv("SEATLY_APP_VERSION", defaults.app_version),
        default_rows=_env_int("SEATLY_ROWS", defaults.default_rows),
        default_columns=_env_int("SEATLY_COLUMNS", defaults.default_columns),
        not_available_label=os.getenv(
            "SEATLY_NOT_AVAILABLE_LABEL",
            defaults.not_available_label,
        ),
        log_level=_env_log_level("SEATLY_LOG_LEVEL", defaults.log_level),
        log_file=_env_path("SEATLY_LOG_FILE"),
        log_stack_traces=_env_bool("SEATLY_LOG_STACK_TRACES", defaults.log_stack_traces),
    )
