"""Diagnostic event recording, kept off the allocation path."""

from __future__ import annotations

import logging
import time
from typing import Any, Optional, Protocol

from seatly.utils.logger import get_logger


logger = get_logger(__name__)


class EventRecorder(Protocol):
    def record(self, event: str, **context: Any) -> None:
        ...


class NullEventRecorder:
    """Discards every event."""

    def record(self, event: str, **context: Any) -> None:
        return None


class LoggingEventRecorder:
    """Writes events as ``event | key=value | ...`` log lines."""

    def __init__(
        self,
        event_logger: Optional[logging.Logger] = None,
        level: int = logging.INFO,
    ) -> None:
        self._logger = event_logger or get_logger("seatly.events")
        self._level = level

    def record(self, event: str, **context: Any) -> None:
        if not self._logger.isEnabledFor(self._level):
            return
        parts = [event] + [f"{key}={value}" for key, value in context.items()]
        self._logger.log(self._level, " | ".join(parts))


def safe_record(recorder: Optional[EventRecorder], event: str, **context: Any) -> None:
    """Forward an event; a failing recorder never reaches the caller."""
    if recorder is None:
        return
    try:
        recorder.record(event, **context)
    except Exception:  # noqa: BLE001 - telemetry must not affect allocation results
        logger.debug("Event recorder failed | event=%s", event, exc_info=True)


def start_timer() -> float:
    return time.perf_counter()


def elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000.0, 3)
