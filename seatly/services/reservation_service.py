"""Sequential allocation of seat requests against one exclusively owned grid."""

from __future__ import annotations

import re
from enum import Enum
from typing import Iterable, Optional, Sequence

from seatly.domain.constraints import parse_dimension
from seatly.domain.errors import InvalidRequestError, SeatlyError
from seatly.domain.models import AllocationOutcome, Grid, RunResult, SkippedReservation
from seatly.services.grid_service import (
    available_count,
    create_grid,
    parse_location,
    reserve,
    reserve_range,
)
from seatly.services.search_service import find_best_range
from seatly.utils.config import Settings, get_settings
from seatly.utils.logger import get_logger
from seatly.utils.telemetry import (
    EventRecorder,
    LoggingEventRecorder,
    elapsed_ms,
    safe_record,
    start_timer,
)


logger = get_logger(__name__)

_SEAT_COUNT_PATTERN = re.compile(r"[0-9]+")


class RunPhase(str, Enum):
    IDLE = "idle"
    INITIALIZING = "initializing"
    PROCESSING = "processing"
    DONE = "done"


def parse_seat_count(text: str) -> int:
    value = text.strip()
    if not _SEAT_COUNT_PATTERN.fullmatch(value):
        raise InvalidRequestError(f"Invalid input: {text!r}")
    seat_count = int(value)
    if seat_count < 1:
        raise InvalidRequestError(f"Seat count must be at least 1: {text!r}")
    return seat_count


def apply_initial_reservations(
    grid: Grid,
    tokens: Iterable[str],
    *,
    recorder: Optional[EventRecorder] = None,
    log_stack_traces: bool = False,
) -> tuple[Grid, list[SkippedReservation]]:
    """Reserve already-sold seats in order, skipping tokens that fail.

    Seats committed before and after a failing token are kept.
    """
    skipped: list[SkippedReservation] = []
    applied = 0
    for token in tokens:
        try:
            grid = reserve(grid, parse_location(token, grid))
            applied += 1
        except SeatlyError as exc:
            skipped.append(SkippedReservation(token=token, error=str(exc)))
            logger.warning(
                "Initial reservation skipped | token=%s | error=%s",
                token,
                exc,
                exc_info=log_stack_traces,
            )
            safe_record(
                recorder,
                "reservation_skipped",
                token=token,
                error=type(exc).__name__,
            )
    safe_record(recorder, "initial_reservations", applied=applied, skipped=len(skipped))
    return grid, skipped


def allocate_request(
    grid: Grid,
    request: str,
    *,
    recorder: Optional[EventRecorder] = None,
    log_stack_traces: bool = False,
) -> tuple[Grid, AllocationOutcome]:
    """Allocate the best block for one request line; failures leave ``grid`` as is."""
    try:
        seat_count = parse_seat_count(request)
        best = find_best_range(grid, seat_count, recorder=recorder)
        updated = reserve_range(grid, best)
    except SeatlyError as exc:
        logger.info(
            "Not Available | request=%s | error=%s",
            request,
            exc,
            exc_info=log_stack_traces,
        )
        safe_record(
            recorder,
            "request_unavailable",
            request=request,
            error=type(exc).__name__,
        )
        return grid, AllocationOutcome(request=request, error=str(exc))
    return updated, AllocationOutcome(request=request, seat_range=best)


class ReservationService:
    """Runs one allocation pass: initial reservations, then every request in order."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        recorder: Optional[EventRecorder] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._recorder = recorder if recorder is not None else LoggingEventRecorder()
        self._phase = RunPhase.IDLE

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def phase(self) -> RunPhase:
        return self._phase

    def _enter(self, phase: RunPhase) -> None:
        logger.debug("Run phase changed | from=%s | to=%s", self._phase.value, phase.value)
        self._phase = phase

    def run(
        self,
        lines: Sequence[str],
        *,
        rows: Optional[int | str] = None,
        columns: Optional[int | str] = None,
    ) -> RunResult:
        """Process reservation input lines.

        ``lines[0]`` holds space separated already-reserved seats and may be
        blank; every later line is one seat-count request.
        """
        started = start_timer()
        resolved_rows = parse_dimension(
            rows if rows is not None else self._settings.default_rows,
            "rows",
        )
        resolved_columns = parse_dimension(
            columns if columns is not None else self._settings.default_columns,
            "columns",
        )
        self._enter(RunPhase.IDLE)
        grid = create_grid(resolved_rows, resolved_columns)

        self._enter(RunPhase.INITIALIZING)
        skipped: list[SkippedReservation] = []
        reserved_line = lines[0].strip() if lines else ""
        if reserved_line:
            grid, skipped = apply_initial_reservations(
                grid,
                reserved_line.split(),
                recorder=self._recorder,
                log_stack_traces=self._settings.log_stack_traces,
            )

        self._enter(RunPhase.PROCESSING)
        outcomes: list[AllocationOutcome] = []
        for line in lines[1:]:
            grid, outcome = allocate_request(
                grid,
                line.strip(),
                recorder=self._recorder,
                log_stack_traces=self._settings.log_stack_traces,
            )
            outcomes.append(outcome)

        self._enter(RunPhase.DONE)
        result = RunResult(
            outcomes=outcomes,
            available_seats=available_count(grid),
            skipped_reservations=skipped,
            grid=grid,
        )
        safe_record(
            self._recorder,
            "run_completed",
            rows=resolved_rows,
            columns=resolved_columns,
            requests=len(outcomes),
            allocated=sum(1 for outcome in outcomes if outcome.allocated),
            available_seats=result.available_seats,
            elapsed_ms=elapsed_ms(started),
        )
        return result

    def run_lines(
        self,
        lines: Sequence[str],
        *,
        rows: Optional[int | str] = None,
        columns: Optional[int | str] = None,
    ) -> list[str]:
        result = self.run(lines, rows=rows, columns=columns)
        return result.to_lines(self._settings.not_available_label)
