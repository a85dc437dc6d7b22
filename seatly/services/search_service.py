"""Candidate search, centering score and best-range selection."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional

from seatly.domain.errors import InvalidRequestError, NoCandidateError
from seatly.domain.models import Grid, SeatLocation, SeatRange
from seatly.utils.telemetry import EventRecorder, elapsed_ms, safe_record, start_timer


def find_all_ranges(grid: Grid, seat_count: int) -> list[SeatRange]:
    """Return every free same-row block of exactly ``seat_count`` seats.

    A single pass per row tracks the length of the current run of free seats,
    so the scan costs O(rows * columns) regardless of ``seat_count``. Results
    are row-major with ascending start column.
    """
    if seat_count < 1:
        raise InvalidRequestError(f"seat count must be >= 1, got {seat_count}")
    if seat_count > grid.columns:
        return []

    candidates: list[SeatRange] = []
    for row_index, row in enumerate(grid.occupancy):
        if all(row):
            continue
        free_run = 0
        for column, occupied in enumerate(row):
            free_run = 0 if occupied else free_run + 1
            if free_run >= seat_count:
                candidates.append(
                    SeatRange(
                        start=SeatLocation(row_index, column - seat_count + 1),
                        end=SeatLocation(row_index, column),
                    )
                )
    return candidates


def distance_to_center(location: SeatLocation, center: Iterable[SeatLocation]) -> int:
    """Manhattan distance from ``location`` to the nearest center reference."""
    return min(
        abs(location.row - reference.row) + abs(location.column - reference.column)
        for reference in center
    )


def score(seat_range: SeatRange, center: tuple[SeatLocation, ...]) -> int:
    # Summing every seat instead of the range midpoint avoids off-by-one picks
    # when the column count is even and no single seat sits on the center.
    return sum(distance_to_center(location, center) for location in seat_range.locations())


def score_candidates(
    candidates: Iterable[SeatRange],
    center: tuple[SeatLocation, ...],
) -> list[SeatRange]:
    return [replace(candidate, score=score(candidate, center)) for candidate in candidates]


def _selection_key(candidate: SeatRange) -> tuple[float, int, int]:
    candidate_score = candidate.score if candidate.score is not None else float("inf")
    return (candidate_score, candidate.row, candidate.start.column)


def select_best(candidates: Iterable[SeatRange]) -> SeatRange:
    """Lowest score wins; equal scores prefer the front row, then the leftmost start."""
    best: Optional[SeatRange] = None
    for candidate in candidates:
        if best is None or _selection_key(candidate) < _selection_key(best):
            best = candidate
    if best is None:
        raise NoCandidateError("No possible ranges found")
    return best


def find_best_range(
    grid: Grid,
    seat_count: int,
    recorder: Optional[EventRecorder] = None,
) -> SeatRange:
    started = start_timer()
    candidates = score_candidates(find_all_ranges(grid, seat_count), grid.center)
    safe_record(
        recorder,
        "find_all_ranges",
        seat_count=seat_count,
        candidates=len(candidates),
        elapsed_ms=elapsed_ms(started),
    )

    if not candidates:
        raise NoCandidateError(f"No possible ranges found: {seat_count}")

    started = start_timer()
    best = select_best(candidates)
    safe_record(
        recorder,
        "find_best_range",
        seat_count=seat_count,
        candidates=len(candidates),
        best=best.label,
        score=best.score,
        elapsed_ms=elapsed_ms(started),
    )
    return best
