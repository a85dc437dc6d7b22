"""Domain models for seat grids, ranges and allocation outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional


@dataclass(frozen=True, order=True)
class SeatLocation:
    """Zero-based seat coordinate; rendered one-based as ``R{row}C{column}``."""

    row: int
    column: int

    @property
    def label(self) -> str:
        return f"R{self.row + 1}C{self.column + 1}"


@dataclass(frozen=True)
class SeatRange:
    start: SeatLocation
    end: SeatLocation
    score: Optional[int] = field(default=None, compare=False)

    @property
    def row(self) -> int:
        return self.start.row

    @property
    def seat_count(self) -> int:
        return self.end.column - self.start.column + 1

    @property
    def label(self) -> str:
        if self.start == self.end:
            return self.start.label
        return f"{self.start.label} - {self.end.label}"

    def locations(self) -> Iterator[SeatLocation]:
        for column in range(self.start.column, self.end.column + 1):
            yield SeatLocation(self.start.row, column)


@dataclass(frozen=True)
class Grid:
    """Seating plan snapshot; reservations produce a new ``Grid``."""

    rows: int
    columns: int
    occupancy: tuple[tuple[bool, ...], ...]
    center: tuple[SeatLocation, ...]


@dataclass(frozen=True)
class AllocationOutcome:
    request: str
    seat_range: Optional[SeatRange] = None
    error: Optional[str] = None

    @property
    def allocated(self) -> bool:
        return self.seat_range is not None


@dataclass(frozen=True)
class SkippedReservation:
    token: str
    error: str


@dataclass(frozen=True)
class RunResult:
    outcomes: list[AllocationOutcome]
    available_seats: int
    skipped_reservations: list[SkippedReservation]
    grid: Grid

    def to_lines(self, not_available_label: str = "Not Available") -> list[str]:
        lines = [
            outcome.seat_range.label if outcome.seat_range is not None else not_available_label
            for outcome in self.outcomes
        ]
        lines.append(str(self.available_seats))
        return lines
