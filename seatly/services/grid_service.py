"""Grid model operations: creation, seat token parsing and reservations.

Every reservation returns a new ``Grid`` and leaves its input untouched, so a
failed range reservation never exposes a partially committed grid.
"""

from __future__ import annotations

import re
from dataclasses import replace

from seatly.domain.constraints import GridConfig, validate_grid_config
from seatly.domain.errors import (
    AlreadyReservedError,
    BoundsError,
    InvalidRangeError,
    ParseError,
    ValidationError,
)
from seatly.domain.models import Grid, SeatLocation, SeatRange


# Sign and fraction are captured only so they can be rejected with a precise message.
SEAT_TOKEN_PATTERN = re.compile(r"R(-?[0-9]+(?:\.[0-9]+)?)C(-?[0-9]+(?:\.[0-9]+)?)")


def center_reference(columns: int) -> tuple[SeatLocation, ...]:
    """Front-row center seat, or the two middle seats when ``columns`` is even."""
    if columns % 2 == 1:
        return (SeatLocation(0, columns // 2),)
    return (SeatLocation(0, columns // 2 - 1), SeatLocation(0, columns // 2))


def create_grid(rows: int, columns: int) -> Grid:
    validate_grid_config(GridConfig(rows=rows, columns=columns))
    return Grid(
        rows=rows,
        columns=columns,
        occupancy=tuple((False,) * columns for _ in range(rows)),
        center=center_reference(columns),
    )


def _validate_token_part(part: str, token: str) -> None:
    if "." in part:
        raise ValidationError(f"Invalid input, no decimals allowed: {token}")
    if part.startswith("-"):
        raise ValidationError(f"Invalid input, no negative numbers allowed: {token}")


def parse_location(text: str, grid: Grid) -> SeatLocation:
    """Parse a one-based ``R<row>C<column>`` token into a zero-based location."""
    match = SEAT_TOKEN_PATTERN.fullmatch(text)
    if match is None:
        raise ParseError(f"Invalid input: {text}")

    row_part, column_part = match.group(1), match.group(2)
    _validate_token_part(row_part, text)
    _validate_token_part(column_part, text)

    row, column = int(row_part), int(column_part)
    if row < 1 or column < 1:
        raise ValidationError(f"Invalid location, location out of bounds: {text}")
    if row > grid.rows or column > grid.columns:
        raise ValidationError(f"Invalid location, location out of bounds: {text}")
    return SeatLocation(row - 1, column - 1)


def is_available(grid: Grid, location: SeatLocation) -> bool:
    if not (0 <= location.row < grid.rows and 0 <= location.column < grid.columns):
        raise BoundsError(
            f"Invalid location, location out of bounds: ({location.row}, {location.column})"
        )
    return not grid.occupancy[location.row][location.column]


def reserve(grid: Grid, location: SeatLocation) -> Grid:
    if not is_available(grid, location):
        raise AlreadyReservedError(f"Seat is not available: {location.label}")

    row = list(grid.occupancy[location.row])
    row[location.column] = True
    occupancy = (
        grid.occupancy[: location.row]
        + (tuple(row),)
        + grid.occupancy[location.row + 1 :]
    )
    return replace(grid, occupancy=occupancy)


def validate_range(seat_range: SeatRange) -> None:
    if seat_range.start.row != seat_range.end.row:
        raise InvalidRangeError("Only single-row ranges are supported")
    if seat_range.start.column > seat_range.end.column:
        raise InvalidRangeError(
            f"Invalid range: {seat_range.start.label} comes after {seat_range.end.label}"
        )


def reserve_range(grid: Grid, seat_range: SeatRange) -> Grid:
    """Reserve every seat of ``seat_range`` left to right, all or nothing."""
    validate_range(seat_range)
    updated = grid
    for location in seat_range.locations():
        updated = reserve(updated, location)
    return updated


def available_count(grid: Grid) -> int:
    return sum(row.count(False) for row in grid.occupancy)
