from __future__ import annotations

from dataclasses import replace
from typing import Any

import pytest

from seatly.domain.errors import ConfigError, InvalidRequestError
from seatly.domain.models import SeatLocation
from seatly.services.grid_service import create_grid, is_available
from seatly.services.reservation_service import (
    ReservationService,
    RunPhase,
    allocate_request,
    apply_initial_reservations,
    parse_seat_count,
)
from seatly.utils.config import get_settings
from seatly.utils.telemetry import NullEventRecorder


class RecordingEventRecorder:
    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def record(self, event: str, **context: Any) -> None:
        self.events.append((event, context))


class ExplodingEventRecorder:
    def record(self, event: str, **context: Any) -> None:
        raise RuntimeError(f"telemetry sink down: {event}")


def _build_test_settings(**overrides):
    get_settings.cache_clear()
    base = get_settings()
    return replace(base, **overrides)


def _run(lines: list[str], rows: int, columns: int, recorder=None) -> list[str]:
    service = ReservationService(
        settings=_build_test_settings(),
        recorder=recorder or NullEventRecorder(),
    )
    return service.run_lines(lines, rows=rows, columns=columns)


def test_single_request_fills_whole_row():
    assert _run(["", "3"], rows=1, columns=3) == ["R1C1 - R1C3", "0"]


def test_second_request_unavailable_when_too_few_seats_remain():
    assert _run(["", "2", "2"], rows=1, columns=3) == ["R1C1 - R1C2", "Not Available", "1"]


def test_block_moves_to_second_row_when_front_row_is_mostly_sold():
    reserved = " ".join(f"R1C{column}" for column in range(1, 9))

    assert _run([reserved, "3"], rows=3, columns=11) == ["R2C5 - R2C7", "22"]


def test_single_seats_spread_out_from_center():
    assert _run(["", "1", "1", "1"], rows=1, columns=11) == ["R1C6", "R1C5", "R1C7", "8"]


def test_even_column_grid_straddles_both_centers():
    assert _run(["", "2"], rows=2, columns=4) == ["R1C2 - R1C3", "6"]


def test_malformed_initial_token_is_skipped_and_run_continues():
    service = ReservationService(settings=_build_test_settings(), recorder=NullEventRecorder())

    result = service.run(["R1C1A R1C2", "1"], rows=1, columns=3)

    assert result.to_lines() == ["R1C1", "1"]
    assert [skipped.token for skipped in result.skipped_reservations] == ["R1C1A"]


def test_seats_reserved_after_a_failing_token_are_kept():
    service = ReservationService(settings=_build_test_settings(), recorder=NullEventRecorder())

    result = service.run(["R1C1 R9C9 R1C1 R1C3", "1", "1"], rows=1, columns=3)

    assert result.to_lines() == ["R1C2", "Not Available", "0"]
    assert [skipped.token for skipped in result.skipped_reservations] == ["R9C9", "R1C1"]


def test_non_numeric_request_does_not_affect_following_requests():
    assert _run(["", "abc", "1"], rows=1, columns=3) == ["Not Available", "R1C2", "2"]


@pytest.mark.parametrize("request_line", ["0", "-1", "1.5", "", "two", "+2", "3 seats"])
def test_malformed_requests_are_not_available(request_line):
    assert _run(["", request_line, "3"], rows=1, columns=3) == [
        "Not Available",
        "R1C1 - R1C3",
        "0",
    ]


def test_request_wider_than_grid_is_not_available():
    assert _run(["", "12"], rows=3, columns=11) == ["Not Available", "33"]


def test_run_without_requests_reports_capacity():
    assert _run([""], rows=3, columns=11) == ["33"]
    assert _run([], rows=2, columns=2) == ["4"]


def test_run_uses_default_dimensions_from_settings():
    service = ReservationService(
        settings=_build_test_settings(default_rows=2, default_columns=5),
        recorder=NullEventRecorder(),
    )

    assert service.run_lines(["", "5"]) == ["R1C1 - R1C5", "5"]


def test_not_available_label_comes_from_settings():
    service = ReservationService(
        settings=_build_test_settings(not_available_label="SOLD OUT"),
        recorder=NullEventRecorder(),
    )

    assert service.run_lines(["", "4"], rows=1, columns=3) == ["SOLD OUT", "3"]


@pytest.mark.parametrize(("rows", "columns"), [(0, 3), (3, 0), ("abc", 3), (3, "-2")])
def test_invalid_dimensions_abort_before_processing(rows, columns):
    service = ReservationService(settings=_build_test_settings(), recorder=NullEventRecorder())

    with pytest.raises(ConfigError):
        service.run(["", "1"], rows=rows, columns=columns)
    assert service.phase is RunPhase.IDLE


def test_run_finishes_in_done_phase():
    service = ReservationService(settings=_build_test_settings(), recorder=NullEventRecorder())

    service.run(["", "1"], rows=1, columns=1)

    assert service.phase is RunPhase.DONE


def test_failing_recorder_does_not_change_results():
    lines = ["R1C6 R2C6 bogus", "2", "x", "3", "11", "4"]

    expected = _run(lines, rows=3, columns=11)

    assert _run(lines, rows=3, columns=11, recorder=ExplodingEventRecorder()) == expected


def test_run_records_lifecycle_events():
    recorder = RecordingEventRecorder()

    _run(["R1C1 nope", "2", "9"], rows=1, columns=3, recorder=recorder)

    names = [event for event, _ in recorder.events]
    assert names[0] == "reservation_skipped"
    assert "initial_reservations" in names
    assert "find_best_range" in names
    assert "request_unavailable" in names
    assert names[-1] == "run_completed"
    completed = recorder.events[-1][1]
    assert completed["requests"] == 2
    assert completed["allocated"] == 1
    assert completed["available_seats"] == 0


def test_apply_initial_reservations_keeps_input_grid_untouched():
    grid = create_grid(1, 3)

    updated, skipped = apply_initial_reservations(grid, ["R1C2", "R1C2"])

    assert is_available(grid, SeatLocation(0, 1))
    assert not is_available(updated, SeatLocation(0, 1))
    assert [item.token for item in skipped] == ["R1C2"]
    assert "not available" in skipped[0].error


def test_allocate_request_failure_returns_same_grid():
    grid = create_grid(1, 2)

    updated, outcome = allocate_request(grid, "3")

    assert updated is grid
    assert not outcome.allocated
    assert outcome.error


@pytest.mark.parametrize(("raw", "expected"), [("1", 1), (" 12 ", 12), ("007", 7)])
def test_parse_seat_count_accepts_positive_integers(raw, expected):
    assert parse_seat_count(raw) == expected


@pytest.mark.parametrize("raw", ["0", "00", "-4", "2.0", "", "abc", "1e3"])
def test_parse_seat_count_rejects_everything_else(raw):
    with pytest.raises(InvalidRequestError):
        parse_seat_count(raw)
