"""HTTP controller layer for seat reservation runs."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field, field_validator

from seatly.domain.errors import ConfigError
from seatly.services.reservation_service import ReservationService
from seatly.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(tags=["reservations"])


class ReservationRunRequest(BaseModel):
    """Input DTO; each call is an independent run on a fresh grid."""

    rows: int | None = Field(default=None, ge=1)
    columns: int | None = Field(default=None, ge=1)
    reserved: list[str] = Field(default_factory=list)
    requests: list[str] = Field(default_factory=list)

    @field_validator("reserved")
    @classmethod
    def strip_reserved_tokens(cls, value: list[str]) -> list[str]:
        return [token.strip() for token in value if token.strip()]


class ReservationRunResponse(BaseModel):
    results: list[str]
    available_seats: int = Field(ge=0)
    skipped_reservations: list[str]


def get_reservation_service(request: Request) -> ReservationService:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Reservation service is not initialized",
        )
    return ReservationService(settings=settings)


@router.post(
    "/reservations",
    response_model=ReservationRunResponse,
    status_code=status.HTTP_200_OK,
)
async def run_reservations(
    payload: ReservationRunRequest,
    service: ReservationService = Depends(get_reservation_service),
) -> ReservationRunResponse:
    """Apply already-reserved seats, then allocate each request in order."""
    lines = [" ".join(payload.reserved), *payload.requests]
    try:
        result = service.run(lines, rows=payload.rows, columns=payload.columns)
    except ConfigError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected reservation failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to run reservations",
        ) from exc

    label = service.settings.not_available_label
    return ReservationRunResponse(
        results=[
            outcome.seat_range.label if outcome.seat_range is not None else label
            for outcome in result.outcomes
        ],
        available_seats=result.available_seats,
        skipped_reservations=[skipped.token for skipped in result.skipped_reservations],
    )
