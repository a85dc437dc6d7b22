"""
app.py — FastAPI application factory.

This is the ASGI application object imported by uvicorn.
It stores runtime settings on app.state and registers routers.

Usage (via launcher):
    python main.py --serve

Usage (direct uvicorn):
    uvicorn app:app --reload
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from seatly.controllers.reservation_controller import router as reservation_router
from seatly.utils.config import Settings, get_settings
from seatly.utils.logger import configure_logging, get_logger


logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build and wire the FastAPI application.

    Settings are attached to app.state; controllers build a reservation service
    per request so concurrent runs never share run state.
    """
    settings = settings or get_settings()
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level, settings.log_file)
        logger.info(
            "Startup complete | rows=%s | columns=%s",
            settings.default_rows,
            settings.default_columns,
        )
        yield

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.include_router(reservation_router)
    app.state.settings = settings

    return app


# Module-level app object for uvicorn
app = create_app()
