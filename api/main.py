"""
api/main.py — FastAPI entry point.

Lifespan:
  - Builds one DefaultCalculator from Settings and keeps it in app.state
  - The calculator holds no per-request state, so it is shared by all requests
"""
from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI

from adapters.calculator import DefaultCalculator
from api.routers import evaluate
from api.schemas import HealthResponse
from config import Settings

logger = logging.getLogger("letcalc.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    app.state.calculator = DefaultCalculator.from_settings(settings)
    logger.info("LetCalc API ready (max nesting depth %d).", settings.max_nesting_depth)
    yield
    logger.info("Shutting down.")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())
    # results are arbitrary-precision; serialize them in full
    sys.set_int_max_str_digits(0)

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Routers
    app.include_router(evaluate.router)

    # Health
    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health():
        return HealthResponse(status="ok", version=settings.app_version)

    return app


app = create_app()
