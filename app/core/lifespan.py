"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (logging, telemetry, DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, telemetry (if enabled). Shutdown: telemetry flush,
    SQL engine dispose.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    app.state.telemetry = None
    if settings.telemetry_enabled:
        from app.infrastructure.persistence import database
        from app.shared.telemetry.telemetry import TelemetryConfig

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        telemetry.instrument_fastapi(app)
        engine = database.ensure_engine()
        if engine is not None:
            telemetry.instrument_sqlalchemy(engine)
        app.state.telemetry = telemetry
        logger.info("Telemetry initialized")

    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    # ---- Shutdown ----
    if app.state.telemetry is not None:
        app.state.telemetry.shutdown()

    from app.infrastructure.persistence import database

    if database.engine is not None:
        await database.engine.dispose()
        logger.info("Database engine disposed")
