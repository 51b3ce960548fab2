"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (registration store, upload
store, telemetry). A store that cannot be opened aborts startup.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from selecta.core.config import Settings, get_settings
from selecta.infrastructure.external.storage import LocalFileStore
from selecta.infrastructure.persistence import StoreFactory
from selecta.shared.telemetry import get_telemetry, set_telemetry, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, registration store (opened; failure re-raised),
    upload store, SQL instrumentation (when telemetry was set up by
    create_app). Shutdown order: store close, telemetry shutdown.
    """
    settings: Settings = getattr(app.state, "settings", None) or get_settings()
    setup_logging(settings)

    # ---- Startup ----
    app.state.started_at = time.monotonic()

    store = StoreFactory.create_registration_store(settings)
    try:
        await store.open()
    except Exception:
        logger.exception(
            "Failed to initialize %s registration store", settings.registration_backend
        )
        raise
    app.state.registration_store = store
    app.state.file_store = LocalFileStore(settings.upload_dir)
    logger.info(
        "Server ready: backend=%s, uploads=%s",
        settings.registration_backend,
        app.state.file_store.upload_dir,
    )

    telemetry = get_telemetry()
    engine = getattr(store, "engine", None)
    if telemetry is not None and engine is not None:
        telemetry.instrument_sqlalchemy(engine)

    yield

    # ---- Shutdown ----
    await store.close()
    app.state.registration_store = None
    logger.info("Registration store closed")

    if telemetry is not None:
        telemetry.shutdown()
        set_telemetry(None)
