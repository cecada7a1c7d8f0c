"""Document Browser API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - The store is connected and pinged in the lifespan, before any request is served;
      a StoreUnavailableError there aborts startup
    - Error handlers map BrowserError to plain-text responses

Design Decisions:
    - Store handle kept on app.state and injected via Depends(get_store)
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from docbrowser.api.error_handlers import register_error_handlers
from docbrowser.api.routes import browse, health
from docbrowser.config import get_settings
from docbrowser.infrastructure.observability import setup_logging
from docbrowser.infrastructure.store import connect_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.store = await connect_store(
        settings.mongodb_url,
        settings.database,
        connect_timeout=settings.connect_timeout_seconds,
        ping_timeout=settings.ping_timeout_seconds,
    )
    logger.info("Document browser started", extra={"database": settings.database})
    yield
    logger.info("Document browser shutting down")
    await app.state.store.close()


app = FastAPI(title="Document Browser", version="1.0.0", lifespan=lifespan)

register_error_handlers(app)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(browse.router)


def run() -> None:
    """Console entry point: serve the app on the configured host and port."""
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
