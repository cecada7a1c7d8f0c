"""Request Dependencies: hand the app-owned store handle and settings to routes.

Invariants:
    - The StoreHandle lives on app.state, set once by the lifespan before serving
    - Routes never import a module-level client
"""

from fastapi import Request

from docbrowser.config import Settings, get_settings
from docbrowser.infrastructure.store import StoreHandle


def get_store(request: Request) -> StoreHandle:
    """FastAPI dependency for the store handle."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Store not initialized")
    return store


def get_query_timeout() -> float:
    settings: Settings = get_settings()
    return settings.query_timeout_seconds
