"""Health & Readiness Probes.

Invariants:
    - GET /health always returns 200 if the process is up (liveness)
    - GET /health/ready returns 503 if the store does not answer a ping in time
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from docbrowser.api.dependencies import get_query_timeout, get_store
from docbrowser.infrastructure.store import StoreHandle

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe."""
    return {"status": "healthy", "service": "docbrowser"}


@router.get("/ready")
async def readiness_check(
    store: StoreHandle = Depends(get_store),
    timeout: float = Depends(get_query_timeout),
):
    """Readiness probe: includes store connectivity."""
    if not await store.health_check(timeout):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "store_unavailable"},
        )
    return {"status": "ready", "checks": {"store": "healthy"}, "database": store.name}
