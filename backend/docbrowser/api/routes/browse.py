"""Browse Routes: GET /, /collection and /document.

Invariants:
    - Query parameters arrive as raw strings; validation belongs to the query
      operations so every route reports the same messages
    - Failures propagate as BrowserError to the global handler (400 / 500 plain text)
"""

from fastapi import APIRouter, Depends, Query

from docbrowser.api.dependencies import get_query_timeout, get_store
from docbrowser.infrastructure.store import StoreHandle
from docbrowser.schemas.browse import (
    CollectionListingResponse, DocumentIdPageResponse, DocumentViewResponse,
)
from docbrowser.services import browse_queries

router = APIRouter(tags=["browse"])


@router.get("/", response_model=CollectionListingResponse)
async def index(
    store: StoreHandle = Depends(get_store),
    timeout: float = Depends(get_query_timeout),
):
    """List the collections of the bound database."""
    result = await browse_queries.list_collections(store, timeout)
    return CollectionListingResponse.from_browse_result(result)


@router.get("/collection", response_model=DocumentIdPageResponse)
async def collection(
    name: str | None = Query(None),
    skip: str | None = Query(None),
    store: StoreHandle = Depends(get_store),
    timeout: float = Depends(get_query_timeout),
):
    """Document count and identifiers of one collection, from `skip` onward."""
    result = await browse_queries.list_document_ids(store, name, skip, timeout)
    return DocumentIdPageResponse.from_browse_result(result)


@router.get("/document", response_model=DocumentViewResponse)
async def document(
    collection: str | None = Query(None),
    id: str | None = Query(None),
    store: StoreHandle = Depends(get_store),
    timeout: float = Depends(get_query_timeout),
):
    result = await browse_queries.get_document(store, collection, id, timeout)
    return DocumentViewResponse.from_browse_result(result)
