"""Browse Queries: ListCollections, ListDocumentIdentifiers and GetDocument.

Invariants:
    - Validation happens before any store call; bad input never reaches the driver
    - One attempt per request, no retries (a page reload is the retry)
    - A deadline covers the full round trip; expiry raises QueryTimeoutError,
      an already-expired deadline fails before any store call
    - Cursors are closed on every exit path (success, error, timeout, cancellation)
    - Listing-path store failures are 400, fetch-path failures are 500
    - Raw driver errors are logged here and replaced by a short generic message

Design Decisions:
    - Deadline via asyncio.timeout inside the request task: cancelling the request
      (client disconnect) cancels the pending store call with it
    - Not-found and failed lookups both surface as STORE_ERROR 500
"""

import asyncio
import logging
import re
from collections.abc import Callable
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, TypeVar

from bson import ObjectId
from bson.errors import BSONError
from bson.int64 import Int64
from pymongo.errors import PyMongoError

from docbrowser.core.document_format import format_document
from docbrowser.core.domain_types import (
    CollectionListing, CollectionName, DocumentIdPage, DocumentView, PageWindow,
)
from docbrowser.core.errors import (
    BrowseValidationError, QueryTimeoutError, StoreQueryError,
)
from docbrowser.core.object_ids import parse_object_id
from docbrowser.infrastructure.store import StoreHandle

logger = logging.getLogger(__name__)

DEFAULT_QUERY_TIMEOUT = 5.0

_DRIVER_ERRORS = (PyMongoError, BSONError)

_SKIP = re.compile(r"[+-]?[0-9]+")
_MAX_SKIP = 2**63 - 1

T = TypeVar("T")


# ─── Input Validation ───────────────────────────────────────────

def require_param(value: str | None, field: str) -> str:
    if not value:
        raise BrowseValidationError(f"missing {field} query parameter", field)
    return value


def parse_skip(raw: str | None) -> PageWindow:
    """Parse the optional skip offset; absent or empty means 0."""
    if raw is None or raw == "":
        return PageWindow(0)
    if not _SKIP.fullmatch(raw) or len(raw) > 20:
        raise BrowseValidationError("invalid skip param", "skip")
    n = int(raw)
    if n < 0 or n > _MAX_SKIP:
        raise BrowseValidationError("invalid skip param", "skip")
    return PageWindow(n)


# ─── Deadline & Cursor Helpers ──────────────────────────────────

@asynccontextmanager
async def query_deadline(operation: str, timeout: float) -> AsyncIterator[None]:
    """Bound the enclosed store calls; map expiry to QueryTimeoutError."""
    if timeout <= 0:
        raise QueryTimeoutError(operation)
    try:
        async with asyncio.timeout(timeout):
            yield
    except TimeoutError:
        logger.warning(
            f"{operation} exceeded {timeout}s deadline",
            extra={"operation": operation},
        )
        raise QueryTimeoutError(operation)


async def drain_cursor(cursor: Any, extract: Callable[[dict], T]) -> list[T]:
    """Consume a driver cursor lazily, always closing it.

    The first error (from the store or from ``extract``) stops the scan.
    """
    try:
        return [extract(doc) async for doc in cursor]
    finally:
        await cursor.close()


def _store_failure(
    operation: str, message: str, e: Exception, http_status: int,
    collection: str | None = None,
) -> StoreQueryError:
    logger.error(
        f"{operation} failed: {e}",
        extra={"operation": operation, "collection": collection},
    )
    return StoreQueryError(message, operation, http_status)


# ─── Operations ─────────────────────────────────────────────────

async def list_collections(
    store: StoreHandle, timeout: float = DEFAULT_QUERY_TIMEOUT,
) -> CollectionListing:
    """List collection names in store-native order."""
    async with query_deadline("list_collections", timeout):
        try:
            cursor = await store.database.list_collections()
            names = await drain_cursor(cursor, lambda doc: doc["name"])
        except (*_DRIVER_ERRORS, KeyError) as e:
            raise _store_failure(
                "list_collections", "failed to list collections", e, 500,
            )
    return CollectionListing(database_name=store.name, collection_names=names)


def _object_id_of(doc: dict) -> ObjectId:
    value = doc.get("_id")
    if not isinstance(value, ObjectId):
        raise StoreQueryError(
            f"unsupported ID type {bson_type_name(value)}",
            "list_document_ids", 400,
        )
    return value


async def list_document_ids(
    store: StoreHandle,
    name: str | None,
    skip: str | None = None,
    timeout: float = DEFAULT_QUERY_TIMEOUT,
) -> DocumentIdPage:
    """Count a collection and list the identifiers from ``skip`` onward.

    The count always covers the whole collection. Iteration order is the
    store's natural order (no sort), so windows can shift if data changes
    between calls.
    """
    collection = CollectionName(require_param(name, "name"))
    window = parse_skip(skip)

    async with query_deadline("list_document_ids", timeout):
        try:
            col = store.collection(collection)
            count = await col.count_documents({})
        except _DRIVER_ERRORS as e:
            raise _store_failure(
                "count_documents", "failed to count documents", e, 400, collection,
            )
        try:
            cursor = col.find({}, {"_id": 1}, skip=window)
            ids = await drain_cursor(cursor, _object_id_of)
        except _DRIVER_ERRORS as e:
            raise _store_failure(
                "find", "failed to query documents", e, 400, collection,
            )

    return DocumentIdPage(
        database_name=store.name,
        collection_name=collection,
        document_count=count,
        ids=ids,
    )


async def get_document(
    store: StoreHandle,
    collection: str | None,
    id_hex: str | None,
    timeout: float = DEFAULT_QUERY_TIMEOUT,
) -> DocumentView:
    """Fetch one record by identifier and render it as indented text."""
    collection_name = CollectionName(require_param(collection, "collection"))
    object_id = parse_object_id(id_hex, "id")

    async with query_deadline("get_document", timeout):
        try:
            document = await store.collection(collection_name).find_one(
                {"_id": object_id},
            )
        except _DRIVER_ERRORS as e:
            raise _store_failure(
                "find_one", "failed to decode document", e, 500, collection_name,
            )
    if document is None:
        logger.info(
            f"document {object_id} not found",
            extra={"operation": "find_one", "collection": collection_name},
        )
        raise StoreQueryError("failed to decode document", "find_one", 500)

    return DocumentView(
        database_name=store.name,
        collection_name=collection_name,
        id=object_id,
        document=format_document(document),
    )


# ─── BSON Type Names ────────────────────────────────────────────

def bson_type_name(value: Any) -> str:
    """Name a decoded value by its BSON type, as used in error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, Int64):
        return "int64"
    if isinstance(value, int):
        return "int32" if -(2**31) <= value < 2**31 else "int64"
    return _BSON_TYPE_NAMES.get(type(value).__name__, type(value).__name__)


_BSON_TYPE_NAMES = {
    "ObjectId": "objectId",
    "float": "double",
    "str": "string",
    "dict": "embedded document",
    "SON": "embedded document",
    "list": "array",
    "bytes": "binary",
    "Binary": "binary",
    "UUID": "binary",
    "datetime": "UTC datetime",
    "Regex": "regex",
    "Pattern": "regex",
    "Timestamp": "timestamp",
    "Decimal128": "128-bit decimal",
    "Code": "javascript",
    "MinKey": "min key",
    "MaxKey": "max key",
    "DBRef": "dbref",
}
