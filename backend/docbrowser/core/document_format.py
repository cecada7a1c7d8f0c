"""Document Formatting: render an arbitrary store record as indented JSON text.

Invariants:
    - Output is tab-indented with sorted keys, so identical records give identical text
    - NaN and Infinity are rejected (no valid JSON form)
    - Every BSON value has a text form; values JSON cannot hold are converted, never dropped
    - Encoding failures raise StoreQueryError (500), never a bare TypeError

Design Decisions:
    - ObjectId renders as bare hex and datetimes as ISO-8601, not as
      bson.json_util {"$oid": ...} wrappers
"""

import base64
import json
import logging
import uuid
from datetime import datetime
from typing import Any

from bson import Binary, Decimal128, ObjectId, Regex
from bson.timestamp import Timestamp

from docbrowser.core.domain_types import DocumentRecord
from docbrowser.core.errors import StoreQueryError

logger = logging.getLogger(__name__)


def _encode_bson_value(value: Any) -> Any:
    """json.dumps `default` hook for BSON types."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Timestamp):
        return {"t": value.time, "i": value.inc}
    if isinstance(value, Decimal128):
        return str(value.to_decimal())
    if isinstance(value, (bytes, Binary)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, Regex):
        return value.pattern
    return str(value)


def format_document(document: DocumentRecord) -> str:
    """Serialize a record to indented, human-readable text."""
    try:
        return json.dumps(
            document, indent="\t", sort_keys=True, allow_nan=False,
            ensure_ascii=False, default=_encode_bson_value,
        )
    except (TypeError, ValueError) as e:
        logger.error(
            f"Document encode failed: {e}",
            extra={"operation": "format_document"},
        )
        raise StoreQueryError("failed to encode document", "format_document", 500)
