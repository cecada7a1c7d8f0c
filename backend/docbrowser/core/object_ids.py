"""Identifier Parsing: 24-character hex strings to and from store ObjectIds.

Invariants:
    - A value parses only from exactly 24 hex characters; anything else is rejected whole
    - format_object_id(parse_object_id(s)) == s.lower()
"""

import re

from bson import ObjectId

from docbrowser.core.errors import BrowseValidationError

_HEX_ID = re.compile(r"[0-9a-fA-F]{24}")


def parse_object_id(id_hex: str | None, field: str = "id") -> ObjectId:
    """Parse a caller-supplied identifier or raise BrowseValidationError."""
    if not id_hex:
        raise BrowseValidationError(f"missing {field} query parameter", field)
    # fullmatch, not ObjectId.is_valid: the latter also accepts 12-byte values
    if not _HEX_ID.fullmatch(id_hex):
        raise BrowseValidationError("invalid object ID", field)
    return ObjectId(id_hex)


def format_object_id(value: ObjectId) -> str:
    return str(value)
