"""Domain Types: browse results handed from query operations to the renderer.

Invariants:
    - Results are immutable and built once per request
    - DocumentIdPage.document_count reflects the whole collection, never the skip window
    - DocumentIdPage.ids hold ObjectId values only (mixed identifier types are rejected upstream)
"""

from dataclasses import dataclass, field
from typing import Any, NewType

from bson import ObjectId


# ─── Value Types ─────────────────────────────────────────────────

CollectionName = NewType("CollectionName", str)
PageWindow = NewType("PageWindow", int)   # skip offset, >= 0

# Arbitrary store-defined document, ordered as the store returned it
DocumentRecord = dict[str, Any]


# ─── Results ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class CollectionListing:
    """Result of ListCollections."""
    database_name: str
    collection_names: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DocumentIdPage:
    """Result of ListDocumentIdentifiers."""
    database_name: str
    collection_name: CollectionName
    document_count: int
    ids: list[ObjectId] = field(default_factory=list)


@dataclass(frozen=True)
class DocumentView:
    """Result of GetDocument: the record serialized as indented text."""
    database_name: str
    collection_name: CollectionName
    id: ObjectId
    document: str
