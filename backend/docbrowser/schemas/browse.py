"""Browse Schemas: JSON shapes of the three browse results.

Invariants:
    - Identifiers leave the API as 24-character lowercase hex strings
    - Built from core result dataclasses via from_browse_result(), never by hand in routes
"""

from pydantic import BaseModel, Field

from docbrowser.core.domain_types import (
    CollectionListing, DocumentIdPage, DocumentView,
)
from docbrowser.core.object_ids import format_object_id


class CollectionListingResponse(BaseModel):
    database_name: str
    collection_names: list[str] = Field(default_factory=list)

    @classmethod
    def from_browse_result(cls, result: CollectionListing) -> "CollectionListingResponse":
        return cls(
            database_name=result.database_name,
            collection_names=list(result.collection_names),
        )


class DocumentIdPageResponse(BaseModel):
    database_name: str
    collection_name: str
    document_count: int = Field(ge=0)
    ids: list[str] = Field(default_factory=list)

    @classmethod
    def from_browse_result(cls, result: DocumentIdPage) -> "DocumentIdPageResponse":
        return cls(
            database_name=result.database_name,
            collection_name=result.collection_name,
            document_count=result.document_count,
            ids=[format_object_id(i) for i in result.ids],
        )


class DocumentViewResponse(BaseModel):
    """Single document; `document` holds the tab-indented JSON text."""
    database_name: str
    collection_name: str
    id: str
    document: str

    @classmethod
    def from_browse_result(cls, result: DocumentView) -> "DocumentViewResponse":
        return cls(
            database_name=result.database_name,
            collection_name=result.collection_name,
            id=format_object_id(result.id),
            document=result.document,
        )
