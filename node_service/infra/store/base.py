"""Document store interface.

The repository, paginator and bulk deleter talk to a ``DocumentStore``
rather than to a client library, so the same code runs against:

- InMemoryDocumentStore: for testing and local development
- FirestoreDocumentStore: for production with Google Cloud Firestore

Example:
    from node_service.infra.store import InMemoryDocumentStore

    store = InMemoryDocumentStore()
    doc_id, created = await store.add("model_bewell_staging", {"name": "test"})
    doc = await store.get("model_bewell_staging", doc_id)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from datetime import datetime

    from node_service.core.database.query import Query


@dataclass(frozen=True, slots=True)
class Document:
    """A document snapshot returned by a store."""

    id: str
    data: dict[str, Any] = field(default_factory=dict)
    update_time: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Copy of the document data."""
        return dict(self.data)


class DocumentStore(ABC):
    """Abstract base class for document stores.

    Implementations raise ``StoreError`` for transport and backend
    failures. Reading or deleting a missing document is not a failure.
    """

    @abstractmethod
    async def add(
        self,
        collection: str,
        data: dict[str, Any],
        *,
        document_id: str | None = None,
    ) -> tuple[str, datetime]:
        """Create a new document.

        Args:
            collection: Collection name
            data: Document fields
            document_id: Id to create the document under (generated if None)

        Returns:
            Tuple of (document id, write time)
        """

    @abstractmethod
    async def get(self, collection: str, document_id: str) -> Document | None:
        """Get a document by id.

        Returns:
            Document if it exists, None otherwise
        """

    @abstractmethod
    async def set(
        self,
        collection: str,
        document_id: str,
        data: dict[str, Any],
        *,
        merge: bool = False,
    ) -> datetime:
        """Write a document, creating it if missing.

        Args:
            collection: Collection name
            document_id: Document id
            data: Document fields
            merge: Merge into existing fields instead of replacing them

        Returns:
            Write time
        """

    @abstractmethod
    async def delete(self, collection: str, document_id: str) -> None:
        """Delete a document. Deleting a missing document succeeds."""

    @abstractmethod
    async def run_query(
        self,
        query: Query,
        *,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Document]:
        """Execute a query.

        Args:
            query: Filtered and ordered query
            offset: Number of leading results to skip
            limit: Maximum number of results (None = all)

        Returns:
            Matching documents in query order
        """

    @abstractmethod
    async def list_documents(self, collection: str, *, limit: int | None = None) -> list[str]:
        """List document ids in a collection.

        Args:
            collection: Collection name
            limit: Maximum number of ids (None = all)
        """

    async def close(self) -> None:
        """Release client resources."""
        return None

    async def __aenter__(self) -> DocumentStore:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


__all__ = ["Document", "DocumentStore"]
