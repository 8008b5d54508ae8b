"""Google Cloud Firestore document store.

Translates ``Query`` values into native Firestore queries on an
``AsyncClient`` and wraps client failures in ``StoreError``.

Example:
    store = FirestoreDocumentStore.from_settings()
    async with store:
        docs = await store.run_query(Query("model_bewell_prod"), limit=10)
"""

from __future__ import annotations

import inspect
import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from google.api_core import exceptions as gcp_exceptions
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from node_service.core.database.enums import SortOrder
from node_service.core.database.exceptions import StoreError
from node_service.core.settings.loader import get_firestore_settings
from node_service.infra.store.base import Document, DocumentStore

if TYPE_CHECKING:
    from datetime import datetime

    from node_service.core.database.query import Query
    from node_service.core.settings.firestore import FirestoreSettings

logger = logging.getLogger(__name__)

EMULATOR_HOST_ENV = "FIRESTORE_EMULATOR_HOST"


def create_firestore_client(settings: FirestoreSettings | None = None) -> firestore.AsyncClient:
    """Create an async Firestore client from settings.

    When ``emulator_host`` is configured the client library is pointed at
    the emulator through its environment variable.
    """
    settings = settings or get_firestore_settings()
    if settings.emulator_host:
        os.environ[EMULATOR_HOST_ENV] = settings.emulator_host
        logger.info("Using Firestore emulator at %s", settings.emulator_host)
    return firestore.AsyncClient(project=settings.project_id, database=settings.database)


@contextmanager
def _store_errors(operation: str, **details: Any) -> Iterator[None]:
    try:
        yield
    except (gcp_exceptions.GoogleAPIError, gcp_exceptions.RetryError) as e:
        logger.warning(
            "Firestore %s failed: %s",
            operation,
            e,
            extra={"operation": operation, **details},
        )
        raise StoreError(operation, str(e) or type(e).__name__, details) from e


class FirestoreDocumentStore(DocumentStore):
    """Firestore-backed document store for production."""

    def __init__(self, client: firestore.AsyncClient) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: FirestoreSettings | None = None) -> FirestoreDocumentStore:
        """Create a store with a client built from settings."""
        return cls(create_firestore_client(settings))

    @property
    def client(self) -> firestore.AsyncClient:
        return self._client

    async def add(
        self,
        collection: str,
        data: dict[str, Any],
        *,
        document_id: str | None = None,
    ) -> tuple[str, datetime]:
        """Create a new document."""
        with _store_errors("store.add", collection=collection, id=document_id):
            update_time, ref = await self._client.collection(collection).add(
                data, document_id=document_id
            )
        return ref.id, update_time

    async def get(self, collection: str, document_id: str) -> Document | None:
        """Get a document by id."""
        with _store_errors("store.get", collection=collection, id=document_id):
            snapshot = await self._client.collection(collection).document(document_id).get()
        if not snapshot.exists:
            return None
        return Document(snapshot.id, snapshot.to_dict() or {}, snapshot.update_time)

    async def set(
        self,
        collection: str,
        document_id: str,
        data: dict[str, Any],
        *,
        merge: bool = False,
    ) -> datetime:
        """Write a document, creating it if missing."""
        with _store_errors("store.set", collection=collection, id=document_id):
            result = await self._client.collection(collection).document(document_id).set(
                data, merge=merge
            )
        return result.update_time

    async def delete(self, collection: str, document_id: str) -> None:
        """Delete a document."""
        with _store_errors("store.delete", collection=collection, id=document_id):
            await self._client.collection(collection).document(document_id).delete()

    def _build_query(self, query: Query, offset: int, limit: int | None) -> Any:
        native: Any = self._client.collection(query.collection)
        for predicate in query.predicates:
            native = native.where(
                filter=FieldFilter(predicate.field, predicate.operator, predicate.value)
            )
        for ordering in query.orderings:
            direction = (
                firestore.Query.DESCENDING
                if ordering.direction == SortOrder.DESC
                else firestore.Query.ASCENDING
            )
            native = native.order_by(ordering.field, direction=direction)
        if offset:
            native = native.offset(offset)
        if limit is not None:
            native = native.limit(limit)
        return native

    async def run_query(
        self,
        query: Query,
        *,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Document]:
        """Execute a query with native offset and limit."""
        native = self._build_query(query, offset, limit)
        with _store_errors("store.run_query", collection=query.collection):
            return [
                Document(snapshot.id, snapshot.to_dict() or {}, snapshot.update_time)
                async for snapshot in native.stream()
            ]

    async def list_documents(self, collection: str, *, limit: int | None = None) -> list[str]:
        """List document ids in a collection."""
        native: Any = self._client.collection(collection)
        if limit is not None:
            native = native.limit(limit)
        with _store_errors("store.list_documents", collection=collection):
            return [snapshot.id async for snapshot in native.stream()]

    async def close(self) -> None:
        """Close the underlying client."""
        result = self._client.close()
        if inspect.isawaitable(result):
            await result


__all__ = ["EMULATOR_HOST_ENV", "FirestoreDocumentStore", "create_firestore_client"]
