"""In-memory document store.

Follows Firestore query semantics closely enough for the repository and
paginator to behave the same against both backends:

- a predicate or ordering on a field excludes documents missing that field
- values of different types never compare equal or less/greater; ordering
  across types follows Firestore's type order
- results are ordered by the requested orderings, then by document id
"""

from __future__ import annotations

import copy
import functools
import logging
import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from node_service.core.database.enums import SortOrder
from node_service.core.database.exceptions import StoreError
from node_service.infra.store.base import Document, DocumentStore

if TYPE_CHECKING:
    from node_service.core.database.query import FieldPredicate, Query

logger = logging.getLogger(__name__)

_MISSING = object()

# Firestore's cross-type ordering
_TYPE_RANKS: tuple[tuple[type | tuple[type, ...], int], ...] = (
    (type(None), 0),
    (bool, 1),
    ((int, float), 2),
    (datetime, 3),
    (str, 4),
    (bytes, 5),
    ((list, tuple), 7),
    (dict, 8),
)


def _rank(value: Any) -> int:
    for types, rank in _TYPE_RANKS:
        if isinstance(value, types):
            return rank
    return 9


def _normalize(value: Any) -> Any:
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _compare(a: Any, b: Any) -> int:
    """Three-way compare of two field values in store order."""
    rank_a, rank_b = _rank(a), _rank(b)
    if rank_a != rank_b:
        return -1 if rank_a < rank_b else 1
    if rank_a == 0:
        return 0
    if rank_a == 7:
        for x, y in zip(a, b, strict=False):
            result = _compare(x, y)
            if result:
                return result
        return (len(a) > len(b)) - (len(a) < len(b))
    if rank_a >= 8:
        a, b = repr(a), repr(b)
    a, b = _normalize(a), _normalize(b)
    return (a > b) - (a < b)


def _lookup(data: dict[str, Any], field_path: str) -> Any:
    value: Any = data
    for part in field_path.split("."):
        if not isinstance(value, dict) or part not in value:
            return _MISSING
        value = value[part]
    return value


def _matches(data: dict[str, Any], predicate: FieldPredicate) -> bool:
    value = _lookup(data, predicate.field)
    if value is _MISSING:
        return False
    operator, target = predicate.operator, predicate.value

    if operator == "in":
        return any(_rank(value) == _rank(t) and _compare(value, t) == 0 for t in target)
    if operator == "array-contains":
        return isinstance(value, (list, tuple)) and any(
            _rank(item) == _rank(target) and _compare(item, target) == 0 for item in value
        )
    if _rank(value) != _rank(target):
        return False

    result = _compare(value, target)
    return {
        "<": result < 0,
        "<=": result <= 0,
        "==": result == 0,
        ">": result > 0,
        ">=": result >= 0,
    }[operator]


def _merge(target: dict[str, Any], data: dict[str, Any]) -> dict[str, Any]:
    merged = dict(target)
    for key, value in data.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class InMemoryDocumentStore(DocumentStore):
    """In-memory document store for testing and development.

    Not suitable for production - data is lost on restart.
    Documents are deep-copied on the way in and out.
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, Document]] = {}

    def _collection(self, name: str) -> dict[str, Document]:
        return self._collections.setdefault(name, {})

    async def add(
        self,
        collection: str,
        data: dict[str, Any],
        *,
        document_id: str | None = None,
    ) -> tuple[str, datetime]:
        """Create a new document."""
        documents = self._collection(collection)
        document_id = document_id or uuid.uuid4().hex
        if document_id in documents:
            raise StoreError(
                "store.add",
                "Document already exists",
                details={"collection": collection, "id": document_id},
            )
        now = datetime.now(UTC)
        documents[document_id] = Document(document_id, copy.deepcopy(data), now)
        return document_id, now

    async def get(self, collection: str, document_id: str) -> Document | None:
        """Get a document by id."""
        document = self._collections.get(collection, {}).get(document_id)
        if document is None:
            return None
        return Document(document.id, copy.deepcopy(document.data), document.update_time)

    async def set(
        self,
        collection: str,
        document_id: str,
        data: dict[str, Any],
        *,
        merge: bool = False,
    ) -> datetime:
        """Write a document, creating it if missing."""
        documents = self._collection(collection)
        existing = documents.get(document_id)
        new_data = copy.deepcopy(data)
        if merge and existing is not None:
            new_data = _merge(existing.data, new_data)
        now = datetime.now(UTC)
        documents[document_id] = Document(document_id, new_data, now)
        return now

    async def delete(self, collection: str, document_id: str) -> None:
        """Delete a document."""
        self._collections.get(collection, {}).pop(document_id, None)

    async def run_query(
        self,
        query: Query,
        *,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Document]:
        """Execute a query against the collection snapshot."""
        if offset < 0:
            raise StoreError("store.run_query", "Offset must be non-negative", {"offset": offset})

        documents = [
            document
            for document in self._collections.get(query.collection, {}).values()
            if all(_matches(document.data, p) for p in query.predicates)
            and all(_lookup(document.data, o.field) is not _MISSING for o in query.orderings)
        ]

        orderings = query.orderings
        id_direction = orderings[-1].direction if orderings else SortOrder.ASC

        def compare_documents(a: Document, b: Document) -> int:
            for ordering in orderings:
                result = _compare(_lookup(a.data, ordering.field), _lookup(b.data, ordering.field))
                if result:
                    return -result if ordering.direction == SortOrder.DESC else result
            result = (a.id > b.id) - (a.id < b.id)
            return -result if id_direction == SortOrder.DESC else result

        documents.sort(key=functools.cmp_to_key(compare_documents))
        end = None if limit is None else offset + limit
        window = documents[offset:end]

        logger.debug(
            "Query %s matched %d documents, returning %d",
            query.collection,
            len(documents),
            len(window),
        )
        return [Document(d.id, copy.deepcopy(d.data), d.update_time) for d in window]

    async def list_documents(self, collection: str, *, limit: int | None = None) -> list[str]:
        """List document ids in a collection, ordered by id."""
        ids = sorted(self._collections.get(collection, {}))
        return ids if limit is None else ids[:limit]

    def count(self, collection: str) -> int:
        """Number of documents in a collection."""
        return len(self._collections.get(collection, {}))

    def clear_all(self) -> None:
        """Clear entire store (for testing)."""
        self._collections.clear()


__all__ = ["InMemoryDocumentStore"]
