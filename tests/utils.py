"""Test utilities and helper node types.

Usage:
    from tests.utils import Note, Patient, FailingDeleteStore

    patient = Patient(name="Jane", age=42)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from node_service.core.database.exceptions import StoreError
from node_service.core.database.nodes import Model
from node_service.infra.store.memory import InMemoryDocumentStore


class Patient(Model):
    """Node type with extra fields, used by filter and sort tests."""

    age: int = 0
    score: float = 0.0
    tags: list[str] = []


@dataclass
class Note:
    """Dataclass node, to exercise non-pydantic marshalling."""

    id: str = ""
    text: str = ""
    labels: list[str] = field(default_factory=list)

    def is_node(self) -> bool:
        return True

    def get_id(self) -> str:
        return self.id

    def set_id(self, id: str) -> None:  # noqa: A002
        self.id = id


class FailingDeleteStore(InMemoryDocumentStore):
    """In-memory store whose deletes fail for the given ids."""

    def __init__(self, failing_ids: set[str]) -> None:
        super().__init__()
        self.failing_ids = failing_ids
        self.delete_calls: list[str] = []

    async def delete(self, collection: str, document_id: str) -> None:
        self.delete_calls.append(document_id)
        if document_id in self.failing_ids:
            raise StoreError("store.delete", "permission denied", {"id": document_id})
        await super().delete(collection, document_id)


class FailingListStore(InMemoryDocumentStore):
    """In-memory store whose listings always fail."""

    async def list_documents(self, collection: str, *, limit: int | None = None) -> list[str]:
        raise StoreError("store.list_documents", "unavailable", {"collection": collection})
