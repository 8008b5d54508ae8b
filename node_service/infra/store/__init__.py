"""Document store backends.

Provides:
- DocumentStore: abstract interface used by repositories
- InMemoryDocumentStore: in-process backend for tests and development
- FirestoreDocumentStore: Google Cloud Firestore backend

The Firestore backend is imported from its own module:

    from node_service.infra.store.firestore import FirestoreDocumentStore
"""

from __future__ import annotations

from .base import Document, DocumentStore
from .memory import InMemoryDocumentStore

__all__ = ["Document", "DocumentStore", "InMemoryDocumentStore"]
