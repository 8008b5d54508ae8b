"""Batched collection deletion.

Deletes every document in a collection, one batch at a time, without a
transaction. A document that fails to delete is logged and skipped on
later batches; the drain stops with ``BulkDeleteError`` once only
undeletable documents remain.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from node_service.core.database.exceptions import BulkDeleteError, StoreError
from node_service.core.database.timeouts import deadline
from node_service.core.settings.loader import get_pagination_settings
from node_service.infra.logging.lazy import get_lazy_logger

if TYPE_CHECKING:
    from node_service.infra.store.base import DocumentStore

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)


async def delete_collection(
    store: DocumentStore,
    collection: str,
    batch_size: int | None = None,
    *,
    timeout: float | None = None,
) -> int:
    """Delete all documents in collection.

    Args:
        store: Document store
        collection: Full (suffixed) collection name
        batch_size: Documents listed per batch (default: from settings)
        timeout: Deadline in seconds for the whole drain

    Returns:
        Number of documents deleted

    Raises:
        StoreError: If listing the collection fails
        BulkDeleteError: If only undeletable documents remain
        OperationCancelledError: If the deadline expires
    """
    if batch_size is None:
        batch_size = get_pagination_settings().delete_batch_size
    if batch_size <= 0:
        raise ValueError("batch_size must be positive")

    deleted = 0
    failed_ids: set[str] = set()
    async with deadline(timeout, "db.delete_collection"):
        while True:
            # Known failures come back in every listing
            listed = await store.list_documents(collection, limit=batch_size + len(failed_ids))
            if not listed:
                break
            ids = [document_id for document_id in listed if document_id not in failed_ids]
            if not ids:
                raise BulkDeleteError(collection, len(failed_ids))

            batch_deleted = 0
            for document_id in ids:
                try:
                    await store.delete(collection, document_id)
                except StoreError as e:
                    failed_ids.add(document_id)
                    logger.warning(
                        "Failed to delete document",
                        extra={
                            "collection": collection,
                            "id": document_id,
                            "operation": "db.delete_collection",
                            "error": str(e),
                        },
                    )
                else:
                    batch_deleted += 1

            deleted += batch_deleted
            lazy_logger.debug(
                lambda: f"db.delete_collection: {collection} batch -> {batch_deleted} deleted"
            )
            # Let cancellation land between batches
            await asyncio.sleep(0)

    logger.info(
        "Collection drained",
        extra={"collection": collection, "deleted": deleted, "operation": "db.delete_collection"},
    )
    return deleted


__all__ = ["delete_collection"]
