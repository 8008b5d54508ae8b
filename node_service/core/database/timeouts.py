"""Deadlines for store operations.

A deadline that expires raises ``OperationCancelledError``. Cancellation
of the calling task is never converted; ``CancelledError`` propagates.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from node_service.core.database.exceptions import OperationCancelledError


@asynccontextmanager
async def deadline(timeout_seconds: float | None, operation_name: str) -> AsyncIterator[None]:
    """Bound everything awaited in the block by timeout_seconds.

    A missing or non-positive timeout means no deadline.

    Raises:
        OperationCancelledError: If the deadline expires inside the block
    """
    if not timeout_seconds or timeout_seconds <= 0:
        yield
        return

    timeout_cm = asyncio.timeout(timeout_seconds)
    try:
        async with timeout_cm:
            yield
    except TimeoutError as exc:
        if not timeout_cm.expired():
            raise
        raise OperationCancelledError(operation_name, timeout_seconds) from exc


__all__ = ["deadline"]
