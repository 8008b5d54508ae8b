"""Offset-window pagination with GraphQL Relay-style metadata.

Clients page through results with ``first``/``last`` and
``after``/``before``, and receive ``PageInfo`` with opaque cursors they can
hand back unchanged:

    result = await paginate(store, query, PaginationInput(first=20))
    next_page = PaginationInput(first=20, after=result.page_info.end_cursor)

Cursors are base64-encoded msgpack envelopes holding a zero-based offset.
"""

from node_service.core.pagination.cursor import Cursor, CursorCodec, create_and_encode_cursor
from node_service.core.pagination.paginator import (
    PageWindow,
    PaginatedResult,
    paginate,
    resolve_window,
    validate_pagination_parameters,
)
from node_service.core.pagination.schemas import (
    Connection,
    Edge,
    PageInfo,
    PaginationInput,
)

__all__ = [
    # GraphQL-style schemas
    "Connection",
    # Cursor utilities
    "Cursor",
    "CursorCodec",
    "Edge",
    "PageInfo",
    # Paging
    "PageWindow",
    "PaginatedResult",
    "PaginationInput",
    "create_and_encode_cursor",
    "paginate",
    "resolve_window",
    "validate_pagination_parameters",
]
