"""Pagination request and response schemas.

Request side:
    PaginationInput: Relay-style ``first``/``last``/``after``/``before``.
    ``after``/``before`` are literal zero-based offsets ("30") or opaque
    cursors previously returned in ``PageInfo``.

Response side (GraphQL Relay connection pattern):
    PageInfo with navigation metadata, plus Edge/Connection wrappers for
    callers that want typed nodes with per-item cursors.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import ConfigDict, Field

from node_service.core.schemas.base import CustomBase

T = TypeVar("T")


class PaginationInput(CustomBase):
    """Paging parameters.

    Zero or None means "not specified" for ``first`` and ``last``; an empty
    string or None means the same for ``after`` and ``before``.
    """

    first: int | None = Field(default=None, ge=0, description="Page size, counting forward")
    last: int | None = Field(default=None, ge=0, description="Page size, counting backward")
    after: str | None = Field(default=None, description="Offset or cursor to start after")
    before: str | None = Field(default=None, description="Offset or cursor to end before")


class PageInfo(CustomBase):
    """Pagination metadata following GraphQL Relay specification.

    Attributes:
        has_previous_page: Whether there are items before the current page
        has_next_page: Whether there are items after the current page
        start_cursor: Cursor of the first item in this page
        end_cursor: Cursor of the last item in this page
    """

    model_config = ConfigDict(frozen=True)

    has_next_page: bool = Field(
        default=False,
        description="Whether more items exist",
    )
    has_previous_page: bool = Field(
        default=False,
        description="Whether previous items exist",
    )
    start_cursor: str | None = Field(
        default=None,
        description="Cursor of the first item",
    )
    end_cursor: str | None = Field(
        default=None,
        description="Cursor of the last item",
    )


class Edge(CustomBase, Generic[T]):
    """Edge wrapper for paginated items (Relay pattern).

    Attributes:
        node: The actual data item
        cursor: Cursor for this specific item
    """

    node: T = Field(description="The data item")
    cursor: str = Field(description="Cursor for this item")


class Connection(CustomBase, Generic[T]):
    """GraphQL Connection pattern for cursor pagination.

    Client navigation:
        # First page
        repo.query_connection(store, Model(), pagination=PaginationInput(first=10))

        # Next page (using end_cursor from previous response)
        PaginationInput(first=10, after=connection.page_info.end_cursor)

    Attributes:
        edges: List of Edge objects containing nodes and cursors
        page_info: Navigation metadata
    """

    edges: list[Edge[T]] = Field(
        default_factory=list,
        description="List of edges (items with cursors)",
    )
    page_info: PageInfo = Field(
        description="Pagination metadata",
    )

    @property
    def nodes(self) -> list[T]:
        """Get just the nodes without edge wrappers."""
        return [edge.node for edge in self.edges]


__all__ = [
    "Connection",
    "Edge",
    "PageInfo",
    "PaginationInput",
]
