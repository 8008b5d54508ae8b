"""Offset-window pagination over document queries.

``first``/``last`` pick the page size and ``after``/``before`` pick the
starting offset. Either position may be a literal zero-based offset ("30")
or a cursor previously returned in ``PageInfo``:

    # First page of 10
    PaginationInput(first=10)

    # Next page
    PaginationInput(first=10, after=page_info.end_cursor)

    # Previous page
    PaginationInput(first=10, before=page_info.start_cursor)

The store is asked for one document more than the page size so that
``has_next_page`` can be answered without a count query.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from node_service.core.database.exceptions import InvalidCursorError, InvalidPaginationError
from node_service.core.pagination.cursor import CursorCodec
from node_service.core.pagination.schemas import PageInfo
from node_service.core.settings.loader import get_pagination_settings
from node_service.infra.logging.lazy import get_lazy_logger

if TYPE_CHECKING:
    from node_service.core.database.query import Query
    from node_service.core.pagination.schemas import PaginationInput
    from node_service.infra.store.base import Document, DocumentStore

lazy_logger = get_lazy_logger(__name__)

FIRST_AND_LAST_MESSAGE = "if `first` is specified for pagination, `last` cannot be specified"

_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")


def validate_pagination_parameters(pagination: PaginationInput | None) -> None:
    """Reject ambiguous pagination input.

    Raises:
        InvalidPaginationError: If both `first` and `last` are specified
    """
    if pagination is None:
        return
    if pagination.first and pagination.last:
        raise InvalidPaginationError(FIRST_AND_LAST_MESSAGE, "first")


@dataclass(frozen=True, slots=True)
class PageWindow:
    """A resolved slice of a result set.

    Attributes:
        offset: Zero-based offset of the first result
        page_size: Maximum number of results in the page
    """

    offset: int
    page_size: int

    @property
    def page(self) -> int:
        """One-based page number, for stores that page by number and size."""
        return self.offset // max(self.page_size, 1) + 1

    @property
    def limit(self) -> int:
        """Number of results to fetch, including one look-ahead result."""
        return self.page_size + 1


@dataclass(frozen=True, slots=True)
class PaginatedResult:
    """Documents of one page with navigation metadata.

    ``window`` is None when the query was not paginated.
    """

    documents: list[Document] = field(default_factory=list)
    page_info: PageInfo = field(default_factory=PageInfo)
    window: PageWindow | None = None

    def cursor_at(self, index: int) -> str:
        """Cursor for the document at index within this page."""
        offset = self.window.offset if self.window is not None else 0
        return CursorCodec.encode(offset + index)


def _parse_position(value: str | None, parameter: str) -> tuple[int, bool] | None:
    """Parse an after/before value into (position, is_cursor).

    Returns None for an empty value.
    """
    if not value:
        return None
    if _DECIMAL_RE.fullmatch(value):
        position = int(value)
        if position < 0:
            raise InvalidPaginationError(
                f"`{parameter}` must be a non-negative offset, got {value!r}", parameter
            )
        return position, False
    try:
        return CursorCodec.decode(value), True
    except InvalidCursorError as e:
        raise InvalidPaginationError(
            f"`{parameter}` must be an offset or a cursor: {e.message}", parameter
        ) from e


def resolve_window(
    pagination: PaginationInput,
    *,
    default_page_size: int | None = None,
    max_page_size: int | None = None,
) -> PageWindow:
    """Resolve pagination input into an offset and page size.

    Page size: the default, replaced by `last` if positive, replaced by
    `first` if positive, then clamped to the maximum.

    Offset: 0, replaced by `before` if given, replaced by `after` if given.
    A cursor in `after` starts just past its position; a cursor in
    `before` starts one page before its position, and the page ends just
    before it. A literal `before` offset is a plain offset.

    Raises:
        InvalidPaginationError: If `after` or `before` cannot be parsed
    """
    settings = get_pagination_settings()
    page_size = default_page_size or settings.default_page_size
    if pagination.last and pagination.last > 0:
        page_size = pagination.last
    if pagination.first and pagination.first > 0:
        page_size = pagination.first
    page_size = min(page_size, max_page_size or settings.max_page_size)

    offset = 0
    before = _parse_position(pagination.before, "before")
    if before is not None:
        position, is_cursor = before
        offset = max(position - page_size, 0) if is_cursor else position
    after = _parse_position(pagination.after, "after")
    if after is not None:
        position, is_cursor = after
        offset = max(position + 1, 0) if is_cursor else position
    if before is not None and before[1]:
        # Stop short of the item a `before` cursor points at
        page_size = max(min(page_size, before[0] - offset), 0)

    return PageWindow(offset=offset, page_size=page_size)


def _page_info(documents: list[Document], offset: int, *, has_next: bool) -> PageInfo:
    if not documents:
        return PageInfo(has_next_page=has_next, has_previous_page=offset > 0)
    return PageInfo(
        has_next_page=has_next,
        has_previous_page=offset > 0,
        start_cursor=CursorCodec.encode(offset),
        end_cursor=CursorCodec.encode(offset + len(documents) - 1),
    )


async def paginate(
    store: DocumentStore,
    query: Query,
    pagination: PaginationInput | None,
    *,
    default_page_size: int | None = None,
    max_page_size: int | None = None,
) -> PaginatedResult:
    """Execute query and return one page of it.

    Without pagination input every matching document is returned.

    Raises:
        InvalidPaginationError: If `after` or `before` cannot be parsed
        StoreError: If the store fails
    """
    if pagination is None:
        documents = await store.run_query(query)
        lazy_logger.debug(
            lambda: f"Unpaginated query [{query.describe()}] returned {len(documents)} documents"
        )
        return PaginatedResult(documents, _page_info(documents, 0, has_next=False))

    window = resolve_window(
        pagination,
        default_page_size=default_page_size,
        max_page_size=max_page_size,
    )
    fetched = await store.run_query(query, offset=window.offset, limit=window.limit)
    has_next = len(fetched) > window.page_size
    documents = fetched[: window.page_size]

    lazy_logger.debug(
        lambda: (
            f"Page {window.page} of [{query.describe()}] "
            f"(offset={window.offset}, size={window.page_size}) "
            f"returned {len(documents)} documents, has_next={has_next}"
        )
    )
    return PaginatedResult(
        documents,
        _page_info(documents, window.offset, has_next=has_next),
        window,
    )


__all__ = [
    "FIRST_AND_LAST_MESSAGE",
    "PageWindow",
    "PaginatedResult",
    "paginate",
    "resolve_window",
    "validate_pagination_parameters",
]
