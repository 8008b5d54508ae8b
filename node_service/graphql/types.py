"""GraphQL wire types for filtering, sorting and paginating nodes.

Schemas that expose node queries can use these inputs directly and convert
them to the core pydantic inputs with ``to_pydantic()``:

    @strawberry.field
    async def models(
        self,
        info: Info,
        pagination: PaginationInputType | None = None,
        filter: FilterInputType | None = None,
        sort: SortInputType | None = None,
    ) -> ...:
        docs, page_info = await repo.query(
            store,
            Model(),
            pagination=pagination.to_pydantic() if pagination else None,
            filter=filter.to_pydantic() if filter else None,
            sort=sort.to_pydantic() if sort else None,
        )
        return ..., PageInfoType.from_pydantic(page_info)
"""

from __future__ import annotations

from datetime import datetime

import strawberry
from strawberry.scalars import JSON

from node_service.core.database.enums import FieldType as CoreFieldType
from node_service.core.database.enums import Operation as CoreOperation
from node_service.core.database.enums import SortOrder as CoreSortOrder
from node_service.core.database.exceptions import InvalidFilterError
from node_service.core.pagination.schemas import PageInfo, PaginationInput
from node_service.core.schemas.inputs import FilterInput, FilterParam, SortInput, SortParam

# ============================================================================
# Enums
# ============================================================================

FieldType = strawberry.enum(CoreFieldType, description="Type a filter value is coerced to")
Operation = strawberry.enum(CoreOperation, description="Filter comparison operation")
SortOrder = strawberry.enum(CoreSortOrder, description="Sort direction")


# ============================================================================
# Inputs
# ============================================================================


@strawberry.input(description="Input for offset/cursor pagination")
class PaginationInputType:
    """Relay-style paging parameters.

    ``after``/``before`` accept a literal offset ("30") or a cursor
    from a previous PageInfo.
    """

    first: int | None = strawberry.field(
        default=None,
        description="Number of items to return, counting forward",
    )
    last: int | None = strawberry.field(
        default=None,
        description="Number of items to return, counting backward",
    )
    after: str | None = strawberry.field(
        default=None,
        description="Offset or cursor to start after",
    )
    before: str | None = strawberry.field(
        default=None,
        description="Offset or cursor to end before",
    )

    def to_pydantic(self) -> PaginationInput:
        return PaginationInput(
            first=self.first,
            last=self.last,
            after=self.after,
            before=self.before,
        )


@strawberry.input(description="A single field comparison")
class FilterParamType:
    field_name: str = strawberry.field(description="Document field to compare")
    field_type: FieldType = strawberry.field(description="Type the value is coerced to")
    comparison_operation: Operation = strawberry.field(description="Comparison operation")
    field_value: JSON | None = strawberry.field(
        default=None,
        description="Value to compare against",
    )

    def to_pydantic(self) -> FilterParam:
        """Convert to the core FilterParam.

        JSON has no timestamp type, so TIMESTAMP values arrive as ISO-8601
        strings and are parsed here.

        Raises:
            InvalidFilterError: If a TIMESTAMP value is not ISO-8601
        """
        value = self.field_value
        if self.field_type == CoreFieldType.TIMESTAMP and isinstance(value, str):
            try:
                value = datetime.fromisoformat(value)
            except ValueError as e:
                raise InvalidFilterError(
                    f"invalid TIMESTAMP filter value: {value!r}", self.field_name
                ) from e
        return FilterParam(
            field_name=self.field_name,
            field_type=self.field_type,
            comparison_operation=self.comparison_operation,
            field_value=value,
        )


@strawberry.input(description="Free-text search plus ANDed field comparisons")
class FilterInputType:
    search: str | None = strawberry.field(default=None, description="Free-text search (unused)")
    filter_by: list[FilterParamType] = strawberry.field(
        default_factory=list,
        description="Field comparisons, all of which must match",
    )

    def to_pydantic(self) -> FilterInput:
        return FilterInput(
            search=self.search,
            filter_by=[param.to_pydantic() for param in self.filter_by],
        )


@strawberry.input(description="A single sort key")
class SortParamType:
    field_name: str = strawberry.field(description="Document field to sort by")
    sort_order: SortOrder = strawberry.field(
        default=CoreSortOrder.ASC,
        description="Sort direction",
    )

    def to_pydantic(self) -> SortParam:
        return SortParam(field_name=self.field_name, sort_order=self.sort_order)


@strawberry.input(description="Ordered sort keys; the first is the primary key")
class SortInputType:
    sort_by: list[SortParamType] = strawberry.field(
        default_factory=list,
        description="Sort keys in priority order",
    )

    def to_pydantic(self) -> SortInput:
        return SortInput(sort_by=[param.to_pydantic() for param in self.sort_by])


# ============================================================================
# Outputs
# ============================================================================


@strawberry.type(description="Pagination metadata following GraphQL Relay specification")
class PageInfoType:
    """GraphQL Relay PageInfo.

    Mirrors node_service.core.pagination.schemas.PageInfo.
    """

    has_previous_page: bool = strawberry.field(description="Whether previous items exist")
    has_next_page: bool = strawberry.field(description="Whether more items exist")
    start_cursor: str | None = strawberry.field(
        default=None,
        description="Cursor of the first item",
    )
    end_cursor: str | None = strawberry.field(
        default=None,
        description="Cursor of the last item",
    )

    @staticmethod
    def from_pydantic(page_info: PageInfo) -> PageInfoType:
        """Convert from the core PageInfo."""
        return PageInfoType(
            has_previous_page=page_info.has_previous_page,
            has_next_page=page_info.has_next_page,
            start_cursor=page_info.start_cursor,
            end_cursor=page_info.end_cursor,
        )


__all__ = [
    "FieldType",
    "FilterInputType",
    "FilterParamType",
    "Operation",
    "PageInfoType",
    "PaginationInputType",
    "SortInputType",
    "SortOrder",
    "SortParamType",
]
