"""Strawberry GraphQL types for node queries."""

from node_service.graphql.types import (
    FieldType,
    FilterInputType,
    FilterParamType,
    Operation,
    PageInfoType,
    PaginationInputType,
    SortInputType,
    SortOrder,
    SortParamType,
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
