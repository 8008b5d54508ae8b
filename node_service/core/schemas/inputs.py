"""Filter and sort inputs for node queries.

These are the JSON-shaped parameters callers hand to
``NodeRepository.query``. Enum fields are validated on construction, so an
unknown ``fieldType``, ``comparisonOperation`` or ``sortOrder`` string is
rejected before any query is composed. ``fieldValue`` stays untyped here;
it is coerced against ``fieldType`` during composition.

Example:
    FilterInput.model_validate({
        "filterBy": [
            {
                "fieldName": "deleted",
                "fieldType": "BOOLEAN",
                "comparisonOperation": "EQUAL",
                "fieldValue": "false",
            }
        ]
    })
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from node_service.core.database.enums import FieldType, Operation, SortOrder
from node_service.core.schemas.base import CustomBase


class FilterParam(CustomBase):
    """A single field comparison."""

    field_name: str = Field(min_length=1, description="Document field to compare")
    field_type: FieldType = Field(description="How field_value is coerced")
    comparison_operation: Operation = Field(description="Comparison operator")
    field_value: Any = Field(default=None, description="Value to compare against")


class FilterInput(CustomBase):
    """Free-text search plus ANDed field comparisons."""

    search: str | None = Field(default=None, description="Free-text search term")
    filter_by: list[FilterParam] = Field(
        default_factory=list,
        description="Comparisons, all of which must match",
    )


class SortParam(CustomBase):
    """A single sort key."""

    field_name: str = Field(min_length=1, description="Document field to sort by")
    sort_order: SortOrder = Field(default=SortOrder.ASC, description="Sort direction")


class SortInput(CustomBase):
    """Ordered sort keys; the first entry is the primary key."""

    sort_by: list[SortParam] = Field(default_factory=list, description="Sort keys")


__all__ = [
    "FilterInput",
    "FilterParam",
    "SortInput",
    "SortParam",
]
