"""Query filters for document queries.

These filters work directly on ``Query`` values without hiding them. Each
one returns a new query, so they compose in any order:

    from node_service.core.database.filters import FieldFilter, OrderBy
    from node_service.core.database.query import Query

    query = Query("model_bewell_staging")
    query = FieldFilter("deleted", Operation.EQUAL, False).apply(query)
    query = OrderBy("name", SortOrder.DESC).apply(query)

Filter values coming from callers are untyped. ``coerce_field_value`` turns
them into the Python type implied by their ``FieldType`` (or refuses them)
before a filter is built.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Any

from node_service.core.database.enums import FieldType, Operation, SortOrder, op_string
from node_service.core.database.exceptions import InvalidFilterError

if TYPE_CHECKING:
    from node_service.core.database.query import Query
    from node_service.core.schemas.inputs import FilterParam

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def _coerce_boolean(value: Any) -> bool:
    if value == "true" and isinstance(value, str):
        return True
    if value == "false" and isinstance(value, str):
        return False
    raise ValueError(f"expected the string 'true' or 'false', got {value!r}")


def _coerce_integer(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and _INTEGER_RE.fullmatch(value):
        return int(value, 10)
    raise ValueError(f"expected a base-10 integer string, got {value!r}")


def _coerce_number(value: Any) -> float:
    # JSON decoders produce int for whole numbers; strings are never parsed
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    raise ValueError(f"expected a number, got {value!r}")


def _coerce_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    raise ValueError(f"expected a timestamp, got {value!r}")


def _coerce_string(value: Any) -> Any:
    return value


_COERCERS: dict[FieldType, Callable[[Any], Any]] = {
    FieldType.BOOLEAN: _coerce_boolean,
    FieldType.INTEGER: _coerce_integer,
    FieldType.NUMBER: _coerce_number,
    FieldType.TIMESTAMP: _coerce_timestamp,
    FieldType.STRING: _coerce_string,
}


def coerce_field_value(
    field_type: FieldType | str,
    value: Any,
    *,
    field_name: str | None = None,
) -> Any:
    """Coerce an untyped filter value according to its field type.

    Args:
        field_type: Declared type of the compared field
        value: Raw value supplied by the caller
        field_name: Field being filtered (for error context)

    Returns:
        Value converted to the field type's Python type

    Raises:
        InvalidFilterError: On an unknown field type or a value that
            cannot be coerced
    """
    coercer = _COERCERS.get(field_type) if FieldType.is_valid(field_type) else None
    if coercer is None:
        raise InvalidFilterError(f"unknown field type {field_type!r}", field_name)
    try:
        return coercer(value)
    except ValueError as e:
        raise InvalidFilterError(
            f"invalid {FieldType(field_type)} filter value: {e}", field_name
        ) from e


class QueryFilter(ABC):
    """Base class for query filters.

    All filters implement `apply()` which returns a refined query.
    """

    @abstractmethod
    def apply(self, query: Query) -> Query:
        """Apply filter to query.

        Args:
            query: Document query

        Returns:
            Refined query
        """
        ...


class FieldFilter(QueryFilter):
    """Compare one document field against an already-coerced value.

    Example:
        query = FieldFilter("count", Operation.GREATER_THAN, 0).apply(query)
        # where count > 0
    """

    def __init__(self, field_name: str, operation: Operation | str, value: Any):
        """Initialize field filter.

        Raises:
            InvalidFilterError: If the operation has no store operator
        """
        self.field_name = field_name
        self.operation = operation
        self.operator = op_string(operation)
        self.value = value

    @classmethod
    def from_param(cls, param: FilterParam) -> FieldFilter:
        """Build a filter from a caller-supplied FilterParam.

        The value is coerced by ``param.field_type`` before the operation
        is mapped.

        Raises:
            InvalidFilterError: If the value or operation is invalid
        """
        value = coerce_field_value(
            param.field_type, param.field_value, field_name=param.field_name
        )
        return cls(param.field_name, param.comparison_operation, value)

    def apply(self, query: Query) -> Query:
        """Apply comparison to query."""
        return query.where(self.field_name, self.operator, self.value)


class OrderBy(QueryFilter):
    """Field ordering/sorting.

    Example:
        query = OrderBy("created", SortOrder.DESC).apply(query)

        # Multiple orderings; the first is the primary key
        query = OrderBy(["deleted", "name"], [SortOrder.ASC, SortOrder.DESC]).apply(query)
    """

    def __init__(
        self,
        fields: str | Sequence[str],
        sort_order: SortOrder | str | Sequence[SortOrder | str] = SortOrder.ASC,
    ):
        """Initialize ordering filter.

        Args:
            fields: Single field or list of fields to order by
            sort_order: Sort direction(s)

        Raises:
            ValueError: If the number of directions doesn't match the fields
        """
        self.fields = [fields] if isinstance(fields, str) else list(fields)

        if isinstance(sort_order, str):
            self.sort_orders = [SortOrder.parse(sort_order)] * len(self.fields)
        else:
            self.sort_orders = [SortOrder.parse(order) for order in sort_order]
            if len(self.sort_orders) != len(self.fields):
                msg = "sort_order length must match fields length"
                raise ValueError(msg)

    def apply(self, query: Query) -> Query:
        """Apply ordering to query."""
        for field, order in zip(self.fields, self.sort_orders, strict=True):
            query = query.order_by(field, order)
        return query


class FilterGroup(QueryFilter):
    """Apply several filters in sequence (AND semantics)."""

    def __init__(self, filters: Sequence[QueryFilter]):
        self.filters = list(filters)

    def apply(self, query: Query) -> Query:
        """Apply all filters to query."""
        for filter_obj in self.filters:
            query = filter_obj.apply(query)
        return query


__all__ = [
    "FieldFilter",
    "FilterGroup",
    "OrderBy",
    "QueryFilter",
    "coerce_field_value",
]
