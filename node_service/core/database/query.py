"""Store-agnostic document queries and the query composer.

A ``Query`` is an immutable description of "which documents, in what
order" for one collection. Stores translate it into their own query API;
the paginator adds the offset and limit at execution time.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from node_service.core.database.collections import get_collection_name
from node_service.core.database.enums import SortOrder
from node_service.core.database.exceptions import InvalidFilterError
from node_service.core.database.filters import FieldFilter, FilterGroup, OrderBy, QueryFilter
from node_service.infra.logging.lazy import get_lazy_logger

if TYPE_CHECKING:
    from node_service.core.database.nodes import Node
    from node_service.core.schemas.inputs import FilterInput, SortInput

lazy_logger = get_lazy_logger(__name__)

# Operators understood by every DocumentStore
SUPPORTED_OPERATORS = frozenset({"<", "<=", "==", ">", ">=", "in", "array-contains"})


@dataclass(frozen=True, slots=True)
class FieldPredicate:
    """A single ``field <operator> value`` condition."""

    field: str
    operator: str
    value: Any


@dataclass(frozen=True, slots=True)
class Ordering:
    """Sort key; earlier orderings take precedence."""

    field: str
    direction: SortOrder = SortOrder.ASC


@dataclass(frozen=True, slots=True)
class Query:
    """Immutable collection query.

    Example:
        query = (
            Query("model_bewell_staging")
            .where("deleted", "==", False)
            .order_by("name", SortOrder.DESC)
        )
    """

    collection: str
    predicates: tuple[FieldPredicate, ...] = field(default=())
    orderings: tuple[Ordering, ...] = field(default=())

    def where(self, field_name: str, operator: str, value: Any) -> Query:
        """Return a copy of this query with one more predicate (AND).

        Raises:
            InvalidFilterError: If operator is not a store operator
        """
        if operator not in SUPPORTED_OPERATORS:
            raise InvalidFilterError(f"unsupported operator {operator!r}", field_name)
        if operator == "in" and not isinstance(value, (list, tuple)):
            raise InvalidFilterError("'in' requires a list value", field_name)
        predicate = FieldPredicate(field_name, operator, value)
        return dataclasses.replace(self, predicates=(*self.predicates, predicate))

    def order_by(self, field_name: str, direction: SortOrder | str = SortOrder.ASC) -> Query:
        """Return a copy of this query with one more sort key."""
        ordering = Ordering(field_name, SortOrder.parse(direction))
        return dataclasses.replace(self, orderings=(*self.orderings, ordering))

    def describe(self) -> str:
        """Short human-readable form for logs."""
        parts = [self.collection]
        parts.extend(f"{p.field} {p.operator} {p.value!r}" for p in self.predicates)
        parts.extend(f"order {o.field} {o.direction}" for o in self.orderings)
        return " | ".join(parts)


def compose_unpaginated_query(
    filter: FilterInput | None,  # noqa: A002
    sort: SortInput | None,
    node: Node | type,
    *,
    suffix: str | None = None,
) -> Query:
    """Build the query for node's collection from filter and sort inputs.

    Predicates are applied in ``filter.filter_by`` order, then orderings in
    ``sort.sort_by`` order. ``filter.search`` is accepted but not applied.

    Args:
        filter: Optional filter input
        sort: Optional sort input
        node: Node (or node type) whose collection is queried
        suffix: Environment suffix; defaults to the configured one

    Returns:
        Query without offset or limit

    Raises:
        InvalidFilterError: If any filter value or operation is invalid.
            No partially-built query is returned.
    """
    query = Query(get_collection_name(node, suffix))
    filters: list[QueryFilter] = []

    if filter is not None:
        if filter.search:
            lazy_logger.debug(
                lambda: f"Ignoring free-text search {filter.search!r} on {query.collection}"
            )
        filters.extend(FieldFilter.from_param(param) for param in filter.filter_by)

    if sort is not None:
        filters.extend(OrderBy(param.field_name, param.sort_order) for param in sort.sort_by)

    return FilterGroup(filters).apply(query)


__all__ = [
    "SUPPORTED_OPERATORS",
    "FieldPredicate",
    "Ordering",
    "Query",
    "compose_unpaginated_query",
]
