"""Core document access package: nodes, queries and the repository.

Nodes:
    - Node: Protocol for persisted entities (is_node/get_id/set_id)
    - Model: Pydantic base node with the common document fields
    - marshal_id / unmarshal_id: Opaque relay IDs ("id|Type", base64)

Collections:
    - get_collection_name: Collection for a node type, environment-suffixed
    - suffix_collection: Append the environment suffix to a bare name

Enums:
    - FieldType, Operation, SortOrder: Closed wire vocabularies
    - op_string: Operation to store operator

Query Composition:
    - Query: Immutable collection query (predicates + orderings)
    - compose_unpaginated_query: Build a Query from filter and sort inputs
    - FieldFilter / OrderBy / FilterGroup: Composable query filters
    - coerce_field_value: Type-directed filter value coercion

Repository:
    - NodeRepository: CRUD and paginated queries with explicit store passing
    - delete_collection: Batched collection drain

Exceptions:
    - RepositoryError and its ValidationError / NotFoundError / StoreError families
"""

from node_service.core.database.bulk import delete_collection
from node_service.core.database.collections import (
    COLLECTION_INFIX,
    get_collection_name,
    suffix_collection,
)
from node_service.core.database.enums import FieldType, Operation, SortOrder, op_string
from node_service.core.database.exceptions import (
    BulkDeleteError,
    InvalidCursorError,
    InvalidEnumValueError,
    InvalidFilterError,
    InvalidPaginationError,
    NotFoundError,
    OperationCancelledError,
    RepositoryError,
    StoreError,
    ValidationError,
)
from node_service.core.database.filters import (
    FieldFilter,
    FilterGroup,
    OrderBy,
    QueryFilter,
    coerce_field_value,
)
from node_service.core.database.nodes import (
    SEP,
    Model,
    N,
    Node,
    marshal_id,
    node_from_document,
    node_to_document,
    typeof,
    unmarshal_id,
)
from node_service.core.database.query import (
    FieldPredicate,
    Ordering,
    Query,
    compose_unpaginated_query,
)
from node_service.core.database.repository import NodeRepository
from node_service.core.database.timeouts import deadline

__all__ = [
    "COLLECTION_INFIX",
    "SEP",
    "BulkDeleteError",
    "FieldFilter",
    "FieldPredicate",
    "FieldType",
    "FilterGroup",
    "InvalidCursorError",
    "InvalidEnumValueError",
    "InvalidFilterError",
    "InvalidPaginationError",
    "Model",
    "N",
    "Node",
    "NodeRepository",
    "NotFoundError",
    "Operation",
    "OperationCancelledError",
    "OrderBy",
    "Ordering",
    "Query",
    "QueryFilter",
    "RepositoryError",
    "SortOrder",
    "StoreError",
    "ValidationError",
    "coerce_field_value",
    "compose_unpaginated_query",
    "deadline",
    "delete_collection",
    "get_collection_name",
    "marshal_id",
    "node_from_document",
    "node_to_document",
    "op_string",
    "suffix_collection",
    "typeof",
    "unmarshal_id",
]
