"""Generic repository for node documents.

Provides CRUD plus filtered, sorted and paginated queries for any node
type with explicit store passing. Each node type is kept in its own
collection (see ``collections.get_collection_name``).

Example:
    from node_service.core.database.repository import NodeRepository
    from node_service.core.database.nodes import Model
    from node_service.infra.store import InMemoryDocumentStore

    store = InMemoryDocumentStore()
    repo = NodeRepository()

    node_id, created = await repo.create(store, Model(name="test"))
    node = await repo.retrieve(store, node_id, Model())

    docs, page_info = await repo.query(
        store,
        Model(),
        pagination=PaginationInput(first=10),
        filter=FilterInput(filter_by=[
            FilterParam(
                field_name="deleted",
                field_type=FieldType.BOOLEAN,
                comparison_operation=Operation.EQUAL,
                field_value="false",
            ),
        ]),
    )
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from node_service.core.database.collections import get_collection_name
from node_service.core.database.exceptions import NotFoundError
from node_service.core.database.nodes import node_from_document, node_to_document, typeof
from node_service.core.database.query import compose_unpaginated_query
from node_service.core.database.timeouts import deadline
from node_service.core.settings.loader import get_firestore_settings
from node_service.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

if TYPE_CHECKING:
    from datetime import datetime

    from node_service.core.database.nodes import N, Node
    from node_service.core.pagination.paginator import PaginatedResult
    from node_service.core.pagination.schemas import Connection, PageInfo, PaginationInput
    from node_service.core.schemas.inputs import FilterInput, SortInput
    from node_service.infra.store.base import Document, DocumentStore


def _new_id() -> str:
    return str(uuid.uuid4())


class NodeRepository:
    """Node CRUD and query operations.

    Provides:
        - create(store, node) -> (id, write time)
        - retrieve(store, id, node) -> node (raises NotFoundError)
        - update(store, id, node) -> write time
        - delete(store, id, node) -> True
        - query(store, node, ...) -> (documents, PageInfo)
        - query_connection(store, node, ...) -> Connection[node type]

    The store is always explicit - no hidden state. The node argument
    selects the collection and, for reads, the type to unmarshal into.
    Every operation accepts ``timeout`` in seconds; an expired deadline
    raises OperationCancelledError.

    Update and delete succeed whether or not the document exists.
    """

    __slots__ = ("suffix", "id_factory", "default_page_size", "default_timeout")

    def __init__(
        self,
        *,
        suffix: str | None = None,
        id_factory: Callable[[], str] = _new_id,
        default_page_size: int | None = None,
        default_timeout: float | None = None,
    ) -> None:
        """Initialize repository.

        Args:
            suffix: Collection environment suffix (default: from settings)
            id_factory: Generates ids for nodes created without one
            default_page_size: Page size when neither first nor last is given
                (default: from settings)
            default_timeout: Deadline in seconds applied when an operation
                is called without one (default: from settings)
        """
        self.suffix = suffix
        self.id_factory = id_factory
        self.default_page_size = default_page_size
        self.default_timeout = (
            default_timeout
            if default_timeout is not None
            else get_firestore_settings().operation_timeout
        )

    def collection(self, node: Node | type) -> str:
        """Collection holding documents of node's type."""
        return get_collection_name(node, self.suffix)

    def _timeout(self, timeout: float | None) -> float | None:
        return timeout if timeout is not None else self.default_timeout

    @staticmethod
    def _loggers(node: Node | type) -> tuple[logging.Logger, LazyLoggerAdapter]:
        name = node.__name__ if isinstance(node, type) else typeof(node)
        # Standard logger for INFO/WARNING, lazy logger for DEBUG
        return logging.getLogger(f"repository.{name}"), get_lazy_logger(f"repository.{name}")

    async def create(
        self,
        store: DocumentStore,
        node: Node,
        *,
        timeout: float | None = None,
    ) -> tuple[str, datetime]:
        """Persist a new node.

        A node without an id is given one from ``id_factory``; the id is
        set on the node before it is written.

        Args:
            store: Document store
            node: Node to persist

        Returns:
            Tuple of (document id, write time)
        """
        collection = self.collection(node)
        if not node.get_id():
            node.set_id(self.id_factory())
        data = node_to_document(node)

        async with deadline(self._timeout(timeout), "db.create"):
            node_id, created = await store.add(collection, data, document_id=node.get_id())

        _, lazy = self._loggers(node)
        lazy.debug(lambda: f"db.create: {typeof(node)}(id={node_id}) in {collection}")
        return node_id, created

    async def retrieve(
        self,
        store: DocumentStore,
        id: str,  # noqa: A002
        node: N,
        *,
        timeout: float | None = None,
    ) -> N:
        """Get a node by id.

        Args:
            store: Document store
            id: Document id
            node: Instance of the type to retrieve; it is not modified

        Returns:
            New instance of type(node) with its id set

        Raises:
            NotFoundError: If the document doesn't exist
        """
        collection = self.collection(node)
        async with deadline(self._timeout(timeout), "db.retrieve"):
            document = await store.get(collection, id)

        logger, lazy = self._loggers(node)
        if document is None:
            logger.info(
                "Entity not found",
                extra={"entity": typeof(node), "id": id, "operation": "db.retrieve"},
            )
            raise NotFoundError(typeof(node), {"id": id})

        lazy.debug(lambda: f"db.retrieve: {typeof(node)}({id}) -> found")
        return node_from_document(type(node), document.to_dict(), document.id)

    async def update(
        self,
        store: DocumentStore,
        id: str,  # noqa: A002
        node: Node,
        *,
        timeout: float | None = None,
    ) -> datetime:
        """Merge node's fields into the document at id.

        The node's id is set to ``id`` first. A missing document is
        created rather than reported.

        Returns:
            Write time
        """
        node.set_id(id)
        collection = self.collection(node)
        data = node_to_document(node)

        async with deadline(self._timeout(timeout), "db.update"):
            updated = await store.set(collection, id, data, merge=True)

        _, lazy = self._loggers(node)
        lazy.debug(lambda: f"db.update: {typeof(node)}({id}) in {collection}")
        return updated

    async def delete(
        self,
        store: DocumentStore,
        id: str,  # noqa: A002
        node: Node,
        *,
        timeout: float | None = None,
    ) -> bool:
        """Delete the document at id.

        Returns:
            True, whether or not the document existed
        """
        collection = self.collection(node)
        async with deadline(self._timeout(timeout), "db.delete"):
            await store.delete(collection, id)

        logger, _ = self._loggers(node)
        logger.info(
            "Entity deleted",
            extra={"entity": typeof(node), "id": id, "operation": "db.delete"},
        )
        return True

    async def _run_query(
        self,
        store: DocumentStore,
        node: Node | type,
        pagination: PaginationInput | None,
        filter: FilterInput | None,  # noqa: A002
        sort: SortInput | None,
        timeout: float | None,
    ) -> PaginatedResult:
        from node_service.core.pagination.paginator import paginate, validate_pagination_parameters

        validate_pagination_parameters(pagination)
        query = compose_unpaginated_query(filter, sort, node, suffix=self.suffix)
        async with deadline(self._timeout(timeout), "db.query"):
            return await paginate(
                store,
                query,
                pagination,
                default_page_size=self.default_page_size,
            )

    async def query(
        self,
        store: DocumentStore,
        node: Node | type,
        *,
        pagination: PaginationInput | None = None,
        filter: FilterInput | None = None,  # noqa: A002
        sort: SortInput | None = None,
        timeout: float | None = None,
    ) -> tuple[list[Document], PageInfo]:
        """Filter, sort and paginate documents of node's type.

        Args:
            store: Document store
            node: Node (or node type) whose collection is queried
            pagination: Paging input (None returns every match)
            filter: Field predicates, ANDed
            sort: Orderings, primary key first

        Returns:
            Tuple of (documents in the page, page info)

        Raises:
            InvalidPaginationError: If pagination input is invalid
            InvalidFilterError: If a filter is invalid
        """
        result = await self._run_query(store, node, pagination, filter, sort, timeout)
        _, lazy = self._loggers(node)
        lazy.debug(
            lambda: (
                f"db.query: {self.collection(node)} -> {len(result.documents)} documents, "
                f"has_next={result.page_info.has_next_page}"
            )
        )
        return result.documents, result.page_info

    async def query_connection(
        self,
        store: DocumentStore,
        node: N,
        *,
        pagination: PaginationInput | None = None,
        filter: FilterInput | None = None,  # noqa: A002
        sort: SortInput | None = None,
        timeout: float | None = None,
    ) -> Connection[N]:
        """Same as query(), returned as a Relay connection of nodes.

        Example:
            connection = await repo.query_connection(
                store, Model(), pagination=PaginationInput(first=50)
            )
            for edge in connection.edges:
                print(edge.node.name, edge.cursor)

            if connection.page_info.has_next_page:
                next_cursor = connection.page_info.end_cursor
        """
        from node_service.core.pagination.schemas import Connection, Edge

        result = await self._run_query(store, node, pagination, filter, sort, timeout)
        node_type = type(node)
        edges: list[Edge[Any]] = [
            Edge[Any](
                node=node_from_document(node_type, document.to_dict(), document.id),
                cursor=result.cursor_at(index),
            )
            for index, document in enumerate(result.documents)
        ]

        _, lazy = self._loggers(node)
        lazy.debug(
            lambda: f"db.query_connection: {typeof(node)} -> {len(edges)} edges"
        )
        return Connection[Any](edges=edges, page_info=result.page_info)


__all__ = ["NodeRepository"]
