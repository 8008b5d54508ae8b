"""Unit tests for the in-memory document store."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from node_service.core.database.enums import SortOrder
from node_service.core.database.exceptions import StoreError
from node_service.core.database.query import Query
from node_service.infra.store.memory import InMemoryDocumentStore

C = "thing_bewell_staging"


@pytest.fixture
async def things() -> InMemoryDocumentStore:
    store = InMemoryDocumentStore()
    await store.add(C, {"name": "b", "rank": 2, "tags": ["x", "y"], "meta": {"level": 1}}, document_id="1")
    await store.add(C, {"name": "a", "rank": 1, "tags": ["y"]}, document_id="2")
    await store.add(C, {"name": "c", "rank": 2.5, "tags": []}, document_id="3")
    await store.add(C, {"name": "d", "rank": "2"}, document_id="4")
    await store.add(C, {"name": "e"}, document_id="5")
    return store


def _ids(documents):
    return [d.id for d in documents]


@pytest.mark.unit
class TestCrud:
    """Single-document operations."""

    @pytest.mark.asyncio
    async def test_add_and_get(self, store):
        doc_id, created = await store.add(C, {"name": "x"})

        document = await store.get(C, doc_id)
        assert document.data == {"name": "x"}
        assert document.update_time == created
        assert created.tzinfo is not None

    @pytest.mark.asyncio
    async def test_add_existing_id_conflicts(self, store):
        await store.add(C, {}, document_id="dup")
        with pytest.raises(StoreError):
            await store.add(C, {}, document_id="dup")

    @pytest.mark.asyncio
    async def test_get_missing(self, store):
        assert await store.get(C, "missing") is None

    @pytest.mark.asyncio
    async def test_documents_are_copied(self, store):
        data = {"tags": ["a"]}
        doc_id, _ = await store.add(C, data)
        data["tags"].append("b")

        document = await store.get(C, doc_id)
        document.data["tags"].append("c")

        assert (await store.get(C, doc_id)).data == {"tags": ["a"]}

    @pytest.mark.asyncio
    async def test_set_replaces(self, store):
        await store.add(C, {"a": 1, "b": 2}, document_id="1")
        await store.set(C, "1", {"a": 3})
        assert (await store.get(C, "1")).data == {"a": 3}

    @pytest.mark.asyncio
    async def test_set_merge(self, store):
        await store.add(C, {"a": 1, "nested": {"x": 1, "y": 2}}, document_id="1")
        await store.set(C, "1", {"b": 2, "nested": {"y": 3}}, merge=True)

        assert (await store.get(C, "1")).data == {"a": 1, "b": 2, "nested": {"x": 1, "y": 3}}

    @pytest.mark.asyncio
    async def test_set_creates_missing(self, store):
        await store.set(C, "new", {"a": 1}, merge=True)
        assert (await store.get(C, "new")).data == {"a": 1}

    @pytest.mark.asyncio
    async def test_delete_missing_is_not_an_error(self, store):
        await store.delete(C, "missing")
        await store.delete("no_such_collection", "missing")

    @pytest.mark.asyncio
    async def test_list_documents(self, things):
        assert await things.list_documents(C) == ["1", "2", "3", "4", "5"]
        assert await things.list_documents(C, limit=2) == ["1", "2"]
        assert await things.list_documents("empty") == []

    @pytest.mark.asyncio
    async def test_count_and_clear(self, things):
        assert things.count(C) == 5
        things.clear_all()
        assert things.count(C) == 0


@pytest.mark.unit
class TestRunQuery:
    """Firestore-like filtering and ordering."""

    @pytest.mark.asyncio
    async def test_default_order_is_by_id(self, things):
        assert _ids(await things.run_query(Query(C))) == ["1", "2", "3", "4", "5"]

    @pytest.mark.asyncio
    async def test_equality(self, things):
        assert _ids(await things.run_query(Query(C).where("name", "==", "a"))) == ["2"]

    @pytest.mark.asyncio
    async def test_comparison_does_not_cross_types(self, things):
        """Numbers compare with numbers only; the string "2" never matches."""
        result = await things.run_query(Query(C).where("rank", ">=", 2))
        assert _ids(result) == ["1", "3"]

    @pytest.mark.asyncio
    async def test_int_and_float_compare(self, things):
        assert _ids(await things.run_query(Query(C).where("rank", "==", 2.0))) == ["1"]

    @pytest.mark.asyncio
    async def test_missing_field_never_matches(self, things):
        result = await things.run_query(Query(C).where("rank", "<", 100))
        assert "5" not in _ids(result)

    @pytest.mark.asyncio
    async def test_in(self, things):
        result = await things.run_query(Query(C).where("name", "in", ["a", "c", "z"]))
        assert _ids(result) == ["2", "3"]

    @pytest.mark.asyncio
    async def test_array_contains(self, things):
        result = await things.run_query(Query(C).where("tags", "array-contains", "y"))
        assert _ids(result) == ["1", "2"]

    @pytest.mark.asyncio
    async def test_nested_field_path(self, things):
        assert _ids(await things.run_query(Query(C).where("meta.level", "==", 1))) == ["1"]

    @pytest.mark.asyncio
    async def test_order_excludes_missing_field(self, things):
        """Ordering by a field drops documents without it."""
        result = await things.run_query(Query(C).order_by("rank"))
        # numbers before strings, per cross-type ordering
        assert _ids(result) == ["2", "1", "3", "4"]

    @pytest.mark.asyncio
    async def test_order_desc_with_tie_break(self, store):
        for doc_id, group in [("a", 1), ("b", 2), ("c", 1), ("d", 2)]:
            await store.add(C, {"group": group}, document_id=doc_id)

        result = await store.run_query(Query(C).order_by("group", SortOrder.DESC))
        assert _ids(result) == ["d", "b", "c", "a"]

    @pytest.mark.asyncio
    async def test_multiple_orderings(self, store):
        rows = [("1", True, "b"), ("2", False, "a"), ("3", False, "c"), ("4", True, "a")]
        for doc_id, deleted, name in rows:
            await store.add(C, {"deleted": deleted, "name": name}, document_id=doc_id)

        query = Query(C).order_by("deleted").order_by("name", SortOrder.DESC)
        assert _ids(await store.run_query(query)) == ["3", "2", "1", "4"]

    @pytest.mark.asyncio
    async def test_timestamps(self, store):
        now = datetime.now(UTC)
        await store.add(C, {"at": now - timedelta(days=1)}, document_id="old")
        await store.add(C, {"at": now}, document_id="new")

        result = await store.run_query(Query(C).where("at", ">", now - timedelta(hours=1)))
        assert _ids(result) == ["new"]

    @pytest.mark.asyncio
    async def test_offset_and_limit(self, things):
        result = await things.run_query(Query(C), offset=1, limit=2)
        assert _ids(result) == ["2", "3"]

    @pytest.mark.asyncio
    async def test_negative_offset(self, things):
        with pytest.raises(StoreError):
            await things.run_query(Query(C), offset=-1)

    @pytest.mark.asyncio
    async def test_unknown_collection_is_empty(self, store):
        assert await store.run_query(Query("nothing_here")) == []
