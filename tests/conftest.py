"""Pytest configuration and shared fixtures.

This module provides reusable fixtures for testing across the entire test suite.
Fixtures are organized by category to make them easy to discover and extend.

Organization:
    - Settings Fixtures: pinned environment and cache resets
    - Store Fixtures: in-memory document store and repository
    - Node Fixtures: seeded collections
"""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from node_service.core.database.repository import NodeRepository
from node_service.core.settings.loader import clear_all_caches
from node_service.infra.store.memory import InMemoryDocumentStore
from tests.utils import Patient

# Ensure tests run without external infrastructure
os.environ.setdefault("ROOT_COLLECTION_SUFFIX", "staging")
os.environ.setdefault("PAGINATION_DEFAULT_PAGE_SIZE", "100")
os.environ.setdefault("PAGINATION_MAX_PAGE_SIZE", "1000")
os.environ.setdefault("LOG_JSON", "false")
os.environ.pop("FIRESTORE_EMULATOR_HOST", None)
os.environ.pop("FIRESTORE_OPERATION_TIMEOUT", None)


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _clear_settings_caches() -> Iterator[None]:
    """Reload settings for every test so monkeypatched env vars take effect."""
    clear_all_caches()
    yield
    clear_all_caches()


# ============================================================================
# Store Fixtures
# ============================================================================


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """Fresh in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def repo() -> NodeRepository:
    """Repository writing to the "staging" collections."""
    return NodeRepository(suffix="staging")


# ============================================================================
# Node Fixtures
# ============================================================================


@pytest.fixture
async def seeded_patients(store: InMemoryDocumentStore, repo: NodeRepository) -> list[str]:
    """Ten patients p00..p09: age == index, odd indexes are deleted."""
    ids = []
    for index in range(10):
        patient = Patient(
            id=f"p{index:02d}",
            name=f"patient-{index}",
            age=index,
            score=index / 2,
            deleted=index % 2 == 1,
            tags=["even"] if index % 2 == 0 else ["odd"],
        )
        node_id, _ = await repo.create(store, patient)
        ids.append(node_id)
    return ids
