"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the process.

Usage:
    from node_service.core.settings.loader import get_firestore_settings

    settings = get_firestore_settings()  # First call: loads and validates
    settings = get_firestore_settings()  # Subsequent calls: returns cached instance

Testing:
    In tests, clear the cache to force reload:
    clear_all_caches()

    Or override with custom values:
    settings = FirestoreSettings(root_collection_suffix="testing")
"""

from __future__ import annotations

from functools import lru_cache

from .firestore import FirestoreSettings
from .logs import LoggingSettings
from .pagination import PaginationSettings


@lru_cache(maxsize=1)
def get_firestore_settings() -> FirestoreSettings:
    """Get cached document store settings.

    Returns:
        Validated and frozen FirestoreSettings instance.
    """
    return FirestoreSettings()


@lru_cache(maxsize=1)
def get_pagination_settings() -> PaginationSettings:
    """Get cached pagination settings.

    Returns:
        Validated and frozen PaginationSettings instance.
    """
    return PaginationSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings.

    Returns:
        Validated and frozen LoggingSettings instance.
    """
    return LoggingSettings()


def clear_all_caches() -> None:
    """Clear all settings caches.

    Useful for testing or when you need to force reload settings.
    In production, prefer process restarts over cache clearing.
    """
    get_firestore_settings.cache_clear()
    get_pagination_settings.cache_clear()
    get_logging_settings.cache_clear()
