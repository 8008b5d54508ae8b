"""Pydantic Settings v2 configuration.

Settings are split by concern and loaded from environment variables
(and an optional .env file) through LRU-cached loaders:

    from node_service.core.settings import get_firestore_settings

    suffix = get_firestore_settings().root_collection_suffix

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file
"""

from __future__ import annotations

from .firestore import FirestoreSettings
from .loader import (
    clear_all_caches,
    get_firestore_settings,
    get_logging_settings,
    get_pagination_settings,
)
from .logs import LoggingSettings
from .pagination import PaginationSettings

__all__ = [
    "FirestoreSettings",
    "LoggingSettings",
    "PaginationSettings",
    "clear_all_caches",
    "get_firestore_settings",
    "get_logging_settings",
    "get_pagination_settings",
]
