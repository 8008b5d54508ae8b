"""Pagination settings for node queries.

This module provides configurable defaults for paginated node queries and
collection drains. Having centralized pagination settings ensures consistency
and allows easy tuning based on store quotas.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_DEFAULT_PAGE_SIZE=50, PAGINATION_MAX_PAGE_SIZE=500
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        default_page_size: Page size used when neither `first` nor `last` is given.
        max_page_size: Hard upper bound on any requested page size.
        delete_batch_size: Documents fetched per batch when draining a collection.

    Example:
        settings = PaginationSettings()
        page_size = min(requested, settings.max_page_size)
    """

    default_page_size: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="Default page size when first/last not specified",
    )
    max_page_size: int = Field(
        default=1000,
        ge=1,
        le=10000,
        description="Maximum allowed page size (hard limit)",
    )
    delete_batch_size: int = Field(
        default=100,
        ge=1,
        le=500,
        description="Batch size for bulk collection deletion",
    )

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )
