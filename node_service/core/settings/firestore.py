"""Firestore connection and collection naming settings.

Environment variables use FIRESTORE_ prefix, except the collection suffix
which keeps its deployment-wide name.
Example: FIRESTORE_PROJECT_ID=my-project, ROOT_COLLECTION_SUFFIX=prod
"""

from __future__ import annotations

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FirestoreSettings(BaseSettings):
    """Document store configuration.

    Attributes:
        project_id: Google Cloud project (None lets the client discover it).
        database: Firestore database name.
        emulator_host: host:port of a local emulator, if any.
        root_collection_suffix: Environment suffix appended to every collection name.
        operation_timeout: Default per-call deadline in seconds (None = no deadline).
    """

    project_id: str | None = Field(
        default=None,
        description="Google Cloud project ID",
    )
    database: str = Field(
        default="(default)",
        min_length=1,
        description="Firestore database name",
    )
    emulator_host: str | None = Field(
        default=None,
        description="Firestore emulator host:port for local development",
    )
    root_collection_suffix: str = Field(
        default="staging",
        min_length=1,
        validation_alias=AliasChoices(
            "ROOT_COLLECTION_SUFFIX",
            "FIRESTORE_ROOT_COLLECTION_SUFFIX",
            "root_collection_suffix",
        ),
        description="Environment suffix used to isolate collections per deployment",
    )
    operation_timeout: float | None = Field(
        default=None,
        gt=0,
        le=600,
        description="Default deadline for store calls, in seconds",
    )

    @field_validator("root_collection_suffix", mode="before")
    @classmethod
    def normalize_suffix(cls, v: str) -> str:
        """Strip whitespace around the suffix."""
        if isinstance(v, str):
            return v.strip()
        return v

    model_config = SettingsConfigDict(
        env_prefix="FIRESTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        env_ignore_empty=True,
    )
