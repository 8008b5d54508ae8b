"""Logging configuration settings."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings(BaseSettings):
    """Structured logging configuration.

    Environment variables use LOG_ prefix.
    Example: LOG_LEVEL=INFO, LOG_JSON=true, LOG_FILE=logs/node-service.log.jsonl
    """

    service_name: str = Field(
        default="node-service",
        description="Service name to include in log records (static field in JSON)",
    )

    level: LogLevel = Field(
        default="INFO",
        description="Root logger level (DEBUG|INFO|WARNING|ERROR|CRITICAL)",
    )

    json_logs: bool = Field(
        default=True,
        validation_alias=AliasChoices("LOG_JSON", "json_logs"),
        description="Enable JSON Lines (JSONL) formatted structured logs",
    )

    log_file: str | None = Field(
        default=None,
        validation_alias=AliasChoices("LOG_FILE", "log_file"),
        max_length=500,
        description="Log file path (None to disable file logging)",
    )
    file_max_bytes: int = Field(
        default=10_485_760,
        ge=1024,
        le=1_073_741_824,
        description="Max log file size in bytes before rotation",
    )
    file_backup_count: int = Field(
        default=5, ge=0, le=100, description="Number of rotated log files to keep"
    )

    console_enabled: bool = Field(
        default=True, description="Enable console/stderr logging"
    )

    capture_warnings: bool = Field(
        default=True, description="Forward Python warnings to logging"
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        if isinstance(v, str):
            return v.upper()
        return v

    def to_logging_kwargs(self) -> dict[str, Any]:
        """Return kwargs suitable for configure_logging(...)."""
        return {
            "service_name": self.service_name,
            "log_level": self.level,
            "json_logs": self.json_logs,
            "file_path": self.log_file,
            "file_max_bytes": self.file_max_bytes,
            "file_backup_count": self.file_backup_count,
            "console_enabled": self.console_enabled,
            "capture_warnings": self.capture_warnings,
        }

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        env_ignore_empty=True,
    )
