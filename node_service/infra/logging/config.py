"""Logging configuration setup.

Builds a ``logging.config.dictConfig`` configuration from LoggingSettings:
- All handlers on the root logger (child loggers propagate)
- JSONL format for machine parsing, plain text for local development
- Optional size-rotated log file
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)
_LOGGING_INITIALIZED = False

if TYPE_CHECKING:
    from node_service.core.settings.logs import LoggingSettings

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **configure_kwargs: Any,
) -> None:
    """Ensure logging is configured once across entrypoints.

    Args:
        log_settings: Optional logging settings instance. If omitted, settings
            are loaded via get_logging_settings().
        force: Reconfigure logging even if it was already initialized.
        **configure_kwargs: Explicit overrides for configure_logging().
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    settings_obj = log_settings
    if settings_obj is None:
        from node_service.core.settings import get_logging_settings

        settings_obj = get_logging_settings()

    log_config = {**settings_obj.to_logging_kwargs(), **configure_kwargs}
    configure_logging(**log_config)
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    *,
    service_name: str | None = None,
    json_logs: bool = True,
    file_path: str | Path | None = None,
    file_max_bytes: int = 10 * 1024 * 1024,
    file_backup_count: int = 5,
    console_enabled: bool = True,
    capture_warnings: bool = True,
    **kwargs: Any,
) -> dict[str, Any]:
    """Configure the root logger with dictConfig.

    Args:
        log_level: Root logger level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Added as a static "service" field to JSON records.
        json_logs: Enable JSONL (JSON Lines) structured logging.
        file_path: Path to log file. None disables file logging.
        file_max_bytes: Maximum log file size before rotation.
        file_backup_count: Number of rotated log files to keep.
        console_enabled: Enable console/stderr logging.
        capture_warnings: Forward Python warnings to logging system.
        **kwargs: Unused settings, logged at DEBUG.

    Returns:
        The dictConfig dictionary that was applied.

    Example:
        from node_service.core.settings import get_logging_settings
        configure_logging(**get_logging_settings().to_logging_kwargs())
    """
    if kwargs:
        logger.debug("Unused logging kwargs supplied: %s", ", ".join(sorted(kwargs)))

    logging.captureWarnings(capture_warnings)

    formatter_name = "json" if json_logs else "text"
    formatters: dict[str, Any] = {
        "json": {
            "()": "node_service.infra.logging.formatters.JSONFormatter",
            "static": {"service": service_name} if service_name else None,
        },
        "text": {"format": TEXT_FORMAT},
    }

    handlers: dict[str, Any] = {}
    if console_enabled:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "formatter": formatter_name,
            "stream": "ext://sys.stderr",
        }
    if file_path:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "json",
            "filename": str(path),
            "maxBytes": file_max_bytes,
            "backupCount": file_backup_count,
            "encoding": "utf-8",
        }

    logging_config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "handlers": handlers,
        "root": {
            "level": log_level.upper(),
            "handlers": list(handlers),
        },
    }
    logging.config.dictConfig(logging_config)
    return logging_config
