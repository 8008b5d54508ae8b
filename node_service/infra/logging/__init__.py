"""Logging infrastructure.

Basic usage:
    import logging

    from node_service.infra.logging import get_lazy_logger, setup_logging

    setup_logging()  # reads LOG_* settings once per process

    logger = logging.getLogger(__name__)
    logger.info("Entity deleted", extra={"entity": "Model", "id": "abc"})

    lazy_logger = get_lazy_logger(__name__)
    lazy_logger.debug(lambda: f"db.query -> {len(documents)} documents")
"""

from node_service.infra.logging.config import configure_logging, setup_logging
from node_service.infra.logging.formatters import JSONFormatter
from node_service.infra.logging.lazy import (
    LazyLoggerAdapter,
    get_lazy_logger,
)

__all__ = [
    "JSONFormatter",
    "LazyLoggerAdapter",
    "configure_logging",
    "get_lazy_logger",
    "setup_logging",
]
