"""Lazy evaluation support for logging.

Repository and store code logs per-document detail at DEBUG. Building
those messages (formatting ids, counting results, rendering queries)
is only worth doing when DEBUG is actually enabled, so messages may be
passed as callables that are evaluated on demand.
"""

from __future__ import annotations

import logging
from typing import Any


class LazyLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that evaluates callable messages and arguments lazily.

    Example:
        ```python
        logger = get_lazy_logger("repository.Model")
        logger.debug(lambda: f"db.query: {collection} -> {len(docs)} documents")
        ```
    """

    def log(
        self,
        level: int,
        msg: Any,
        *args: Any,
        **kwargs: Any,
    ) -> None:
        """Log message, evaluating callables only if the level is enabled.

        Args:
            level: Numeric log level (e.g., logging.DEBUG).
            msg: Log message or callable returning message.
            *args: Format arguments (may include callables).
            **kwargs: Additional kwargs for logging.
        """
        if not self.isEnabledFor(level):
            return

        if callable(msg):
            msg = msg()

        if args:
            args = tuple(arg() if callable(arg) else arg for arg in args)

        super().log(level, msg, *args, **kwargs)

    def debug(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.ERROR, msg, *args, **kwargs)

    def exception(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("exc_info", True)
        self.log(logging.ERROR, msg, *args, **kwargs)


def get_lazy_logger(name: str, **context: Any) -> LazyLoggerAdapter:
    """Get logger with lazy evaluation support.

    Args:
        name: Logger name (usually __name__ or "repository.<Type>").
        **context: Optional context bound to every record (passed as ``extra``).

    Returns:
        Logger adapter with lazy evaluation support.
    """
    return LazyLoggerAdapter(logging.getLogger(name), context or {})
