"""Document repository exceptions.

Custom exceptions for repository operations that provide better
error messages and typing than raw document store exceptions.

Validation errors (bad filters, pagination or cursors) and not-found
errors are returned to callers verbatim. Store errors wrap the
underlying client exception and are never retried by this layer.
"""
from __future__ import annotations

from typing import Any


class RepositoryError(Exception):
    """Base exception for repository operations.

    Raised when a repository operation fails due to programming
    errors, configuration issues, or unexpected states.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize repository error.

        Args:
            message: Error description
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Format error message with details."""
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ValidationError(RepositoryError):
    """Caller supplied malformed query input.

    Never retried: the same input will fail the same way.
    """


class InvalidFilterError(ValidationError):
    """Invalid filter or query parameters.

    Raised when a filter references an unknown operation or field type,
    or when its value cannot be coerced to the declared field type.
    """

    def __init__(self, message: str, filter_name: str | None = None):
        """Initialize invalid filter error.

        Args:
            message: Error description
            filter_name: Name of the problematic field (if applicable)
        """
        details = {"filter": filter_name} if filter_name else {}
        super().__init__(message, details=details)
        self.filter_name = filter_name


class InvalidPaginationError(ValidationError):
    """Pagination parameters are ambiguous or unparseable."""

    def __init__(self, message: str, parameter: str | None = None):
        details = {"parameter": parameter} if parameter else {}
        super().__init__(message, details=details)
        self.parameter = parameter


class InvalidCursorError(ValidationError):
    """An opaque pagination cursor could not be decoded."""

    def __init__(self, cursor: str, reason: str):
        super().__init__(f"Invalid cursor: {reason}", details={"cursor": cursor})
        self.cursor = cursor


class InvalidEnumValueError(ValidationError):
    """A wire value is not a member of the expected enum."""

    def __init__(self, enum_name: str, value: Any):
        super().__init__(
            f"{value!r} is not a valid {enum_name}",
            details={"enum": enum_name},
        )
        self.enum_name = enum_name
        self.value = value


class NotFoundError(RepositoryError):
    """Document not found in its collection.

    This is a data-level error (404-like) rather than a system error.

    Attributes:
        model_name: Name of the node type that wasn't found
        identifier: The key/value that was searched for
    """

    def __init__(self, model_name: str, identifier: dict[str, Any]):
        """Initialize not found error.

        Args:
            model_name: Name of the node type (e.g., "Model", "Patient")
            identifier: Key-value pairs used in the lookup (e.g., {"id": "abc"})
        """
        self.model_name = model_name
        self.identifier = identifier

        id_str = ", ".join(f"{k}={v!r}" for k, v in identifier.items())
        message = f"{model_name} not found with {id_str}"

        super().__init__(message, details={"model": model_name, **identifier})

    def __repr__(self) -> str:
        """Repr for debugging."""
        return f"NotFoundError(model={self.model_name!r}, identifier={self.identifier!r})"


class StoreError(RepositoryError):
    """The document store rejected a call or could not be reached.

    The original client exception is chained as ``__cause__``.
    """

    def __init__(self, operation: str, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details={"operation": operation, **(details or {})})
        self.operation = operation


class OperationCancelledError(StoreError):
    """The operation's deadline expired before the store answered."""

    def __init__(self, operation: str, timeout_seconds: float | None):
        self.timeout_seconds = timeout_seconds
        timeout_display = "unknown" if timeout_seconds is None else f"{float(timeout_seconds):g}"
        super().__init__(
            operation,
            f"{operation} cancelled after {timeout_display}s",
            details={"timeout": timeout_seconds},
        )


class BulkDeleteError(StoreError):
    """Documents in a drained collection could not be deleted.

    Raised once every remaining document has already failed to delete.
    """

    def __init__(self, collection: str, failed: int):
        super().__init__(
            "db.delete_collection",
            f"{failed} documents could not be deleted from {collection}",
            details={"collection": collection, "failed": failed},
        )
        self.collection = collection
        self.failed = failed


__all__ = [
    "BulkDeleteError",
    "InvalidCursorError",
    "InvalidEnumValueError",
    "InvalidFilterError",
    "InvalidPaginationError",
    "NotFoundError",
    "OperationCancelledError",
    "RepositoryError",
    "StoreError",
    "ValidationError",
]
