"""Closed vocabularies for filtering and sorting documents.

The member values are the wire strings used by JSON and GraphQL
clients, e.g. ``{"fieldType": "BOOLEAN", "comparisonOperation": "EQUAL"}``.

Usage:
    from node_service.core.database.enums import FieldType, Operation, op_string

    FieldType.parse("INTEGER")          # FieldType.INTEGER
    FieldType.is_valid("NOT A TYPE")    # False
    op_string(Operation.CONTAINS)       # "array-contains"
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Self

from node_service.core.database.exceptions import InvalidEnumValueError, InvalidFilterError


class _WireEnum(StrEnum):
    """StrEnum that validates wire strings with a typed error."""

    @classmethod
    def parse(cls, value: Any) -> Self:
        """Parse a wire value into a member.

        Raises:
            InvalidEnumValueError: If value is not a string naming a member
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidEnumValueError(cls.__name__, value)
        try:
            return cls(value)
        except ValueError as e:
            raise InvalidEnumValueError(cls.__name__, value) from e

    @classmethod
    def is_valid(cls, value: Any) -> bool:
        """Whether value is a member or the wire string of one."""
        return isinstance(value, str) and value in cls._value2member_map_


class FieldType(_WireEnum):
    """How a filter's comparison value is coerced before querying."""

    BOOLEAN = "BOOLEAN"
    TIMESTAMP = "TIMESTAMP"
    NUMBER = "NUMBER"
    INTEGER = "INTEGER"
    STRING = "STRING"


class Operation(_WireEnum):
    """Supported comparison operators."""

    LESS_THAN = "LESS_THAN"
    LESS_THAN_OR_EQUAL_TO = "LESS_THAN_OR_EQUAL_TO"
    EQUAL = "EQUAL"
    GREATER_THAN = "GREATER_THAN"
    GREATER_THAN_OR_EQUAL_TO = "GREATER_THAN_OR_EQUAL_TO"
    IN = "IN"
    CONTAINS = "CONTAINS"


class SortOrder(_WireEnum):
    """Sort direction."""

    ASC = "ASC"
    DESC = "DESC"


_OPERATORS: dict[Operation, str] = {
    Operation.LESS_THAN: "<",
    Operation.LESS_THAN_OR_EQUAL_TO: "<=",
    Operation.EQUAL: "==",
    Operation.GREATER_THAN: ">",
    Operation.GREATER_THAN_OR_EQUAL_TO: ">=",
    Operation.IN: "in",
    Operation.CONTAINS: "array-contains",
}

UNKNOWN_OPERATION_MESSAGE = (
    "unknown operation; did you forget to update this function after adding "
    "new operations in the schema?"
)


def op_string(operation: Operation | str) -> str:
    """Map an operation to the document store's comparison operator.

    Args:
        operation: Operation member (or its wire string)

    Returns:
        Store operator, e.g. ``"<="`` or ``"array-contains"``

    Raises:
        InvalidFilterError: If the operation has no store operator
    """
    if not Operation.is_valid(operation):
        raise InvalidFilterError(UNKNOWN_OPERATION_MESSAGE)
    operator = _OPERATORS.get(Operation(operation))
    if operator is None:
        raise InvalidFilterError(UNKNOWN_OPERATION_MESSAGE)
    return operator


__all__ = [
    "FieldType",
    "Operation",
    "SortOrder",
    "UNKNOWN_OPERATION_MESSAGE",
    "op_string",
]
