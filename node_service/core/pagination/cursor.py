"""Cursor encoding and decoding for pagination.

Cursors are opaque strings that encode a zero-based position in a result
set. Clients receive them in ``PageInfo`` and hand them back unchanged.

The cursor format is:
1. msgpack map with a single integer ``offset`` field
2. Standard base64 encoded for transport

Example:
    CursorCodec.encode(0)            # "gaZvZmZzZXQA"
    CursorCodec.decode("gaZvZmZzZXQA")  # 0

Negative offsets round-trip too; -1 is used as a "before the first item"
position.
"""

from __future__ import annotations

import base64
import binascii
from typing import Any

import msgpack
from msgpack.exceptions import UnpackException
from pydantic import BaseModel, Field

from node_service.core.database.exceptions import InvalidCursorError

# Envelopes issued by earlier clients used the capitalised key
_OFFSET_KEYS = ("offset", "Offset")


class Cursor(BaseModel):
    """A zero-based position in a result set.

    Attributes:
        offset: Position of the item the cursor points at
    """

    offset: int = Field(description="Zero-based offset")

    model_config = {"frozen": True}


class CursorCodec:
    """Encode and decode pagination cursors.

    Usage:
        token = CursorCodec.encode(20)
        CursorCodec.decode(token)  # 20
    """

    @staticmethod
    def encode(offset: int | Cursor) -> str:
        """Encode an offset to an opaque string.

        Args:
            offset: Offset (or Cursor) to encode

        Returns:
            Base64 encoded msgpack envelope
        """
        if isinstance(offset, Cursor):
            offset = offset.offset
        packed = msgpack.packb({"offset": offset})
        return base64.b64encode(packed).decode("ascii")

    @staticmethod
    def decode(cursor: str) -> int:
        """Decode a cursor string to its offset.

        Args:
            cursor: Base64 encoded cursor string

        Returns:
            Zero-based offset

        Raises:
            InvalidCursorError: If cursor is not a valid envelope
        """
        return CursorCodec.decode_cursor(cursor).offset

    @staticmethod
    def decode_cursor(cursor: str) -> Cursor:
        """Decode a cursor string to a Cursor.

        Raises:
            InvalidCursorError: If cursor is not a valid envelope
        """
        if not isinstance(cursor, str) or not cursor:
            raise InvalidCursorError(str(cursor), "cursor must be a non-empty string")
        try:
            raw = base64.b64decode(cursor.encode("ascii"), validate=True)
            payload: Any = msgpack.unpackb(raw, raw=False, strict_map_key=False)
        except (binascii.Error, UnicodeEncodeError, TypeError, ValueError, UnpackException) as e:
            raise InvalidCursorError(cursor, str(e) or type(e).__name__) from e

        if not isinstance(payload, dict):
            raise InvalidCursorError(cursor, "envelope is not a map")
        for key in _OFFSET_KEYS:
            value = payload.get(key)
            if isinstance(value, int) and not isinstance(value, bool):
                return Cursor(offset=value)
        raise InvalidCursorError(cursor, "envelope has no integer offset")


def create_and_encode_cursor(offset: int) -> str:
    """Create a cursor for offset and encode it immediately.

    These cursors use ZERO BASED indexing.
    """
    return CursorCodec.encode(offset)


__all__ = ["Cursor", "CursorCodec", "create_and_encode_cursor"]
