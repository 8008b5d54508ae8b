"""Unit tests for the pagination cursor codec."""
from __future__ import annotations

import base64

import msgpack
import pytest

from node_service.core.database.exceptions import InvalidCursorError
from node_service.core.pagination.cursor import Cursor, CursorCodec, create_and_encode_cursor


@pytest.mark.unit
class TestCursorCodec:
    """Tests for CursorCodec encode/decode."""

    def test_encode_zero(self):
        """Offset 0 encodes to a fixed, stable token."""
        assert CursorCodec.encode(0) == "gaZvZmZzZXQA"

    def test_encoded_envelope_is_msgpack_map(self):
        encoded = CursorCodec.encode(20)
        payload = msgpack.unpackb(base64.b64decode(encoded), raw=False)
        assert payload == {"offset": 20}

    @pytest.mark.parametrize("offset", [0, 1, -1, 99, 1000, 2**40, -(2**40)])
    def test_round_trip(self, offset):
        """Decoding an encoded offset returns it exactly, negatives included."""
        assert CursorCodec.decode(CursorCodec.encode(offset)) == offset

    def test_encode_cursor_model(self):
        assert CursorCodec.encode(Cursor(offset=5)) == CursorCodec.encode(5)

    def test_decode_cursor_returns_model(self):
        assert CursorCodec.decode_cursor(CursorCodec.encode(7)) == Cursor(offset=7)

    @pytest.mark.parametrize(
        ("token", "offset"),
        [
            ("gaZPZmZzZXTTAAAAAAAAAAA=", 0),
            ("gaZPZmZzZXTT//////////8=", -1),
        ],
    )
    def test_decode_legacy_capitalised_key(self, token, offset):
        """Tokens issued with the capitalised "Offset" key still decode."""
        assert CursorCodec.decode(token) == offset

    @pytest.mark.parametrize(
        "token",
        [
            "",
            "not base64!",
            base64.b64encode(b"\xc1").decode(),  # never-used msgpack byte
            base64.b64encode(msgpack.packb([1, 2])).decode(),
            base64.b64encode(msgpack.packb({"page": 1})).decode(),
            base64.b64encode(msgpack.packb({"offset": "1"})).decode(),
            base64.b64encode(msgpack.packb({"offset": True})).decode(),
            "ünïcode",
        ],
    )
    def test_decode_invalid(self, token):
        with pytest.raises(InvalidCursorError):
            CursorCodec.decode(token)

    def test_create_and_encode_cursor(self):
        assert create_and_encode_cursor(3) == CursorCodec.encode(3)


@pytest.mark.unit
class TestCursorModel:
    def test_cursor_is_frozen(self):
        cursor = Cursor(offset=1)
        with pytest.raises(ValueError):
            cursor.offset = 2
