from __future__ import annotations

import base64

import pytest

from pyattendance._codec import decode_document, encode_document


def test_encode_document_is_compact_utf8_without_wrapping() -> None:
    encoded = encode_document({"school": "Zürich", "values": list(range(40))})
    assert "\n" not in encoded
    text = base64.b64decode(encoded).decode("utf-8")
    assert text.startswith('{"school":"Zürich","values":[0,1,2')


def test_decode_document_ignores_line_breaks() -> None:
    encoded = base64.encodebytes(b'{"a": {"b": [1, 2, 3]}, "c": "' + b"y" * 100 + b'"}').decode("ascii")
    assert "\n" in encoded.strip()
    assert decode_document(encoded) == {"a": {"b": [1, 2, 3]}, "c": "y" * 100}


@pytest.mark.parametrize(
    "payload",
    ["", "###", base64.b64encode(b"null").decode(), base64.b64encode(b'"text"').decode()],
)
def test_decode_document_rejects_non_objects(payload: str) -> None:
    with pytest.raises(ValueError):
        decode_document(payload)
