"""JSON document <-> Base64 payload encoding used by the contents API."""

from __future__ import annotations

import base64
import binascii
import json
from collections.abc import Mapping
from typing import Any


def encode_document(document: Mapping[str, Any]) -> str:
    """Serialise *document* to compact JSON and Base64-encode it without line wrapping."""
    text = json.dumps(dict(document), separators=(",", ":"), ensure_ascii=False)
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_document(payload: str) -> dict[str, Any]:
    """Decode a Base64 payload into a JSON object.

    GitHub wraps the payload with ``\\n`` every 60 characters; whitespace
    is stripped before strict decoding.

    Raises
    ------
    ValueError
        When the payload is not Base64, not UTF-8, not JSON, or not a
        JSON object.
    """
    compact = "".join(payload.split())
    try:
        raw = base64.b64decode(compact, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"content is not valid base64: {exc}") from exc

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ValueError("content is not UTF-8 text") from exc

    # json.JSONDecodeError is a ValueError subclass
    document = json.loads(text)
    if not isinstance(document, dict):
        raise ValueError(f"content is a JSON {type(document).__name__}, expected an object")
    return document
