"""Redaction of request bodies and headers before DEBUG logging.

Contents API bodies carry the whole document as Base64 ``content``;
headers carry the access token.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_SENSITIVE_KEYS: frozenset[str] = frozenset({"token", "authorization", "cookie", "content"})


def redact_for_log(value: Any, *, max_string: int = 512) -> Any:
    """Return a copy of a JSON-like *value* safe to log.

    Sensitive keys are replaced with ``<redacted:N>`` (``N`` being the
    string length) and long strings are truncated.
    """
    if isinstance(value, Mapping):
        return {
            str(key): _redact_value(item)
            if str(key).lower() in _SENSITIVE_KEYS
            else redact_for_log(item, max_string=max_string)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [redact_for_log(item, max_string=max_string) for item in value]
    if isinstance(value, str) and len(value) > max_string:
        return f"{value[:max_string]}…<truncated>"
    return value


def _redact_value(value: Any) -> str:
    if isinstance(value, str):
        return f"<redacted:{len(value)}>"
    return "<redacted>"
