"""Masking of Dapr payloads before DEBUG tracing.

State values, binding data, API tokens and secret store documents carry
user data; traces keep the payload's shape (keys, etags, operations) and
replace that data with ``<redacted>``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

REDACTED = "<redacted>"

# Keys whose values are user data in state, binding and header payloads.
_MASKED_KEYS: frozenset[str] = frozenset({"value", "data", "dapr-api-token", "authorization", "token", "secret"})

_MAX_DEPTH = 20


def _walk(value: Any, mask_leaf: Callable[[str, Any], Any], max_string: int, depth: int) -> Any:
    if depth > _MAX_DEPTH:
        return "<max-depth>"
    if isinstance(value, Mapping):
        return {
            str(k): mask_leaf(str(k), v)
            if not isinstance(v, (Mapping, list, tuple))
            else (REDACTED if str(k).lower() in _MASKED_KEYS else _walk(v, mask_leaf, max_string, depth + 1))
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_walk(v, mask_leaf, max_string, depth + 1) for v in value]
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"
    if isinstance(value, str) and len(value) > max_string:
        return f"{value[:max_string]}…<truncated>"
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return repr(value)


def redact_for_log(value: Any, *, max_string: int = 512) -> Any:
    """Mask state values, binding data and tokens in a decoded payload."""

    def mask_leaf(key: str, leaf: Any) -> Any:
        if key.lower() in _MASKED_KEYS:
            return REDACTED
        return _walk(leaf, mask_leaf, max_string, 1)

    return _walk(value, mask_leaf, max_string, 0)


def redact_secret_document(document: Any) -> Any:
    """Mask every value of a secret store response, keeping only its keys."""
    if not isinstance(document, Mapping):
        return REDACTED
    return _walk(document, lambda _key, _leaf: REDACTED, 0, 0)
