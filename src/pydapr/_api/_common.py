"""Shared helpers for sidecar endpoint modules.

This module centralizes the most repeated patterns:
- validating required string arguments before any network call
- building ``/v1.0/...`` URLs with escaped path segments
- appending raw metadata query strings
- decoding JSON success payloads

It is internal to pydapr and may change at any time.
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import quote

from pydapr._constants import API_VERSION
from pydapr._transport import DaprResponse
from pydapr.exceptions import DaprInvalidArgumentError, DaprResponseDecodeError


def require_non_empty(name: str, value: str | None) -> str:
    """Return *value* or raise :class:`DaprInvalidArgumentError`."""
    if value is None or not str(value).strip():
        raise DaprInvalidArgumentError(name)
    return str(value)


def segment(value: str, *, safe: str = "") -> str:
    """Percent-encode a single URL path segment."""
    return quote(value, safe=safe)


def api_url(address: str, *parts: str) -> str:
    """Join an (already resolved) sidecar address with API path parts."""
    return "/".join((address, API_VERSION, *parts))


def with_metadata_query(url: str, metadata: str | None) -> str:
    """Append a raw ``k=v&k2=v2`` metadata query string when given."""
    if not metadata:
        return url
    return f"{url}?{metadata.lstrip('?')}"


def decode_json_body(endpoint: str, response: DaprResponse) -> Any:
    """Decode a 2xx body that is expected to be a JSON document."""
    try:
        return json.loads(response.body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DaprResponseDecodeError(
            f"Response from {endpoint} is not valid JSON: {response.body[:64]!r}",
            endpoint=endpoint,
        ) from exc
