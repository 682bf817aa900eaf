"""JSON codec used for every request body.

Pydantic models are dumped with their camelCase aliases and without
``None`` fields; everything else goes through :func:`json.dumps`.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel

from pydapr.models._base import DaprBaseModel


def to_jsonable(value: Any) -> Any:
    """Convert *value* into plain JSON-compatible Python objects."""
    if isinstance(value, DaprBaseModel):
        return value.to_wire()
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def dumps(value: Any) -> bytes:
    """Serialize *value* to UTF-8 JSON bytes."""
    return json.dumps(to_jsonable(value), separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def dumps_many(values: Iterable[Any]) -> bytes:
    """Serialize an iterable (e.g. a generator of records) as a JSON array."""
    return dumps(list(values))


def raw_json_bytes(payload: str | bytes | bytearray) -> bytes:
    """Return raw JSON text as bytes without re-encoding it."""
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return bytes(payload)
