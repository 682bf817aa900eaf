"""State store endpoints.

Endpoints:
  - POST   /v1.0/state/{store}        (save)
  - GET    /v1.0/state/{store}/{key}  (get)
  - DELETE /v1.0/state/{store}/{key}  (delete)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from pydapr import _codec
from pydapr._api._common import api_url, require_non_empty, segment
from pydapr._transport import Transport, dapr_http_call
from pydapr.exceptions import DaprInvalidArgumentError
from pydapr.models.state import StateRecord, decode_json_bytes

_logger = logging.getLogger(__name__)


def _check_byte_values(records: list[StateRecord]) -> None:
    """Reject ``bytes`` values that are not UTF-8 JSON text."""
    for record in records:
        if not isinstance(record.value, (bytes, bytearray)):
            continue
        try:
            decode_json_bytes(record.value)
        except ValueError as exc:
            raise DaprInvalidArgumentError(
                "value",
                f"bytes value of state key {record.key!r} must be UTF-8 JSON text",
            ) from exc


async def save_state(
    transport: Transport,
    address: str,
    store: str | None,
    records: Iterable[StateRecord],
    *,
    cancel_event: asyncio.Event | None = None,
) -> None:
    """Save *records* to *store* in a single request."""
    store = require_non_empty("store", store)
    records = list(records)
    _check_byte_values(records)
    body = _codec.dumps_many(records)
    url = api_url(address, "state", segment(store))

    await dapr_http_call(
        lambda: transport.request("POST", url, body=body),
        cancel_event=cancel_event,
    )
    _logger.debug("Saved %d state record(s) to store=%s", len(records), store)


async def get_state(
    transport: Transport,
    address: str,
    store: str | None,
    key: str | None,
    *,
    cancel_event: asyncio.Event | None = None,
) -> StateRecord:
    """Read *key* from *store*.

    The returned record carries the raw response body as ``value`` and
    the ``ETag`` response header as ``etag`` (``None`` when absent).
    An empty body means the key does not exist in the store.
    """
    store = require_non_empty("store", store)
    key = require_non_empty("key", key)
    url = api_url(address, "state", segment(store), segment(key))

    response = await dapr_http_call(
        lambda: transport.request("GET", url),
        cancel_event=cancel_event,
    )
    return StateRecord(key=key, value=response.body, etag=response.etag)


async def delete_state(
    transport: Transport,
    address: str,
    store: str | None,
    key: str | None,
    *,
    etag: str | None = None,
    cancel_event: asyncio.Event | None = None,
) -> None:
    """Delete *key* from *store*, guarded by ``If-Match`` when *etag* is given."""
    store = require_non_empty("store", store)
    key = require_non_empty("key", key)
    url = api_url(address, "state", segment(store), segment(key))
    headers = {"If-Match": etag} if etag else None

    await dapr_http_call(
        lambda: transport.request("DELETE", url, headers=headers),
        cancel_event=cancel_event,
    )
