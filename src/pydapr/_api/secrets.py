"""Secret store endpoints.

Endpoints:
  - GET /v1.0/secrets/{store}/{key}?{metadata}
  - GET /v1.0/secrets/{store}/bulk?{metadata}
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from pydapr._api._common import api_url, decode_json_body, require_non_empty, segment, with_metadata_query
from pydapr._redact import redact_secret_document
from pydapr._transport import Transport, dapr_http_call

_logger = logging.getLogger(__name__)


async def get_secret(
    transport: Transport,
    address: str,
    store: str | None,
    key: str | None,
    metadata: str | None = None,
    *,
    cancel_event: asyncio.Event | None = None,
) -> Any:
    """Fetch one secret and return the parsed JSON document.

    The sidecar answers with an object mapping secret names to values,
    e.g. ``{"apikey": "xyz"}``.
    """
    store = require_non_empty("store", store)
    key = require_non_empty("key", key)
    url = with_metadata_query(api_url(address, "secrets", segment(store), segment(key)), metadata)

    response = await dapr_http_call(
        lambda: transport.request("GET", url),
        cancel_event=cancel_event,
    )
    document = decode_json_body(f"/secrets/{store}/{key}", response)
    _logger.debug("Secret fetched store=%s document=%s", store, redact_secret_document(document))
    return document


async def get_bulk_secret(
    transport: Transport,
    address: str,
    store: str | None,
    metadata: str | None = None,
    *,
    cancel_event: asyncio.Event | None = None,
) -> Any:
    """Fetch every secret the app may read from *store*."""
    store = require_non_empty("store", store)
    url = with_metadata_query(api_url(address, "secrets", segment(store), "bulk"), metadata)

    response = await dapr_http_call(
        lambda: transport.request("GET", url),
        cancel_event=cancel_event,
    )
    return decode_json_body(f"/secrets/{store}/bulk", response)
