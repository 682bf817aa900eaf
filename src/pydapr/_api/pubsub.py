"""Pub/sub publish endpoint: ``POST /v1.0/publish/{pubsub}/{topic}``."""

from __future__ import annotations

import asyncio

from pydapr import _codec
from pydapr._api._common import api_url, require_non_empty, segment
from pydapr._transport import Transport, dapr_http_call


async def publish_event(
    transport: Transport,
    address: str,
    pubsub_name: str | None,
    topic: str | None,
    payload: str | bytes | None = None,
    *,
    cancel_event: asyncio.Event | None = None,
) -> None:
    """Publish *payload* to *topic*.

    *payload* is raw JSON text and is sent byte-for-byte as given.
    """
    pubsub_name = require_non_empty("pubsub_name", pubsub_name)
    topic = require_non_empty("topic", topic)
    url = api_url(address, "publish", segment(pubsub_name), segment(topic))
    body = _codec.raw_json_bytes(payload) if payload is not None else None

    await dapr_http_call(
        lambda: transport.request("POST", url, body=body),
        cancel_event=cancel_event,
    )
