"""Sidecar health endpoint: ``GET /v1.0/healthz``."""

from __future__ import annotations

import asyncio

from pydapr._api._common import api_url
from pydapr._transport import Transport, dapr_http_call


async def health_check(
    transport: Transport,
    address: str,
    *,
    cancel_event: asyncio.Event | None = None,
) -> bool:
    url = api_url(address, "healthz")
    await dapr_http_call(
        lambda: transport.request("GET", url),
        cancel_event=cancel_event,
    )
    return True
