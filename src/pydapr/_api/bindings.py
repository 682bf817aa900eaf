"""Output binding endpoint: ``POST /v1.0/bindings/{name}``."""

from __future__ import annotations

import asyncio

from pydapr import _codec
from pydapr._api._common import api_url, require_non_empty, segment
from pydapr._transport import Transport, dapr_http_call
from pydapr.models.binding import BindingMessage


async def send_to_binding(
    transport: Transport,
    address: str,
    message: BindingMessage,
    *,
    cancel_event: asyncio.Event | None = None,
) -> None:
    binding_name = require_non_empty("binding_name", message.binding_name)
    url = api_url(address, "bindings", segment(binding_name))
    body = _codec.dumps(message)

    await dapr_http_call(
        lambda: transport.request("POST", url, body=body),
        cancel_event=cancel_event,
    )
