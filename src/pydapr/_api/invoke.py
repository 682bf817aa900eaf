"""Service invocation endpoint: ``{verb} /v1.0/invoke/{app}/method/{method}``."""

from __future__ import annotations

import asyncio
import re
from typing import Any

from pydapr import _codec
from pydapr._api._common import api_url, require_non_empty, segment
from pydapr._transport import Transport, dapr_http_call
from pydapr.exceptions import DaprInvalidArgumentError

# RFC 9110 method token
_VERB_TOKEN = re.compile(r"[!#$%&'*+.^_`|~0-9A-Za-z-]+")


def normalize_verb(http_verb: str | None) -> str:
    verb = require_non_empty("http_verb", http_verb).strip().upper()
    if not _VERB_TOKEN.fullmatch(verb):
        raise DaprInvalidArgumentError("http_verb", f"invalid HTTP verb {http_verb!r}")
    return verb


async def invoke_method(
    transport: Transport,
    address: str,
    app_id: str | None,
    method_name: str | None,
    http_verb: str = "POST",
    body: Any = None,
    *,
    cancel_event: asyncio.Event | None = None,
) -> None:
    """Invoke *method_name* on the app identified by *app_id*.

    *body*, when not ``None``, is JSON-serialized. Slashes in
    *method_name* are preserved so nested routes reach the target app.
    """
    app_id = require_non_empty("app_id", app_id)
    method_name = require_non_empty("method_name", method_name)
    verb = normalize_verb(http_verb)
    url = api_url(address, "invoke", segment(app_id), "method", segment(method_name, safe="/"))
    payload = _codec.dumps(body) if body is not None else None

    await dapr_http_call(
        lambda: transport.request(verb, url, body=payload),
        cancel_event=cancel_event,
    )
