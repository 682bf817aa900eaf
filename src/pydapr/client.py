"""High-level async client for the Dapr sidecar HTTP API."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

import aiohttp

from pydapr._api import bindings as _bindings_api
from pydapr._api import health as _health_api
from pydapr._api import invoke as _invoke_api
from pydapr._api import pubsub as _pubsub_api
from pydapr._api import secrets as _secrets_api
from pydapr._api import state as _state_api
from pydapr._transport import AiohttpTransport, Transport
from pydapr.config import DaprConfig
from pydapr.exceptions import DaprError
from pydapr.models.binding import BindingMessage
from pydapr.models.state import StateRecord

_logger = logging.getLogger(__name__)


class DaprClient:
    """Async client for a locally running Dapr sidecar.

    Usage::

        async with DaprClient(DaprConfig.from_env()) as client:
            await client.save_state("statestore", [StateRecord(key="k", value={"a": 1})])
            record = await client.get_state("statestore", "k")

    Every operation accepts ``dapr_address`` to target another sidecar
    and ``cancel_event``; setting the event aborts the call with
    :class:`~pydapr.exceptions.DaprCancelledError`.
    """

    def __init__(
        self,
        config: DaprConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config if config is not None else DaprConfig.from_env()
        self._default_address = self._config.resolve_address()
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._owns_transport = transport is None

    @property
    def config(self) -> DaprConfig:
        return self._config

    @property
    def default_address(self) -> str:
        return self._default_address

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> DaprClient:
        if self._owns_transport:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = AiohttpTransport(self._config, self._http_session)
        _logger.debug("Dapr client ready default_address=%s", self._default_address)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Release the HTTP session if this client created it."""
        if self._owns_transport:
            if not self._external_session and self._http_session is not None:
                await self._http_session.close()
            self._http_session = None
            self._transport = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise DaprError("Client not initialized. Use 'async with DaprClient(...) as client:'")
        return self._transport

    def _address(self, dapr_address: str | None) -> str:
        if dapr_address:
            return self._config.resolve_address(dapr_address)
        return self._default_address

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    async def save_state(
        self,
        store: str | None,
        records: Iterable[StateRecord],
        *,
        dapr_address: str | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        """Save one or more records to a state store."""
        await _state_api.save_state(
            self._require_transport(),
            self._address(dapr_address),
            store,
            records,
            cancel_event=cancel_event,
        )

    async def get_state(
        self,
        store: str | None,
        key: str | None,
        *,
        dapr_address: str | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> StateRecord:
        """Read a single key; the record's ``value`` holds the raw body bytes."""
        return await _state_api.get_state(
            self._require_transport(),
            self._address(dapr_address),
            store,
            key,
            cancel_event=cancel_event,
        )

    async def delete_state(
        self,
        store: str | None,
        key: str | None,
        *,
        etag: str | None = None,
        dapr_address: str | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        await _state_api.delete_state(
            self._require_transport(),
            self._address(dapr_address),
            store,
            key,
            etag=etag,
            cancel_event=cancel_event,
        )

    # ------------------------------------------------------------------
    # Service invocation, bindings and pub/sub
    # ------------------------------------------------------------------

    async def invoke_method(
        self,
        app_id: str | None,
        method_name: str | None,
        http_verb: str = "POST",
        body: Any = None,
        *,
        dapr_address: str | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        """Invoke a method on another Dapr app; *body* is JSON-serialized."""
        await _invoke_api.invoke_method(
            self._require_transport(),
            self._address(dapr_address),
            app_id,
            method_name,
            http_verb,
            body,
            cancel_event=cancel_event,
        )

    async def send_to_binding(
        self,
        message: BindingMessage,
        *,
        dapr_address: str | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        """Send *message* to the output binding named by ``message.binding_name``."""
        await _bindings_api.send_to_binding(
            self._require_transport(),
            self._address(dapr_address),
            message,
            cancel_event=cancel_event,
        )

    async def publish_event(
        self,
        pubsub_name: str | None,
        topic: str | None,
        payload: str | bytes | None = None,
        *,
        dapr_address: str | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        """Publish raw JSON *payload* to *topic*; the text is sent unchanged."""
        await _pubsub_api.publish_event(
            self._require_transport(),
            self._address(dapr_address),
            pubsub_name,
            topic,
            payload,
            cancel_event=cancel_event,
        )

    # ------------------------------------------------------------------
    # Secrets
    # ------------------------------------------------------------------

    async def get_secret(
        self,
        store: str | None,
        key: str | None,
        metadata: str | None = None,
        *,
        dapr_address: str | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> Any:
        """Fetch a secret and return the parsed JSON document.

        *metadata* is a raw query string such as ``"version_id=2"``.
        """
        return await _secrets_api.get_secret(
            self._require_transport(),
            self._address(dapr_address),
            store,
            key,
            metadata,
            cancel_event=cancel_event,
        )

    async def get_bulk_secret(
        self,
        store: str | None,
        metadata: str | None = None,
        *,
        dapr_address: str | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> Any:
        return await _secrets_api.get_bulk_secret(
            self._require_transport(),
            self._address(dapr_address),
            store,
            metadata,
            cancel_event=cancel_event,
        )

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    async def health_check(
        self,
        *,
        dapr_address: str | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> bool:
        """Return ``True`` when the sidecar reports healthy.

        Raises :class:`~pydapr.exceptions.DaprSidecarNotPresentError` when
        nothing listens on the sidecar port.
        """
        return await _health_api.health_check(
            self._require_transport(),
            self._address(dapr_address),
            cancel_event=cancel_event,
        )
