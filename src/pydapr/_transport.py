"""HTTP transport and the call wrapper every sidecar operation goes through."""

from __future__ import annotations

import asyncio
import dataclasses
import errno
import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Protocol

import aiohttp

from pydapr._constants import (
    API_TOKEN_HEADER,
    ERR_DOES_NOT_EXIST,
    ERR_REQUEST_FAILED,
    ERR_SIDECAR_DOES_NOT_EXIST,
    ERR_UNKNOWN,
    JSON_CONTENT_TYPE,
    MSG_DOES_NOT_EXIST,
    MSG_INVALID_ERROR_BODY,
    MSG_SIDECAR_DOES_NOT_EXIST,
    MSG_UNKNOWN,
    USER_AGENT,
)
from pydapr._redact import redact_for_log
from pydapr.config import DaprConfig
from pydapr.exceptions import (
    DaprCancelledError,
    DaprError,
    DaprErrorKind,
    DaprSidecarError,
    DaprSidecarNotPresentError,
)

_logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class DaprResponse:
    """A fully read sidecar response."""

    status: int
    headers: Mapping[str, str] = dataclasses.field(default_factory=dict)
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def etag(self) -> str | None:
        for name, value in self.headers.items():
            if name.lower() == "etag":
                return value or None
        return None


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`AiohttpTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        url: str,
        *,
        body: bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DaprResponse:
        ...


class AiohttpTransport:
    """Transport backed by a shared :class:`aiohttp.ClientSession`.

    Connection pooling and reuse are left to the session's connector.
    """

    def __init__(self, config: DaprConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def _build_headers(self, body: bytes | None, extra: Mapping[str, str] | None) -> dict[str, str]:
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        if body is not None:
            headers["content-type"] = JSON_CONTENT_TYPE
        if self._config.api_token:
            headers[API_TOKEN_HEADER] = self._config.api_token
        if extra:
            headers.update(extra)
        return headers

    def _trace(self, label: str, url: str, payload: bytes | None) -> None:
        if not self._config.api_trace_enabled or not payload:
            return
        try:
            decoded: Any = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError):
            decoded = payload
        _logger.debug("%s %s body=%s", label, url, redact_for_log(decoded))

    async def request(
        self,
        method: str,
        url: str,
        *,
        body: bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DaprResponse:
        _logger.debug("%s %s", method, url)
        self._trace("request", url, body)

        async with self._http.request(
            method,
            url,
            data=body,
            headers=self._build_headers(body, headers),
            timeout=self._timeout,
        ) as resp:
            payload = await resp.read()
            response = DaprResponse(status=resp.status, headers=dict(resp.headers), body=payload)

        _logger.debug("%s %s -> HTTP %d (%d bytes)", method, url, response.status, len(payload))
        self._trace("response", url, payload)
        return response


# ------------------------------------------------------------------
# Error normalization
# ------------------------------------------------------------------


def _is_connection_refused(exc: BaseException | None) -> bool:
    if exc is None:
        return False
    if isinstance(exc, ConnectionRefusedError):
        return True
    return isinstance(exc, OSError) and exc.errno == errno.ECONNREFUSED


def _string_field(document: Mapping[str, Any], name: str) -> str:
    value = document.get(name)
    return value if isinstance(value, str) else ""


def _invalid_error_body(response: DaprResponse, cause: BaseException | None) -> DaprSidecarError:
    return DaprSidecarError(
        response.status,
        ERR_UNKNOWN,
        MSG_INVALID_ERROR_BODY,
        cause=cause,
        kind=DaprErrorKind.INVALID_ERROR_BODY,
    )


def raise_for_dapr_failure(response: DaprResponse) -> None:
    """Raise a :class:`DaprSidecarError` for any non-2xx response.

    Values reported by the sidecar in its ``{"errorCode", "message"}``
    body always win over the generic defaults.
    """
    if response.ok:
        return

    error_code = ""
    message = ""

    if response.body:
        try:
            dapr_error = json.loads(response.body)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise _invalid_error_body(response, exc) from exc

        if not isinstance(dapr_error, dict):
            raise _invalid_error_body(response, None)

        message = _string_field(dapr_error, "message")
        error_code = _string_field(dapr_error, "errorCode")

    # Specific 404 messages can be returned by the sidecar (e.g. actor state lookups).
    if response.status == 404:
        raise DaprSidecarError(
            response.status,
            error_code or ERR_DOES_NOT_EXIST,
            message or MSG_DOES_NOT_EXIST,
            kind=DaprErrorKind.NOT_FOUND,
        )

    raise DaprSidecarError(
        response.status,
        error_code or ERR_UNKNOWN,
        message or MSG_UNKNOWN,
    )


async def _await_cancellable(
    call: Callable[[], Awaitable[DaprResponse]],
    cancel_event: asyncio.Event | None,
) -> DaprResponse:
    if cancel_event is None:
        return await call()
    if cancel_event.is_set():
        raise DaprCancelledError("Operation was cancelled before the request was sent")

    request_task = asyncio.ensure_future(call())
    cancel_task = asyncio.ensure_future(cancel_event.wait())
    try:
        done, _pending = await asyncio.wait({request_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        cancel_task.cancel()
        if not request_task.done():
            request_task.cancel()

    if request_task in done:
        return request_task.result()

    await asyncio.gather(request_task, return_exceptions=True)
    raise DaprCancelledError("Operation was cancelled while waiting for the sidecar")


async def dapr_http_call(
    call: Callable[[], Awaitable[DaprResponse]],
    *,
    cancel_event: asyncio.Event | None = None,
) -> DaprResponse:
    """Run one sidecar request and normalize every failure.

    Returns the response unchanged when the sidecar answered 2xx.
    """
    try:
        response = await _await_cancellable(call, cancel_event)
    except DaprError:
        raise
    except aiohttp.ClientConnectorError as exc:
        if _is_connection_refused(exc.os_error):
            raise DaprSidecarNotPresentError(
                503,
                ERR_SIDECAR_DOES_NOT_EXIST,
                MSG_SIDECAR_DOES_NOT_EXIST,
                cause=exc,
            ) from exc
        raise DaprSidecarError(
            500, ERR_REQUEST_FAILED, str(exc), cause=exc, kind=DaprErrorKind.REQUEST_FAILED
        ) from exc
    except ConnectionRefusedError as exc:
        raise DaprSidecarNotPresentError(
            503,
            ERR_SIDECAR_DOES_NOT_EXIST,
            MSG_SIDECAR_DOES_NOT_EXIST,
            cause=exc,
        ) from exc
    except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as exc:
        raise DaprSidecarError(
            500, ERR_REQUEST_FAILED, str(exc) or type(exc).__name__, cause=exc, kind=DaprErrorKind.REQUEST_FAILED
        ) from exc

    raise_for_dapr_failure(response)
    return response
