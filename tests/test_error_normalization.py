from __future__ import annotations

import asyncio
import errno
import json

import pytest

from pydapr._transport import DaprResponse, dapr_http_call, raise_for_dapr_failure
from pydapr.exceptions import (
    DaprErrorKind,
    DaprSidecarError,
    DaprSidecarNotPresentError,
)


def _json_response(status: int, payload: object) -> DaprResponse:
    return DaprResponse(status=status, body=json.dumps(payload).encode())


@pytest.mark.parametrize("status", [200, 201, 204, 299])
def test_success_statuses_never_raise(status: int) -> None:
    raise_for_dapr_failure(DaprResponse(status=status))
    raise_for_dapr_failure(DaprResponse(status=status, body=b"not json at all"))


def test_404_keeps_sidecar_code_and_message() -> None:
    response = _json_response(404, {"errorCode": "ERR_ACTOR_INSTANCE_MISSING", "message": "actor not found"})

    with pytest.raises(DaprSidecarError) as exc_info:
        raise_for_dapr_failure(response)

    exc = exc_info.value
    assert exc.status_code == 404
    assert exc.error_code == "ERR_ACTOR_INSTANCE_MISSING"
    assert exc.message == "actor not found"
    assert exc.kind is DaprErrorKind.NOT_FOUND


def test_404_with_empty_body_uses_defaults() -> None:
    with pytest.raises(DaprSidecarError) as exc_info:
        raise_for_dapr_failure(DaprResponse(status=404))

    exc = exc_info.value
    assert exc.error_code == "ERR_DOES_NOT_EXIST"
    assert exc.message == "The requested Dapr resource is not properly configured."


def test_404_fills_only_the_missing_field() -> None:
    with pytest.raises(DaprSidecarError) as exc_info:
        raise_for_dapr_failure(_json_response(404, {"message": "no such state store"}))

    exc = exc_info.value
    assert exc.error_code == "ERR_DOES_NOT_EXIST"
    assert exc.message == "no such state store"


def test_other_status_with_sidecar_fields() -> None:
    response = _json_response(400, {"errorCode": "ERR_STATE_STORE_NOT_FOUND", "message": "store missing"})

    with pytest.raises(DaprSidecarError) as exc_info:
        raise_for_dapr_failure(response)

    exc = exc_info.value
    assert exc.status_code == 400
    assert exc.error_code == "ERR_STATE_STORE_NOT_FOUND"
    assert exc.message == "store missing"
    assert exc.kind is DaprErrorKind.SIDECAR_ERROR


def test_other_status_with_empty_body_uses_unknown_defaults() -> None:
    with pytest.raises(DaprSidecarError) as exc_info:
        raise_for_dapr_failure(DaprResponse(status=500))

    exc = exc_info.value
    assert exc.status_code == 500
    assert exc.error_code == "ERR_UNKNOWN"
    assert exc.message == "No meaningful error message is returned."


def test_json_body_without_known_fields_uses_defaults() -> None:
    with pytest.raises(DaprSidecarError) as exc_info:
        raise_for_dapr_failure(_json_response(409, {"details": [], "errorCode": 7}))

    exc = exc_info.value
    assert exc.status_code == 409
    assert exc.error_code == "ERR_UNKNOWN"
    assert exc.message == "No meaningful error message is returned."


@pytest.mark.parametrize("status", [400, 404, 502])
def test_invalid_json_body_keeps_actual_status(status: int) -> None:
    with pytest.raises(DaprSidecarError) as exc_info:
        raise_for_dapr_failure(DaprResponse(status=status, body=b"<html>Bad Gateway</html>"))

    exc = exc_info.value
    assert exc.status_code == status
    assert exc.error_code == "ERR_UNKNOWN"
    assert "not a valid JSON" in exc.message
    assert isinstance(exc.cause, json.JSONDecodeError)
    assert exc.__cause__ is exc.cause
    assert exc.kind is DaprErrorKind.INVALID_ERROR_BODY


def test_non_object_json_body_is_rejected() -> None:
    with pytest.raises(DaprSidecarError) as exc_info:
        raise_for_dapr_failure(DaprResponse(status=500, body=b'["oops"]'))

    assert exc_info.value.error_code == "ERR_UNKNOWN"
    assert exc_info.value.kind is DaprErrorKind.INVALID_ERROR_BODY


def test_str_includes_status_code_and_message() -> None:
    exc = DaprSidecarError(400, "ERR_X", "bad thing")
    assert str(exc) == "Status Code: 400; Error Code: ERR_X; Message: bad thing"


@pytest.mark.asyncio
async def test_call_wrapper_returns_success_response_unchanged() -> None:
    response = DaprResponse(status=200, body=b"")

    async def call() -> DaprResponse:
        return response

    assert await dapr_http_call(call) is response


@pytest.mark.asyncio
async def test_call_wrapper_maps_connection_refused() -> None:
    refused = ConnectionRefusedError(errno.ECONNREFUSED, "Connection refused")

    async def call() -> DaprResponse:
        raise refused

    with pytest.raises(DaprSidecarNotPresentError) as exc_info:
        await dapr_http_call(call)

    exc = exc_info.value
    assert exc.status_code == 503
    assert exc.error_code == "ERR_SIDECAR_DOES_NOT_EXIST"
    assert "docs.dapr.io" in exc.message
    assert exc.cause is refused
    assert exc.kind is DaprErrorKind.SIDECAR_NOT_PRESENT


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "fault",
    [
        OSError(errno.EHOSTUNREACH, "No route to host"),
        asyncio.TimeoutError(),
    ],
)
async def test_call_wrapper_maps_other_transport_faults(fault: BaseException) -> None:
    async def call() -> DaprResponse:
        raise fault

    with pytest.raises(DaprSidecarError) as exc_info:
        await dapr_http_call(call)

    exc = exc_info.value
    assert not isinstance(exc, DaprSidecarNotPresentError)
    assert exc.status_code == 500
    assert exc.error_code == "ERR_REQUEST_FAILED"
    assert exc.message
    assert exc.cause is fault
    assert exc.kind is DaprErrorKind.REQUEST_FAILED


@pytest.mark.asyncio
async def test_call_wrapper_normalizes_error_responses() -> None:
    async def call() -> DaprResponse:
        return DaprResponse(status=403, body=b'{"errorCode":"ERR_PERMISSION_DENIED","message":"denied"}')

    with pytest.raises(DaprSidecarError) as exc_info:
        await dapr_http_call(call)

    assert exc_info.value.status_code == 403
    assert exc_info.value.error_code == "ERR_PERMISSION_DENIED"
