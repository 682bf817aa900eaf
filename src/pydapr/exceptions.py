"""Custom exception hierarchy for pydapr."""

from __future__ import annotations

import enum


class DaprErrorKind(enum.Enum):
    """Discriminator carried by every normalized sidecar error."""

    REQUEST_FAILED = "request_failed"
    SIDECAR_NOT_PRESENT = "sidecar_not_present"
    NOT_FOUND = "not_found"
    SIDECAR_ERROR = "sidecar_error"
    INVALID_ERROR_BODY = "invalid_error_body"


class DaprError(Exception):
    """Base exception for all pydapr errors."""


class DaprConfigError(DaprError):
    """Invalid or missing configuration."""


class DaprInvalidArgumentError(DaprError, ValueError):
    """A required argument was missing or empty.

    Raised before any network activity takes place.
    """

    def __init__(self, argument: str, message: str | None = None) -> None:
        self.argument = argument
        super().__init__(message or f"{argument} must be a non-empty string")


class DaprSidecarError(DaprError):
    """Normalized failure of a sidecar call.

    Every transport fault and every non-2xx sidecar response ends up as
    an instance of this class (or :class:`DaprSidecarNotPresentError`).
    ``status_code`` and ``error_code`` are always populated.
    """

    def __init__(
        self,
        status_code: int,
        error_code: str,
        message: str,
        *,
        cause: BaseException | None = None,
        kind: DaprErrorKind = DaprErrorKind.SIDECAR_ERROR,
    ) -> None:
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.cause = cause
        self.kind = kind
        super().__init__(message)

    def __str__(self) -> str:
        text = f"Status Code: {self.status_code}; Error Code: {self.error_code}; Message: {self.message}"
        if self.cause is not None:
            text += f"; Inner Exception: {self.cause!r}"
        return text


class DaprSidecarNotPresentError(DaprSidecarError):
    """The sidecar refused the connection (it is most likely not running).

    Callers may treat this as "feature unavailable" instead of a hard
    failure.
    """

    def __init__(self, status_code: int, error_code: str, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(
            status_code,
            error_code,
            message,
            cause=cause,
            kind=DaprErrorKind.SIDECAR_NOT_PRESENT,
        )


class DaprCancelledError(DaprError):
    """The caller's cancel event fired while a call was outstanding."""


class DaprResponseDecodeError(DaprError):
    """A successful response body that must be JSON could not be decoded."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)
