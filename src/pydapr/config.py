"""Client configuration for pydapr."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pydapr._constants import DAPR_API_TOKEN_ENV, DAPR_HTTP_PORT_ENV, DEFAULT_HOST, DEFAULT_HTTP_PORT
from pydapr.exceptions import DaprConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def parse_port(value: str | None, default: int = DEFAULT_HTTP_PORT) -> int:
    """Parse a sidecar port, returning *default* when unset or unparseable."""
    if value is None:
        return default
    try:
        port = int(value.strip())
    except ValueError:
        return default
    if not 0 < port < 65536:
        return default
    return port


def strip_trailing_slash(address: str) -> str:
    """Remove a single trailing ``/`` from *address*."""
    if address.endswith("/"):
        return address[:-1]
    return address


@dataclasses.dataclass(frozen=True)
class DaprConfig:
    """Client configuration.

    Parameters
    ----------
    http_port : int
        Port of the sidecar's HTTP API. Defaults to ``3500``.
    host : str
        Host the sidecar listens on. Defaults to ``localhost``.
    api_token : str or None
        Value sent as the ``dapr-api-token`` header when the sidecar
        has API token authentication enabled.
    request_timeout : float
        Total timeout in seconds applied to every request.
    api_trace_enabled : bool
        Log (redacted) request and response bodies at DEBUG level.
    """

    http_port: int = DEFAULT_HTTP_PORT
    host: str = DEFAULT_HOST
    api_token: str | None = None
    request_timeout: float = 60.0
    api_trace_enabled: bool = False

    def __post_init__(self) -> None:
        if not 0 < self.http_port < 65536:
            raise DaprConfigError(f"http_port must be between 1 and 65535, got {self.http_port}")
        if self.request_timeout <= 0:
            raise DaprConfigError(f"request_timeout must be positive, got {self.request_timeout}")

    @property
    def base_url(self) -> str:
        """Default sidecar address, e.g. ``http://localhost:3500``."""
        return f"http://{self.host}:{self.http_port}"

    def resolve_address(self, explicit: str | None = None) -> str:
        """Return *explicit* (or the default address) without a trailing slash."""
        return strip_trailing_slash(explicit or self.base_url)

    @classmethod
    def from_env(cls, **overrides: Any) -> DaprConfig:
        """Create configuration from environment variables.

        Reads ``DAPR_HTTP_PORT``, ``DAPR_API_TOKEN``,
        ``DAPR_HTTP_TIMEOUT`` and ``DAPR_API_TRACE_ENABLED``. A missing
        or unparseable port falls back to ``3500``. Explicit keyword
        arguments override environment values.
        """
        env = os.environ

        config_kwargs: dict[str, Any] = {}
        if "http_port" not in overrides:
            config_kwargs["http_port"] = parse_port(env.get(DAPR_HTTP_PORT_ENV))

        token = env.get(DAPR_API_TOKEN_ENV)
        if token:
            config_kwargs["api_token"] = token

        timeout_env = env.get("DAPR_HTTP_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = float(timeout_env)

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(env.get("DAPR_API_TRACE_ENABLED"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
