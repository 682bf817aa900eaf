"""pydapr - Async Python client for the Dapr sidecar HTTP API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pydapr")
except PackageNotFoundError:
    __version__ = "0+local"
from pydapr.client import DaprClient
from pydapr.config import DaprConfig
from pydapr.exceptions import (
    DaprCancelledError,
    DaprConfigError,
    DaprError,
    DaprErrorKind,
    DaprInvalidArgumentError,
    DaprResponseDecodeError,
    DaprSidecarError,
    DaprSidecarNotPresentError,
)
from pydapr.models import (
    BindingMessage,
    Concurrency,
    Consistency,
    StateOptions,
    StateRecord,
)

__all__ = [
    "__version__",
    "BindingMessage",
    "Concurrency",
    "Consistency",
    "DaprCancelledError",
    "DaprClient",
    "DaprConfig",
    "DaprConfigError",
    "DaprError",
    "DaprErrorKind",
    "DaprInvalidArgumentError",
    "DaprResponseDecodeError",
    "DaprSidecarError",
    "DaprSidecarNotPresentError",
    "StateOptions",
    "StateRecord",
]
