"""Data models for Dapr sidecar payloads."""

from pydapr.models._base import DaprBaseModel
from pydapr.models.binding import BindingMessage
from pydapr.models.state import Concurrency, Consistency, StateOptions, StateRecord

__all__ = [
    "BindingMessage",
    "Concurrency",
    "Consistency",
    "DaprBaseModel",
    "StateOptions",
    "StateRecord",
]
