"""Output binding models."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from pydapr.models._base import DaprBaseModel


class BindingMessage(DaprBaseModel):
    """Message sent to an output binding.

    ``binding_name`` selects the URL path segment and is never part of
    the serialized body.
    """

    binding_name: str = Field(exclude=True)
    operation: str = "create"
    data: Any = None
    metadata: dict[str, str] | None = None
