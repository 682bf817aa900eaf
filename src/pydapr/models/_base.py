"""Base model for Dapr wire payloads.

Every model inherits from :class:`DaprBaseModel`, which maps
snake_case fields to the camelCase keys used by the Dapr HTTP API
(``alias_generator=to_camel``) and is frozen.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DaprBaseModel(BaseModel):
    """Base for Dapr request and response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
        arbitrary_types_allowed=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Return the camelCase dict sent to the sidecar, without ``None`` fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
