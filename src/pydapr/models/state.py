"""State store models."""

from __future__ import annotations

import enum
import json
from typing import Any

from pydantic import field_serializer

from pydapr.models._base import DaprBaseModel


def decode_json_bytes(value: bytes | bytearray) -> Any:
    """Decode UTF-8 JSON *value*; an empty body decodes to ``None``.

    Raises :class:`ValueError` (``UnicodeDecodeError`` or
    ``json.JSONDecodeError``) when *value* is not UTF-8 JSON text.
    """
    if not value:
        return None
    return json.loads(bytes(value).decode("utf-8"))


class Concurrency(enum.StrEnum):
    FIRST_WRITE = "first-write"
    LAST_WRITE = "last-write"


class Consistency(enum.StrEnum):
    EVENTUAL = "eventual"
    STRONG = "strong"


class StateOptions(DaprBaseModel):
    """Per-record concurrency and consistency options."""

    concurrency: Concurrency | None = None
    consistency: Consistency | None = None


class StateRecord(DaprBaseModel):
    """A single key/value entry of a state store.

    Parameters
    ----------
    key : str
        State key.
    value : Any
        Raw ``bytes`` when returned by :meth:`pydapr.DaprClient.get_state`.
        When saving, any JSON-serializable value. ``bytes`` must hold
        UTF-8 JSON text (as returned by a read) and are sent as that JSON
        value; anything else is rejected by
        :meth:`pydapr.DaprClient.save_state` before the request is sent.
    etag : str or None
        Optimistic-concurrency version token. ``None`` means no check.
    metadata : dict or None
        Store-specific metadata.
    options : StateOptions or None
        Concurrency/consistency options.
    """

    key: str
    value: Any = None
    etag: str | None = None
    metadata: dict[str, str] | None = None
    options: StateOptions | None = None

    @field_serializer("value")
    def _serialize_value(self, value: Any) -> Any:
        if isinstance(value, (bytes, bytearray)):
            return decode_json_bytes(value)
        return value

    def json_value(self) -> Any:
        """Decode :attr:`value` as JSON when it holds raw bytes.

        Returns ``None`` for an empty body (the key does not exist).
        """
        if isinstance(self.value, (bytes, bytearray)):
            return decode_json_bytes(self.value)
        return self.value
