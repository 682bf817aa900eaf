from __future__ import annotations

import pytest
from pydantic import ValidationError

from pydapr._codec import dumps
from pydapr.models import BindingMessage, Concurrency, Consistency, StateOptions, StateRecord


def test_state_record_wire_format_uses_camel_case_and_drops_none() -> None:
    record = StateRecord(
        key="k",
        value={"a": 1},
        options=StateOptions(concurrency=Concurrency.FIRST_WRITE, consistency=Consistency.STRONG),
    )

    assert record.to_wire() == {
        "key": "k",
        "value": {"a": 1},
        "options": {"concurrency": "first-write", "consistency": "strong"},
    }


def test_state_record_bytes_value_is_sent_as_json() -> None:
    assert StateRecord(key="k", value=b'{"a": [1]}').to_wire()["value"] == {"a": [1]}
    assert StateRecord(key="k", value=b"\"plain text\"").to_wire()["value"] == "plain text"


def test_state_record_is_frozen() -> None:
    record = StateRecord(key="k", value=1)
    with pytest.raises(ValidationError):
        record.key = "other"  # type: ignore[misc]


def test_state_record_accepts_camel_case_input() -> None:
    record = StateRecord.model_validate({"key": "k", "value": 1, "etag": "9", "unknownField": True})
    assert record.etag == "9"


def test_json_value_decodes_bytes() -> None:
    assert StateRecord(key="k", value=b'"hi"').json_value() == "hi"
    assert StateRecord(key="k", value={"a": 1}).json_value() == {"a": 1}


def test_binding_message_body() -> None:
    message = BindingMessage(binding_name="queue", data=[1, 2], operation="get")

    assert message.to_wire() == {"operation": "get", "data": [1, 2]}
    assert BindingMessage.model_validate({"bindingName": "queue"}).binding_name == "queue"


def test_dumps_is_compact_utf8() -> None:
    assert dumps({"name": "café", "items": (1, 2)}) == '{"name":"café","items":[1,2]}'.encode()
