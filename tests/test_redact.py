from __future__ import annotations

from pydapr._redact import redact_for_log, redact_secret_document


def test_redact_for_log_redacts_sensitive_keys() -> None:
    payload = [
        {"key": "order-1", "value": {"card": "4111"}, "etag": "3"},
        {"operation": "create", "data": "hello", "metadata": {"token": "abc"}},
    ]

    redacted = redact_for_log(payload)
    assert redacted[0]["key"] == "order-1"
    assert redacted[0]["value"] == "<redacted>"
    assert redacted[0]["etag"] == "3"
    assert redacted[1]["data"] == "<redacted>"
    assert redacted[1]["metadata"]["token"] == "<redacted>"


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"message": long_value}, max_string=10)
    assert redacted["message"].startswith("x" * 10)
    assert "<truncated>" in redacted["message"]


def test_redact_for_log_summarizes_bytes() -> None:
    assert redact_for_log(b"abcd") == "<bytes:4b>"


def test_redact_secret_document_keeps_only_keys() -> None:
    document = {"apikey": "xyz", "nested": {"user": "u", "pass": "p"}}

    assert redact_secret_document(document) == {
        "apikey": "<redacted>",
        "nested": {"user": "<redacted>", "pass": "<redacted>"},
    }
