import json
import logging

from telemetry import log_structured, log_tool_step, sanitize_value


def test_sanitize_redacts_sensitive_fields():
    assert sanitize_value("abc123", "api_key") == "[REDACTED]"
    assert sanitize_value("docs", "index_name") == "docs"


def test_sanitize_serializes_containers():
    assert json.loads(sanitize_value({"term": "x", "limit": 0})) == {"term": "x", "limit": 0}
    assert json.loads(sanitize_value(["docs", "blog"])) == ["docs", "blog"]


def test_sanitize_truncates_long_strings():
    value = sanitize_value("x" * 5000, "term")
    assert len(value) == 2048 + 3
    assert value.endswith("...")


def test_log_structured_uses_prefix(caplog):
    caplog.set_level(logging.INFO)
    log_structured("info", "orama_index_registry_loaded", index_count=2)
    record = caplog.records[-1]
    assert record.getMessage() == "[TELEMETRY] orama_index_registry_loaded"
    assert record.index_count == 2


def test_log_tool_step_round_trip(caplog):
    caplog.set_level(logging.INFO)
    metadata = log_tool_step("search_orama_index", "start", {"inputs": "{}"})
    assert "_span" in metadata

    log_tool_step("search_orama_index", "error", {**metadata, "error_message": "boom"})

    messages = [record.getMessage() for record in caplog.records]
    assert "[TELEMETRY] Tool search_orama_index started" in messages
    assert "[TELEMETRY] Tool search_orama_index error" in messages
