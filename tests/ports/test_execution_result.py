"""Tests for the execution result DTO."""

from reqcore.ports.result import ExecutionResult

__all__ = []


def test_execution_result_payload_uses_camel_case() -> None:
    """to_payload() should produce the mapping the host renders."""
    result = ExecutionResult(duration_ms=12, status=200, headers={"a": "1"}, body="hi")

    assert result.to_payload() == {
        "status": 200,
        "durationMs": 12,
        "headers": {"a": "1"},
        "body": "hi",
        "error": None,
    }
    assert result.is_transport_error is False


def test_execution_result_transport_error_defaults() -> None:
    """A transport failure carries no status, headers or body."""
    result = ExecutionResult(duration_ms=3, error="Request failed: boom")

    payload = result.to_payload()
    assert payload["status"] is None
    assert payload["headers"] == {}
    assert payload["body"] == ""
    assert result.is_transport_error is True
