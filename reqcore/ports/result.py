"""Execution result port (DTO)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

__all__ = ["ExecutionResult"]


@dataclass(slots=True, frozen=True)
class ExecutionResult:
    """Normalized outcome of one request execution.

    Either a completed HTTP exchange (``status`` set) or a transport
    failure (``error`` set). Returned for every request that reached the
    sending stage.

    Attributes:
        duration_ms: Wall time from body encoding to end of response read.
        status: HTTP status code; None when no round trip completed.
        headers: Response headers, repeated names joined with ",".
        body: Decoded response body, possibly truncated.
        error: Human-readable transport failure; None on success.
    """

    duration_ms: int
    status: int | None = None
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""
    error: str | None = None

    @property
    def is_transport_error(self) -> bool:
        return self.error is not None

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the camelCase mapping the host expects.

        Returns:
            JSON-serializable dictionary.
        """
        return {
            "status": self.status,
            "durationMs": self.duration_ms,
            "headers": dict(self.headers),
            "body": self.body,
            "error": self.error,
        }
