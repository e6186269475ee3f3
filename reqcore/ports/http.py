"""HTTP transport port definition (DTOs and error)."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

__all__ = ["PreparedRequest", "RawResponse", "RequestFn", "TransportError"]


@dataclass
class PreparedRequest:
    """Wire-level request produced by the core pipeline.

    Decouples request construction from the HTTP implementation.

    Attributes:
        method: Uppercased HTTP method token.
        url: Absolute URL with query parameters applied.
        headers: Header pairs in send order; names may repeat.
        body: Encoded body, or None when no body is attached.
        timeout_ms: Total request timeout in milliseconds.
    """

    method: str
    url: str
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: bytes | None = None
    timeout_ms: int = 15_000


@dataclass
class RawResponse:
    """Fully read HTTP response as returned by the transport.

    Attributes:
        status: HTTP status code.
        headers: Header pairs in received order; names may repeat.
        body: Complete response body.
    """

    status: int
    headers: list[tuple[str, str]]
    body: bytes


class TransportError(Exception):
    """Raised by a transport when the round trip could not be completed.

    Covers DNS, connection, TLS, timeout and mid-read failures.
    """


RequestFn = Callable[[PreparedRequest], Awaitable[RawResponse]]
