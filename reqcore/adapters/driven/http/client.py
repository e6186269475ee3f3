"""HTTP client adapter backed by aiohttp."""

import asyncio
import logging
from types import TracebackType

import aiohttp
from aiohttp import ClientTimeout
from multidict import CIMultiDict

from reqcore.ports.http import PreparedRequest, RawResponse, TransportError
from reqcore.ports.request import DEFAULT_TIMEOUT_MS

__all__ = ["HttpClient"]

logger = logging.getLogger(__name__)

# Headers aiohttp must not invent; text bodies go out without a content type.
SKIP_AUTO_HEADERS = frozenset({"Content-Type"})


def _client_timeout(timeout_ms: int) -> ClientTimeout:
    return ClientTimeout(total=timeout_ms / 1_000)


class HttpClient:
    """Single-use HTTP transport for the request executor.

    Features:
    - Total-request timeout covering connect, send and body read.
    - Repeated request headers sent as separate header lines.
    - Every network failure surfaced as TransportError.
    - Context manager for proper resource cleanup.
    """

    def __init__(self, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> None:
        """Initialize HTTP client.

        Args:
            timeout_ms: Default total timeout in milliseconds.
        """
        self.timeout_ms = timeout_ms
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "HttpClient":
        """Enter async context manager (start session).

        Returns:
            Self for use in async with statement.
        """
        self.session = aiohttp.ClientSession(timeout=_client_timeout(self.timeout_ms))
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Exit async context manager (close session).

        Args:
            exc_type: Exception type if raised in context.
            exc: Exception instance if raised in context.
            tb: Traceback if raised in context.
        """
        if self.session:
            await self.session.close()

    async def send(self, req: PreparedRequest) -> RawResponse:
        """Send one request and read the complete response.

        Args:
            req: Prepared wire-level request.

        Returns:
            Status, header pairs and full body.

        Raises:
            RuntimeError: If session not initialized.
            TransportError: If the round trip failed for any network reason.
        """
        if self.session is None:
            raise RuntimeError("Session not initialized; use 'async with' context manager")

        logger.debug(f"Sending {req.method} {req.url} ({len(req.headers)} headers)")
        try:
            async with self.session.request(
                req.method,
                req.url,
                headers=CIMultiDict(req.headers),
                data=req.body,
                skip_auto_headers=SKIP_AUTO_HEADERS,
                timeout=_client_timeout(req.timeout_ms),
            ) as resp:
                body = await resp.read()
                return RawResponse(
                    status=resp.status,
                    headers=list(resp.headers.items()),
                    body=body,
                )
        except asyncio.TimeoutError as e:
            raise TransportError(f"timed out after {req.timeout_ms} ms") from e
        except (aiohttp.ClientError, OSError, ValueError) as e:
            raise TransportError(str(e) or type(e).__name__) from e
