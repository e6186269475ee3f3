"""Request execution pipeline."""

import asyncio
import logging

from reqcore.core.request_builder import build_headers, build_url, encode_body, resolve_method
from reqcore.core.response import cap_body, flatten_headers
from reqcore.ports.http import PreparedRequest, RequestFn, TransportError
from reqcore.ports.request import RequestSpec
from reqcore.ports.result import ExecutionResult

__all__ = ["get_now_time", "run_request"]

logger = logging.getLogger(__name__)


def get_now_time() -> float:
    """Get current monotonic time in seconds from the running loop."""
    return asyncio.get_running_loop().time()


def _elapsed_ms(start: float) -> int:
    return max(0, round((get_now_time() - start) * 1_000))


async def run_request(spec: RequestSpec, request_fn: RequestFn) -> ExecutionResult:
    """Build, send and normalize one HTTP request.

    Stages:
    1. Validate the URL (with query) and method.
    2. Encode the body and assemble headers.
    3. Send through ``request_fn`` and read the whole response.
    4. Normalize the response, or turn a transport failure into a result.

    Args:
        spec: Request specification.
        request_fn: Transport used to perform the round trip.

    Returns:
        ExecutionResult with either ``status`` or ``error`` set.

    Raises:
        ExecutorError: If the request is invalid; no I/O was attempted.
    """
    url = build_url(spec)
    method = resolve_method(spec)

    start = get_now_time()
    prepared = PreparedRequest(
        method=method,
        url=url,
        body=encode_body(spec, method),
        headers=build_headers(spec),
        timeout_ms=spec.effective_timeout_ms,
    )

    try:
        raw = await request_fn(prepared)
    except TransportError as e:
        duration_ms = _elapsed_ms(start)
        logger.warning(f"{method} {url} failed after {duration_ms} ms: {e}")
        return ExecutionResult(duration_ms=duration_ms, error=f"Request failed: {e}")

    result = ExecutionResult(
        duration_ms=_elapsed_ms(start),
        status=raw.status,
        headers=flatten_headers(raw.headers),
        body=cap_body(raw.body),
    )
    logger.info(f"{method} {url} -> {result.status} in {result.duration_ms} ms")
    return result
