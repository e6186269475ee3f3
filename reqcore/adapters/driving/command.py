"""Host-facing commands wiring the executor to the aiohttp transport."""

import asyncio
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from reqcore.adapters.driven.http.client import HttpClient
from reqcore.core.errors import ExecutorError, InvalidPayload
from reqcore.core.executor import run_request
from reqcore.ports.request import RequestSpec
from reqcore.ports.result import ExecutionResult

__all__ = ["execute", "execute_batch", "execute_request", "parse_payload"]

logger = logging.getLogger(__name__)


def parse_payload(payload: Mapping[str, Any]) -> RequestSpec:
    """Validate a host payload into a RequestSpec.

    Raises:
        InvalidPayload: If the mapping does not describe a request.
    """
    try:
        return RequestSpec.model_validate(payload)
    except ValidationError as e:
        raise InvalidPayload(f"Invalid request payload: {e}") from e


async def execute(spec: RequestSpec) -> ExecutionResult:
    """Execute one request over a fresh HTTP session.

    Args:
        spec: Request specification.

    Returns:
        Normalized result; transport failures are reported in ``error``.

    Raises:
        ExecutorError: If the request is invalid.
    """
    async with HttpClient(timeout_ms=spec.effective_timeout_ms) as http:
        return await run_request(spec, http.send)


async def execute_request(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Execute a request described by a camelCase payload.

    Mirrors the desktop shell command: mapping in, mapping out.

    Raises:
        ExecutorError: If the payload or request is invalid.
    """
    result = await execute(parse_payload(payload))
    return result.to_payload()


async def execute_batch(
    payloads: Iterable[Mapping[str, Any]],
) -> list[ExecutionResult | ExecutorError]:
    """Execute several payloads concurrently.

    Each payload runs in its own task; a precondition failure in one does
    not affect the others.

    Args:
        payloads: Host payloads.

    Returns:
        One entry per payload, in input order: the result, or the
        precondition error that prevented sending.
    """

    async def _run_once(index: int, payload: Mapping[str, Any]) -> ExecutionResult | ExecutorError:
        try:
            return await execute(parse_payload(payload))
        except ExecutorError as e:
            logger.warning(f"Payload #{index} rejected ({e.kind}): {e}")
            return e

    tasks = [asyncio.create_task(_run_once(i, p)) for i, p in enumerate(payloads)]
    return list(await asyncio.gather(*tasks))
