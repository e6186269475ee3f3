"""Translation of a RequestSpec into wire-level request parts.

Every function here is pure: no I/O, no shared state. Validation failures
raise ExecutorError subclasses so the caller never reaches the network.
"""

import json
import re
from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import urlencode

from yarl import URL

from reqcore.core.errors import BodySerializationError, InvalidFormBody, InvalidMethod, InvalidUrl
from reqcore.ports.request import BodyKind, RequestSpec

__all__ = [
    "CONTENT_TYPE_FORM",
    "CONTENT_TYPE_JSON",
    "build_headers",
    "build_url",
    "encode_body",
    "resolve_method",
]

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"

# RFC 9110 section 5.6.2 token characters
_METHOD_TOKEN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


def build_url(spec: RequestSpec) -> str:
    """Parse the URL and append the active query rows.

    Existing query parameters in the URL are kept; rows are appended in
    order and repeated keys are preserved.

    Args:
        spec: Request specification.

    Returns:
        Absolute URL with the query applied.

    Raises:
        InvalidUrl: If the URL is not absolute or cannot be parsed.
    """
    try:
        url = URL(spec.url)
        if not url.scheme or not url.host:
            raise ValueError("relative URL without a scheme or host")
        _ = url.port
    except (TypeError, ValueError) as e:
        raise InvalidUrl(f"Invalid URL {spec.url!r}: {e}") from e

    pairs = [(q.key, q.value) for q in spec.query if q.is_active]
    if pairs:
        url = url.extend_query(pairs)
    return str(url)


def resolve_method(spec: RequestSpec) -> str:
    """Return the canonical uppercased method token.

    Raises:
        InvalidMethod: If the method contains non-token characters.
    """
    if not _METHOD_TOKEN.fullmatch(spec.method):
        raise InvalidMethod(f"Invalid HTTP method: {spec.method!r}")
    return spec.method.upper()


def build_headers(spec: RequestSpec) -> list[tuple[str, str]]:
    """Assemble request headers in send order.

    Explicit rows come first, then the bearer token, then the content
    type implied by the body kind. Nothing is replaced: a user supplied
    Authorization or Content-Type header is sent alongside ours.

    Args:
        spec: Request specification.

    Returns:
        List of (name, value) pairs; names may repeat.
    """
    headers = [(h.key, h.value) for h in spec.headers if h.is_active]

    token = spec.auth.bearer_token
    if token is not None:
        headers.append(("Authorization", f"Bearer {token}"))

    kind = spec.body.kind
    if kind is BodyKind.JSON:
        headers.append(("Content-Type", CONTENT_TYPE_JSON))
    elif kind is BodyKind.FORM:
        headers.append(("Content-Type", CONTENT_TYPE_FORM))

    return headers


def encode_body(spec: RequestSpec, method: str) -> bytes | None:
    """Encode the request body according to its declared kind.

    Args:
        spec: Request specification.
        method: Resolved method; GET requests never carry a body.

    Returns:
        UTF-8 encoded body, or None when no body is attached.

    Raises:
        BodySerializationError: If a JSON value cannot be serialized.
        InvalidFormBody: If a form value is not a sequence.
    """
    kind = spec.body.kind
    if method == "GET" or kind is BodyKind.NONE:
        return None

    value = spec.body.value
    if kind is BodyKind.JSON:
        text = _encode_json(value)
    elif kind is BodyKind.FORM:
        text = _encode_form(value)
    else:
        text = value if isinstance(value, str) else ""
    return text.encode("utf-8")


def _encode_json(value: Any) -> str:
    # A string is already JSON text typed by the user; dumping it again
    # would wrap it in quotes.
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise BodySerializationError(f"JSON serialization failed: {e}") from e


def _encode_form(value: Any) -> str:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise InvalidFormBody(f"Form body must be an array, got {type(value).__name__}")

    pairs: list[tuple[str, str]] = []
    for row in value:
        if not isinstance(row, Mapping):
            continue
        key = _str_or_empty(row.get("key"))
        enabled = row.get("enabled")
        if enabled is True and key:
            pairs.append((key, _str_or_empty(row.get("value"))))
    return urlencode(pairs)


def _str_or_empty(value: object) -> str:
    return value if isinstance(value, str) else ""
