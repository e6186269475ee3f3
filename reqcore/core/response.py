"""Response normalization: header flattening and body capping."""

from collections.abc import Iterable

__all__ = ["MAX_BODY_SIZE", "cap_body", "flatten_headers", "truncation_marker"]

MAX_BODY_SIZE = 2 * 1024 * 1024


def truncation_marker(limit: int = MAX_BODY_SIZE) -> str:
    """Return the text appended to a body cut at ``limit`` bytes."""
    return f"\n\n[Truncated: body exceeded {limit} bytes]"


def _clean_text(text: str) -> str:
    # aiohttp decodes header bytes with surrogateescape; lone surrogates
    # cannot be written out as UTF-8.
    try:
        raw = text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        raw = text.encode("utf-8", "replace")
    return raw.decode("utf-8", "replace")


def flatten_headers(pairs: Iterable[tuple[str, str]]) -> dict[str, str]:
    """Collapse repeated header names into single comma-joined values.

    Names are lowercased and keep their first-seen order. Bytes that are
    not valid UTF-8 become replacement characters.

    Args:
        pairs: Header (name, value) pairs in received order.

    Returns:
        Mapping from lowercased name to value.
    """
    out: dict[str, str] = {}
    for name, value in pairs:
        key = _clean_text(name).lower()
        value = _clean_text(value)
        if key in out:
            out[key] = f"{out[key]},{value}"
        else:
            out[key] = value
    return out


def cap_body(raw: bytes, limit: int = MAX_BODY_SIZE) -> str:
    """Decode a response body, truncating it to ``limit`` bytes.

    Invalid UTF-8 sequences are replaced rather than rejected.

    Args:
        raw: Complete response body.
        limit: Maximum number of bytes kept.

    Returns:
        Decoded text, with the truncation marker when cut.
    """
    if len(raw) <= limit:
        return raw.decode("utf-8", errors="replace")
    return raw[:limit].decode("utf-8", errors="replace") + truncation_marker(limit)
