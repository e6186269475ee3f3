"""Tests for response header flattening and body capping."""

from reqcore.core.response import MAX_BODY_SIZE, cap_body, flatten_headers, truncation_marker

__all__ = []


def test_flatten_headers_joins_repeated_names() -> None:
    """Repeated names are comma-joined under their first position."""
    pairs = [("Set-Cookie", "a=1"), ("Content-Type", "text/plain"), ("set-cookie", "b=2")]

    flat = flatten_headers(pairs)

    assert flat == {"set-cookie": "a=1,b=2", "content-type": "text/plain"}
    assert list(flat) == ["set-cookie", "content-type"]


def test_flatten_headers_empty() -> None:
    assert flatten_headers([]) == {}


def test_flatten_headers_echoes_request_headers() -> None:
    """Every sent header shows up in the flattened mapping."""
    sent = [("X-A", "1"), ("X-B", "2"), ("X-A", "3")]

    assert flatten_headers(sent) == {"x-a": "1,3", "x-b": "2"}


def test_flatten_headers_replaces_undecodable_bytes() -> None:
    """Values holding escaped non-UTF-8 bytes come out as encodable text."""
    raw = b"caf\xe9".decode("utf-8", "surrogateescape")

    flat = flatten_headers([("X-Bin", raw), ("X-Bin", "ok")])

    assert flat == {"x-bin": "caf\ufffd,ok"}
    flat["x-bin"].encode("utf-8")


def test_truncation_marker_text_is_exact() -> None:
    assert MAX_BODY_SIZE == 2_097_152
    assert truncation_marker() == "\n\n[Truncated: body exceeded 2097152 bytes]"


def test_cap_body_keeps_small_body() -> None:
    assert cap_body(b"hello") == "hello"


def test_cap_body_at_exact_limit_is_not_truncated() -> None:
    body = cap_body(b"a" * MAX_BODY_SIZE)

    assert len(body) == MAX_BODY_SIZE
    assert "Truncated" not in body


def test_cap_body_truncates_large_body() -> None:
    """A 3,000,000 byte body keeps exactly MAX_BODY_SIZE bytes plus the marker."""
    body = cap_body(b"a" * 3_000_000)

    assert body == "a" * MAX_BODY_SIZE + "\n\n[Truncated: body exceeded 2097152 bytes]"


def test_cap_body_custom_limit() -> None:
    assert cap_body(b"abcdef", limit=3) == "abc\n\n[Truncated: body exceeded 3 bytes]"


def test_cap_body_replaces_invalid_utf8() -> None:
    assert cap_body(b"\xff\xfeok") == "\ufffd\ufffdok"


def test_cap_body_split_multibyte_character_is_replaced() -> None:
    """Cutting inside a UTF-8 sequence yields a replacement character."""
    assert cap_body("é".encode() * 2, limit=3) == "é\ufffd\n\n[Truncated: body exceeded 3 bytes]"
