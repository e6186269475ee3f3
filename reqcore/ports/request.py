"""Request specification port (DTO)."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "DEFAULT_TIMEOUT_MS",
    "Auth",
    "AuthKind",
    "Body",
    "BodyKind",
    "KeyValue",
    "RequestSpec",
]

DEFAULT_TIMEOUT_MS = 15_000


class AuthKind(str, Enum):
    """Authentication schemes understood by the executor."""

    NONE = "none"
    BEARER = "bearer"


class BodyKind(str, Enum):
    """Request body encodings understood by the executor."""

    NONE = "none"
    JSON = "json"
    FORM = "form"
    TEXT = "text"


class KeyValue(BaseModel):
    """One header or query row as edited in the UI.

    Attributes:
        key: Header or parameter name. Empty keys are never sent.
        value: Header or parameter value.
        enabled: Disabled rows are kept by the UI but never sent.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    value: str = ""
    enabled: bool

    @property
    def is_active(self) -> bool:
        """Return True when the row should be part of the request."""
        return self.enabled and bool(self.key)


class Auth(BaseModel):
    """Authentication block of a request.

    Attributes:
        type: Scheme name; only "bearer" has an effect.
        token: Bearer token, ignored when empty.
    """

    model_config = ConfigDict(frozen=True)

    type: str = AuthKind.NONE.value
    token: str | None = None

    @property
    def kind(self) -> AuthKind:
        if self.type == AuthKind.BEARER.value:
            return AuthKind.BEARER
        return AuthKind.NONE

    @property
    def bearer_token(self) -> str | None:
        """Return the token to send, or None when no auth header applies."""
        if self.kind is AuthKind.BEARER and self.token:
            return self.token
        return None


class Body(BaseModel):
    """Request body as declared by the caller.

    Attributes:
        type: Encoding name ("none", "json", "form", "text").
        value: Raw value; its expected shape depends on ``type``.
    """

    model_config = ConfigDict(frozen=True)

    type: str = BodyKind.NONE.value
    value: Any = None

    @property
    def kind(self) -> BodyKind:
        # Unknown encodings fall back to raw text.
        try:
            return BodyKind(self.type)
        except ValueError:
            return BodyKind.TEXT


class RequestSpec(BaseModel):
    """Declarative description of one HTTP request.

    Built from the camelCase payload sent by the host (``timeoutMs``) or
    from snake_case keyword arguments.

    Attributes:
        method: HTTP verb, case-insensitive.
        url: Absolute URL, query rows are appended to it.
        auth: Authentication block.
        headers: Header rows in send order.
        query: Query rows in send order.
        body: Body declaration.
        timeout_ms: Total request timeout in milliseconds.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    method: str
    url: str
    auth: Auth = Field(default_factory=Auth)
    headers: list[KeyValue] = Field(default_factory=list)
    query: list[KeyValue] = Field(default_factory=list)
    body: Body = Field(default_factory=Body)
    timeout_ms: int | None = Field(default=None, alias="timeoutMs", gt=0)

    @property
    def effective_timeout_ms(self) -> int:
        return self.timeout_ms if self.timeout_ms is not None else DEFAULT_TIMEOUT_MS
