"""Precondition errors raised before any network I/O."""

__all__ = [
    "BodySerializationError",
    "ExecutorError",
    "InvalidFormBody",
    "InvalidMethod",
    "InvalidPayload",
    "InvalidUrl",
]


class ExecutorError(Exception):
    """Base class for request validation failures.

    Transport failures are never raised as ExecutorError; they are
    reported inside an ExecutionResult instead.
    """

    @property
    def kind(self) -> str:
        return type(self).__name__


class InvalidPayload(ExecutorError):
    """Raised when a host payload does not describe a request."""


class InvalidUrl(ExecutorError):
    """Raised when the URL is not an absolute URL."""


class InvalidMethod(ExecutorError):
    """Raised when the method is not a valid HTTP token."""


class InvalidFormBody(ExecutorError):
    """Raised when a form body value is not a sequence of rows."""


class BodySerializationError(ExecutorError):
    """Raised when a JSON body value cannot be serialized."""
