"""
Closed error taxonomy for LLM providers.

Every provider client converts its failures into LLMError so callers can
switch on ErrorKind instead of inspecting error messages.
"""
from enum import Enum
from typing import Optional

import httpx


class ErrorKind(Enum):
    """Classes of provider failure."""
    CONFIGURATION = 'configuration'
    RATE_LIMIT = 'rate_limit'
    INSUFFICIENT_CREDITS = 'insufficient_credits'
    MODEL_OVERLOADED = 'model_overloaded'
    SERVER_ERROR = 'server_error'
    TIMEOUT = 'timeout'
    NETWORK = 'network'
    INVALID_RESPONSE = 'invalid_response'
    UNKNOWN = 'unknown'

    @property
    def retryable(self) -> bool:
        """Only throttling is worth retrying with backoff."""
        return self is ErrorKind.RATE_LIMIT

    @property
    def fatal(self) -> bool:
        """Failures that abort a whole synchronization."""
        return self is ErrorKind.CONFIGURATION


class LLMError(Exception):
    """Provider failure tagged with its ErrorKind."""

    def __init__(self, kind: ErrorKind, message: str = "", provider: Optional[str] = None):
        self.kind = kind
        self.provider = provider
        self.message = message
        super().__init__(self._describe())

    def _describe(self) -> str:
        prefix = self.kind.name
        if self.provider:
            prefix = f"{prefix}|{self.provider}"
        return f"{prefix}|{self.message}" if self.message else prefix

    @property
    def retryable(self) -> bool:
        return self.kind.retryable

    @property
    def fatal(self) -> bool:
        return self.kind.fatal


_STATUS_KINDS = {
    401: ErrorKind.CONFIGURATION,
    403: ErrorKind.CONFIGURATION,
    402: ErrorKind.INSUFFICIENT_CREDITS,
    408: ErrorKind.TIMEOUT,
    429: ErrorKind.RATE_LIMIT,
    500: ErrorKind.SERVER_ERROR,
    502: ErrorKind.SERVER_ERROR,
    503: ErrorKind.MODEL_OVERLOADED,
    504: ErrorKind.TIMEOUT,
}


def error_kind_from_status(status_code: int) -> ErrorKind:
    """
    Map an HTTP status code to an ErrorKind.

    Args:
        status_code: HTTP response status

    Returns:
        Matching kind, UNKNOWN for unmapped codes
    """
    kind = _STATUS_KINDS.get(status_code)
    if kind is not None:
        return kind
    if 500 <= status_code < 600:
        return ErrorKind.SERVER_ERROR
    return ErrorKind.UNKNOWN


def classify_exception(exc: BaseException, provider: Optional[str] = None) -> LLMError:
    """
    Wrap an arbitrary exception into an LLMError.

    LLMError instances pass through unchanged; httpx transport and status
    errors are mapped by type; anything else becomes UNKNOWN.
    """
    if isinstance(exc, LLMError):
        return exc
    if isinstance(exc, httpx.HTTPStatusError):
        return LLMError(
            error_kind_from_status(exc.response.status_code),
            f"HTTP {exc.response.status_code}: {exc.response.text[:200]}",
            provider
        )
    if isinstance(exc, httpx.TimeoutException):
        return LLMError(ErrorKind.TIMEOUT, str(exc), provider)
    if isinstance(exc, httpx.TransportError):
        return LLMError(ErrorKind.NETWORK, str(exc), provider)
    return LLMError(ErrorKind.UNKNOWN, f"{type(exc).__name__}: {exc}"[:200], provider)
