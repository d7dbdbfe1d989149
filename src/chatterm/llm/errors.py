"""Completion error taxonomy.

Every failure of a completion round trip is one of these. Providers raise
them; the completion client turns them into result values.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a failed completion request."""

    TRANSPORT = "transport"    # Network failure, no response
    SERVICE = "service"        # Non-2xx response
    MALFORMED = "malformed"    # Response body could not be parsed
    EMPTY = "empty"            # Response had no choices
    UNEXPECTED = "unexpected"  # Anything else raised while waiting


class CompletionError(Exception):
    """Base class for completion failures."""

    kind = ErrorKind.UNEXPECTED


class TransportError(CompletionError):
    """The request could not be sent or the response not read."""

    kind = ErrorKind.TRANSPORT


class ServiceError(CompletionError):
    """The service answered with a non-success status."""

    kind = ErrorKind.SERVICE

    def __init__(
        self,
        status_code: int,
        message: str | None = None,
        error_type: str | None = None,
        code: str | None = None,
        body: str = "",
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.error_type = error_type
        self.code = code
        self.body = body
        if message is not None:
            text = f"API error: {message} (type: {error_type or ''}, code: {code or ''})"
        else:
            text = f"API error (status {status_code}): {body}"
        super().__init__(text)


class MalformedResponseError(CompletionError):
    """The response body was not a valid completion payload."""

    kind = ErrorKind.MALFORMED


class EmptyResponseError(CompletionError):
    """The response contained no choices."""

    kind = ErrorKind.EMPTY

    def __init__(self, message: str = "no response from LLM") -> None:
        super().__init__(message)
