"""Custom exceptions for stackbind."""

from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    import httpx


class StackbindError(Exception):
    """Base exception for stackbind errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(StackbindError):
    """Raised when configuration loading or validation fails."""


class ApiError(StackbindError):
    """Base exception for failures of an API call."""

    def __init__(
        self,
        message: str,
        error_type: str = "api_error",
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=details)
        self.error_type = error_type
        self.status_code = status_code


class TransportError(ApiError):
    """The network operation itself failed (connection, DNS, TLS, timeout).

    The originating httpx exception is available as ``__cause__``.
    """

    def __init__(
        self, message: str, details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message=message, error_type="transport_error", details=details)


class HttpError(ApiError):
    """The service answered with a non-success status code.

    ``response`` is the raw response, kept for inspection and logging. Its
    body has not been read.
    """

    def __init__(
        self,
        status_code: int,
        response: "httpx.Response | None" = None,
        message: str | None = None,
    ) -> None:
        reason = response.reason_phrase if response is not None else ""
        super().__init__(
            message=message or f"HTTP {status_code} {reason}".rstrip(),
            error_type="http_error",
            status_code=status_code,
        )
        self.response = response
        self.reason = reason


class ParseError(ApiError):
    """The body was received but does not match the target type."""

    def __init__(
        self,
        message: str,
        target: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_type="parse_error", details=details)
        self.target = target
