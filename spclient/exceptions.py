"""Public exceptions for the spclient SDK."""


class SpclientError(Exception):
    """Base exception for all spclient SDK errors."""


class ConfigurationError(SpclientError):
    """Configuration error (unusable service address, missing device id)."""


class AuthError(SpclientError):
    """The credential supplier failed to produce a bearer token."""


class TransportError(SpclientError):
    """Network-level failure that persisted after all retries."""

    def __init__(self, message: str, attempts: int = 0) -> None:
        super().__init__(message)
        self.attempts = attempts


class RequestCancelledError(SpclientError):
    """The caller cancelled the request before it completed."""


class SpclientAPIError(SpclientError):
    """Error status returned by the spclient service."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UnexpectedStatusError(SpclientAPIError):
    """HTTP status outside the set an operation accepts."""


class PayloadTooLargeError(SpclientAPIError):
    """The service rejected a state update as too big (HTTP 413)."""

    def __init__(self, message: str, size: int) -> None:
        super().__init__(message, status_code=413)
        self.size = size


class SpclientValidationError(SpclientError):
    """Validation error for request/response messages."""


class EncodeError(SpclientValidationError):
    """A request message could not be serialized."""


class DecodeError(SpclientValidationError):
    """A response body is not a valid encoded message."""
