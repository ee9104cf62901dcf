"""
Exception taxonomy for the gateway API.

Business services raise these; ErrorHandlerMiddleware turns them into
JSON error responses.
"""
from typing import Optional


class GatewayError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    code: str = "internal_error"
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(GatewayError):
    """The request is malformed."""

    status_code = 400
    code = "bad_request"
    default_message = "Bad request"


class UnsupportedApiVersionError(BadRequestError):
    """The requested API version is not supported."""

    code = "unsupported_api_version"
    default_message = "Unsupported API version"


class UnauthorizedError(GatewayError):
    """Authentication is required."""

    status_code = 401
    code = "unauthorized"
    default_message = "Authentication required"


class ForbiddenError(GatewayError):
    """The current identity may not perform this operation."""

    status_code = 403
    code = "forbidden"
    default_message = "Access denied"


class NotFoundError(GatewayError):
    """The requested resource does not exist."""

    status_code = 404
    code = "not_found"
    default_message = "Resource not found"


class ConflictError(GatewayError):
    """The resource already exists."""

    status_code = 409
    code = "conflict"
    default_message = "Resource already exists"


class PayloadTooLargeError(GatewayError):
    """The request body exceeds the configured limit."""

    status_code = 413
    code = "payload_too_large"
    default_message = "Request body too large"


class ConfigurationError(GatewayError):
    """The application is misconfigured."""

    code = "configuration_error"
    default_message = "Invalid configuration"
