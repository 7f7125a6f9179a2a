from typing import Any, Mapping, Optional


class KitchenSathiError(Exception):
    """Base class for errors raised by the service layer.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, flags for the client)
        code: machine-readable error code, defaults to ``default_code``
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_code = "INTERNAL_SERVER_ERROR"
    default_message = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Mapping[str, Any]] = None,
        code: Optional[str] = None,
    ):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(KitchenSathiError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_code = "SERVICE_VALIDATION_ERROR"
    default_message = "Invalid input"


class UnauthorizedError(KitchenSathiError):
    """Raised when authentication fails (missing, invalid or expired credentials)."""

    http_status = 401
    default_code = "UNAUTHORIZED"
    default_message = "Unauthorized"


class ForbiddenError(KitchenSathiError):
    """Raised when the caller is authenticated but not allowed to do this."""

    http_status = 403
    default_code = "FORBIDDEN"
    default_message = "Forbidden"


class NotFoundError(KitchenSathiError):
    """Raised when a requested resource was not found (or is not owned by the caller)."""

    http_status = 404
    default_code = "NOT_FOUND"
    default_message = "Not found"


class ConflictError(KitchenSathiError):
    """Raised when a resource conflict occurs (e.g., duplicate entry)."""

    http_status = 409
    default_code = "CONFLICT"
    default_message = "Conflict"


class GoneError(KitchenSathiError):
    """Raised for identifiers that used to be valid but are no longer served."""

    http_status = 410
    default_code = "GONE"
    default_message = "Resource is no longer available"


class ExternalServiceError(KitchenSathiError):
    """Raised when a third-party provider answered with an error."""

    http_status = 502
    default_code = "EXTERNAL_SERVICE_ERROR"
    default_message = "Upstream service error"


class ServiceUnavailableError(KitchenSathiError):
    """Raised when a required third-party provider is not configured or unreachable."""

    http_status = 503
    default_code = "SERVICE_UNAVAILABLE"
    default_message = "Service unavailable"
