"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and security helpers.
"""

from app.config import settings
from app.exceptions import (
    KitchenSathiError,
    ServiceValidationError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    ConflictError,
    GoneError,
    ExternalServiceError,
    ServiceUnavailableError,
)

__all__ = [
    "settings",
    "KitchenSathiError",
    "ServiceValidationError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "GoneError",
    "ExternalServiceError",
    "ServiceUnavailableError",
]
