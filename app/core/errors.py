"""
Domain-specific exceptions for the Asset Management API.

These exceptions represent request and business rule violations and are
mapped to appropriate HTTP status codes in the API layer.
"""

from typing import Any


class AssetApiError(Exception):
    """Base exception for all asset management domain errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AssetApiError):
    """
    Raised when input data fails validation.

    Examples:
    - Required field missing or empty
    - Blank resource identifier in the path
    - Referenced department, employee or asset does not exist

    ``details`` maps each offending field to the list of its messages.

    HTTP Status: 400 Bad Request
    """

    @classmethod
    def for_fields(cls, errors: dict[str, list[str]]) -> "ValidationError":
        return cls("One or more validation errors occurred.", details=errors)


class NotFoundError(AssetApiError):
    """
    Raised when a requested resource does not exist.

    HTTP Status: 404 Not Found
    """

    pass


class UnauthorizedError(AssetApiError):
    """
    Raised when the bearer credential is missing or invalid.

    HTTP Status: 401 Unauthorized
    """

    pass


# HTTP Status Code Mapping
ERROR_STATUS_MAP = {
    ValidationError: 400,
    UnauthorizedError: 401,
    NotFoundError: 404,
}


def get_status_code(error: Exception) -> int:
    """
    Get the HTTP status code for a given exception.

    Args:
        error: The exception instance

    Returns:
        HTTP status code (defaults to 500 for unknown errors)
    """
    return ERROR_STATUS_MAP.get(type(error), 500)
