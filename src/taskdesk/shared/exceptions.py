"""
Custom exception classes for the application.

Server-side errors are mapped to HTTP responses in ``taskdesk.main``;
client-side errors are raised by ``taskdesk.client.api``.
"""

from typing import Any


class AppException(Exception):
    """Base exception for application errors."""

    def __init__(
        self,
        message: str,
        code: str = "APP_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application exception.

        Args:
            message: Human-readable error message.
            code: Machine-readable error code.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class NotFoundError(AppException):
    """Raised when a referenced record does not exist."""

    def __init__(self, entity: str, message: str | None = None) -> None:
        self.entity = entity
        super().__init__(
            message or f"{entity} not found",
            "NOT_FOUND",
            {"entity": entity},
        )


class ConflictError(AppException):
    """Raised when a unique key is already taken by another record."""

    def __init__(self, entity: str, field: str, value: Any) -> None:
        self.entity = entity
        self.field = field
        self.value = value
        super().__init__(
            f"{entity} with this {field} already exists",
            "CONFLICT",
            {"entity": entity, "field": field},
        )


class TransportError(AppException):
    """Raised by the API client when the server cannot be reached."""

    def __init__(
        self,
        message: str = "Unable to reach the server",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, "TRANSPORT_ERROR", details)


class ApiError(AppException):
    """Raised by the API client for unexpected non-2xx responses."""

    def __init__(
        self,
        status_code: int,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(message, "API_ERROR", details)
