"""
Base exception classes for application-wide error handling.

This module provides a standardized exception hierarchy that enables:
- Consistent error responses across the application
- Machine-readable error codes for client handling
- Detailed error information for debugging

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Input validation failures
    ├── NotFoundError - Resource not found
    └── PermissionDeniedError - Authorization failures

App-specific errors subclass these (see chat.exceptions for the
pagination errors raised by the cursor codec and keyset paginator).

Usage:
    from core.exceptions import ValidationError, NotFoundError

    # Raise with message only
    raise ValidationError("Latitude out of range")

    # Raise with error code for client handling
    raise ValidationError("Page size too large", error_code="INVALID_PAGE_SIZE")

    # Convert to dict for API response
    try:
        ...
    except BaseApplicationError as e:
        return Response(e.to_dict(), status=400)

Note:
    These exceptions are for domain/business logic errors.
    DRF handles API-layer exceptions (serialization, authentication, etc.).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, metadata, etc.)

    Example:
        try:
            page = paginator.paginate(request)
        except BaseApplicationError as e:
            logger.warning(f"Rejected page request: {e.error_code}")
            return Response(e.to_dict(), status=400)
    """

    default_error_code: str = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dict with error, error_code, and details keys

        Example:
            {
                "error": "Invalid cursor",
                "error_code": "INVALID_CURSOR"
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input validation fails.

    Use for:
    - Malformed client input (cursors, page sizes, coordinates)
    - Business rule violations (participant counts, ownership)

    Example:
        raise ValidationError(
            "Chat must have exactly 2 participants",
            error_code="INVALID_PARTICIPANTS",
            details={"count": 3},
        )
    """

    default_error_code: str = "VALIDATION_ERROR"


class NotFoundError(BaseApplicationError):
    """
    Raised when a requested resource is not found.

    Example:
        raise NotFoundError(
            "Chat not found",
            error_code="CHAT_NOT_FOUND",
            details={"chat_id": chat_id},
        )
    """

    default_error_code: str = "NOT_FOUND"


class PermissionDeniedError(BaseApplicationError):
    """
    Raised when user lacks permission for an operation.

    Example:
        if not chat.has_participant(user):
            raise PermissionDeniedError("Access denied", error_code="NOT_PARTICIPANT")
    """

    default_error_code: str = "PERMISSION_DENIED"
