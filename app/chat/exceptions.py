"""
Exceptions raised by message history pagination.

Both errors are client-correctable and map to HTTP 400:
    InvalidCursorError: The cursor token is malformed, tampered with, or
        not in canonical form. Clients recover by discarding the cursor
        and requesting the first page again.
    InvalidPageSizeError: The requested page size is outside the
        configured range. Requests are rejected rather than clamped.

Usage:
    from chat.exceptions import InvalidCursorError, InvalidPageSizeError

    try:
        page = paginator.paginate(PageRequest(page_size=20, cursor=token))
    except (InvalidCursorError, InvalidPageSizeError) as e:
        return Response(e.to_dict(), status=400)
"""

from __future__ import annotations

from core.exceptions import ValidationError


class InvalidCursorError(ValidationError):
    """
    Raised when a pagination cursor cannot be decoded.

    Every decode failure (bad signature, bad encoding, bad JSON, missing
    field, non-canonical timestamp, malformed identifier) produces the
    same message and error code so callers learn nothing about the token format.
    """

    default_error_code: str = "INVALID_CURSOR"

    def __init__(self, message: str = "Invalid cursor", **kwargs):
        super().__init__(message, **kwargs)


class InvalidPageSizeError(ValidationError):
    """
    Raised when a page size falls outside [1, max_page_size].

    Example:
        raise InvalidPageSizeError(max_page_size=100)
        # [INVALID_PAGE_SIZE] Page size must be between 1 and 100
    """

    default_error_code: str = "INVALID_PAGE_SIZE"

    def __init__(self, max_page_size: int, message: str | None = None, **kwargs):
        self.max_page_size = max_page_size
        super().__init__(
            message or f"Page size must be between 1 and {max_page_size}",
            details={"min_page_size": 1, "max_page_size": max_page_size},
            **kwargs,
        )
