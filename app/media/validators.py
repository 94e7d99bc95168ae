"""
Media metadata validators.

Files are stored by the client-side uploader; this service only records
their metadata. Validation therefore checks the reported MIME type and
size against an allowlist and normalizes the file name.
"""

from __future__ import annotations

import re
from dataclasses import dataclass


# =============================================================================
# Configuration
# =============================================================================

ALLOWED_MIME_TYPES: dict[str, set[str]] = {
    "image": {
        "image/jpeg",
        "image/png",
        "image/gif",
        "image/webp",
    },
    "video": {
        "video/mp4",
        "video/quicktime",
        "video/x-msvideo",
    },
    "audio": {
        "audio/mpeg",
        "audio/mp4",
        "audio/wav",
    },
    "document": {
        "application/pdf",
        "text/plain",
    },
}

SIZE_LIMITS: dict[str, int] = {
    "image": 10 * 1024 * 1024,  # 10MB
    "video": 100 * 1024 * 1024,  # 100MB
    "audio": 25 * 1024 * 1024,  # 25MB
    "document": 10 * 1024 * 1024,  # 10MB
}

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class ValidationResult:
    """Result of metadata validation.

    Attributes:
        is_valid: Whether the metadata passed validation.
        media_type: Category of the file (image, video, audio, document).
        file_name: Sanitized file name.
        error: Human-readable error message if validation failed.
        error_code: Machine-readable error code if validation failed.
    """

    is_valid: bool
    media_type: str | None = None
    file_name: str | None = None
    error: str | None = None
    error_code: str | None = None


def sanitize_file_name(file_name: str) -> str:
    """Replace anything but letters, digits, dots and dashes with "_"."""
    return _UNSAFE_FILENAME_CHARS.sub("_", file_name.strip())


# =============================================================================
# Validator Class
# =============================================================================


class MediaMetadataValidator:
    """Validates reported file metadata.

    Example:
        result = MediaMetadataValidator().validate("beach.jpg", 2048, "image/jpeg")
        if result.is_valid:
            print(result.media_type, result.file_name)
    """

    def __init__(
        self,
        allowed_mime_types: dict[str, set[str]] | None = None,
        size_limits: dict[str, int] | None = None,
    ) -> None:
        self._allowed_mime_types = allowed_mime_types or ALLOWED_MIME_TYPES
        self._size_limits = size_limits or SIZE_LIMITS

    def validate(self, file_name: str, file_size: int, mime_type: str) -> ValidationResult:
        """Validate file metadata.

        Checks, in order: file name present, size non-negative, MIME type
        allowed, size within the category limit.
        """
        file_name = sanitize_file_name(file_name or "")
        if not file_name:
            return ValidationResult(
                is_valid=False,
                error="File name is required",
                error_code="MISSING_FILE_NAME",
            )

        if file_size is None or file_size < 0:
            return ValidationResult(
                is_valid=False,
                error="File size must be zero or more bytes",
                error_code="INVALID_FILE_SIZE",
            )

        media_type = None
        for category, mime_types in self._allowed_mime_types.items():
            if mime_type in mime_types:
                media_type = category
                break
        if media_type is None:
            return ValidationResult(
                is_valid=False,
                error=f"File type not allowed: {mime_type}",
                error_code="UNSUPPORTED_FILE_TYPE",
            )

        limit = self._size_limits.get(media_type)
        if limit is not None and file_size > limit:
            return ValidationResult(
                is_valid=False,
                media_type=media_type,
                error=f"File too large. Maximum size is {limit // (1024 * 1024)}MB",
                error_code="FILE_TOO_LARGE",
            )

        return ValidationResult(is_valid=True, media_type=media_type, file_name=file_name)
