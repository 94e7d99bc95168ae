"""
MediaItem model for files shared between partners.

Provides:
- 24-hex primary key
- Owner/partner pair (the uploader and the partner it is shared with)
- Raw size and MIME type as reported at upload time
- Soft delete support (tombstone flag plus deleted_at)
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.utils import timezone

from core.managers import SoftDeleteManager
from core.model_mixins import ObjectIdPrimaryKeyMixin, SoftDeleteMixin
from core.models import BaseModel

SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def format_file_size(size: int) -> str:
    """
    Render a byte count for display.

    Uses 1024-based units with up to two decimals and no trailing zeros.

    Example:
        format_file_size(0)     # "0 Bytes"
        format_file_size(1536)  # "1.5 KB"
    """
    if size <= 0:
        return "0 Bytes"
    index = 0
    value = float(size)
    while value >= 1024 and index < len(SIZE_UNITS) - 1:
        value /= 1024
        index += 1
    rendered = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{rendered} {SIZE_UNITS[index]}"


class MediaItem(ObjectIdPrimaryKeyMixin, SoftDeleteMixin, BaseModel):
    """
    A file one partner shared with the other.

    Fields:
        owner: User who uploaded the file
        partner: User the file is shared with
        file_name: Original file name
        file_url: Where the file is stored
        file_size: Size in bytes
        mime_type: Reported MIME type
        uploaded_at: Upload time (sort key for media lists)

    Managers:
        objects: Excludes soft-deleted items
        all_objects: Includes soft-deleted items
    """

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="owned_media_items",
        help_text="User who uploaded this file",
    )

    partner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="shared_media_items",
        help_text="Partner this file is shared with",
    )

    file_name = models.CharField(
        max_length=255,
        help_text="Original file name",
    )

    file_url = models.URLField(
        max_length=500,
        help_text="Location of the stored file",
    )

    file_size = models.PositiveBigIntegerField(
        help_text="File size in bytes",
    )

    mime_type = models.CharField(
        max_length=100,
        help_text="MIME type of the file",
    )

    uploaded_at = models.DateTimeField(
        default=timezone.now,
        help_text="When the file was uploaded",
    )

    objects = SoftDeleteManager()
    all_objects = models.Manager()

    class Meta:
        db_table = "media_item"
        ordering = ["-uploaded_at", "-id"]
        indexes = [
            models.Index(
                fields=["owner", "is_deleted", "-uploaded_at"],
                name="media_item_owner_idx",
            ),
            models.Index(
                fields=["partner", "is_deleted", "-uploaded_at"],
                name="media_item_partner_idx",
            ),
            models.Index(
                fields=["owner", "partner", "is_deleted"],
                name="media_item_pair_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.file_name} ({self.formatted_file_size})"

    @property
    def file_extension(self) -> str:
        """Lowercase extension without the dot ("" if the name has none)."""
        name = self.file_name.strip()
        if "." not in name:
            return ""
        return name.rsplit(".", 1)[-1].lower()

    @property
    def formatted_file_size(self) -> str:
        return format_file_size(self.file_size)
