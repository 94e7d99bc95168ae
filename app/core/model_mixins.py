"""
Model mixins providing reusable functionality for Django models.

This module contains abstract mixin classes that can be combined with
BaseModel to add specific functionality. They are generic infrastructure
classes with no domain-specific logic.

Available Mixins:
    ObjectIdPrimaryKeyMixin: 24-character hex string as primary key
    SoftDeleteMixin: Soft delete support (is_deleted, deleted_at)

Usage:
    from core.models import BaseModel
    from core.model_mixins import ObjectIdPrimaryKeyMixin, SoftDeleteMixin

    class MediaItem(ObjectIdPrimaryKeyMixin, SoftDeleteMixin, BaseModel):
        file_name = models.CharField(max_length=255)

Note:
    - Always list mixins before BaseModel in inheritance
    - Mixins are abstract and don't create database tables
    - SoftDeleteMixin pairs with SoftDeleteManager (see core.managers)
"""

from __future__ import annotations

from django.core.validators import RegexValidator
from django.db import models
from django.utils import timezone

from core.helpers import OBJECT_ID_LENGTH, generate_object_id

validate_object_id = RegexValidator(
    regex=r"^[0-9a-f]{24}$",
    message="Identifier must be 24 lowercase hexadecimal characters.",
    code="invalid_object_id",
)


class ObjectIdPrimaryKeyMixin(models.Model):
    """
    Use a 24-character hexadecimal identifier as primary key.

    Identifiers begin with a creation timestamp, so they roughly follow
    insertion order, and compare correctly as plain strings. The keyset
    paginator relies on that string comparison for its tie-break.

    Fields:
        id: CharField primary key (auto-generated)

    Usage:
        class Message(ObjectIdPrimaryKeyMixin, BaseModel):
            content = models.TextField()

        message = Message.objects.create(content="hi")
        print(message.id)  # "6650b0c2a1f3e9d4c2b10001"
    """

    id = models.CharField(
        primary_key=True,
        max_length=OBJECT_ID_LENGTH,
        default=generate_object_id,
        editable=False,
        validators=[validate_object_id],
        help_text="Unique 24-character hexadecimal identifier",
    )

    class Meta:
        abstract = True


class SoftDeleteMixin(models.Model):
    """
    Soft delete support for models.

    Instead of permanently deleting records, marks them as deleted
    (a tombstone). Deleted records can be restored and still anchor
    queries that reference them.

    Fields:
        is_deleted: Boolean flag indicating soft delete status
        deleted_at: Timestamp when the record was soft deleted
    """

    is_deleted = models.BooleanField(
        default=False,
        db_index=True,
        help_text="Whether this record has been soft deleted",
    )
    deleted_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Timestamp when this record was soft deleted",
    )

    class Meta:
        abstract = True

    def soft_delete(self) -> None:
        """
        Mark this record as deleted.

        Sets is_deleted=True and deleted_at to current time.
        Does not actually remove the record from database.
        """
        self.is_deleted = True
        self.deleted_at = timezone.now()
        self.save(update_fields=["is_deleted", "deleted_at", "updated_at"])

    def restore(self) -> None:
        """Restore a soft-deleted record."""
        self.is_deleted = False
        self.deleted_at = None
        self.save(update_fields=["is_deleted", "deleted_at", "updated_at"])
