"""
Custom QuerySet and Manager classes for soft-deleted models.

Manager vs QuerySet:
    - QuerySet: Defines chainable methods (filter, exclude, etc.)
    - Manager: Attaches QuerySet to model, defines table-level operations

Usage:
    from core.managers import SoftDeleteManager

    class MediaItem(SoftDeleteMixin, BaseModel):
        objects = SoftDeleteManager()  # Default: excludes deleted
        all_objects = models.Manager()  # Includes deleted

    MediaItem.objects.all()          # Only live items
    MediaItem.objects.deleted()      # Only tombstoned items
    MediaItem.all_objects.all()      # Everything

Related:
    - core.model_mixins.SoftDeleteMixin: Model mixin for soft delete fields
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone


class SoftDeleteQuerySet(models.QuerySet):
    """
    QuerySet that provides soft delete operations.

    Methods:
        delete(): Soft delete (marks is_deleted=True)
        hard_delete(): Permanent delete
        restore(): Restore soft-deleted records
        deleted(): Filter to only deleted records
        active(): Filter to only active records

    Note:
        The default filtering of deleted records happens in SoftDeleteManager,
        not in this QuerySet. This allows all_objects to use the same QuerySet
        without filtering.
    """

    def delete(self) -> tuple[int, dict[str, int]]:
        """
        Soft delete all objects in queryset.

        Returns:
            Tuple of (count, {model_name: count}) matching Django's delete()
        """
        count = self.filter(is_deleted=False).update(
            is_deleted=True, deleted_at=timezone.now()
        )
        return count, {self.model._meta.label: count}

    def hard_delete(self) -> tuple[int, dict[str, int]]:
        """
        Permanently delete all objects in queryset.

        Warning:
            This cannot be undone. Consider delete() first.
        """
        return super().delete()

    def restore(self) -> int:
        """
        Restore all soft-deleted objects in queryset.

        Returns:
            Number of restored records
        """
        return self.filter(is_deleted=True).update(is_deleted=False, deleted_at=None)

    def deleted(self) -> SoftDeleteQuerySet:
        """Filter to only soft-deleted records."""
        return self.filter(is_deleted=True)

    def active(self) -> SoftDeleteQuerySet:
        """Filter to only active (non-deleted) records."""
        return self.filter(is_deleted=False)


class SoftDeleteManager(models.Manager):
    """
    Manager that filters out soft-deleted records by default.

    Use as the default manager on models with SoftDeleteMixin.
    Always pair with a standard Manager for accessing deleted records.

    Note:
        The filtering happens in get_queryset(), so all queries through
        this manager automatically exclude deleted records.
    """

    def get_queryset(self) -> SoftDeleteQuerySet:
        """Return queryset excluding soft-deleted records."""
        return SoftDeleteQuerySet(self.model, using=self._db).filter(is_deleted=False)

    def deleted(self) -> SoftDeleteQuerySet:
        """Shortcut to get only deleted records."""
        return SoftDeleteQuerySet(self.model, using=self._db).filter(is_deleted=True)

    def with_deleted(self) -> SoftDeleteQuerySet:
        """Get queryset including deleted records."""
        return SoftDeleteQuerySet(self.model, using=self._db)
