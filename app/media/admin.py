"""Django admin configuration for media app."""

from django.contrib import admin

from media.models import MediaItem


@admin.register(MediaItem)
class MediaItemAdmin(admin.ModelAdmin):
    """Admin configuration for MediaItem model."""

    list_display = [
        "id",
        "file_name",
        "mime_type",
        "file_size",
        "owner",
        "partner",
        "is_deleted",
        "uploaded_at",
    ]
    list_filter = ["mime_type", "is_deleted"]
    search_fields = ["file_name", "owner__email", "partner__email"]
    raw_id_fields = ["owner", "partner"]
    readonly_fields = ["id", "deleted_at", "created_at", "updated_at"]

    def get_queryset(self, request):
        """Include soft-deleted items."""
        return MediaItem.all_objects.all()
