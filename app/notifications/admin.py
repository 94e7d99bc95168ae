"""
Django admin configuration for notifications.
"""

from django.contrib import admin

from notifications.models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    """Admin configuration for Notification."""

    list_display = [
        "id",
        "recipient",
        "notification_type",
        "title",
        "is_read",
        "created_at",
    ]
    list_filter = ["notification_type", "is_read", "created_at"]
    search_fields = ["recipient__email", "title", "message"]
    raw_id_fields = ["recipient"]
    readonly_fields = ["id", "read_at", "created_at", "updated_at"]
    ordering = ["-created_at"]
