"""
Serializers for notification API.

Serializers:
    NotificationSerializer: Read-only notification representation
    UnreadCountSerializer: Response for unread count endpoint
    MarkAllReadResponseSerializer: Response for mark all read endpoint
"""

from rest_framework import serializers

from notifications.models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    """
    Serializer for Notification model.

    Usage:
        serializer = NotificationSerializer(notification)
        serializer = NotificationSerializer(notifications, many=True)
    """

    type = serializers.CharField(source="notification_type", read_only=True)

    class Meta:
        model = Notification
        fields = [
            "id",
            "type",
            "title",
            "message",
            "data",
            "is_read",
            "read_at",
            "created_at",
        ]
        read_only_fields = fields


class UnreadCountSerializer(serializers.Serializer):
    """Response serializer for unread count endpoint."""

    unread_count = serializers.IntegerField()


class MarkAllReadResponseSerializer(serializers.Serializer):
    """Response serializer for mark all read endpoint."""

    marked_count = serializers.IntegerField()
