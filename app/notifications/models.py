"""
Notification system models.

Notifications are in-app messages addressed to a single user, such as
"your partner opened the photo you sent". They are created by other apps
through NotificationService and read through the notifications API.

Design Decisions:
    - Notification types are a closed set (NotificationType choices)
    - Title and message are stored fully rendered
    - read_at is set once, when the notification is first marked read

Usage:
    from notifications.models import Notification, NotificationType

    notification = Notification.objects.create(
        recipient=user,
        notification_type=NotificationType.ONE_VIEW_OPENED,
        title="Photo opened",
        message="Alex opened your view-once photo",
    )
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from core.model_mixins import ObjectIdPrimaryKeyMixin
from core.models import BaseModel


class NotificationType(models.TextChoices):
    """Kinds of notification a user can receive."""

    MESSAGE = "message", "Message"
    PARTNER_REQUEST = "partner_request", "Partner Request"
    PARTNER_ACCEPTED = "partner_accepted", "Partner Accepted"
    PARTNER_REJECTED = "partner_rejected", "Partner Rejected"
    FILE_SHARED = "file_shared", "File Shared"
    ONE_VIEW_OPENED = "one_view_opened", "One-View Opened"


class Notification(ObjectIdPrimaryKeyMixin, BaseModel):
    """
    Individual notification record for a user.

    Fields:
        recipient: User receiving the notification (scopes all queries)
        notification_type: One of NotificationType
        title: Rendered title string
        message: Rendered body string
        data: Arbitrary JSON context (chat id, message id, ...)
        is_read: Whether recipient has read this notification
        read_at: When it was first marked read

    Note:
        - recipient CASCADE: Notifications deleted when user deleted
    """

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
        help_text="User receiving this notification",
    )

    notification_type = models.CharField(
        max_length=32,
        choices=NotificationType.choices,
        help_text="Type of this notification",
    )

    title = models.CharField(
        max_length=255,
        help_text="Rendered notification title",
    )

    message = models.TextField(
        help_text="Rendered notification body",
    )

    data = models.JSONField(
        default=dict,
        blank=True,
        help_text="Arbitrary context data",
    )

    is_read = models.BooleanField(
        default=False,
        help_text="Whether recipient has read this notification",
    )

    read_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the notification was first read",
    )

    class Meta:
        db_table = "notifications_notification"
        ordering = ["-created_at", "-id"]
        indexes = [
            # Primary query: user's unread notifications
            models.Index(
                fields=["recipient", "is_read"],
                name="notif_recipient_unread_idx",
            ),
            models.Index(
                fields=["-created_at"],
                name="notif_created_idx",
            ),
        ]

    def __str__(self) -> str:
        read_status = "read" if self.is_read else "unread"
        return (
            f"Notification({self.notification_type}) -> "
            f"User {self.recipient_id} [{read_status}]"
        )
