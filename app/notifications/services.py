"""
Notification service layer.

Services:
    NotificationService: Create, list, read and delete notifications

Usage:
    from notifications.services import NotificationService

    result = NotificationService.create(
        recipient=user,
        notification_type=NotificationType.FILE_SHARED,
        title="New photo",
        message="Your partner shared a photo",
        data={"media_item_id": item.id},
    )
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.utils import timezone

from core.services import BaseService, ServiceResult

from notifications.models import Notification, NotificationType

if TYPE_CHECKING:
    from typing import Any

    from django.db.models import QuerySet

    from authentication.models import User
    from chat.models import Message


class NotificationService(BaseService):
    """
    Service for notification operations.

    Methods:
        create: Create a notification for a user
        list_for_user: User's notifications, newest first
        mark_as_read: Mark one notification read (owner only)
        mark_all_as_read: Mark every unread notification read
        get_unread_count: Badge count
        delete: Remove a notification (owner only)
        notify_one_view_opened: Tell a sender their one-view message was opened
    """

    @classmethod
    def create(
        cls,
        recipient: User,
        notification_type: str,
        title: str,
        message: str,
        data: dict[str, Any] | None = None,
    ) -> ServiceResult[Notification]:
        """
        Create a notification.

        Args:
            recipient: User to notify
            notification_type: One of NotificationType
            title: Rendered title
            message: Rendered body
            data: Optional JSON context

        Returns:
            ServiceResult with the new Notification

        Error codes:
            INVALID_TYPE: Unknown notification type
            VALIDATION_ERROR: Title or message missing
        """
        if notification_type not in NotificationType.values:
            return ServiceResult.failure(
                f"Unknown notification type: {notification_type}",
                error_code="INVALID_TYPE",
            )

        errors = {}
        if not title or not title.strip():
            errors["title"] = ["This field is required."]
        if not message or not message.strip():
            errors["message"] = ["This field is required."]
        if errors:
            return ServiceResult.failure(
                "Title and message are required",
                error_code="VALIDATION_ERROR",
                errors=errors,
            )

        notification = Notification.objects.create(
            recipient=recipient,
            notification_type=notification_type,
            title=title.strip(),
            message=message.strip(),
            data=data or {},
        )

        cls.get_logger().debug(
            f"Created {notification_type} notification {notification.id} "
            f"for user {recipient.id}"
        )
        return ServiceResult.success(notification)

    @classmethod
    def list_for_user(cls, user: User, unread_only: bool = False) -> QuerySet:
        """User's notifications, newest first."""
        queryset = Notification.objects.filter(recipient=user)
        if unread_only:
            queryset = queryset.filter(is_read=False)
        return queryset.order_by("-created_at", "-id")

    @classmethod
    def mark_as_read(
        cls,
        notification: Notification,
        user: User,
    ) -> ServiceResult[Notification]:
        """
        Mark a single notification as read.

        Idempotent: an already-read notification keeps its original read_at.

        Error codes:
            NOT_OWNER: User doesn't own the notification
        """
        if notification.recipient_id != user.pk:
            cls.get_logger().warning(
                f"User {user.id} attempted to mark notification {notification.id} "
                f"owned by user {notification.recipient_id}"
            )
            return ServiceResult.failure(
                "Cannot mark notification you don't own",
                error_code="NOT_OWNER",
            )

        if not notification.is_read:
            notification.is_read = True
            notification.read_at = timezone.now()
            notification.save(update_fields=["is_read", "read_at", "updated_at"])

        return ServiceResult.success(notification)

    @classmethod
    def mark_all_as_read(cls, user: User) -> ServiceResult[int]:
        """
        Mark all user's unread notifications as read.

        Returns:
            ServiceResult with count of notifications marked as read
        """
        now = timezone.now()
        count = Notification.objects.filter(recipient=user, is_read=False).update(
            is_read=True, read_at=now, updated_at=now
        )

        cls.get_logger().info(f"Marked {count} notifications as read for user {user.id}")
        return ServiceResult.success(count)

    @classmethod
    def get_unread_count(cls, user: User) -> int:
        return Notification.objects.filter(recipient=user, is_read=False).count()

    @classmethod
    def delete(cls, notification: Notification, user: User) -> ServiceResult[None]:
        """
        Delete a notification.

        Error codes:
            NOT_OWNER: User doesn't own the notification
        """
        if notification.recipient_id != user.pk:
            return ServiceResult.failure(
                "Cannot delete notification you don't own",
                error_code="NOT_OWNER",
            )

        notification_id = notification.id
        notification.delete()
        cls.get_logger().debug(f"Deleted notification {notification_id}")
        return ServiceResult.success(None)

    @classmethod
    def notify_one_view_opened(
        cls,
        message: Message,
        viewer: User,
    ) -> ServiceResult[Notification]:
        """Tell the sender of a one-view message that viewer opened it."""
        label = message.get_message_type_display().lower()
        return cls.create(
            recipient=message.sender,
            notification_type=NotificationType.ONE_VIEW_OPENED,
            title="View-once message opened",
            message=f"{viewer.get_short_name()} opened your view-once {label}",
            data={
                "chat_id": message.chat_id,
                "message_id": message.id,
                "viewer_id": viewer.id,
            },
        )
