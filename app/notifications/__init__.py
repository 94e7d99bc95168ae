"""
Notifications app for in-app notifications.

This app provides:
- Notification model with a closed set of notification types
- NotificationService for creating and managing notifications
- REST API for listing, reading and deleting notifications

Usage:
    from notifications.services import NotificationService

    result = NotificationService.create(
        recipient=user,
        notification_type="message",
        title="New message",
        message="You have a new message",
    )

    if result.success:
        notification = result.data
"""
