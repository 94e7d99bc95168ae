"""
Factory Boy factories for notification models.

Usage:
    from notifications.tests.factories import NotificationFactory

    notification = NotificationFactory(recipient=user)
    read = NotificationFactory(recipient=user, is_read=True)
"""

import factory
from django.utils import timezone

from authentication.tests.factories import UserFactory
from notifications.models import Notification, NotificationType


class NotificationFactory(factory.django.DjangoModelFactory):
    """Factory for Notification model (unread FILE_SHARED by default)."""

    class Meta:
        model = Notification

    recipient = factory.SubFactory(UserFactory)
    notification_type = NotificationType.FILE_SHARED
    title = factory.Sequence(lambda n: f"Notification {n}")
    message = "Your partner shared a file"
    data = factory.LazyFunction(dict)
    is_read = False
    read_at = factory.LazyAttribute(lambda o: timezone.now() if o.is_read else None)
