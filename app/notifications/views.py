"""
Views for notification API.

Endpoints:
    GET /api/v1/notifications/ - List user's notifications (paginated)
    DELETE /api/v1/notifications/{id}/ - Delete a notification
    GET /api/v1/notifications/unread-count/ - Get unread count
    POST /api/v1/notifications/{id}/read/ - Mark single notification as read
    POST /api/v1/notifications/read-all/ - Mark all notifications as read
"""

from __future__ import annotations

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from drf_spectacular.utils import (
    extend_schema,
    extend_schema_view,
    OpenApiParameter,
    OpenApiResponse,
)

from notifications.models import Notification
from notifications.serializers import (
    MarkAllReadResponseSerializer,
    NotificationSerializer,
    UnreadCountSerializer,
)
from notifications.services import NotificationService


@extend_schema_view(
    list=extend_schema(
        operation_id="list_notifications",
        summary="List notifications",
        description="Get paginated list of notifications for the authenticated user.",
        parameters=[
            OpenApiParameter(
                name="unread_only",
                type=bool,
                location=OpenApiParameter.QUERY,
                description="Only return unread notifications",
                required=False,
            ),
        ],
        tags=["Notifications"],
    ),
    destroy=extend_schema(
        operation_id="delete_notification",
        summary="Delete notification",
        tags=["Notifications"],
    ),
)
class NotificationViewSet(
    mixins.ListModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for notification operations.

    Provides:
    - list: GET / - List user's notifications
    - destroy: DELETE /{id}/ - Delete notification
    - unread_count: GET /unread-count/ - Get badge count
    - read: POST /{id}/read/ - Mark single as read
    - read_all: POST /read-all/ - Mark all as read

    Users can only see and change their own notifications; other users'
    notifications return 404.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = NotificationSerializer

    def get_queryset(self):
        unread_only = self.request.query_params.get("unread_only", "").lower() == "true"
        return NotificationService.list_for_user(self.request.user, unread_only=unread_only)

    def perform_destroy(self, instance: Notification):
        NotificationService.delete(instance, self.request.user)

    @extend_schema(
        operation_id="get_unread_notification_count",
        summary="Get unread notification count",
        responses={200: UnreadCountSerializer},
        tags=["Notifications"],
    )
    @action(detail=False, methods=["get"], url_path="unread-count")
    def unread_count(self, request):
        """
        Get count of unread notifications.

        Returns:
            {"unread_count": <int>}
        """
        count = NotificationService.get_unread_count(request.user)
        return Response(UnreadCountSerializer({"unread_count": count}).data)

    @extend_schema(
        operation_id="mark_notification_read",
        summary="Mark notification as read",
        responses={
            200: NotificationSerializer,
            404: OpenApiResponse(description="Notification not found"),
        },
        tags=["Notifications"],
    )
    @action(detail=True, methods=["post"])
    def read(self, request, pk=None):
        """Mark single notification as read (idempotent)."""
        notification = self.get_object()
        result = NotificationService.mark_as_read(notification, request.user)

        if not result.success:
            return Response(
                {"error": result.error, "error_code": result.error_code},
                status=status.HTTP_400_BAD_REQUEST,
            )

        return Response(self.get_serializer(result.data).data)

    @extend_schema(
        operation_id="mark_all_notifications_read",
        summary="Mark all notifications as read",
        responses={200: MarkAllReadResponseSerializer},
        tags=["Notifications"],
    )
    @action(detail=False, methods=["post"], url_path="read-all")
    def read_all(self, request):
        """
        Mark all user's notifications as read.

        Returns:
            {"marked_count": <int>}
        """
        result = NotificationService.mark_all_as_read(request.user)
        return Response(MarkAllReadResponseSerializer({"marked_count": result.data}).data)
