"""
ViewSets for chat API.

This module provides REST API endpoints for the chat system:
- ChatViewSet: Chat listing, get-or-create and message history
- MessageViewSet: Per-message actions (edit, reactions, one-view tracking,
  deletion)

URL Structure:
    /api/v1/chat/chats/                         GET, POST
    /api/v1/chat/chats/{id}/                    GET
    /api/v1/chat/chats/{id}/messages/           GET, POST
    /api/v1/chat/messages/{id}/                 PATCH (edit), DELETE (for everyone)
    /api/v1/chat/messages/{id}/react/           POST
    /api/v1/chat/messages/{id}/view/            POST
    /api/v1/chat/messages/{id}/view-status/     GET
    /api/v1/chat/messages/{id}/hide/            POST (delete for me)

History Paging:
    GET .../messages/?page_size=20&cursor=<token>&direction=older

    The response carries next_cursor while more messages remain. A 400
    with error_code INVALID_CURSOR means the token is unusable; clients
    drop it and request the first page again.

Design Decisions:
    - All operations go through the service layer
    - Participant checks happen in both the permission class and the service
    - Service failures map to 400 (403 for ownership/participation codes)
"""

from __future__ import annotations

from django.shortcuts import get_object_or_404
from django.contrib.auth import get_user_model
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
    extend_schema_view,
)
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.exceptions import ValidationError
from core.helpers import OBJECT_ID_LENGTH

from chat.models import Chat, Message
from chat.pagination import PageDirection, parse_page_size
from chat.permissions import IsChatParticipant
from chat.serializers import (
    ChatCreateSerializer,
    ChatSerializer,
    MarkViewedResponseSerializer,
    MessageCreateSerializer,
    MessageEditSerializer,
    MessagePageSerializer,
    MessageReactionSerializer,
    MessageSerializer,
    ReactionCreateSerializer,
    ViewStatusSerializer,
)
from chat.services import (
    ChatService,
    MessageService,
    get_default_page_size,
    get_max_page_size,
)

User = get_user_model()

OBJECT_ID_LOOKUP = f"[0-9a-f]{{{OBJECT_ID_LENGTH}}}"

FORBIDDEN_CODES = {"NOT_PARTICIPANT", "NOT_SENDER"}


def _error_response(result) -> Response:
    """Map a failed ServiceResult to a response."""
    status_code = (
        status.HTTP_403_FORBIDDEN
        if result.error_code in FORBIDDEN_CODES
        else status.HTTP_400_BAD_REQUEST
    )
    return Response(
        {"error": result.error, "error_code": result.error_code},
        status=status_code,
    )


@extend_schema_view(
    list=extend_schema(
        operation_id="list_chats",
        summary="List chats",
        description="Active chats of the current user, most recent activity first.",
        tags=["Chat"],
    ),
    retrieve=extend_schema(
        operation_id="get_chat",
        summary="Get chat",
        tags=["Chat"],
    ),
)
class ChatViewSet(viewsets.ReadOnlyModelViewSet):
    """
    ViewSet for chats.

    list:
        Get the user's active chats.

    create:
        Open the chat with a partner, creating it on first contact.

    messages:
        GET one page of history, POST a new message.
    """

    serializer_class = ChatSerializer
    permission_classes = [IsAuthenticated, IsChatParticipant]
    lookup_value_regex = OBJECT_ID_LOOKUP
    pagination_class = None

    def get_queryset(self):
        return ChatService.list_user_chats(self.request.user)

    @extend_schema(
        operation_id="open_chat",
        summary="Open chat with partner",
        description="Returns the existing chat with the partner or creates one.",
        request=ChatCreateSerializer,
        responses={
            200: ChatSerializer,
            201: ChatSerializer,
            400: OpenApiResponse(description="Same user or inactive partner"),
            404: OpenApiResponse(description="Partner not found"),
        },
        tags=["Chat"],
    )
    def create(self, request):
        """Get or create the chat with partner_id."""
        serializer = ChatCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        partner = get_object_or_404(User, pk=serializer.validated_data["partner_id"])
        existed = ChatService.are_partners(request.user, partner)

        result = ChatService.get_or_create_chat(request.user, partner)
        if not result.success:
            return _error_response(result)

        return Response(
            ChatSerializer(result.data, context={"request": request}).data,
            status=status.HTTP_200_OK if existed else status.HTTP_201_CREATED,
        )

    @extend_schema(
        methods=["GET"],
        operation_id="list_messages",
        summary="Get message history page",
        description=(
            "One page of the chat's history. Pass next_cursor from the previous "
            "response as cursor to continue. direction=older (default) pages back "
            "in time, direction=newer pages forward."
        ),
        parameters=[
            OpenApiParameter(
                name="cursor",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="next_cursor from the previous page",
                required=False,
            ),
            OpenApiParameter(
                name="page_size",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                description="Messages per page (default 20, max 100)",
                required=False,
            ),
            OpenApiParameter(
                name="direction",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                enum=[d.value for d in PageDirection],
                required=False,
            ),
        ],
        responses={
            200: MessagePageSerializer,
            400: OpenApiResponse(description="Invalid cursor, page size or direction"),
        },
        tags=["Chat - Messages"],
    )
    @extend_schema(
        methods=["POST"],
        operation_id="send_message",
        summary="Send message",
        request=MessageCreateSerializer,
        responses={201: MessageSerializer},
        tags=["Chat - Messages"],
    )
    @action(detail=True, methods=["get", "post"])
    def messages(self, request, pk=None):
        """History page (GET) or send (POST)."""
        chat = self.get_object()
        if request.method == "POST":
            return self._send_message(request, chat)

        try:
            page_size = parse_page_size(
                request.query_params.get("page_size"),
                default=get_default_page_size(),
                max_page_size=get_max_page_size(),
            )
            result = MessageService.get_messages(
                chat=chat,
                user=request.user,
                page_size=page_size,
                cursor=request.query_params.get("cursor") or None,
                direction=request.query_params.get("direction") or PageDirection.OLDER,
            )
        except ValidationError as e:
            return Response(e.to_dict(), status=status.HTTP_400_BAD_REQUEST)

        if not result.success:
            return _error_response(result)

        return Response(MessagePageSerializer(result.data).data)

    def _send_message(self, request, chat: Chat) -> Response:
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = MessageService.send_message(
            chat=chat,
            sender=request.user,
            **serializer.validated_data,
        )
        if not result.success:
            return _error_response(result)

        return Response(MessageSerializer(result.data).data, status=status.HTTP_201_CREATED)


@extend_schema_view(
    destroy=extend_schema(
        operation_id="delete_message_for_everyone",
        summary="Delete message for everyone",
        description=(
            "Sender only. The message stays in both histories as a tombstone "
            "showing the deleted placeholder."
        ),
        responses={204: None, 400: OpenApiResponse(description="Already deleted")},
        tags=["Chat - Messages"],
    ),
    partial_update=extend_schema(
        operation_id="edit_message",
        summary="Edit message",
        description="Sender only; text messages only.",
        request=MessageEditSerializer,
        responses={200: MessageSerializer},
        tags=["Chat - Messages"],
    ),
)
class MessageViewSet(viewsets.GenericViewSet):
    """
    ViewSet for actions on a single message.

    partial_update:
        Edit the text of a message (sender only).

    destroy:
        Delete for everyone (sender only).

    react:
        Add, replace or remove the user's reaction.

    view / view-status:
        One-view message tracking.

    hide:
        Delete for me; the partner still sees the message.
    """

    serializer_class = MessageSerializer
    permission_classes = [IsAuthenticated, IsChatParticipant]
    lookup_value_regex = OBJECT_ID_LOOKUP

    def get_queryset(self):
        """Messages in the user's chats."""
        return Message.objects.filter(chat__participants=self.request.user).select_related(
            "chat", "sender"
        )

    def partial_update(self, request, pk=None):
        message = self.get_object()
        serializer = MessageEditSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = MessageService.edit_message(
            message, request.user, serializer.validated_data["content"]
        )
        if not result.success:
            return _error_response(result)
        return Response(MessageSerializer(result.data).data)

    def destroy(self, request, pk=None):
        message = self.get_object()
        result = MessageService.delete_for_everyone(message, request.user)
        if not result.success:
            return _error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="mark_message_viewed",
        summary="Mark one-view message as viewed",
        request=None,
        responses={200: MarkViewedResponseSerializer},
        tags=["Chat - Messages"],
    )
    @action(detail=True, methods=["post"])
    def view(self, request, pk=None):
        message = self.get_object()
        result = MessageService.mark_viewed(message, request.user)
        if not result.success:
            return _error_response(result)
        return Response(MarkViewedResponseSerializer(result.data).data)

    @extend_schema(
        operation_id="get_message_view_status",
        summary="Get one-view status",
        responses={200: ViewStatusSerializer},
        tags=["Chat - Messages"],
    )
    @action(detail=True, methods=["get"], url_path="view-status")
    def view_status(self, request, pk=None):
        message = self.get_object()
        result = MessageService.get_view_status(message, request.user)
        if not result.success:
            return _error_response(result)
        return Response(ViewStatusSerializer(result.data).data)

    @extend_schema(
        operation_id="delete_message_for_me",
        summary="Delete message for me",
        request=None,
        responses={204: None},
        tags=["Chat - Messages"],
    )
    @action(detail=True, methods=["post"])
    def hide(self, request, pk=None):
        message = self.get_object()
        result = MessageService.delete_for_me(message, request.user)
        if not result.success:
            return _error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="react_to_message",
        summary="Toggle reaction",
        description=(
            "Reacting with a new emoji adds it, the same emoji again removes it "
            "and a different emoji replaces the user's previous reaction."
        ),
        request=ReactionCreateSerializer,
        responses={200: MessageReactionSerializer(many=True)},
        tags=["Chat - Messages"],
    )
    @action(detail=True, methods=["post"])
    def react(self, request, pk=None):
        message = self.get_object()
        serializer = ReactionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = MessageService.react_to_message(
            message, request.user, serializer.validated_data["emoji"]
        )
        if not result.success:
            return _error_response(result)
        return Response(MessageReactionSerializer(result.data, many=True).data)
