"""
Serializers for chat API.

This module provides serializers for the chat system:
- Chat serializers (read, get-or-create)
- Message serializers (read, create)
- History page and one-view status responses

Serializer Hierarchy:
    ChatSerializer: Chat with participants and last message preview
    ChatCreateSerializer: Partner id for get-or-create

    MessageSerializer: Message with tombstone handling
    MessagePreviewSerializer: Minimal message for chat list preview
    MessageCreateSerializer: Send new message
    MessageEditSerializer: New text for an edited message
    MessageReactionSerializer: One user's reaction
    ReactionCreateSerializer: Emoji to toggle
    MessagePageSerializer: {"results", "next_cursor", "has_more"}
    ViewStatusSerializer: One-view tracking details

Design Decisions:
    - Read and write serializers are separate
    - Deleted message content is replaced with the placeholder
    - Cursor tokens are passed through untouched; clients never parse them
"""

from __future__ import annotations

from rest_framework import serializers

from authentication.serializers import UserSerializer
from core.model_mixins import validate_object_id

from chat.constants import MESSAGE_CONFIG, REACTION_CONFIG
from chat.models import CONTENT_REQUIRED_TYPES, Chat, Message, MessageReaction, MessageType


# =============================================================================
# Message Serializers
# =============================================================================


class MessagePreviewSerializer(serializers.ModelSerializer):
    """Minimal message representation used in chat lists."""

    content = serializers.CharField(source="get_display_content", read_only=True)

    class Meta:
        model = Message
        fields = ["id", "sender_id", "content", "message_type", "created_at"]
        read_only_fields = fields


class MessageReactionSerializer(serializers.ModelSerializer):
    user_id = serializers.CharField(read_only=True)

    class Meta:
        model = MessageReaction
        fields = ["user_id", "emoji", "created_at"]
        read_only_fields = fields


class MessageSerializer(serializers.ModelSerializer):
    """
    Full message serializer for history pages.

    Includes sender details, reply target, reactions and attachment
    metadata.
    """

    sender = UserSerializer(read_only=True)
    content = serializers.SerializerMethodField(
        help_text="Message content (placeholder if deleted)"
    )
    chat_id = serializers.CharField(read_only=True)
    reply_to = MessagePreviewSerializer(read_only=True, allow_null=True)
    reactions = MessageReactionSerializer(many=True, read_only=True)

    class Meta:
        model = Message
        fields = [
            "id",
            "chat_id",
            "sender",
            "content",
            "message_type",
            "file_url",
            "file_name",
            "file_size",
            "mime_type",
            "thumbnail_url",
            "duration",
            "is_one_view",
            "view_count",
            "viewed_at",
            "reply_to",
            "reactions",
            "is_edited",
            "edited_at",
            "is_deleted_for_everyone",
            "created_at",
        ]
        read_only_fields = fields

    def get_content(self, obj: Message) -> str:
        return obj.get_display_content()


class MessageCreateSerializer(serializers.Serializer):
    """
    Serializer for sending messages.

    Field-level checks only; participant and reply rules are enforced by
    MessageService.send_message.
    """

    content = serializers.CharField(
        max_length=MESSAGE_CONFIG.MAX_CONTENT_LENGTH,
        required=False,
        allow_blank=True,
        default="",
        trim_whitespace=True,
    )
    message_type = serializers.ChoiceField(
        choices=MessageType.choices,
        default=MessageType.TEXT,
    )
    reply_to_id = serializers.CharField(
        required=False,
        allow_null=True,
        validators=[validate_object_id],
    )
    is_one_view = serializers.BooleanField(default=False)
    file_url = serializers.URLField(max_length=500, required=False, default="")
    file_name = serializers.CharField(max_length=255, required=False, default="")
    file_size = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    mime_type = serializers.CharField(max_length=100, required=False, default="")
    thumbnail_url = serializers.URLField(max_length=500, required=False, default="")
    duration = serializers.FloatField(min_value=0, required=False, allow_null=True)

    def validate(self, attrs):
        message_type = attrs.get("message_type", MessageType.TEXT)
        if message_type in CONTENT_REQUIRED_TYPES and not attrs.get("content"):
            raise serializers.ValidationError(
                {"content": "Content is required for this message type."}
            )
        if message_type not in CONTENT_REQUIRED_TYPES and not attrs.get("file_url"):
            raise serializers.ValidationError(
                {"file_url": "A file is required for this message type."}
            )
        return attrs


class MessageEditSerializer(serializers.Serializer):
    content = serializers.CharField(
        max_length=MESSAGE_CONFIG.MAX_CONTENT_LENGTH,
        trim_whitespace=True,
    )


class ReactionCreateSerializer(serializers.Serializer):
    """
    Emoji to toggle on a message.

    The allowed set is checked by MessageService.react_to_message so the
    error code matches the service layer.
    """

    emoji = serializers.CharField(
        max_length=REACTION_CONFIG.MAX_EMOJI_LENGTH,
        required=False,
        allow_blank=True,
        default="",
    )


class MessagePageSerializer(serializers.Serializer):
    """Response envelope for one page of message history."""

    results = MessageSerializer(many=True, source="items")
    next_cursor = serializers.CharField(allow_null=True)
    has_more = serializers.BooleanField()


class ViewStatusSerializer(serializers.Serializer):
    """One-view tracking details for a message."""

    is_one_view = serializers.BooleanField()
    view_count = serializers.IntegerField()
    viewed_by = UserSerializer(many=True)
    viewed_at = serializers.DateTimeField(allow_null=True)


class MarkViewedResponseSerializer(serializers.Serializer):
    view_count = serializers.IntegerField()
    viewed_by_count = serializers.IntegerField()


# =============================================================================
# Chat Serializers
# =============================================================================


class ChatSerializer(serializers.ModelSerializer):
    """
    Chat with participants and a preview of the last message.

    partner is the participant other than the requesting user (needs
    "request" in the serializer context).
    """

    participants = UserSerializer(many=True, read_only=True)
    partner = serializers.SerializerMethodField()
    last_message = MessagePreviewSerializer(read_only=True, allow_null=True)

    class Meta:
        model = Chat
        fields = [
            "id",
            "participants",
            "partner",
            "last_message",
            "last_message_at",
            "is_active",
            "created_at",
        ]
        read_only_fields = fields

    def get_partner(self, obj: Chat) -> dict | None:
        request = self.context.get("request")
        if request is None:
            return None
        for participant in obj.participants.all():
            if participant.pk != request.user.pk:
                return UserSerializer(participant).data
        return None


class ChatCreateSerializer(serializers.Serializer):
    """Partner to open (or reopen) a chat with."""

    partner_id = serializers.CharField(validators=[validate_object_id])
