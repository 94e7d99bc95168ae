"""
Chat system models.

This module defines the data models for partner chats:
- Chat: a private conversation between exactly two users
- Message: an individual message within a chat
- MessageReaction: one participant's emoji reaction to a message

Design Decisions:
    - A chat's participant pair is fixed at creation (no adding/removing)
    - Messages are ordered by (created_at DESC, id DESC); the id tie-break
      is permanent because issued pagination cursors depend on it
    - Message.created_at is stored at millisecond precision so every
      stored value can be written into a cursor and read back unchanged
    - "Delete for everyone" turns the message into a tombstone that both
      participants keep seeing as the deleted placeholder; "delete for me"
      records the user in deleted_for and leaves the row visible to the
      partner
    - is_deleted (soft delete) is reserved for removal by staff or
      maintenance and hides the message from history entirely
    - Each participant has at most one reaction per message
    - One-view messages record who has opened them (viewed_by, view_count)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import models

from core.helpers import now_millis, truncate_to_millis
from core.managers import SoftDeleteManager
from core.model_mixins import ObjectIdPrimaryKeyMixin, SoftDeleteMixin
from core.models import BaseModel

from chat.constants import MESSAGE_CONFIG, REACTION_CONFIG

if TYPE_CHECKING:
    from collections.abc import Iterable

    from authentication.models import User

CHAT_PARTICIPANT_COUNT = 2


class MessageType(models.TextChoices):
    """
    Type of message content.

    TEXT and EMOJI messages require content; the others carry a file
    reference (file_url, file_name, ...) and may have empty content.
    """

    TEXT = "text", "Text"
    IMAGE = "image", "Image"
    VIDEO = "video", "Video"
    AUDIO = "audio", "Audio"
    FILE = "file", "File"
    EMOJI = "emoji", "Emoji"
    STICKER = "sticker", "Sticker"
    VOICE = "voice", "Voice"
    PDF = "pdf", "PDF"


CONTENT_REQUIRED_TYPES = frozenset({MessageType.TEXT, MessageType.EMOJI})


class ChatQuerySet(models.QuerySet):
    """QuerySet helpers for looking up chats by participant."""

    def for_user(self, user: User) -> ChatQuerySet:
        """Chats the user participates in."""
        return self.filter(participants=user)

    def between(self, user: User, partner: User) -> ChatQuerySet:
        """Chats shared by both users."""
        return self.filter(participants=user).filter(participants=partner)

    def active(self) -> ChatQuerySet:
        return self.filter(is_active=True)


class Chat(ObjectIdPrimaryKeyMixin, BaseModel):
    """
    A private chat between exactly two users.

    The two-participant rule is enforced in set_participants() and by an
    m2m_changed guard (see chat.signals), so neither the service layer nor
    the admin can produce a chat with one or three members.

    Fields:
        participants: The two users in the chat
        last_message: Most recent visible message (null until one is sent)
        last_message_at: Timestamp used to sort chat lists
        is_active: False once a chat is retired (e.g. by maintenance repair)

    Relationships:
        messages: All Message records in this chat
    """

    participants = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name="chats",
        help_text="The two users in this chat",
    )

    last_message = models.ForeignKey(
        "chat.Message",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        help_text="Most recent message in this chat",
    )

    last_message_at = models.DateTimeField(
        default=now_millis,
        help_text="Timestamp of most recent message (for sorting chat lists)",
    )

    is_active = models.BooleanField(
        default=True,
        db_index=True,
        help_text="Whether this chat is active",
    )

    objects = ChatQuerySet.as_manager()

    class Meta:
        db_table = "chat_chat"
        ordering = ["-last_message_at", "-id"]
        indexes = [
            models.Index(
                fields=["-last_message_at"],
                name="chat_chat_last_msg_idx",
            ),
        ]

    def __str__(self) -> str:
        """Return human-readable representation."""
        status = "active" if self.is_active else "inactive"
        return f"Chat {self.id} [{status}]"

    def set_participants(self, users: Iterable[User]) -> None:
        """
        Assign the participant pair of a newly created chat.

        Args:
            users: Exactly two distinct users

        Raises:
            django.core.exceptions.ValidationError: If the count differs
        """
        users = list({user.pk: user for user in users}.values())
        if len(users) != CHAT_PARTICIPANT_COUNT:
            raise DjangoValidationError(
                "Chat must have exactly 2 participants",
                code="invalid_participants",
            )
        self.participants.add(*users)

    def has_participant(self, user: User) -> bool:
        """Check if user is one of the chat's participants."""
        return self.participants.filter(pk=user.pk).exists()

    def partner_of(self, user: User) -> User | None:
        """Return the other participant, or None if user is not in the chat."""
        ids = {p.pk: p for p in self.participants.all()}
        if user.pk not in ids:
            return None
        others = [p for pk, p in ids.items() if pk != user.pk]
        return others[0] if others else None

    def touch(self, message: Message) -> None:
        """Record message as the chat's most recent message."""
        self.last_message = message
        self.last_message_at = message.created_at
        self.save(update_fields=["last_message", "last_message_at", "updated_at"])


class Message(ObjectIdPrimaryKeyMixin, SoftDeleteMixin, BaseModel):
    """
    A message within a chat.

    Deleted for Everyone:
        When the sender deletes for everyone, is_deleted_for_everyone is
        set and content is replaced by MESSAGE_CONFIG.DELETED_PLACEHOLDER.
        The tombstone stays in both participants' history.

    Soft Delete Behavior:
        When is_deleted=True (removed by staff or maintenance):
        - the default manager hides the message
        - the row still anchors pagination cursors that reference it

    Editing:
        Text messages can be edited by their sender; is_edited and
        edited_at record the last edit.

    Per-user Deletion:
        deleted_for lists users who removed the message from their own
        view only. Their history skips it; the partner still sees it.

    One-view Messages:
        is_one_view messages record each participant who opened them in
        viewed_by. view_count counts distinct viewers and viewed_at is the
        time of the first view.

    Fields:
        chat: Chat this message belongs to
        sender: User who sent the message
        content: Message text (required for text and emoji)
        message_type: Content type (see MessageType)
        file_url, file_name, file_size, mime_type, thumbnail_url, duration:
            Attachment metadata for media messages
        reply_to: Message this one replies to

    Relationships:
        reactions: MessageReaction records, at most one per user
    """

    created_at = models.DateTimeField(
        default=now_millis,
        editable=False,
        help_text="Timestamp when this message was created (millisecond precision)",
    )

    chat = models.ForeignKey(
        Chat,
        on_delete=models.CASCADE,
        related_name="messages",
        help_text="Chat this message belongs to",
    )

    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
        help_text="User who sent this message",
    )

    content = models.TextField(
        blank=True,
        default="",
        help_text="Message text",
    )

    message_type = models.CharField(
        max_length=10,
        choices=MessageType.choices,
        default=MessageType.TEXT,
        help_text="Type of message content",
    )

    file_url = models.URLField(max_length=500, blank=True, default="")
    file_name = models.CharField(max_length=255, blank=True, default="")
    file_size = models.PositiveBigIntegerField(null=True, blank=True)
    mime_type = models.CharField(max_length=100, blank=True, default="")
    thumbnail_url = models.URLField(max_length=500, blank=True, default="")
    duration = models.FloatField(
        null=True,
        blank=True,
        help_text="Length in seconds for audio, voice and video",
    )

    is_one_view = models.BooleanField(
        default=False,
        help_text="Whether this message can only be viewed once per recipient",
    )

    viewed_by = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name="viewed_messages",
        help_text="Users who opened this one-view message",
    )

    viewed_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When this one-view message was first opened",
    )

    view_count = models.PositiveIntegerField(
        default=0,
        help_text="Number of distinct users who opened this message",
    )

    reply_to = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="replies",
        help_text="Message this one replies to",
    )

    deleted_for = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name="hidden_messages",
        help_text="Users who deleted this message for themselves",
    )

    is_deleted_for_everyone = models.BooleanField(
        default=False,
        help_text="Whether the sender deleted this message for everyone",
    )

    is_edited = models.BooleanField(
        default=False,
        help_text="Whether the content was edited after sending",
    )

    edited_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the content was last edited",
    )

    objects = SoftDeleteManager()
    all_objects = models.Manager()

    class Meta:
        db_table = "chat_message"
        ordering = ["-created_at", "-id"]
        base_manager_name = "all_objects"
        indexes = [
            # Keyset pagination within a chat
            models.Index(
                fields=["chat", "-created_at", "-id"],
                name="chat_msg_chat_cursor_idx",
            ),
            models.Index(
                fields=["sender"],
                name="chat_msg_sender_idx",
            ),
            models.Index(
                fields=["is_one_view"],
                name="chat_msg_one_view_idx",
            ),
        ]

    def __str__(self) -> str:
        """Return human-readable representation."""
        preview = self.content[:50] + "..." if len(self.content) > 50 else self.content
        deleted_str = " [deleted]" if self.is_deleted or self.is_deleted_for_everyone else ""
        return f"User {self.sender_id}: {preview}{deleted_str}"

    def save(self, *args, **kwargs):
        if self.created_at is not None:
            self.created_at = truncate_to_millis(self.created_at)
        super().save(*args, **kwargs)

    def clean(self):
        super().clean()
        if self.message_type in CONTENT_REQUIRED_TYPES and not self.content.strip():
            raise DjangoValidationError(
                {"content": f"Content is required for {self.message_type} messages"}
            )
        if len(self.content) > MESSAGE_CONFIG.MAX_CONTENT_LENGTH:
            raise DjangoValidationError(
                {"content": "Message content is too long"}
            )

    @property
    def is_media(self) -> bool:
        """Check if this message carries an attachment."""
        return self.message_type not in CONTENT_REQUIRED_TYPES

    def get_display_content(self) -> str:
        """Content as shown to clients (placeholder once deleted)."""
        if self.is_deleted or self.is_deleted_for_everyone:
            return MESSAGE_CONFIG.DELETED_PLACEHOLDER
        return self.content

    def is_hidden_for(self, user: User) -> bool:
        """Check if user deleted this message for themselves."""
        return self.deleted_for.filter(pk=user.pk).exists()

    def has_been_viewed_by(self, user: User) -> bool:
        return self.viewed_by.filter(pk=user.pk).exists()


class MessageReaction(ObjectIdPrimaryKeyMixin, BaseModel):
    """
    A participant's emoji reaction to a message.

    A user has at most one reaction per message. Reacting again with the
    same emoji removes it; a different emoji replaces it (see
    MessageService.react_to_message).
    """

    message = models.ForeignKey(
        Message,
        on_delete=models.CASCADE,
        related_name="reactions",
        help_text="Message reacted to",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="message_reactions",
        help_text="User who reacted",
    )

    emoji = models.CharField(
        max_length=REACTION_CONFIG.MAX_EMOJI_LENGTH,
        help_text="Reaction emoji (one of REACTION_CONFIG.ALLOWED_EMOJIS)",
    )

    class Meta:
        db_table = "chat_message_reaction"
        ordering = ["created_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["message", "user"],
                name="chat_reaction_one_per_user",
            ),
        ]
        indexes = [
            models.Index(fields=["user"], name="chat_reaction_user_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} reacted {self.emoji} to {self.message_id}"
