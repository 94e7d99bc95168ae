"""
Chat system service layer.

This module provides the business logic for partner chats, encapsulating
all operations on chats and messages.

Services:
    ChatService: Chat lifecycle (get or create, create, list, last message)
    MessageService: Message operations (send, history, one-view, edit,
        reactions, delete)

Design Principles:
    - Services are stateless (use class methods)
    - Expected failures return ServiceResult.failure()
    - Pagination errors (InvalidCursorError, InvalidPageSizeError) are raised
    - Unexpected failures raise exceptions
    - All multi-step writes run in a transaction

Usage:
    from chat.services import ChatService, MessageService

    result = ChatService.get_or_create_chat(user, partner)
    chat = result.data

    result = MessageService.send_message(chat, sender=user, content="Hello!")

    page = MessageService.get_messages(chat, user, page_size=20).data
    older = MessageService.get_messages(
        chat, user, page_size=20, cursor=page.next_cursor
    ).data
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.conf import settings
from django.db.models import F
from django.utils import timezone

from core.diagnostics import LoggingDiagnosticSink
from core.services import BaseService, ServiceResult

from chat.constants import MESSAGE_CONFIG, PAGINATION_CONFIG, REACTION_CONFIG
from chat.models import (
    CHAT_PARTICIPANT_COUNT,
    CONTENT_REQUIRED_TYPES,
    Chat,
    Message,
    MessageReaction,
    MessageType,
)
from chat.pagination import (
    KeysetPaginator,
    MessagePage,
    PageDirection,
    PageRequest,
    QuerySetMessageStore,
)

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Any

    from authentication.models import User
    from core.diagnostics import DiagnosticSink

    from chat.cursors import MessageCursorCodec


def get_default_page_size() -> int:
    """Default message page size (settings.CHAT_MESSAGE_PAGE_SIZE)."""
    return getattr(settings, "CHAT_MESSAGE_PAGE_SIZE", PAGINATION_CONFIG.DEFAULT_PAGE_SIZE)


def get_max_page_size() -> int:
    """Largest accepted message page size (settings.CHAT_MESSAGE_MAX_PAGE_SIZE)."""
    return getattr(settings, "CHAT_MESSAGE_MAX_PAGE_SIZE", PAGINATION_CONFIG.MAX_PAGE_SIZE)


class ChatService(BaseService):
    """
    Service for chat lifecycle operations.

    Methods:
        get_or_create_chat: Return the active chat shared with a partner
        are_partners: Check whether two users share an active chat
        get_chat_for_user: Look up a chat the user participates in
        create_chat: Create a chat for exactly two users
        list_user_chats: Active chats of a user, most recent first
        refresh_last_message: Recompute last_message from visible messages
    """

    @classmethod
    def get_or_create_chat(cls, user: User, partner: User) -> ServiceResult[Chat]:
        """
        Return the active chat between user and partner, creating it if needed.

        Args:
            user: Requesting user
            partner: The other participant

        Returns:
            ServiceResult with Chat (existing or new)

        Error codes:
            SAME_USER: Cannot open a chat with yourself
            PARTNER_INACTIVE: Partner account is deactivated
        """
        if user.pk == partner.pk:
            return ServiceResult.failure(
                "Cannot create a chat with yourself",
                error_code="SAME_USER",
            )

        if not partner.is_active:
            return ServiceResult.failure(
                "Partner account is not active",
                error_code="PARTNER_INACTIVE",
            )

        existing = Chat.objects.between(user, partner).active().first()
        if existing:
            cls.get_logger().debug(
                f"Found existing chat {existing.id} between users {user.id} and {partner.id}"
            )
            return ServiceResult.success(existing)

        return cls.create_chat([user, partner])

    @classmethod
    def create_chat(cls, participants: Iterable[User]) -> ServiceResult[Chat]:
        """
        Create a chat for a participant pair.

        Args:
            participants: Exactly two distinct users

        Returns:
            ServiceResult with the new Chat

        Error codes:
            INVALID_PARTICIPANTS: Participant count is not two
        """
        users = list({user.pk: user for user in participants}.values())
        if len(users) != CHAT_PARTICIPANT_COUNT:
            return ServiceResult.failure(
                "Chat must have exactly 2 participants",
                error_code="INVALID_PARTICIPANTS",
            )

        with cls.atomic():
            chat = Chat.objects.create()
            chat.set_participants(users)

        cls.get_logger().info(
            f"Created chat {chat.id} between users {users[0].id} and {users[1].id}"
        )
        return ServiceResult.success(chat)

    @classmethod
    def list_user_chats(cls, user: User):
        """
        Active chats of a user, most recent activity first.

        Returns:
            QuerySet of Chat with participants and last_message loaded
        """
        return (
            Chat.objects.for_user(user)
            .active()
            .select_related("last_message")
            .prefetch_related("participants")
            .order_by("-last_message_at", "-id")
        )

    @classmethod
    def are_partners(cls, user: User, partner: User) -> bool:
        """Check if two distinct users share an active chat."""
        if user.pk == partner.pk:
            return False
        return Chat.objects.between(user, partner).active().exists()

    @classmethod
    def get_chat_for_user(cls, chat_id: str, user: User) -> ServiceResult[Chat]:
        """
        Look up a chat the user participates in.

        Error codes:
            CHAT_NOT_FOUND: No chat with that id
            NOT_PARTICIPANT: User is not in the chat
        """
        chat = Chat.objects.filter(pk=chat_id).first()
        if chat is None:
            return ServiceResult.failure("Chat not found", error_code="CHAT_NOT_FOUND")
        if not chat.has_participant(user):
            return ServiceResult.failure(
                "You are not a participant in this chat",
                error_code="NOT_PARTICIPANT",
            )
        return ServiceResult.success(chat)

    @classmethod
    def refresh_last_message(cls, chat: Chat) -> bool:
        """
        Point chat.last_message at its newest visible message.

        Returns:
            True if the chat was changed
        """
        newest = chat.messages.order_by("-created_at", "-id").first()
        if newest is None:
            if chat.last_message_id is None:
                return False
            chat.last_message = None
            chat.save(update_fields=["last_message", "updated_at"])
            return True

        if chat.last_message_id == newest.id and chat.last_message_at == newest.created_at:
            return False
        chat.touch(newest)
        return True


class MessageService(BaseService):
    """
    Service for message operations.

    Methods:
        send_message: Send a message to a chat
        get_messages: One page of a chat's message history
        mark_viewed: Record that a participant opened a one-view message
        get_view_status: View tracking details for a message
        edit_message: Change the text of a sent message (sender only)
        react_to_message: Add, replace or remove the user's reaction
        delete_for_me: Hide a message from one participant's history
        delete_for_everyone: Tombstone a message (sender only)
    """

    @classmethod
    def _require_participant(cls, chat: Chat, user: User) -> ServiceResult | None:
        if not chat.has_participant(user):
            return ServiceResult.failure(
                "You are not a participant in this chat",
                error_code="NOT_PARTICIPANT",
            )
        return None

    @classmethod
    def send_message(
        cls,
        chat: Chat,
        sender: User,
        content: str = "",
        message_type: str = MessageType.TEXT,
        reply_to_id: str | None = None,
        is_one_view: bool = False,
        file_url: str = "",
        file_name: str = "",
        file_size: int | None = None,
        mime_type: str = "",
        thumbnail_url: str = "",
        duration: float | None = None,
    ) -> ServiceResult[Message]:
        """
        Send a message to a chat.

        Text and emoji messages need content; every other type needs a
        file_url. The chat's last_message pointer is updated in the same
        transaction.

        Args:
            chat: Target chat
            sender: User sending the message
            content: Message text
            message_type: One of MessageType
            reply_to_id: Optional id of a message in the same chat
            is_one_view: Whether the message can only be opened once
            file_url, file_name, file_size, mime_type, thumbnail_url, duration:
                Attachment metadata for media messages

        Returns:
            ServiceResult with new Message

        Error codes:
            NOT_PARTICIPANT: Sender is not in this chat
            CHAT_INACTIVE: Chat has been deactivated
            INVALID_MESSAGE_TYPE: Unknown message type
            EMPTY_CONTENT: Text or emoji message without content
            CONTENT_TOO_LONG: Content exceeds MAX_CONTENT_LENGTH
            MISSING_FILE: Media message without file_url
            INVALID_REPLY: Reply target not in this chat
        """
        failure = cls._require_participant(chat, sender)
        if failure is not None:
            return failure

        if not chat.is_active:
            return ServiceResult.failure(
                "Cannot send messages to an inactive chat",
                error_code="CHAT_INACTIVE",
            )

        if message_type not in MessageType.values:
            return ServiceResult.failure(
                f"Unknown message type: {message_type}",
                error_code="INVALID_MESSAGE_TYPE",
            )

        content = content.strip() if content else ""
        if message_type in CONTENT_REQUIRED_TYPES and not content:
            return ServiceResult.failure(
                "Message content cannot be empty",
                error_code="EMPTY_CONTENT",
            )

        if len(content) > MESSAGE_CONFIG.MAX_CONTENT_LENGTH:
            return ServiceResult.failure(
                f"Message content cannot exceed {MESSAGE_CONFIG.MAX_CONTENT_LENGTH} characters",
                error_code="CONTENT_TOO_LONG",
            )

        if message_type not in CONTENT_REQUIRED_TYPES and not file_url:
            return ServiceResult.failure(
                f"A file is required for {message_type} messages",
                error_code="MISSING_FILE",
            )

        reply_to = None
        if reply_to_id:
            reply_to = Message.objects.filter(pk=reply_to_id, chat=chat).first()
            if reply_to is None:
                return ServiceResult.failure(
                    "Reply target not found in this chat",
                    error_code="INVALID_REPLY",
                )

        with cls.atomic():
            message = Message.objects.create(
                chat=chat,
                sender=sender,
                content=content,
                message_type=message_type,
                reply_to=reply_to,
                is_one_view=is_one_view,
                file_url=file_url,
                file_name=file_name,
                file_size=file_size,
                mime_type=mime_type,
                thumbnail_url=thumbnail_url,
                duration=duration,
            )
            chat.touch(message)

        cls.get_logger().debug(
            f"User {sender.id} sent {message_type} message {message.id} to chat {chat.id}"
        )
        return ServiceResult.success(message)

    @classmethod
    def get_messages(
        cls,
        chat: Chat,
        user: User,
        page_size: int,
        cursor: str | None = None,
        direction: PageDirection | str = PageDirection.OLDER,
        codec: MessageCursorCodec | None = None,
        diagnostics: DiagnosticSink | None = None,
    ) -> ServiceResult[MessagePage]:
        """
        Return one page of a chat's message history.

        Messages the user deleted for themselves and messages removed by
        staff are skipped. Messages deleted for everyone stay in place as
        tombstones carrying the deleted placeholder. Pages are ordered
        newest first for OLDER and oldest first for NEWER.

        Args:
            chat: Chat to read
            user: Requesting participant
            page_size: Records wanted (1 to CHAT_MESSAGE_MAX_PAGE_SIZE)
            cursor: Token from a previous page's next_cursor
            direction: OLDER or NEWER relative to the cursor
            codec: Cursor codec override
            diagnostics: Diagnostic sink override

        Returns:
            ServiceResult with MessagePage

        Raises:
            InvalidCursorError: Cursor is malformed or tampered with
            InvalidPageSizeError: Page size out of range

        Error codes:
            NOT_PARTICIPANT: User is not in this chat
        """
        failure = cls._require_participant(chat, user)
        if failure is not None:
            return failure

        queryset = (
            Message.objects.filter(chat=chat)
            .exclude(deleted_for=user)
            .select_related("sender", "reply_to")
            .prefetch_related("reactions")
        )
        paginator = KeysetPaginator(
            QuerySetMessageStore(queryset),
            max_page_size=get_max_page_size(),
            codec=codec,
            diagnostics=diagnostics or LoggingDiagnosticSink("chat.pagination"),
        )
        page = paginator.paginate(
            PageRequest(page_size=page_size, cursor=cursor, direction=direction)
        )
        return ServiceResult.success(page)

    @classmethod
    def mark_viewed(cls, message: Message, user: User) -> ServiceResult[dict[str, Any]]:
        """
        Record that a participant opened a one-view message.

        The first view by each user adds them to viewed_by and increments
        view_count; viewed_at is set on the very first view. Repeat views
        change nothing. When the recipient opens the message, the sender
        is notified.

        Returns:
            ServiceResult with {"view_count": int, "viewed_by_count": int}

        Error codes:
            NOT_PARTICIPANT: User is not in the message's chat
        """
        failure = cls._require_participant(message.chat, user)
        if failure is not None:
            return failure

        first_view_by_user = False
        if message.is_one_view:
            with cls.atomic():
                locked = Message.all_objects.select_for_update().get(pk=message.pk)
                if not locked.viewed_by.filter(pk=user.pk).exists():
                    first_view_by_user = True
                    locked.viewed_by.add(user)
                    locked.view_count = F("view_count") + 1
                    update_fields = ["view_count", "updated_at"]
                    if locked.viewed_at is None:
                        locked.viewed_at = timezone.now()
                        update_fields.append("viewed_at")
                    locked.save(update_fields=update_fields)
            message.refresh_from_db(fields=["view_count", "viewed_at"])

        if first_view_by_user and user.pk != message.sender_id:
            from notifications.services import NotificationService

            NotificationService.notify_one_view_opened(message, viewer=user)
            cls.get_logger().info(f"User {user.id} opened one-view message {message.id}")

        return ServiceResult.success(
            {
                "view_count": message.view_count,
                "viewed_by_count": message.viewed_by.count(),
            }
        )

    @classmethod
    def get_view_status(cls, message: Message, user: User) -> ServiceResult[dict[str, Any]]:
        """
        View tracking details for a message.

        Returns:
            ServiceResult with is_one_view, view_count, viewed_by, viewed_at

        Error codes:
            NOT_PARTICIPANT: User is not in the message's chat
        """
        failure = cls._require_participant(message.chat, user)
        if failure is not None:
            return failure

        return ServiceResult.success(
            {
                "is_one_view": message.is_one_view,
                "view_count": message.view_count,
                "viewed_by": list(message.viewed_by.all()),
                "viewed_at": message.viewed_at,
            }
        )

    @classmethod
    def delete_for_me(cls, message: Message, user: User) -> ServiceResult[None]:
        """
        Hide a message from the user's own history.

        The partner still sees the message. Repeating the call is a no-op.

        Error codes:
            NOT_PARTICIPANT: User is not in the message's chat
        """
        failure = cls._require_participant(message.chat, user)
        if failure is not None:
            return failure

        message.deleted_for.add(user)

        cls.get_logger().info(f"User {user.id} deleted message {message.id} for themselves")
        return ServiceResult.success(None)

    @classmethod
    def delete_for_everyone(cls, message: Message, user: User) -> ServiceResult[None]:
        """
        Tombstone a message for both participants.

        Only the sender may do this. Content is replaced with the deleted
        placeholder and is_deleted_for_everyone is set. The message keeps
        its place in both histories (and as the chat's last message), so
        cursors that reference it keep working.

        Error codes:
            NOT_SENDER: Only the sender can delete for everyone
            ALREADY_DELETED: Message is already deleted for everyone
        """
        if message.sender_id != user.pk:
            return ServiceResult.failure(
                "Only the sender can delete this message for everyone",
                error_code="NOT_SENDER",
            )

        if message.is_deleted_for_everyone:
            return ServiceResult.failure(
                "Message is already deleted",
                error_code="ALREADY_DELETED",
            )

        message.content = MESSAGE_CONFIG.DELETED_PLACEHOLDER
        message.is_deleted_for_everyone = True
        message.deleted_at = timezone.now()
        message.save(
            update_fields=["content", "is_deleted_for_everyone", "deleted_at", "updated_at"]
        )

        cls.get_logger().info(
            f"User {user.id} deleted message {message.id} for everyone in chat {message.chat_id}"
        )
        return ServiceResult.success(None)

    @classmethod
    def edit_message(cls, message: Message, user: User, content: str) -> ServiceResult[Message]:
        """
        Replace the text of a sent message.

        Only the sender may edit, and only text messages. Tombstones
        cannot be edited.

        Returns:
            ServiceResult with the updated Message

        Error codes:
            NOT_SENDER: User did not send the message
            NOT_EDITABLE: Message is not a text message
            MESSAGE_DELETED: Message was deleted for everyone
            EMPTY_CONTENT: New content is blank
            CONTENT_TOO_LONG: Content exceeds MAX_CONTENT_LENGTH
        """
        if message.sender_id != user.pk:
            return ServiceResult.failure(
                "You can only edit your own messages",
                error_code="NOT_SENDER",
            )

        if message.message_type != MessageType.TEXT:
            return ServiceResult.failure(
                "Only text messages can be edited",
                error_code="NOT_EDITABLE",
            )

        if message.is_deleted_for_everyone:
            return ServiceResult.failure(
                "Deleted messages cannot be edited",
                error_code="MESSAGE_DELETED",
            )

        content = content.strip() if content else ""
        if not content:
            return ServiceResult.failure(
                "Message content cannot be empty",
                error_code="EMPTY_CONTENT",
            )

        if len(content) > MESSAGE_CONFIG.MAX_CONTENT_LENGTH:
            return ServiceResult.failure(
                f"Message content cannot exceed {MESSAGE_CONFIG.MAX_CONTENT_LENGTH} characters",
                error_code="CONTENT_TOO_LONG",
            )

        message.content = content
        message.is_edited = True
        message.edited_at = timezone.now()
        message.save(update_fields=["content", "is_edited", "edited_at", "updated_at"])

        cls.get_logger().debug(f"User {user.id} edited message {message.id}")
        return ServiceResult.success(message)

    @classmethod
    def react_to_message(
        cls, message: Message, user: User, emoji: str
    ) -> ServiceResult[list[MessageReaction]]:
        """
        Toggle the user's reaction to a message.

        A user holds at most one reaction per message: reacting with a new
        emoji adds it, the same emoji again removes it, and a different
        emoji replaces it.

        Returns:
            ServiceResult with the message's reactions, oldest first

        Error codes:
            NOT_PARTICIPANT: User is not in the message's chat
            EMOJI_REQUIRED: No emoji given
            EMOJI_NOT_ALLOWED: Emoji is not in REACTION_CONFIG.ALLOWED_EMOJIS
            MESSAGE_DELETED: Message was deleted for everyone
        """
        failure = cls._require_participant(message.chat, user)
        if failure is not None:
            return failure

        if not emoji:
            return ServiceResult.failure("Emoji is required", error_code="EMOJI_REQUIRED")

        if emoji not in REACTION_CONFIG.ALLOWED_EMOJIS:
            return ServiceResult.failure("Emoji not allowed", error_code="EMOJI_NOT_ALLOWED")

        if message.is_deleted_for_everyone:
            return ServiceResult.failure(
                "Cannot react to a deleted message",
                error_code="MESSAGE_DELETED",
            )

        with cls.atomic():
            existing = (
                MessageReaction.objects.select_for_update()
                .filter(message=message, user=user)
                .first()
            )
            if existing is None:
                MessageReaction.objects.create(message=message, user=user, emoji=emoji)
            elif existing.emoji == emoji:
                existing.delete()
            else:
                existing.emoji = emoji
                existing.save(update_fields=["emoji", "updated_at"])

        cls.get_logger().debug(f"User {user.id} reacted {emoji} to message {message.id}")
        return ServiceResult.success(
            list(MessageReaction.objects.filter(message=message).order_by("created_at", "id"))
        )
