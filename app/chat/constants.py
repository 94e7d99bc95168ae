"""
Constants and configuration for chat module features.

This module centralizes configuration values for:
- Message operations (content limits, tombstones)
- Message reactions (allowed emoji)
- Message history pagination (page sizes, cursor signing)

Page sizes can be overridden via Django settings
(CHAT_MESSAGE_PAGE_SIZE, CHAT_MESSAGE_MAX_PAGE_SIZE).

Import example:
    from chat.constants import MESSAGE_CONFIG, PAGINATION_CONFIG, REACTION_CONFIG
"""

from typing import Final


# =============================================================================
# Message Configuration
# =============================================================================


class MESSAGE_CONFIG:
    """Configuration for message operations."""

    # Content limits
    MAX_CONTENT_LENGTH: Final[int] = 10000  # Characters

    # Content shown in place of a message deleted for everyone
    DELETED_PLACEHOLDER: Final[str] = "This message was deleted."


# =============================================================================
# Reaction Configuration
# =============================================================================


class REACTION_CONFIG:
    """Emoji a participant may react with (one reaction per user per message)."""

    ALLOWED_EMOJIS: Final[frozenset[str]] = frozenset(
        {"❤️", "😂", "👍", "😮", "😢", "🙏"}
    )
    MAX_EMOJI_LENGTH: Final[int] = 16


# =============================================================================
# Pagination Configuration
# =============================================================================


class PAGINATION_CONFIG:
    """
    Configuration for message history pagination.

    CURSOR_SALT namespaces cursor signatures so a token signed for
    message history cannot be replayed against any other signed value.
    Changing it invalidates every cursor already issued to clients.
    """

    DEFAULT_PAGE_SIZE: Final[int] = 20
    MAX_PAGE_SIZE: Final[int] = 100
    CURSOR_SALT: Final[str] = "chat.message-cursor"
