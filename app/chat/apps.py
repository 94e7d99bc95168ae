"""
Chat application configuration.

This app provides partner chats with:
- Two-participant chats
- Message history with keyset (cursor) pagination
- One-view messages and per-user deletion
"""

from django.apps import AppConfig


class ChatConfig(AppConfig):
    """Configuration for the chat application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "chat"
    verbose_name = "Chat"

    def ready(self):
        """Import signals to connect handlers."""
        import chat.signals  # noqa: F401
