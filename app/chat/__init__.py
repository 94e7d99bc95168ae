"""
Chat app for partner messaging.

This app handles:
- Chats between exactly two partners
- Message sending and history
- Cursor-paginated message history (see cursors.py, pagination.py)
- One-view messages, delete for me and delete for everyone

Related apps:
    - authentication: User model for participants
    - notifications: One-view opened notifications
    - locations: Partner lookup via shared chats

Usage:
    from chat.services import ChatService, MessageService

    chat = ChatService.get_or_create_chat(user, partner).data

    MessageService.send_message(chat, sender=user, content="Hello!")

    page = MessageService.get_messages(chat, user, page_size=20).data
    page.items, page.next_cursor
"""
