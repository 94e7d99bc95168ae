"""
Tests for chat app.

This package contains test modules for:
- test_models.py: Chat, Message model tests
- test_cursors.py: Cursor token encode/decode tests
- test_pagination.py: Keyset paginator tests against the in-memory store
- test_queryset_store.py: Keyset paginator tests against the database
- test_services.py: ChatService, MessageService tests
- test_maintenance.py: Chat state repair tests
- test_views.py: REST API endpoint tests

Usage:
    pytest chat/tests/
    pytest chat/tests/test_pagination.py
"""
