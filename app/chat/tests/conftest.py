"""
Test configuration and fixtures for chat tests.

This module provides:
- Two chat partners and an outsider
- A chat between the partners, with and without history
- API client helpers for authenticated requests
- A recording diagnostic sink and an in-memory record type for
  pagination tests that do not touch the database

Usage:
    def test_example(chat, alice_client):
        response = alice_client.get(f"/api/v1/chat/chats/{chat.id}/messages/")
        assert response.status_code == 200
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tests.factories import UserFactory
from chat.tests.factories import ChatFactory, MessageFactory
from core.helpers import generate_object_id


# =============================================================================
# In-memory Records
# =============================================================================


@dataclass(frozen=True)
class Record:
    """Minimal message-like record (created_at, id) for store tests."""

    created_at: datetime
    id: str


def _make_record(created_at: datetime, suffix: int | None = None) -> Record:
    record_id = f"{suffix:024x}" if suffix is not None else generate_object_id()
    return Record(created_at=created_at, id=record_id)


class RecordingSink:
    """DiagnosticSink that keeps every event for assertions."""

    def __init__(self):
        self.events = []

    def record(self, event, level=logging.INFO, **fields):
        self.events.append((event, level, fields))

    def names(self):
        return [event for event, _, _ in self.events]


@pytest.fixture
def make_record():
    """Build a record; suffix fixes the id so ties sort predictably."""
    return _make_record


@pytest.fixture
def base_time():
    return datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def sink():
    return RecordingSink()


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def alice(db):
    return UserFactory(name="Alice")


@pytest.fixture
def bob(db):
    return UserFactory(name="Bob")


@pytest.fixture
def outsider(db):
    """A user who is not in any test chat."""
    return UserFactory(name="Outsider")


# =============================================================================
# Chat Fixtures
# =============================================================================


@pytest.fixture
def chat(db, alice, bob):
    """Active chat between alice and bob."""
    return ChatFactory(participants=[alice, bob])


@pytest.fixture
def chat_with_history(db, chat, alice, bob, base_time):
    """
    Chat with five messages one second apart, alternating senders.

    Returns (chat, messages) with messages oldest first.
    """
    messages = [
        MessageFactory(
            chat=chat,
            sender=alice if i % 2 == 0 else bob,
            content=f"msg {i}",
            created_at=base_time + timedelta(seconds=i),
        )
        for i in range(5)
    ]
    return chat, messages


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated API client."""
    return APIClient()


@pytest.fixture
def authenticated_client_factory(db):
    """
    Factory to create authenticated clients for any user.

    Usage:
        def test_example(authenticated_client_factory, some_user):
            client = authenticated_client_factory(some_user)
    """

    def _make_client(user):
        client = APIClient()
        refresh = RefreshToken.for_user(user)
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
        return client

    return _make_client


@pytest.fixture
def alice_client(authenticated_client_factory, alice):
    return authenticated_client_factory(alice)


@pytest.fixture
def bob_client(authenticated_client_factory, bob):
    return authenticated_client_factory(bob)


@pytest.fixture
def outsider_client(authenticated_client_factory, outsider):
    return authenticated_client_factory(outsider)
