"""
Test configuration and fixtures for location tests.

Provides a user with a chat partner, a stranger with no shared chat and
authenticated API clients.
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tests.factories import UserFactory
from chat.tests.factories import ChatFactory


@pytest.fixture
def user(db):
    return UserFactory(name="Sam Lee")


@pytest.fixture
def partner(db, user):
    """User who shares an active chat with user."""
    partner = UserFactory(name="Jordan Kim")
    ChatFactory(participants=[user, partner])
    return partner


@pytest.fixture
def stranger(db):
    return UserFactory()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def authenticated_client(user):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {RefreshToken.for_user(user).access_token}")
    return client
