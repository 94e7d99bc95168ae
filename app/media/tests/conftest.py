"""
Test fixtures for media app.

Provides fixtures for:
- An owner with a chat partner, and a stranger
- Shared media items
- Authenticated test clients
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tests.factories import UserFactory
from chat.tests.factories import ChatFactory
from media.tests.factories import MediaItemFactory

if TYPE_CHECKING:
    from authentication.models import User


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def user(db) -> "User":
    return UserFactory(name="Riley")


@pytest.fixture
def partner(db, user) -> "User":
    """User who shares an active chat with user."""
    partner = UserFactory(name="Casey")
    ChatFactory(participants=[user, partner])
    return partner


@pytest.fixture
def stranger(db) -> "User":
    return UserFactory()


# =============================================================================
# Media Fixtures
# =============================================================================


@pytest.fixture
def shared_item(user, partner):
    """Item user shared with partner."""
    return MediaItemFactory(owner=user, partner=partner)


@pytest.fixture
def received_item(user, partner):
    """Item partner shared with user."""
    return MediaItemFactory(owner=partner, partner=user, file_size=1024)


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client() -> APIClient:
    """Return unauthenticated API client."""
    return APIClient()


@pytest.fixture
def authenticated_client(user) -> APIClient:
    """Return API client authenticated as user."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


@pytest.fixture
def partner_client(partner) -> APIClient:
    client = APIClient()
    refresh = RefreshToken.for_user(partner)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client
