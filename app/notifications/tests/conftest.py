"""
Test configuration and fixtures for notification tests.

This module provides:
- A recipient and a second user
- Read and unread notifications
- API client helpers for authenticated requests

Usage:
    def test_example(user, unread_notification, authenticated_client):
        response = authenticated_client.get("/api/v1/notifications/")
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tests.factories import UserFactory
from notifications.tests.factories import NotificationFactory


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def user(db):
    """User receiving notifications."""
    return UserFactory()


@pytest.fixture
def other_user(db):
    return UserFactory()


# =============================================================================
# Notification Fixtures
# =============================================================================


@pytest.fixture
def unread_notification(user):
    return NotificationFactory(recipient=user)


@pytest.fixture
def read_notification(user):
    return NotificationFactory(recipient=user, is_read=True)


@pytest.fixture
def other_users_notification(other_user):
    return NotificationFactory(recipient=other_user)


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def authenticated_client(user):
    """API client authenticated as user with a JWT access token."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client
