"""
Root pytest configuration for the Django project.

pytest-django reads DJANGO_SETTINGS_MODULE from pyproject.toml; this module
adjusts settings for speed and assigns test-category markers.
App-specific fixtures are defined in each app's tests/conftest.py.
"""

import pytest


def pytest_configure():
    """Adjust Django settings before tests run."""
    from django.conf import settings

    # Disable throttling during tests to prevent rate limit failures
    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []
    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {}

    # Use fast password hasher for tests
    settings.PASSWORD_HASHERS = [
        "django.contrib.auth.hashers.MD5PasswordHasher",
    ]

    # Test clients speak plain HTTP; production settings would 301 every request
    settings.SECURE_SSL_REDIRECT = False


def pytest_collection_modifyitems(items):
    """
    Auto-mark tests based on filename patterns.

    Mapping:
    - test_integration.py → e2e (full user journey workflows)
    - test_views.py, test_services.py, test_maintenance.py → integration
    - test_models.py, test_cursors.py, test_pagination.py, etc. → unit
    - Unmatched files → integration (safe default for Django)

    Explicit markers on test functions/classes take precedence.
    """
    e2e_patterns = ["test_integration.py"]

    integration_patterns = [
        "test_views.py",
        "test_services.py",
        "test_permissions.py",
        "test_maintenance.py",
        "test_queryset_store.py",
    ]

    unit_patterns = [
        "test_models.py",
        "test_serializers.py",
        "test_validators.py",
        "test_managers.py",
        "test_signals.py",
        "test_cursors.py",
        "test_pagination.py",
        "test_helpers.py",
        "test_diagnostics.py",
        "test_exceptions.py",
    ]

    for item in items:
        # Skip if test already has unit/integration/e2e marker
        existing_markers = {m.name for m in item.iter_markers()}
        if existing_markers & {"unit", "integration", "e2e"}:
            continue

        filename = item.path.name

        if any(pattern in filename for pattern in e2e_patterns):
            item.add_marker(pytest.mark.e2e)
        elif any(pattern in filename for pattern in integration_patterns):
            item.add_marker(pytest.mark.integration)
        elif any(pattern in filename for pattern in unit_patterns):
            item.add_marker(pytest.mark.unit)
        else:
            # Default: integration (safe for Django where most tests hit DB)
            item.add_marker(pytest.mark.integration)
