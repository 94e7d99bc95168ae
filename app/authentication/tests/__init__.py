"""
Tests for authentication app.

This package contains test modules for:
- test_models.py: User model tests
- test_managers.py: UserManager tests
- test_views.py: JWT token and current-user endpoint tests

Usage:
    pytest authentication/tests/
    pytest authentication/tests/test_models.py
"""
