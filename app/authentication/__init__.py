"""
Authentication application.

This app provides the email-based User model shared by every other app.
Chat participants, notification recipients, media owners and location
owners all reference authentication.User.

Usage:
    from authentication.models import User
"""
