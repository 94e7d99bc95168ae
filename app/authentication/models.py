"""
Authentication models.

This module defines the user model:
- User: Custom user model with email-based authentication

Related files:
    - managers.py: Custom user manager for email-based creation

Identifiers:
    Users carry the same 24-character hex primary key as every other
    record, so chat participants, notification recipients and media
    owners are all plain object identifiers.
"""

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models

from core.model_mixins import ObjectIdPrimaryKeyMixin
from authentication.managers import UserManager


class User(ObjectIdPrimaryKeyMixin, AbstractBaseUser, PermissionsMixin):
    """
    Custom User model using email as the primary identifier.

    Fields:
        id: 24-character hex identifier
        email: Primary identifier, unique, used for login
        name: Display name shown to the partner
        avatar_url: Optional avatar location
        is_active: Whether the user account is active
        is_staff: Whether the user can access Django admin
        date_joined: When the user account was created
        updated_at: When the user record was last modified

    Usage:
        user = User.objects.create_user(
            email='user@example.com',
            password='securepassword',
            name='Sam',
        )
    """

    email = models.EmailField(
        unique=True,
        db_index=True,
        max_length=254,
        help_text="User's email address (primary identifier)",
    )

    name = models.CharField(
        max_length=100,
        blank=True,
        default="",
        help_text="Display name",
    )

    avatar_url = models.URLField(
        blank=True,
        default="",
        help_text="Avatar image location",
    )

    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    date_joined = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user account was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the user record was last modified",
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]

    def __str__(self):
        """Return the user's email as string representation."""
        return self.email

    def get_full_name(self):
        """Return the display name, falling back to the email."""
        return self.name or self.email

    def get_short_name(self):
        """Return the display name, falling back to the email local part."""
        return self.name or self.email.split("@")[0]
