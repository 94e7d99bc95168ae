"""
User manager for email login.

Emails are stored trimmed and fully lowercased, so "Alex@Mail.com" and
"alex@mail.com" are one account. Login lookups lowercase the submitted
email the same way. Display names are stored without surrounding spaces.
"""

from django.contrib.auth.models import BaseUserManager


class UserManager(BaseUserManager):
    """
    Manager for the email-login User model.

    Usage:
        user = User.objects.create_user(
            email="riley@example.com",
            password="securepassword",
            name="Riley",
        )
        admin = User.objects.create_superuser(
            email="admin@example.com",
            password="adminpassword",
        )
    """

    @classmethod
    def normalize_email(cls, email):
        """Trim and lowercase the whole address."""
        return (email or "").strip().lower()

    def get_by_natural_key(self, username):
        """Case-insensitive login lookup."""
        return self.get(**{self.model.USERNAME_FIELD: self.normalize_email(username)})

    def create_user(self, email, password=None, **extra_fields):
        """
        Create a user who can log in with email and password.

        Users created without a password get an unusable one and cannot
        obtain tokens until a password is set.

        Raises:
            ValueError: If email is blank
        """
        email = self.normalize_email(email)
        if not email:
            raise ValueError("The Email field must be set")

        extra_fields["name"] = (extra_fields.get("name") or "").strip()
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)

        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(email, password, **extra_fields)
