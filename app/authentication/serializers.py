"""
Serializers for authentication models.

Provides:
- UserSerializer: Public user representation embedded in chat,
  location and media responses
"""

from rest_framework import serializers

from authentication.models import User


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for User model (read operations).

    Used for /api/v1/auth/me/ and wherever another user is shown, such as
    chat participants and message senders.
    """

    full_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "name",
            "full_name",
            "avatar_url",
            "date_joined",
        ]
        read_only_fields = fields

    def get_full_name(self, obj):
        """Return the display name (email when no name is set)."""
        return obj.get_full_name()
