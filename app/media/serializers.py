"""
Serializers for the shared media library.

Provides:
- MediaItemSerializer: Read-only serializer for API responses
- MediaItemCreateSerializer: Validate metadata for a new shared file
- MediaStatsSerializer: Library statistics response
"""

from __future__ import annotations

from rest_framework import serializers

from core.model_mixins import validate_object_id

from media.models import MediaItem


class MediaItemSerializer(serializers.ModelSerializer):
    """
    Read-only serializer for MediaItem.

    Includes derived file_extension and formatted_file_size.
    """

    owner_id = serializers.CharField(read_only=True)
    partner_id = serializers.CharField(read_only=True)
    file_extension = serializers.CharField(read_only=True)
    formatted_file_size = serializers.CharField(read_only=True)

    class Meta:
        model = MediaItem
        fields = [
            "id",
            "owner_id",
            "partner_id",
            "file_name",
            "file_url",
            "file_size",
            "formatted_file_size",
            "file_extension",
            "mime_type",
            "uploaded_at",
        ]
        read_only_fields = fields


class MediaItemCreateSerializer(serializers.Serializer):
    """
    Metadata for a file shared with a partner.

    MIME allowlist and size limits are checked by MediaService.
    """

    partner_id = serializers.CharField(validators=[validate_object_id])
    file_name = serializers.CharField(max_length=255)
    file_url = serializers.URLField(max_length=500)
    file_size = serializers.IntegerField(min_value=0)
    mime_type = serializers.CharField(max_length=100)


class MediaStatsSerializer(serializers.Serializer):
    """Response serializer for library statistics."""

    total_media = serializers.IntegerField()
    my_media = serializers.IntegerField()
    partner_media = serializers.IntegerField()
    total_storage_used = serializers.IntegerField()
    formatted_storage_used = serializers.CharField()
