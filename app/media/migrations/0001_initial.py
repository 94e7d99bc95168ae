"""
Create MediaItem, the shared media library entry.

Items are soft deleted; indexes serve owner, partner and pair listings.
"""

import core.helpers
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="MediaItem",
            fields=[
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "id",
                    models.CharField(
                        default=core.helpers.generate_object_id,
                        editable=False,
                        help_text="Unique 24-character hexadecimal identifier",
                        max_length=24,
                        primary_key=True,
                        serialize=False,
                        validators=[
                            django.core.validators.RegexValidator(
                                code="invalid_object_id",
                                message="Identifier must be 24 lowercase hexadecimal characters.",
                                regex="^[0-9a-f]{24}$",
                            )
                        ],
                    ),
                ),
                (
                    "is_deleted",
                    models.BooleanField(
                        db_index=True,
                        default=False,
                        help_text="Whether this record has been soft deleted",
                    ),
                ),
                (
                    "deleted_at",
                    models.DateTimeField(
                        blank=True,
                        null=True,
                        help_text="Timestamp when this record was soft deleted",
                    ),
                ),
                ("file_name", models.CharField(help_text="Original file name", max_length=255)),
                (
                    "file_url",
                    models.URLField(help_text="Location of the stored file", max_length=500),
                ),
                ("file_size", models.PositiveBigIntegerField(help_text="File size in bytes")),
                (
                    "mime_type",
                    models.CharField(help_text="MIME type of the file", max_length=100),
                ),
                (
                    "uploaded_at",
                    models.DateTimeField(
                        default=django.utils.timezone.now,
                        help_text="When the file was uploaded",
                    ),
                ),
                (
                    "owner",
                    models.ForeignKey(
                        help_text="User who uploaded this file",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="owned_media_items",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "partner",
                    models.ForeignKey(
                        help_text="Partner this file is shared with",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="shared_media_items",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "media_item",
                "ordering": ["-uploaded_at", "-id"],
                "indexes": [
                    models.Index(
                        fields=["owner", "is_deleted", "-uploaded_at"],
                        name="media_item_owner_idx",
                    ),
                    models.Index(
                        fields=["partner", "is_deleted", "-uploaded_at"],
                        name="media_item_partner_idx",
                    ),
                    models.Index(
                        fields=["owner", "partner", "is_deleted"],
                        name="media_item_pair_idx",
                    ),
                ],
            },
        ),
    ]
