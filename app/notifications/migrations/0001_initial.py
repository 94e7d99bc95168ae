"""
Create Notification.

Indexes cover the unread badge query (recipient, is_read) and
newest-first listing.
"""

import core.helpers
import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
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
                    "notification_type",
                    models.CharField(
                        choices=[
                            ("message", "Message"),
                            ("partner_request", "Partner Request"),
                            ("partner_accepted", "Partner Accepted"),
                            ("partner_rejected", "Partner Rejected"),
                            ("file_shared", "File Shared"),
                            ("one_view_opened", "One-View Opened"),
                        ],
                        help_text="Type of this notification",
                        max_length=32,
                    ),
                ),
                (
                    "title",
                    models.CharField(help_text="Rendered notification title", max_length=255),
                ),
                ("message", models.TextField(help_text="Rendered notification body")),
                (
                    "data",
                    models.JSONField(blank=True, default=dict, help_text="Arbitrary context data"),
                ),
                (
                    "is_read",
                    models.BooleanField(
                        default=False,
                        help_text="Whether recipient has read this notification",
                    ),
                ),
                (
                    "read_at",
                    models.DateTimeField(
                        blank=True,
                        null=True,
                        help_text="When the notification was first read",
                    ),
                ),
                (
                    "recipient",
                    models.ForeignKey(
                        help_text="User receiving this notification",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="notifications",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "notifications_notification",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(
                        fields=["recipient", "is_read"],
                        name="notif_recipient_unread_idx",
                    ),
                    models.Index(fields=["-created_at"], name="notif_created_idx"),
                ],
            },
        ),
    ]
