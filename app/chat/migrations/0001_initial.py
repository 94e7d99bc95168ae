"""
Create Chat and Message.

Changes:
    - Chat with its two-participant M2M and last message pointer
    - Message with attachment, one-view and per-user deletion fields
    - Composite (chat, -created_at, -id) index for keyset history paging
"""

import core.helpers
import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


def object_id_field():
    return models.CharField(
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
    )


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Chat",
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
                ("id", object_id_field()),
                (
                    "last_message_at",
                    models.DateTimeField(
                        default=core.helpers.now_millis,
                        help_text="Timestamp of most recent message (for sorting chat lists)",
                    ),
                ),
                (
                    "is_active",
                    models.BooleanField(
                        db_index=True,
                        default=True,
                        help_text="Whether this chat is active",
                    ),
                ),
                (
                    "participants",
                    models.ManyToManyField(
                        help_text="The two users in this chat",
                        related_name="chats",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "chat_chat",
                "ordering": ["-last_message_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="Message",
            fields=[
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                ("id", object_id_field()),
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
                (
                    "created_at",
                    models.DateTimeField(
                        default=core.helpers.now_millis,
                        editable=False,
                        help_text="Timestamp when this message was created (millisecond precision)",
                    ),
                ),
                ("content", models.TextField(blank=True, default="", help_text="Message text")),
                (
                    "message_type",
                    models.CharField(
                        choices=[
                            ("text", "Text"),
                            ("image", "Image"),
                            ("video", "Video"),
                            ("audio", "Audio"),
                            ("file", "File"),
                            ("emoji", "Emoji"),
                            ("sticker", "Sticker"),
                            ("voice", "Voice"),
                            ("pdf", "PDF"),
                        ],
                        default="text",
                        help_text="Type of message content",
                        max_length=10,
                    ),
                ),
                ("file_url", models.URLField(blank=True, default="", max_length=500)),
                ("file_name", models.CharField(blank=True, default="", max_length=255)),
                ("file_size", models.PositiveBigIntegerField(blank=True, null=True)),
                ("mime_type", models.CharField(blank=True, default="", max_length=100)),
                ("thumbnail_url", models.URLField(blank=True, default="", max_length=500)),
                (
                    "duration",
                    models.FloatField(
                        blank=True,
                        null=True,
                        help_text="Length in seconds for audio, voice and video",
                    ),
                ),
                (
                    "is_one_view",
                    models.BooleanField(
                        default=False,
                        help_text="Whether this message can only be viewed once per recipient",
                    ),
                ),
                (
                    "viewed_at",
                    models.DateTimeField(
                        blank=True,
                        null=True,
                        help_text="When this one-view message was first opened",
                    ),
                ),
                (
                    "view_count",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Number of distinct users who opened this message",
                    ),
                ),
                (
                    "chat",
                    models.ForeignKey(
                        help_text="Chat this message belongs to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="messages",
                        to="chat.chat",
                    ),
                ),
                (
                    "sender",
                    models.ForeignKey(
                        help_text="User who sent this message",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sent_messages",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "reply_to",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        help_text="Message this one replies to",
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="replies",
                        to="chat.message",
                    ),
                ),
                (
                    "viewed_by",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Users who opened this one-view message",
                        related_name="viewed_messages",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "deleted_for",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Users who deleted this message for themselves",
                        related_name="hidden_messages",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "chat_message",
                "ordering": ["-created_at", "-id"],
                "base_manager_name": "all_objects",
                "indexes": [
                    models.Index(
                        fields=["chat", "-created_at", "-id"],
                        name="chat_msg_chat_cursor_idx",
                    ),
                    models.Index(fields=["sender"], name="chat_msg_sender_idx"),
                    models.Index(fields=["is_one_view"], name="chat_msg_one_view_idx"),
                ],
            },
        ),
        # Added after Message exists (Chat and Message reference each other)
        migrations.AddField(
            model_name="chat",
            name="last_message",
            field=models.ForeignKey(
                blank=True,
                null=True,
                help_text="Most recent message in this chat",
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="+",
                to="chat.message",
            ),
        ),
        migrations.AddIndex(
            model_name="chat",
            index=models.Index(fields=["-last_message_at"], name="chat_chat_last_msg_idx"),
        ),
    ]
