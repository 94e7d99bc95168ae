"""
Message tombstones, editing and reactions.

Changes:
    - Message.is_deleted_for_everyone (sender tombstone kept in history)
    - Message.is_edited / edited_at
    - MessageReaction with one reaction per user per message
"""

import core.helpers
import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    dependencies = [
        ("chat", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.AddField(
            model_name="message",
            name="is_deleted_for_everyone",
            field=models.BooleanField(
                default=False,
                help_text="Whether the sender deleted this message for everyone",
            ),
        ),
        migrations.AddField(
            model_name="message",
            name="is_edited",
            field=models.BooleanField(
                default=False,
                help_text="Whether the content was edited after sending",
            ),
        ),
        migrations.AddField(
            model_name="message",
            name="edited_at",
            field=models.DateTimeField(
                blank=True,
                null=True,
                help_text="When the content was last edited",
            ),
        ),
        migrations.CreateModel(
            name="MessageReaction",
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
                    "emoji",
                    models.CharField(
                        help_text="Reaction emoji (one of REACTION_CONFIG.ALLOWED_EMOJIS)",
                        max_length=16,
                    ),
                ),
                (
                    "message",
                    models.ForeignKey(
                        help_text="Message reacted to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reactions",
                        to="chat.message",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        help_text="User who reacted",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="message_reactions",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "chat_message_reaction",
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(fields=["user"], name="chat_reaction_user_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("message", "user"),
                        name="chat_reaction_one_per_user",
                    ),
                ],
            },
        ),
    ]
