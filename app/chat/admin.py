"""
Django admin configuration for chat models.

Provides admin interfaces for:
- Chat inspection (participants chosen once, when the chat is added)
- Message moderation with reactions inline

The participant count is checked on the form, so a wrong pair shows a
form error instead of tripping the m2m guard in chat.signals.
"""

from django import forms
from django.contrib import admin

from chat.models import CHAT_PARTICIPANT_COUNT, Chat, Message, MessageReaction


class ChatAdminForm(forms.ModelForm):
    """Chat form that requires exactly two participants on creation."""

    class Meta:
        model = Chat
        fields = ["participants", "is_active"]

    def clean(self):
        cleaned_data = super().clean()
        participants = cleaned_data.get("participants")
        if "participants" in self.fields and participants is not None:
            if len(participants) != CHAT_PARTICIPANT_COUNT:
                self.add_error(
                    "participants",
                    f"A chat needs exactly {CHAT_PARTICIPANT_COUNT} participants.",
                )
        return cleaned_data


@admin.register(Chat)
class ChatAdmin(admin.ModelAdmin):
    """Admin interface for Chat model."""

    form = ChatAdminForm
    list_display = [
        "id",
        "participant_emails",
        "is_active",
        "last_message_at",
        "created_at",
    ]
    list_filter = ["is_active", "created_at"]
    search_fields = ["id", "participants__email"]
    raw_id_fields = ["participants"]
    readonly_fields = [
        "id",
        "last_message",
        "last_message_at",
        "created_at",
        "updated_at",
    ]
    ordering = ["-last_message_at"]

    def get_readonly_fields(self, request, obj=None):
        # The pair is fixed once the chat exists
        if obj is not None:
            return [*self.readonly_fields, "participants"]
        return self.readonly_fields

    def get_queryset(self, request):
        return super().get_queryset(request).prefetch_related("participants")

    @admin.display(description="Participants")
    def participant_emails(self, obj):
        return ", ".join(p.email for p in obj.participants.all())


class MessageReactionInline(admin.TabularInline):
    """Read-only reactions on a message."""

    model = MessageReaction
    extra = 0
    can_delete = False
    readonly_fields = ["user", "emoji", "created_at"]


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    """Admin interface for Message model, including removed messages."""

    list_display = [
        "id",
        "chat",
        "sender",
        "message_type",
        "content_preview",
        "is_one_view",
        "is_edited",
        "is_deleted_for_everyone",
        "is_deleted",
        "created_at",
    ]
    list_filter = [
        "message_type",
        "is_one_view",
        "is_edited",
        "is_deleted_for_everyone",
        "is_deleted",
        "created_at",
    ]
    search_fields = ["id", "content", "sender__email", "chat__id"]
    raw_id_fields = ["chat", "sender", "reply_to"]
    readonly_fields = [
        "id",
        "created_at",
        "updated_at",
        "viewed_by",
        "viewed_at",
        "view_count",
        "deleted_for",
        "deleted_at",
        "edited_at",
    ]
    inlines = [MessageReactionInline]
    ordering = ["-created_at"]

    def get_queryset(self, request):
        return Message.all_objects.select_related("chat", "sender")

    @admin.display(description="Content")
    def content_preview(self, obj):
        if len(obj.content) > 50:
            return obj.content[:50] + "..."
        return obj.content
