"""
Django signals for chat.

This module guards the chat participant pair:
- Adding a participant fails if the chat would exceed two members
- Removing or clearing participants fails (pairs are fixed at creation)

Related files:
    - models.py: Chat.set_participants()
    - apps.py: Signal import in ready()
"""

import logging

from django.core.exceptions import ValidationError
from django.db.models.signals import m2m_changed
from django.dispatch import receiver

from chat.models import CHAT_PARTICIPANT_COUNT, Chat

logger = logging.getLogger(__name__)


def _check_capacity(chat: Chat, new_user_ids: set) -> None:
    existing = set(chat.participants.values_list("pk", flat=True))
    if len(existing | new_user_ids) > CHAT_PARTICIPANT_COUNT:
        logger.warning(f"Rejected participant change on chat {chat.pk}: too many members")
        raise ValidationError(
            "Chat must have exactly 2 participants",
            code="invalid_participants",
        )


@receiver(m2m_changed, sender=Chat.participants.through)
def guard_chat_participants(sender, instance, action, reverse, model, pk_set, **kwargs):
    """
    Enforce the two-participant rule on every participant change.

    Args:
        sender: The Chat.participants through model
        instance: Chat (forward) or User (reverse) being changed
        action: m2m_changed action name
        reverse: True when the change was made from the User side
        model: Model class of the objects in pk_set
        pk_set: Primary keys being added or removed
    """
    if action in ("pre_remove", "pre_clear"):
        raise ValidationError(
            "Chat participants cannot be changed",
            code="participants_immutable",
        )

    if action != "pre_add" or not pk_set:
        return

    if reverse:
        for chat in Chat.objects.filter(pk__in=pk_set):
            _check_capacity(chat, {instance.pk})
    else:
        _check_capacity(instance, set(pk_set))
