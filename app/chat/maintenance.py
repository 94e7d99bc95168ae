"""
Offline repair of denormalized chat state.

Chat.last_message and Chat.last_message_at are maintained on the write
path (send, delete for everyone). This module recomputes them from the
messages themselves and retires chats that no longer have exactly two
participants. It never runs while serving requests; use the standalone
script scripts/maintenance/repair_chat_state.py.

Usage:
    from chat.maintenance import repair_chat_state

    report = repair_chat_state(dry_run=True)
    print(report.last_message_fixed, report.deactivated)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from django.db import transaction
from django.db.models import Count

from chat.models import CHAT_PARTICIPANT_COUNT, Chat
from chat.services import ChatService

logger = logging.getLogger(__name__)


@dataclass
class RepairReport:
    """Outcome of a repair run (ids are listed even in dry-run mode)."""

    dry_run: bool = False
    checked: int = 0
    last_message_fixed: list[str] = field(default_factory=list)
    deactivated: list[str] = field(default_factory=list)

    @property
    def changed(self) -> int:
        return len(self.last_message_fixed) + len(self.deactivated)


def _last_message_is_stale(chat: Chat) -> bool:
    newest = chat.messages.order_by("-created_at", "-id").first()
    if newest is None:
        return chat.last_message_id is not None
    return chat.last_message_id != newest.id or chat.last_message_at != newest.created_at


def repair_chat_state(dry_run: bool = False) -> RepairReport:
    """
    Recompute last_message pointers and deactivate malformed chats.

    Args:
        dry_run: Report what would change without writing

    Returns:
        RepairReport listing affected chat ids
    """
    report = RepairReport(dry_run=dry_run)
    chats = Chat.objects.active().annotate(participant_count=Count("participants"))

    for chat in chats.iterator():
        report.checked += 1

        if chat.participant_count != CHAT_PARTICIPANT_COUNT:
            report.deactivated.append(chat.id)
            logger.warning(
                f"Chat {chat.id} has {chat.participant_count} participants, deactivating"
            )
            if not dry_run:
                chat.is_active = False
                chat.save(update_fields=["is_active", "updated_at"])
            continue

        if dry_run:
            if _last_message_is_stale(chat):
                report.last_message_fixed.append(chat.id)
            continue

        with transaction.atomic():
            if ChatService.refresh_last_message(chat):
                report.last_message_fixed.append(chat.id)

    logger.info(
        f"Chat repair {'(dry run) ' if dry_run else ''}checked {report.checked} chats: "
        f"{len(report.last_message_fixed)} last_message fixes, "
        f"{len(report.deactivated)} deactivated"
    )
    return report
