"""
Permission classes for chat API.

This module provides DRF permission classes for the chat system:
- IsChatParticipant: User is one of the chat's two participants

Design Decisions:
    - Object permissions accept a Chat or a Message (resolved to its chat)
    - Services repeat the participant check, so views without object
      lookups stay safe
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rest_framework import permissions

from chat.models import Chat, Message

if TYPE_CHECKING:
    from rest_framework.request import Request
    from rest_framework.views import APIView


class IsChatParticipant(permissions.BasePermission):
    """
    Allows access only to participants of the chat.

    This is the base permission for every chat endpoint.
    """

    message = "You are not a participant in this chat."

    def has_object_permission(
        self, request: Request, view: APIView, obj: Chat | Message
    ) -> bool:
        """Check if user belongs to the chat."""
        if not request.user.is_authenticated:
            return False

        chat = obj.chat if isinstance(obj, Message) else obj
        return chat.has_participant(request.user)
