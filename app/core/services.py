"""
Base service layer patterns for business logic encapsulation.

This module provides foundational patterns for the service layer:
- ServiceResult: Standard result wrapper for consistent success/failure handling
- BaseService: Base class with common service utilities

Service Layer Philosophy:
    Services encapsulate business logic separate from views and models.
    Views handle HTTP concerns, models handle data, services handle logic.

Pattern Comparison:
    - ServiceResult: Use for expected failures (validation, business rules)
    - Exceptions: Use for unexpected failures (database errors, bugs)

Usage:
    from core.services import BaseService, ServiceResult

    class ChatService(BaseService):
        @classmethod
        def create_chat(cls, participants) -> ServiceResult[Chat]:
            if len(set(participants)) != 2:
                return ServiceResult.failure(
                    "Chat must have exactly 2 participants",
                    error_code="INVALID_PARTICIPANTS",
                )

            with cls.atomic():
                chat = Chat.objects.create()
                chat.set_participants(participants)

            cls.get_logger().info(f"Created chat {chat.id}")
            return ServiceResult.success(chat)

    # In view
    result = ChatService.create_chat([user, partner])
    if result.success:
        return Response(ChatSerializer(result.data).data, status=201)
    return Response(result.to_response(), status=400)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator
    from typing import Any

# Generic type for ServiceResult data
T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Provides consistent success/failure handling without exceptions.
    Use this for expected failures (validation errors, business rule violations).

    Attributes:
        success: Whether the operation succeeded
        data: Result data if successful (None if failed)
        error: Error message if failed (None if successful)
        error_code: Machine-readable error code for client handling
        errors: Field-level errors for validation failures

    Usage:
        # Success case
        return ServiceResult.success(message)

        # Failure case
        return ServiceResult.failure("Chat not found", "CHAT_NOT_FOUND")

        # Check result
        result = MessageService.send_message(chat, sender, content="hi")
        if result.success:
            message = result.data
        else:
            print(f"Error: {result.error} ({result.error_code})")
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    errors: dict[str, list[str]] | None = field(default=None)

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        """
        Create a successful result.

        Args:
            data: The result data

        Returns:
            ServiceResult with success=True and data set
        """
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> ServiceResult[T]:
        """
        Create a failed result.

        Args:
            error: Human-readable error message
            error_code: Machine-readable error code for client handling
            errors: Field-level errors (for validation failures)

        Returns:
            ServiceResult with success=False and error details

        Example:
            return ServiceResult.failure(
                "Latitude must be between -90 and 90",
                error_code="VALIDATION_ERROR",
                errors={"latitude": ["Out of range"]},
            )
        """
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            errors=errors,
        )

    def to_response(self) -> dict[str, Any]:
        """
        Convert to API response format.

        Returns:
            Dict with success status and data or error details
        """
        if self.success:
            return {"success": True, "data": self.data}

        response: dict[str, Any] = {
            "success": False,
            "error": self.error,
        }
        if self.error_code:
            response["error_code"] = self.error_code
        if self.errors:
            response["errors"] = self.errors
        return response

    def __bool__(self) -> bool:
        """
        Allow using result in boolean context.

        Example:
            if MediaService.delete_item(item, user):
                print("Deleted")
        """
        return self.success


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Database transaction management

    Design Notes:
        - Use @staticmethod or @classmethod (no instance state)
        - Services should be stateless
        - Use ServiceResult for expected failures
        - Raise exceptions for unexpected failures
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.

        Returns:
            Logger instance for this service
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        All database operations within this context manager are
        wrapped in a transaction. If any operation fails, all
        changes are rolled back.

        Example:
            with cls.atomic():
                message = Message.objects.create(chat=chat, sender=sender)
                chat.touch(message)
        """
        with transaction.atomic():
            yield
