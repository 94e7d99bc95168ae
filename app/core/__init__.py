"""
Core Application - Infrastructure & Base Classes

This app contains infrastructure code that provides a foundation for the
domain apps (chat, locations, notifications, media):

- Generic, reusable base classes (no domain-specific logic)
- Clear extension points for domain apps
- Infrastructure concerns separated from business logic

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Model Mixins (import from core.model_mixins):
    - ObjectIdPrimaryKeyMixin: 24-character hex primary key
    - SoftDeleteMixin: Soft delete support (is_deleted, deleted_at)

Managers (import from core.managers):
    - SoftDeleteManager: Filter deleted records by default
    - SoftDeleteQuerySet: QuerySet with soft delete operations

Services (import from core.services):
    - BaseService: Base class for service layer
    - ServiceResult: Standard result wrapper for success/failure handling

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes
    - ValidationError: Input validation failures
    - NotFoundError: Resource not found
    - PermissionDeniedError: Authorization failures

Diagnostics (import from core.diagnostics):
    - DiagnosticSink: Protocol for recording diagnostic events
    - LoggingDiagnosticSink: Sink backed by the logging configuration
    - NullDiagnosticSink: Sink that discards events

Helpers (import from core.helpers):
    - generate_object_id: New 24-character hex identifier
    - is_object_id: Identifier shape validation
    - truncate_to_millis: Millisecond timestamp normalization

Note:
    - Business logic should NOT go here. Extend core classes in your domain apps.
    - Django models, model mixins and managers are NOT imported here to avoid
      AppRegistryNotReady errors. Import them directly from their modules.
"""

# Services (no Django model dependencies)
from .services import BaseService, ServiceResult

# Exceptions (no Django dependencies)
from .exceptions import (
    BaseApplicationError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)

# Diagnostics (no Django dependencies)
from .diagnostics import DiagnosticSink, LoggingDiagnosticSink, NullDiagnosticSink

# Helpers (no Django dependencies)
from .helpers import generate_object_id, is_object_id, truncate_to_millis

__all__ = [
    # Services
    "BaseService",
    "ServiceResult",
    # Exceptions
    "BaseApplicationError",
    "ValidationError",
    "NotFoundError",
    "PermissionDeniedError",
    # Diagnostics
    "DiagnosticSink",
    "LoggingDiagnosticSink",
    "NullDiagnosticSink",
    # Helpers
    "generate_object_id",
    "is_object_id",
    "truncate_to_millis",
]
