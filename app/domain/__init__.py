"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import TaskEntity
from app.domain.enums import NotificationType, TaskStatus, UserRole
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    InvalidStateException,
    ResourceNotFoundException,
    TaskhubException,
    ValidationException,
)

__all__ = [
    # Entities
    "TaskEntity",
    # Enums
    "NotificationType",
    "TaskStatus",
    "UserRole",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "InvalidStateException",
    "ResourceNotFoundException",
    "TaskhubException",
    "ValidationException",
]
