"""Domain enumerations for the Taskhub application.

Enums represent fixed sets of domain values (user role, notification type).
Task status is an open set; TaskStatus only names the well-known values.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class UserRole(_ValuesMixin, str, Enum):
    """User role. Determines notification eligibility and authorization."""

    USER = "user"
    ADMIN = "admin"


class TaskStatus(_ValuesMixin, str, Enum):
    """Well-known task statuses. Other string values are accepted as-is."""

    TODO = "todo"
    IN_PROGRESS = "in progress"
    DONE = "done"


class NotificationType(_ValuesMixin, str, Enum):
    """Kind of event a notification record reports."""

    TASK_CREATED = "task_created"
    TASK_UPDATED = "task_updated"
    TASK_TRASHED = "task_trashed"
    TASK_RESTORED = "task_restored"
    TASK_DELETED = "task_deleted"
    MESSAGE_RECEIVED = "message_received"
