"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from app.domain.enums import UserRole

if TYPE_CHECKING:
    from app.application.dtos.message import ConversationResult, MessageResult
    from app.application.dtos.notification import (
        NotificationDraft,
        NotificationResult,
    )
    from app.application.dtos.task import TaskCreate, TaskFilter, TaskResult
    from app.application.dtos.user import UserResult


# User directory interface
class IUserDirectory(Protocol):
    """Protocol for the user directory (external, read-only)."""

    async def get_by_id(self, user_id: str) -> UserResult | None:
        """Return user by ID, or None."""

    async def get_many_by_ids(self, user_ids: set[str]) -> list[UserResult]:
        """Return users for the given ids in one lookup. Missing ids are omitted."""

    async def find_by_role(self, role: UserRole) -> list[UserResult]:
        """Return every user with the given role."""


# Task store interface
class ITaskRepository(Protocol):
    """Protocol for task store (DIP)."""

    async def insert(self, data: TaskCreate, created_by: str) -> TaskResult:
        """Create an active task owned by created_by."""

    async def find_by_id(self, task_id: str) -> TaskResult | None:
        """Return task by ID regardless of trash state, or None."""

    async def find_many(self, task_filter: TaskFilter) -> list[TaskResult]:
        """Return tasks matching the filter (newest first)."""

    async def update_by_id(
        self, task_id: str, values: dict[str, Any]
    ) -> TaskResult | None:
        """Apply values to the task; return the updated task or None if missing."""

    async def delete_by_id(self, task_id: str) -> bool:
        """Permanently delete the task. Returns False if it did not exist."""

    async def delete_many(self, task_filter: TaskFilter) -> int:
        """Permanently delete matching tasks; return the count."""


# Notification store interface
class INotificationRepository(Protocol):
    """Protocol for notification store (DIP). Performs no authorization."""

    async def create_many(self, drafts: list[NotificationDraft]) -> list[NotificationResult]:
        """Insert drafts in one batch. Empty list is a no-op."""

    async def find_by_id(self, notification_id: str) -> NotificationResult | None:
        """Return notification by ID, or None."""

    async def find_by_recipient(self, user_id: str) -> list[NotificationResult]:
        """Return notifications for recipient, newest first."""

    async def mark_read(self, notification_id: str) -> NotificationResult | None:
        """Set is_read and return the notification, or None if missing."""

    async def delete_one(self, notification_id: str) -> bool:
        """Delete one notification. Returns False if it did not exist."""

    async def delete_all_for(self, user_id: str) -> int:
        """Delete every notification addressed to user_id; return the count."""


# Messaging interfaces
class IMessageRepository(Protocol):
    """Protocol for direct message store (DIP)."""

    async def create(self, sender: str, receiver: str, content: str) -> MessageResult:
        """Persist a new unread message."""

    async def find_by_id(self, message_id: str) -> MessageResult | None:
        """Return message by ID, or None."""

    async def find_received(self, user_id: str) -> list[MessageResult]:
        """Return non-deleted messages received by user_id, newest first."""

    async def find_between(self, user_a: str, user_b: str) -> list[MessageResult]:
        """Return non-deleted messages exchanged by two users, oldest first."""

    async def mark_read_from(self, sender: str, receiver: str) -> int:
        """Mark unread messages from sender to receiver as read; return the count."""

    async def soft_delete(
        self, user_id: str, message_ids: set[str] | None = None
    ) -> int:
        """Soft-delete messages user_id sent or received (all when message_ids is None)."""


class IConversationRepository(Protocol):
    """Protocol for conversation store (DIP)."""

    async def find_or_create(self, user_a: str, user_b: str) -> ConversationResult:
        """Return the conversation for the sorted pair, creating it when missing."""

    async def set_last_message(self, conversation_id: str, message_id: str) -> None:
        """Point the conversation at its most recent message."""
