"""DTOs for notification use cases (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from app.domain.enums import NotificationType


@dataclass(frozen=True)
class NotificationDraft:
    """Notification to be inserted. assigned_to holds exactly one recipient."""

    assigned_to: frozenset[str]
    message: str
    type: NotificationType
    created_by: str
    related_task: str | None = None
    related_message: str | None = None

    def validate(self) -> None:
        """Raise ValueError unless the draft has a single recipient and at most one back-reference."""
        if len(self.assigned_to) != 1:
            raise ValueError(
                f"Notification draft must have exactly one recipient, got {len(self.assigned_to)}"
            )
        if self.related_task and self.related_message:
            raise ValueError("Notification draft may reference a task or a message, not both")

    @property
    def recipient(self) -> str:
        return next(iter(self.assigned_to))


@dataclass(frozen=True)
class NotificationResult:
    """Notification read-model returned by the notification store."""

    id: str
    assigned_to: frozenset[str]
    message: str
    type: NotificationType
    related_task: str | None
    related_message: str | None
    created_by: str
    is_read: bool
    created_at: datetime
