"""Notification operations: create, list for user, read, delete (delegate to INotificationRepository)."""

from __future__ import annotations

from app.application.dtos.notification import NotificationDraft, NotificationResult
from app.application.dtos.user import UserResult
from app.application.interfaces.repositories import (
    IMessageRepository,
    INotificationRepository,
    ITaskRepository,
)
from app.domain.enums import NotificationType
from app.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """Notification inbox for users. The store itself does no authorization; checks live here."""

    def __init__(
        self,
        notification_repo: INotificationRepository,
        task_repo: ITaskRepository,
        message_repo: IMessageRepository,
    ) -> None:
        self.notification_repo = notification_repo
        self.task_repo = task_repo
        self.message_repo = message_repo

    async def add_notification(
        self,
        actor: UserResult,
        recipient_id: str,
        message: str,
        type: NotificationType,
        *,
        related_task: str | None = None,
        related_message: str | None = None,
    ) -> NotificationResult:
        """Create one notification by hand; the referenced task or message must exist."""
        if related_task and related_message:
            raise ValidationException(
                "A notification may reference a task or a message, not both",
                field="related_task",
            )
        if related_task and await self.task_repo.find_by_id(related_task) is None:
            raise ResourceNotFoundException("task", related_task)
        if related_message and await self.message_repo.find_by_id(related_message) is None:
            raise ResourceNotFoundException("message", related_message)
        draft = NotificationDraft(
            assigned_to=frozenset({recipient_id}),
            message=message,
            type=type,
            created_by=actor.id,
            related_task=related_task,
            related_message=related_message,
        )
        try:
            draft.validate()
        except ValueError as e:
            raise ValidationException(str(e), field="assigned_to") from e
        created = await self.notification_repo.create_many([draft])
        return created[0]

    @staticmethod
    def _require_owner(actor: UserResult, user_id: str, action: str) -> None:
        """Only the addressed user or an admin may touch a user's notifications."""
        if actor.id != user_id and not actor.is_admin:
            raise AuthorizationException(
                message=f"You are not authorized to {action} these notifications",
                resource="notification",
            )

    async def _load_owned(
        self, actor: UserResult, notification_id: str, action: str
    ) -> NotificationResult:
        notification = await self.notification_repo.find_by_id(notification_id)
        if notification is None:
            raise ResourceNotFoundException("notification", notification_id)
        for recipient in notification.assigned_to:
            self._require_owner(actor, recipient, action)
        return notification

    async def list_for_user(
        self, actor: UserResult, user_id: str
    ) -> list[NotificationResult]:
        """Return notifications addressed to user_id, newest first."""
        self._require_owner(actor, user_id, "view")
        return await self.notification_repo.find_by_recipient(user_id)

    async def read_notification(
        self, actor: UserResult, notification_id: str
    ) -> NotificationResult:
        """Mark the notification read and return it."""
        await self._load_owned(actor, notification_id, "view")
        notification = await self.notification_repo.mark_read(notification_id)
        if notification is None:
            raise ResourceNotFoundException("notification", notification_id)
        return notification

    async def delete_notification(self, actor: UserResult, notification_id: str) -> None:
        await self._load_owned(actor, notification_id, "delete")
        if not await self.notification_repo.delete_one(notification_id):
            raise ResourceNotFoundException("notification", notification_id)

    async def delete_all_for_user(self, actor: UserResult, user_id: str) -> int:
        """Delete every notification of user_id. Only that user or an admin may do this."""
        self._require_owner(actor, user_id, "delete")
        count = await self.notification_repo.delete_all_for(user_id)
        logger.info("Deleted %d notification(s) for user %s", count, user_id)
        return count
