"""Notification store. No authorization here; callers check ownership."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.notification import NotificationDraft, NotificationResult
from app.domain.enums import NotificationType
from app.infrastructure.persistence.models.notification import Notification
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils import ensure_utc


def _to_result(n: Notification) -> NotificationResult:
    """Map Notification ORM to NotificationResult DTO."""
    return NotificationResult(
        id=n.id,
        assigned_to=frozenset({n.recipient_id}),
        message=n.message,
        type=NotificationType(n.type),
        related_task=n.related_task,
        related_message=n.related_message,
        created_by=n.created_by,
        is_read=n.is_read,
        created_at=ensure_utc(n.created_at),
    )


class NotificationRepository(BaseRepository[Notification]):
    """Notification repository. Implements INotificationRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Notification)

    async def create_many(
        self, drafts: list[NotificationDraft]
    ) -> list[NotificationResult]:
        """Insert all drafts with a single flush.

        Raises ValueError, before anything is added, if any draft does not have
        exactly one recipient or references both a task and a message.
        """
        if not drafts:
            return []
        for draft in drafts:
            draft.validate()
        rows = [
            Notification(
                recipient_id=d.recipient,
                message=d.message,
                type=d.type.value,
                related_task=d.related_task,
                related_message=d.related_message,
                created_by=d.created_by,
                is_read=False,
            )
            for d in drafts
        ]
        self.db.add_all(rows)
        await self.db.flush()
        ids = [r.id for r in rows]
        result = await self.db.execute(
            select(Notification)
            .where(Notification.id.in_(ids))
            .execution_options(populate_existing=True)
        )
        by_id = {n.id: n for n in result.scalars().all()}
        return [_to_result(by_id[i]) for i in ids]

    async def find_by_id(self, notification_id: str) -> NotificationResult | None:
        n = await self._get(notification_id)
        return _to_result(n) if n else None

    async def find_by_recipient(self, user_id: str) -> list[NotificationResult]:
        result = await self.db.execute(
            select(Notification)
            .where(Notification.recipient_id == user_id)
            .order_by(Notification.created_at.desc(), Notification.id)
        )
        return [_to_result(n) for n in result.scalars().all()]

    async def mark_read(self, notification_id: str) -> NotificationResult | None:
        n = await self._get(notification_id)
        if n is None:
            return None
        if not n.is_read:
            n.is_read = True
            await self.db.flush()
        return _to_result(n)

    async def delete_one(self, notification_id: str) -> bool:
        result = await self.db.execute(
            delete(Notification).where(Notification.id == notification_id)
        )
        return (result.rowcount or 0) > 0

    async def delete_all_for(self, user_id: str) -> int:
        result = await self.db.execute(
            delete(Notification).where(Notification.recipient_id == user_id)
        )
        return result.rowcount or 0
