"""Notification effect runner.

Lifecycle operations do not write notifications themselves: they return a
list of NotificationEffect values describing who should hear about what.
NotificationDispatcher turns those effects into one notification record per
(effect, recipient) pair after the primary mutation has been applied.

Fan-out is best-effort. Any failure while resolving recipients or writing
records is logged and swallowed here; it never reaches the caller and never
undoes the primary mutation.
"""

from __future__ import annotations

import contextlib
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import AsyncContextManager

from app.application.dtos.notification import NotificationDraft
from app.application.interfaces.repositories import INotificationRepository
from app.application.interfaces.services import IRecipientResolver
from app.domain.enums import NotificationType
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, add_span_event, traced

logger = get_logger(__name__)


class Audience(str, Enum):
    """How an effect's recipients are derived."""

    ASSIGNEES = "assignees"  # candidates filtered by RecipientResolver.resolve
    ADMINS = "admins"  # RecipientResolver.admin_audience
    DIRECT = "direct"  # candidates used as given


@dataclass(frozen=True)
class NotificationEffect:
    """Pending notification fan-out produced by a lifecycle operation."""

    audience: Audience
    message: str
    type: NotificationType
    created_by: str
    candidates: frozenset[str] = frozenset()
    related_task: str | None = None
    related_message: str | None = None

    @classmethod
    def to_assignees(
        cls,
        assigned_to: frozenset[str],
        message: str,
        type: NotificationType,
        created_by: str,
        related_task: str,
    ) -> NotificationEffect:
        return cls(
            audience=Audience.ASSIGNEES,
            candidates=frozenset(assigned_to),
            message=message,
            type=type,
            created_by=created_by,
            related_task=related_task,
        )

    @classmethod
    def to_admins(
        cls,
        message: str,
        type: NotificationType,
        created_by: str,
        related_task: str,
    ) -> NotificationEffect:
        return cls(
            audience=Audience.ADMINS,
            message=message,
            type=type,
            created_by=created_by,
            related_task=related_task,
        )

    @classmethod
    def to_user(
        cls,
        user_id: str,
        message: str,
        type: NotificationType,
        created_by: str,
        related_message: str | None = None,
    ) -> NotificationEffect:
        return cls(
            audience=Audience.DIRECT,
            candidates=frozenset({user_id}),
            message=message,
            type=type,
            created_by=created_by,
            related_message=related_message,
        )


class NotificationDispatcher:
    """Runs NotificationEffect lists (INotificationDispatcher).

    All assignee candidates across one dispatch call are resolved with a
    single directory lookup; the admin audience is fetched at most once.

    isolate: optional factory of an async context manager wrapped around the
    fan-out I/O (e.g. AsyncSession.begin_nested) so a failed fan-out can be
    rolled back without touching the primary mutation.
    """

    def __init__(
        self,
        notification_repo: INotificationRepository,
        recipient_resolver: IRecipientResolver,
        isolate: Callable[[], AsyncContextManager[object]] | None = None,
    ) -> None:
        self.notification_repo = notification_repo
        self.recipient_resolver = recipient_resolver
        self._isolate = isolate or contextlib.nullcontext

    @traced("notification.dispatch")
    async def dispatch(self, effects: list[NotificationEffect]) -> int:
        """Create notifications for the effects; return the number of records written."""
        if not effects:
            return 0
        try:
            async with self._isolate():
                drafts = await self.build_drafts(effects)
                if not drafts:
                    logger.debug("Notification fan-out: no eligible recipients")
                    return 0
                await self.notification_repo.create_many(drafts)
        except Exception:
            logger.exception(
                "Notification fan-out failed for %d effect(s); primary operation kept",
                len(effects),
            )
            add_span_event("notification.fanout_failed", {"effects": len(effects)})
            return 0
        add_span_attributes(effects=len(effects), records=len(drafts))
        logger.info("Notification fan-out created %d record(s)", len(drafts))
        return len(drafts)

    async def build_drafts(self, effects: list[NotificationEffect]) -> list[NotificationDraft]:
        """Expand effects into single-recipient drafts (one per effect and recipient)."""
        assignee_candidates: set[str] = set()
        wants_admins = False
        for effect in effects:
            if effect.audience == Audience.ASSIGNEES:
                assignee_candidates.update(effect.candidates)
            elif effect.audience == Audience.ADMINS:
                wants_admins = True

        eligible = await self.recipient_resolver.resolve(assignee_candidates)
        admins = await self.recipient_resolver.admin_audience() if wants_admins else set()

        drafts: list[NotificationDraft] = []
        for effect in effects:
            if effect.audience == Audience.ASSIGNEES:
                recipients = effect.candidates & eligible
            elif effect.audience == Audience.ADMINS:
                recipients = frozenset(admins)
            else:
                recipients = effect.candidates
            for recipient in sorted(recipients):
                draft = NotificationDraft(
                    assigned_to=frozenset({recipient}),
                    message=effect.message,
                    type=effect.type,
                    created_by=effect.created_by,
                    related_task=effect.related_task,
                    related_message=effect.related_message,
                )
                draft.validate()
                drafts.append(draft)
        return drafts
