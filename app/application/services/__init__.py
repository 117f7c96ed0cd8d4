"""Application services: recipient resolution, notification fan-out, task authorization."""

from app.application.services.notification_dispatcher import (
    Audience,
    NotificationDispatcher,
    NotificationEffect,
)
from app.application.services.recipient_resolver import RecipientResolver
from app.application.services.task_authorization import TaskAuthorizationGuard

__all__ = [
    "Audience",
    "NotificationDispatcher",
    "NotificationEffect",
    "RecipientResolver",
    "TaskAuthorizationGuard",
]
