"""Application use cases: one entry point per workflow."""

from app.application.use_cases.messages import MessageService
from app.application.use_cases.notifications import NotificationService
from app.application.use_cases.tasks import TaskLifecycleService

__all__ = [
    "MessageService",
    "NotificationService",
    "TaskLifecycleService",
]
