"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.message import Conversation, Message
from app.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    SoftDeleteMixin,
    TimestampMixin,
)
from app.infrastructure.persistence.models.notification import Notification
from app.infrastructure.persistence.models.task import Task, TaskAssignee
from app.infrastructure.persistence.models.user import User

__all__ = [
    "Conversation",
    "CreatedAtMixin",
    "CuidMixin",
    "Message",
    "Notification",
    "SoftDeleteMixin",
    "Task",
    "TaskAssignee",
    "TimestampMixin",
    "User",
]
