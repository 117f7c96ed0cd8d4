"""Notification use cases: manual creation, per-user listing, read, delete."""

from app.application.use_cases.notifications.notification_operations import (
    NotificationService,
)

__all__ = ["NotificationService"]
