"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.services.notification_dispatcher import NotificationEffect


# Recipient resolver interface
class IRecipientResolver(Protocol):
    """Protocol for deriving notification audiences from the user directory."""

    async def resolve(self, candidate_ids: set[str]) -> set[str]:
        """Return candidates eligible for task notifications (non-admins)."""

    async def admin_audience(self) -> set[str]:
        """Return every admin id (audience for progress-start notifications)."""


# Notification effect runner interface
class INotificationDispatcher(Protocol):
    """Protocol for running pending notification effects after a primary mutation."""

    async def dispatch(self, effects: list[NotificationEffect]) -> int:
        """Resolve recipients and write notifications. Never raises; returns records created."""
