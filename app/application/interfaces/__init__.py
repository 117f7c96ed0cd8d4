"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    IConversationRepository,
    IMessageRepository,
    INotificationRepository,
    ITaskRepository,
    IUserDirectory,
)
from app.application.interfaces.services import (
    INotificationDispatcher,
    IRecipientResolver,
)

__all__ = [
    "IConversationRepository",
    "IMessageRepository",
    "INotificationDispatcher",
    "INotificationRepository",
    "IRecipientResolver",
    "ITaskRepository",
    "IUserDirectory",
]
