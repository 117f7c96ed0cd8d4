"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (task/notification/message stores, user directory).
"""

from app.application.interfaces import (
    IConversationRepository,
    IMessageRepository,
    INotificationDispatcher,
    INotificationRepository,
    IRecipientResolver,
    ITaskRepository,
    IUserDirectory,
)
from app.application.services import (
    NotificationDispatcher,
    RecipientResolver,
    TaskAuthorizationGuard,
)
from app.application.use_cases import (
    MessageService,
    NotificationService,
    TaskLifecycleService,
)

__all__ = [
    "IConversationRepository",
    "IMessageRepository",
    "INotificationDispatcher",
    "INotificationRepository",
    "IRecipientResolver",
    "ITaskRepository",
    "IUserDirectory",
    "MessageService",
    "NotificationDispatcher",
    "NotificationService",
    "RecipientResolver",
    "TaskAuthorizationGuard",
    "TaskLifecycleService",
]
