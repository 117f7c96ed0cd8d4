"""API test wiring: real routes, real bearer tokens, in-memory stores."""

from dataclasses import dataclass

import pytest

from app.api.v1 import dependencies
from app.application.services.notification_dispatcher import NotificationDispatcher
from app.application.services.recipient_resolver import RecipientResolver
from app.application.use_cases.messages import MessageService
from app.application.use_cases.notifications import NotificationService
from app.application.use_cases.tasks import TaskLifecycleService
from app.domain.enums import UserRole
from app.infrastructure.security.jwt import create_access_token
from app.main import app
from tests.fakes import (
    Clock,
    FakeConversationRepository,
    FakeMessageRepository,
    FakeNotificationRepository,
    FakeTaskRepository,
    FakeUserDirectory,
    make_user,
)


@dataclass
class Backend:
    directory: FakeUserDirectory
    tasks: FakeTaskRepository
    notifications: FakeNotificationRepository
    messages: FakeMessageRepository

    def headers(self, user_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture
def backend() -> Backend:
    """Override every store-backed dependency with in-memory fakes."""
    clock = Clock()
    directory = FakeUserDirectory(
        make_user("alice"),
        make_user("bob"),
        make_user("carol"),
        make_user("admin1", UserRole.ADMIN),
        make_user("retired", is_active=False),
    )
    tasks = FakeTaskRepository(clock)
    notifications = FakeNotificationRepository(clock)
    messages = FakeMessageRepository(clock)
    conversations = FakeConversationRepository()
    dispatcher = NotificationDispatcher(notifications, RecipientResolver(directory))

    task_svc = TaskLifecycleService(tasks, directory, dispatcher, clock=clock)
    notification_svc = NotificationService(notifications, tasks, messages)
    message_svc = MessageService(messages, conversations, directory, dispatcher)

    app.dependency_overrides.update(
        {
            dependencies.get_user_directory: lambda: directory,
            dependencies.get_task_service: lambda: task_svc,
            dependencies.get_task_service_for_write: lambda: task_svc,
            dependencies.get_notification_service: lambda: notification_svc,
            dependencies.get_notification_service_for_write: lambda: notification_svc,
            dependencies.get_message_service: lambda: message_svc,
            dependencies.get_message_service_for_write: lambda: message_svc,
        }
    )
    yield Backend(directory, tasks, notifications, messages)
    app.dependency_overrides.clear()
