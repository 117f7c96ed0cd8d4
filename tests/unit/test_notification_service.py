"""Tests for NotificationService (manual creation, inbox, read, delete)."""

import pytest

from app.application.dtos.task import TaskCreate
from app.application.use_cases.notifications import NotificationService
from app.domain.enums import NotificationType, UserRole
from app.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from tests.fakes import (
    FakeMessageRepository,
    FakeNotificationRepository,
    FakeTaskRepository,
    make_user,
)

ALICE = make_user("alice")
BOB = make_user("bob")
ADMIN = make_user("root", UserRole.ADMIN)


@pytest.fixture
def stores():
    return FakeNotificationRepository(), FakeTaskRepository(), FakeMessageRepository()


@pytest.fixture
def service(stores) -> NotificationService:
    notifications, tasks, messages = stores
    return NotificationService(notifications, tasks, messages)


async def test_add_notification_sets_creator(service: NotificationService) -> None:
    created = await service.add_notification(
        ALICE, "bob", "Please review", NotificationType.TASK_UPDATED
    )
    assert created.assigned_to == frozenset({"bob"})
    assert created.created_by == "alice"
    assert created.is_read is False


async def test_add_notification_checks_related_task_exists(service, stores) -> None:
    _, tasks, _ = stores
    with pytest.raises(ResourceNotFoundException):
        await service.add_notification(
            ALICE, "bob", "x", NotificationType.TASK_UPDATED, related_task="missing"
        )
    task = await tasks.insert(TaskCreate(title="T", assigned_to=frozenset({"bob"})), "alice")
    created = await service.add_notification(
        ALICE, "bob", "x", NotificationType.TASK_UPDATED, related_task=task.id
    )
    assert created.related_task == task.id


async def test_add_notification_checks_related_message_exists(service, stores) -> None:
    _, _, messages = stores
    with pytest.raises(ResourceNotFoundException):
        await service.add_notification(
            ALICE, "bob", "x", NotificationType.MESSAGE_RECEIVED, related_message="m404"
        )
    message = await messages.create("alice", "bob", "hi")
    created = await service.add_notification(
        ALICE, "bob", "x", NotificationType.MESSAGE_RECEIVED, related_message=message.id
    )
    assert created.related_message == message.id


async def test_add_notification_rejects_two_references(service) -> None:
    with pytest.raises(ValidationException):
        await service.add_notification(
            ALICE,
            "bob",
            "x",
            NotificationType.TASK_UPDATED,
            related_task="t1",
            related_message="m1",
        )


async def test_list_for_user_newest_first(service) -> None:
    first = await service.add_notification(ALICE, "bob", "one", NotificationType.TASK_UPDATED)
    second = await service.add_notification(ALICE, "bob", "two", NotificationType.TASK_UPDATED)
    listed = await service.list_for_user(BOB, "bob")
    assert [n.id for n in listed] == [second.id, first.id]


async def test_list_for_other_user_is_forbidden_unless_admin(service) -> None:
    await service.add_notification(ALICE, "bob", "one", NotificationType.TASK_UPDATED)
    with pytest.raises(AuthorizationException):
        await service.list_for_user(ALICE, "bob")
    assert len(await service.list_for_user(ADMIN, "bob")) == 1


async def test_read_notification_marks_read(service) -> None:
    created = await service.add_notification(ALICE, "bob", "x", NotificationType.TASK_UPDATED)
    read = await service.read_notification(BOB, created.id)
    assert read.is_read is True
    with pytest.raises(AuthorizationException):
        await service.read_notification(ALICE, created.id)


async def test_read_missing_notification_is_not_found(service) -> None:
    with pytest.raises(ResourceNotFoundException):
        await service.read_notification(BOB, "n404")


async def test_delete_notification(service, stores) -> None:
    notifications, _, _ = stores
    created = await service.add_notification(ALICE, "bob", "x", NotificationType.TASK_UPDATED)
    with pytest.raises(AuthorizationException):
        await service.delete_notification(ALICE, created.id)
    await service.delete_notification(BOB, created.id)
    assert notifications.records == []
    with pytest.raises(ResourceNotFoundException):
        await service.delete_notification(BOB, created.id)


async def test_delete_all_for_user(service) -> None:
    for text in ("a", "b", "c"):
        await service.add_notification(ALICE, "bob", text, NotificationType.TASK_UPDATED)
    await service.add_notification(BOB, "alice", "keep", NotificationType.TASK_UPDATED)
    with pytest.raises(AuthorizationException):
        await service.delete_all_for_user(ALICE, "bob")
    assert await service.delete_all_for_user(BOB, "bob") == 3
    assert len(await service.list_for_user(ALICE, "alice")) == 1
