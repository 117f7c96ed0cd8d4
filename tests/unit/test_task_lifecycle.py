"""Tests for TaskLifecycleService over in-memory stores.

Scenarios cover the trash lifecycle, notification fan-out per operation and
the progress-start notification to admins.
"""

from dataclasses import dataclass, replace

import pytest

from app.application.dtos.task import TaskCreate, TaskFilter, TaskUpdate
from app.application.services.notification_dispatcher import NotificationDispatcher
from app.application.services.recipient_resolver import RecipientResolver
from app.application.use_cases.tasks import TaskLifecycleService
from app.domain.enums import NotificationType, UserRole
from app.domain.exceptions import (
    AuthorizationException,
    InvalidStateException,
    ResourceNotFoundException,
    ValidationException,
)
from tests.fakes import (
    Clock,
    FakeNotificationRepository,
    FakeTaskRepository,
    FakeUserDirectory,
    make_user,
)

ALICE = make_user("alice")
BOB = make_user("bob")
CAROL = make_user("carol")
ADMIN1 = make_user("admin1", UserRole.ADMIN, name="Ada")
ADMIN2 = make_user("admin2", UserRole.ADMIN, name="Grace")


class RacingTaskRepository(FakeTaskRepository):
    """Trashes another task between the trash read and the bulk delete."""

    trash_during_delete: str | None = None

    async def delete_many(self, task_filter: TaskFilter) -> int:
        if self.trash_during_delete is not None:
            late = self.tasks[self.trash_during_delete]
            self.tasks[late.id] = replace(late, is_deleted=True, deleted_at=self.clock())
        return await super().delete_many(task_filter)


@dataclass
class World:
    directory: FakeUserDirectory
    tasks: FakeTaskRepository
    notifications: FakeNotificationRepository
    service: TaskLifecycleService


def _world(
    *, fail_fan_out: bool = False, tasks: FakeTaskRepository | None = None
) -> World:
    clock = Clock()
    directory = FakeUserDirectory(ALICE, BOB, CAROL, ADMIN1, ADMIN2)
    tasks = tasks or FakeTaskRepository(clock)
    notifications = FakeNotificationRepository(clock, fail_on_create=fail_fan_out)
    dispatcher = NotificationDispatcher(notifications, RecipientResolver(directory))
    service = TaskLifecycleService(tasks, directory, dispatcher, clock=clock)
    return World(directory, tasks, notifications, service)


@pytest.fixture
def world() -> World:
    return _world()


async def _create(world: World, *assignees: str, title: str = "Ship v2"):
    return await world.service.create_task(
        ALICE,
        TaskCreate(title=title, description="Release", assigned_to=frozenset(assignees)),
    )


def _assert_trash_pair(task) -> None:
    assert task.is_deleted == (task.deleted_at is not None)


# ---- create ----


async def test_create_with_admin_and_user_notifies_only_the_user(world: World) -> None:
    task = await _create(world, "admin1", "bob")
    assert task.created_by == "alice"
    assert task.is_deleted is False
    assert len(world.notifications.records) == 1
    record = world.notifications.records[0]
    assert record.assigned_to == frozenset({"bob"})
    assert record.type == NotificationType.TASK_CREATED
    assert record.related_task == task.id
    assert record.created_by == "alice"
    assert record.message == "New task assigned: Ship v2"


async def test_create_without_assignees_is_rejected(world: World) -> None:
    with pytest.raises(ValidationException):
        await world.service.create_task(
            ALICE, TaskCreate(title="Orphan", assigned_to=frozenset())
        )
    assert world.tasks.tasks == {}
    assert world.notifications.records == []


async def test_create_survives_notification_store_failure() -> None:
    world = _world(fail_fan_out=True)
    task = await _create(world, "bob")
    assert await world.tasks.find_by_id(task.id) == task
    assert world.notifications.create_calls == 1
    assert world.notifications.records == []


async def test_create_with_unknown_assignee_is_not_found(world: World) -> None:
    with pytest.raises(ResourceNotFoundException) as exc:
        await _create(world, "bob", "ghost")
    assert exc.value.details["resource_id"] == "ghost"
    assert world.tasks.tasks == {}
    assert world.notifications.records == []


# ---- queries ----


async def test_get_task_hides_trashed_tasks(world: World) -> None:
    task = await _create(world, "bob")
    await world.service.move_to_trash(ALICE, task.id)
    with pytest.raises(ResourceNotFoundException):
        await world.service.get_task(ALICE, task.id)


async def test_get_task_requires_viewer(world: World) -> None:
    task = await _create(world, "bob")
    assert (await world.service.get_task(BOB, task.id)).id == task.id
    assert (await world.service.get_task(ADMIN1, task.id)).id == task.id
    with pytest.raises(AuthorizationException):
        await world.service.get_task(CAROL, task.id)


async def test_get_tasks_assignee_filter_is_containment(world: World) -> None:
    both = await _create(world, "bob", "carol", title="Both")
    await _create(world, "bob", title="Bob only")
    found = await world.service.get_tasks(TaskFilter(assigned_to=frozenset({"bob", "carol"})))
    assert [t.id for t in found] == [both.id]


async def test_get_tasks_and_user_tasks_skip_trash(world: World) -> None:
    kept = await _create(world, "bob", title="Kept")
    gone = await _create(world, "bob", title="Gone")
    await world.service.move_to_trash(ALICE, gone.id)
    assert [t.id for t in await world.service.get_tasks()] == [kept.id]
    assert [t.id for t in await world.service.get_user_tasks("bob")] == [kept.id]
    # is_deleted in a caller's filter cannot widen the query
    widened = await world.service.get_tasks(TaskFilter(is_deleted=True))
    assert [t.id for t in widened] == [kept.id]


async def test_get_trash_is_scoped_to_creator(world: World) -> None:
    task = await _create(world, "bob")
    await world.service.move_to_trash(ALICE, task.id)
    assert [t.id for t in await world.service.get_trash(ALICE)] == [task.id]
    assert await world.service.get_trash(BOB) == []


# ---- update ----


async def test_update_notifies_merged_assignees(world: World) -> None:
    task = await _create(world, "bob")
    world.notifications.records.clear()
    updated = await world.service.update_task(
        ALICE,
        task.id,
        TaskUpdate(title="Ship v3", assigned_to=frozenset({"carol", "admin1"})),
    )
    assert updated.title == "Ship v3"
    assert updated.assigned_to == frozenset({"carol", "admin1"})
    assert [n.assigned_to for n in world.notifications.records] == [frozenset({"carol"})]
    assert world.notifications.records[0].message == "Task updated: Ship v3"
    assert world.notifications.records[0].type == NotificationType.TASK_UPDATED


async def test_update_by_assignee_is_forbidden(world: World) -> None:
    task = await _create(world, "bob")
    with pytest.raises(AuthorizationException):
        await world.service.update_task(BOB, task.id, TaskUpdate(title="Mine now"))
    assert (await world.tasks.find_by_id(task.id)).title == "Ship v2"


async def test_update_by_admin_is_allowed(world: World) -> None:
    task = await _create(world, "bob")
    updated = await world.service.update_task(ADMIN1, task.id, TaskUpdate(description="x"))
    assert updated.description == "x"


async def test_update_missing_task_is_not_found(world: World) -> None:
    with pytest.raises(ResourceNotFoundException):
        await world.service.update_task(ALICE, "nope", TaskUpdate(title="x"))


async def test_update_with_unknown_assignee_is_not_found(world: World) -> None:
    task = await _create(world, "bob")
    world.notifications.records.clear()
    with pytest.raises(ResourceNotFoundException):
        await world.service.update_task(
            ALICE, task.id, TaskUpdate(assigned_to=frozenset({"carol", "ghost"}))
        )
    assert (await world.tasks.find_by_id(task.id)).assigned_to == frozenset({"bob"})
    assert world.notifications.records == []


async def test_update_explicit_none_clears_description(world: World) -> None:
    task = await _create(world, "bob")
    assert task.description == "Release"
    updated = await world.service.update_task(ALICE, task.id, TaskUpdate(description=None))
    assert updated.description is None
    assert updated.title == "Ship v2"


async def test_update_omitted_fields_are_unchanged(world: World) -> None:
    task = await _create(world, "bob")
    assert TaskUpdate().values() == {}
    updated = await world.service.update_task(ALICE, task.id, TaskUpdate(title="Ship v3"))
    assert updated.description == "Release"
    assert updated.assigned_to == frozenset({"bob"})


async def test_update_cannot_null_the_title(world: World) -> None:
    task = await _create(world, "bob")
    with pytest.raises(ValidationException):
        await world.service.update_task(ALICE, task.id, TaskUpdate(title=None))
    assert (await world.tasks.find_by_id(task.id)).title == "Ship v2"


# ---- status ----


async def test_progress_start_notifies_each_admin_once(world: World) -> None:
    task = await _create(world, "bob")
    world.notifications.records.clear()

    await world.service.update_task_status(BOB, task.id, "in progress")
    recipients = sorted(next(iter(n.assigned_to)) for n in world.notifications.records)
    assert recipients == ["admin1", "admin2"]
    assert all(
        n.message == "Bob started working on task: Ship v2"
        for n in world.notifications.records
    )

    await world.service.update_task_status(BOB, task.id, "in progress")
    assert len(world.notifications.records) == 2


async def test_other_status_changes_notify_nobody(world: World) -> None:
    task = await _create(world, "bob")
    world.notifications.records.clear()
    updated = await world.service.update_task_status(BOB, task.id, "done")
    assert updated.status == "done"
    assert world.notifications.records == []


async def test_status_change_requires_assignee_or_admin(world: World) -> None:
    task = await _create(world, "bob")
    with pytest.raises(AuthorizationException):
        await world.service.update_task_status(ALICE, task.id, "done")
    await world.service.update_task_status(ADMIN2, task.id, "done")


# ---- trash / restore / purge ----


async def test_trash_pairing_holds_after_every_transition(world: World) -> None:
    task = await _create(world, "bob")
    _assert_trash_pair(task)
    trashed = await world.service.move_to_trash(ALICE, task.id)
    _assert_trash_pair(trashed)
    assert trashed.is_deleted is True
    restored = await world.service.restore_task(ALICE, task.id)
    _assert_trash_pair(restored)
    assert restored.deleted_at is None


async def test_trash_then_restore_keeps_visible_fields(world: World) -> None:
    task = await _create(world, "bob", "carol")
    await world.service.move_to_trash(ALICE, task.id)
    restored = await world.service.restore_task(ALICE, task.id)
    for attr in ("title", "description", "assigned_to", "status", "created_by"):
        assert getattr(restored, attr) == getattr(task, attr)


async def test_trash_and_restore_notify_assignees(world: World) -> None:
    task = await _create(world, "bob", "admin1")
    world.notifications.records.clear()
    await world.service.move_to_trash(ALICE, task.id)
    await world.service.restore_task(ALICE, task.id)
    assert [(n.type, n.message) for n in world.notifications.records] == [
        (NotificationType.TASK_TRASHED, "Task moved to trash: Ship v2"),
        (NotificationType.TASK_RESTORED, "Task restored from trash: Ship v2"),
    ]
    assert all(n.assigned_to == frozenset({"bob"}) for n in world.notifications.records)


async def test_trash_twice_is_invalid_state(world: World) -> None:
    task = await _create(world, "bob")
    await world.service.move_to_trash(ALICE, task.id)
    with pytest.raises(InvalidStateException):
        await world.service.move_to_trash(ALICE, task.id)


async def test_restore_active_task_is_invalid_and_silent(world: World) -> None:
    task = await _create(world, "bob")
    world.notifications.records.clear()
    with pytest.raises(InvalidStateException):
        await world.service.restore_task(ALICE, task.id)
    assert world.notifications.records == []


async def test_purge_active_task_is_invalid_and_keeps_it(world: World) -> None:
    task = await _create(world, "bob")
    world.notifications.records.clear()
    with pytest.raises(InvalidStateException):
        await world.service.delete_from_trash(ALICE, task.id)
    assert await world.tasks.find_by_id(task.id) is not None
    assert world.notifications.records == []


async def test_purge_trashed_task_by_creator_is_silent(world: World) -> None:
    task = await _create(world, "bob")
    await world.service.move_to_trash(ALICE, task.id)
    world.notifications.records.clear()
    await world.service.delete_from_trash(ALICE, task.id)
    assert await world.tasks.find_by_id(task.id) is None
    assert world.notifications.records == []


async def test_purge_by_admin_is_forbidden(world: World) -> None:
    task = await _create(world, "bob")
    await world.service.move_to_trash(ALICE, task.id)
    with pytest.raises(AuthorizationException):
        await world.service.delete_from_trash(ADMIN1, task.id)
    assert await world.tasks.find_by_id(task.id) is not None


async def test_trash_by_stranger_is_forbidden(world: World) -> None:
    task = await _create(world, "bob")
    with pytest.raises(AuthorizationException):
        await world.service.move_to_trash(CAROL, task.id)
    assert (await world.tasks.find_by_id(task.id)).is_deleted is False


# ---- empty trash ----


async def test_empty_trash_notifies_non_admins_once_per_task(world: World) -> None:
    first = await _create(world, "bob", "admin1", title="First")
    second = await _create(world, "bob", "admin1", title="Second")
    for task in (first, second):
        await world.service.move_to_trash(ALICE, task.id)
    world.notifications.records.clear()
    world.directory.calls.clear()

    deleted = await world.service.empty_trash(ALICE)

    assert deleted == 2
    assert await world.service.get_trash(ALICE) == []
    records = world.notifications.records
    assert sorted(n.related_task for n in records) == sorted([first.id, second.id])
    assert all(n.assigned_to == frozenset({"bob"}) for n in records)
    assert all(n.type == NotificationType.TASK_DELETED for n in records)
    assert {n.message for n in records} == {
        "Task permanently deleted: First",
        "Task permanently deleted: Second",
    }
    lookups = [c for c in world.directory.calls if c[0] == "get_many_by_ids"]
    assert len(lookups) == 1


async def test_empty_trash_leaves_other_users_trash(world: World) -> None:
    mine = await _create(world, "bob")
    theirs = await world.service.create_task(
        BOB, TaskCreate(title="Bob's", assigned_to=frozenset({"carol"}))
    )
    await world.service.move_to_trash(ALICE, mine.id)
    await world.service.move_to_trash(BOB, theirs.id)
    assert await world.service.empty_trash(ALICE) == 1
    assert [t.id for t in await world.service.get_trash(BOB)] == [theirs.id]


async def test_empty_trash_with_nothing_trashed(world: World) -> None:
    await _create(world, "bob")
    world.notifications.records.clear()
    assert await world.service.empty_trash(ALICE) == 0
    assert world.notifications.records == []


async def test_empty_trash_spares_tasks_trashed_after_the_read() -> None:
    tasks = RacingTaskRepository()
    world = _world(tasks=tasks)
    early = await _create(world, "bob", title="Early")
    late = await _create(world, "bob", title="Late")
    await world.service.move_to_trash(ALICE, early.id)
    world.notifications.records.clear()
    tasks.trash_during_delete = late.id

    deleted = await world.service.empty_trash(ALICE)

    assert deleted == 1
    assert [n.related_task for n in world.notifications.records] == [early.id]
    assert [t.id for t in await world.service.get_trash(ALICE)] == [late.id]
