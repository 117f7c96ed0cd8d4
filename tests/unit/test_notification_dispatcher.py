"""Tests for NotificationDispatcher: draft expansion and failure isolation."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock

from app.application.services.notification_dispatcher import (
    NotificationDispatcher,
    NotificationEffect,
)
from app.application.services.recipient_resolver import RecipientResolver
from app.domain.enums import NotificationType, UserRole
from tests.fakes import FakeNotificationRepository, FakeUserDirectory, make_user


def _directory() -> FakeUserDirectory:
    return FakeUserDirectory(
        make_user("admin1", UserRole.ADMIN),
        make_user("admin2", UserRole.ADMIN),
        make_user("bob"),
        make_user("carol"),
    )


def _assignees(task_id: str, *ids: str) -> NotificationEffect:
    return NotificationEffect.to_assignees(
        assigned_to=frozenset(ids),
        message=f"Task updated: {task_id}",
        type=NotificationType.TASK_UPDATED,
        created_by="alice",
        related_task=task_id,
    )


async def test_dispatch_writes_one_record_per_effect_and_recipient() -> None:
    repo = FakeNotificationRepository()
    dispatcher = NotificationDispatcher(repo, RecipientResolver(_directory()))
    written = await dispatcher.dispatch(
        [_assignees("t1", "bob", "admin1"), _assignees("t2", "bob", "carol")]
    )
    assert written == 3
    pairs = sorted((n.related_task, next(iter(n.assigned_to))) for n in repo.records)
    assert pairs == [("t1", "bob"), ("t2", "bob"), ("t2", "carol")]


async def test_dispatch_resolves_all_assignees_in_one_lookup() -> None:
    directory = _directory()
    dispatcher = NotificationDispatcher(
        FakeNotificationRepository(), RecipientResolver(directory)
    )
    await dispatcher.dispatch([_assignees("t1", "bob"), _assignees("t2", "carol")])
    lookups = [c for c in directory.calls if c[0] == "get_many_by_ids"]
    assert lookups == [("get_many_by_ids", frozenset({"bob", "carol"}))]


async def test_admin_effect_reaches_every_admin() -> None:
    repo = FakeNotificationRepository()
    dispatcher = NotificationDispatcher(repo, RecipientResolver(_directory()))
    effect = NotificationEffect.to_admins(
        message="Bob started working on task: Ship",
        type=NotificationType.TASK_UPDATED,
        created_by="bob",
        related_task="t1",
    )
    assert await dispatcher.dispatch([effect]) == 2
    assert {next(iter(n.assigned_to)) for n in repo.records} == {"admin1", "admin2"}


async def test_direct_effect_is_not_role_filtered() -> None:
    repo = FakeNotificationRepository()
    dispatcher = NotificationDispatcher(repo, RecipientResolver(_directory()))
    effect = NotificationEffect.to_user(
        "admin1",
        message="New message from Bob",
        type=NotificationType.MESSAGE_RECEIVED,
        created_by="bob",
        related_message="m1",
    )
    assert await dispatcher.dispatch([effect]) == 1
    assert repo.records[0].assigned_to == frozenset({"admin1"})
    assert repo.records[0].related_message == "m1"
    assert repo.records[0].related_task is None


async def test_empty_effects_touch_nothing() -> None:
    repo = FakeNotificationRepository()
    resolver = AsyncMock()
    dispatcher = NotificationDispatcher(repo, resolver)
    assert await dispatcher.dispatch([]) == 0
    resolver.resolve.assert_not_called()
    assert repo.create_calls == 0


async def test_no_eligible_recipients_skips_store() -> None:
    repo = FakeNotificationRepository()
    dispatcher = NotificationDispatcher(repo, RecipientResolver(_directory()))
    assert await dispatcher.dispatch([_assignees("t1", "admin1", "admin2")]) == 0
    assert repo.create_calls == 0


async def test_store_failure_is_swallowed_and_logged(caplog) -> None:
    repo = FakeNotificationRepository(fail_on_create=True)
    dispatcher = NotificationDispatcher(repo, RecipientResolver(_directory()))
    assert await dispatcher.dispatch([_assignees("t1", "bob")]) == 0
    assert repo.create_calls == 1
    assert "Notification fan-out failed" in caplog.text


async def test_resolver_failure_is_swallowed() -> None:
    resolver = AsyncMock()
    resolver.resolve.side_effect = ConnectionError("directory down")
    repo = FakeNotificationRepository()
    dispatcher = NotificationDispatcher(repo, resolver)
    assert await dispatcher.dispatch([_assignees("t1", "bob")]) == 0
    assert repo.create_calls == 0


async def test_isolate_scope_wraps_fan_out_and_sees_failure() -> None:
    events: list[str] = []

    @asynccontextmanager
    async def savepoint():
        events.append("begin")
        try:
            yield
        except Exception:
            events.append("rollback")
            raise
        events.append("release")

    ok = NotificationDispatcher(
        FakeNotificationRepository(), RecipientResolver(_directory()), isolate=savepoint
    )
    await ok.dispatch([_assignees("t1", "bob")])
    assert events == ["begin", "release"]

    events.clear()
    failing = NotificationDispatcher(
        FakeNotificationRepository(fail_on_create=True),
        RecipientResolver(_directory()),
        isolate=savepoint,
    )
    assert await failing.dispatch([_assignees("t1", "bob")]) == 0
    assert events == ["begin", "rollback"]
