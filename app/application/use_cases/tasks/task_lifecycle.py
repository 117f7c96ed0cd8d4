"""Task lifecycle use case: create, query, update, trash, restore, purge.

Each mutation re-fetches the task, checks the authorization guard, applies
the transition through the task store and only then hands its pending
notification effects to the dispatcher. The effect builders below are pure
functions of the mutated task and the actor.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import datetime

from app.application.dtos.task import TaskCreate, TaskFilter, TaskResult, TaskUpdate
from app.application.dtos.user import UserResult
from app.application.interfaces.repositories import ITaskRepository, IUserDirectory
from app.application.interfaces.services import INotificationDispatcher
from app.application.services.notification_dispatcher import NotificationEffect
from app.application.services.task_authorization import TaskAuthorizationGuard
from app.domain.entities.task import TaskEntity, trash_state_from_fields
from app.domain.enums import NotificationType, TaskStatus
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, traced
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)


@dataclass(frozen=True)
class LifecycleOutcome:
    """Result of a lifecycle transition plus the notifications it should trigger."""

    task: TaskResult
    effects: list[NotificationEffect] = field(default_factory=list)


def _task_result_to_entity(r: TaskResult) -> TaskEntity:
    """Map TaskResult (application DTO) to TaskEntity (domain entity)."""
    return TaskEntity(
        id=r.id,
        title=r.title,
        description=r.description,
        assigned_to=frozenset(r.assigned_to),
        created_by=r.created_by,
        status=r.status,
        trash=trash_state_from_fields(r.is_deleted, r.deleted_at),
    )


def _assignee_effect(
    task: TaskResult, message: str, type: NotificationType, actor: UserResult
) -> list[NotificationEffect]:
    if not task.assigned_to:
        return []
    return [
        NotificationEffect.to_assignees(
            assigned_to=task.assigned_to,
            message=message,
            type=type,
            created_by=actor.id,
            related_task=task.id,
        )
    ]


def task_created_effects(task: TaskResult, actor: UserResult) -> list[NotificationEffect]:
    return _assignee_effect(
        task, f"New task assigned: {task.title}", NotificationType.TASK_CREATED, actor
    )


def task_updated_effects(task: TaskResult, actor: UserResult) -> list[NotificationEffect]:
    return _assignee_effect(
        task, f"Task updated: {task.title}", NotificationType.TASK_UPDATED, actor
    )


def task_trashed_effects(task: TaskResult, actor: UserResult) -> list[NotificationEffect]:
    return _assignee_effect(
        task, f"Task moved to trash: {task.title}", NotificationType.TASK_TRASHED, actor
    )


def task_restored_effects(task: TaskResult, actor: UserResult) -> list[NotificationEffect]:
    return _assignee_effect(
        task,
        f"Task restored from trash: {task.title}",
        NotificationType.TASK_RESTORED,
        actor,
    )


def task_deleted_effects(task: TaskResult, actor: UserResult) -> list[NotificationEffect]:
    return _assignee_effect(
        task,
        f"Task permanently deleted: {task.title}",
        NotificationType.TASK_DELETED,
        actor,
    )


def status_change_effects(
    task: TaskResult,
    actor: UserResult,
    previous_status: str,
    progress_status: str = TaskStatus.IN_PROGRESS.value,
) -> list[NotificationEffect]:
    """Admins hear only about progress starts, not every status change."""
    if task.status != progress_status or previous_status == progress_status:
        return []
    return [
        NotificationEffect.to_admins(
            message=f"{actor.name} started working on task: {task.title}",
            type=NotificationType.TASK_UPDATED,
            created_by=actor.id,
            related_task=task.id,
        )
    ]


class TaskLifecycleService:
    """Task lifecycle engine over ITaskRepository with best-effort notification fan-out."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        user_directory: IUserDirectory,
        dispatcher: INotificationDispatcher,
        guard: TaskAuthorizationGuard | None = None,
        *,
        clock: Callable[[], datetime] = utc_now,
        progress_status: str = TaskStatus.IN_PROGRESS.value,
    ) -> None:
        self.task_repo = task_repo
        self.user_directory = user_directory
        self.dispatcher = dispatcher
        self.guard = guard or TaskAuthorizationGuard()
        self.clock = clock
        self.progress_status = progress_status

    async def _load(self, task_id: str) -> TaskResult:
        task = await self.task_repo.find_by_id(task_id)
        if task is None:
            raise ResourceNotFoundException("task", task_id)
        return task

    async def _apply(self, task_id: str, values: dict[str, object]) -> TaskResult:
        updated = await self.task_repo.update_by_id(task_id, values)
        if updated is None:
            raise ResourceNotFoundException("task", task_id)
        return updated

    async def _require_known_assignees(self, assigned_to: frozenset[str]) -> None:
        """Every assignee must be a user in the directory (one batched lookup)."""
        found = await self.user_directory.get_many_by_ids(set(assigned_to))
        missing = assigned_to - {u.id for u in found}
        if missing:
            raise ResourceNotFoundException("user", ",".join(sorted(missing)))

    async def _commit(self, outcome: LifecycleOutcome) -> TaskResult:
        """Run the outcome's effects after its mutation has been applied."""
        await self.dispatcher.dispatch(outcome.effects)
        return outcome.task

    # ---- Queries ----

    async def get_task(self, actor: UserResult, task_id: str) -> TaskResult:
        """Return an active task the actor may view. Trashed tasks are not found."""
        task = await self._load(task_id)
        if task.is_deleted:
            raise ResourceNotFoundException("task", task_id)
        self.guard.require_view(_task_result_to_entity(task), actor)
        return task

    async def get_tasks(self, task_filter: TaskFilter | None = None) -> list[TaskResult]:
        """Return active tasks; assigned_to in the filter means all listed ids are assignees."""
        base = task_filter or TaskFilter()
        return await self.task_repo.find_many(replace(base, is_deleted=False))

    async def get_user_tasks(self, user_id: str) -> list[TaskResult]:
        """Return active tasks assigned to user_id."""
        return await self.task_repo.find_many(
            TaskFilter(is_deleted=False, assigned_to=frozenset({user_id}))
        )

    async def get_trash(self, actor: UserResult) -> list[TaskResult]:
        """Return trashed tasks created by the actor (assignment alone does not count)."""
        return await self.task_repo.find_many(
            TaskFilter(is_deleted=True, created_by=actor.id)
        )

    # ---- Mutations ----

    @traced("task.create_task")
    async def create_task(self, actor: UserResult, data: TaskCreate) -> TaskResult:
        """Create a task owned by the actor and notify non-admin assignees."""
        if not data.assigned_to:
            raise ValidationException(
                "Task must be assigned to at least one user", field="assigned_to"
            )
        if not data.title or not data.title.strip():
            raise ValidationException("Task title is required", field="title")
        await self._require_known_assignees(data.assigned_to)
        created = await self.task_repo.insert(data, created_by=actor.id)
        logger.info("Task %s created by %s", created.id, actor.id)
        return await self._commit(
            LifecycleOutcome(created, task_created_effects(created, actor))
        )

    @traced("task.update_task")
    async def update_task(
        self, actor: UserResult, task_id: str, data: TaskUpdate
    ) -> TaskResult:
        """Merge general fields (creator or admin) and notify non-admin assignees."""
        current = await self._load(task_id)
        self.guard.require_manage(_task_result_to_entity(current), actor, "update")
        values = data.values()
        if "title" in values and not (values["title"] or "").strip():
            raise ValidationException("Task title is required", field="title")
        if "status" in values and not values["status"]:
            raise ValidationException("Task status is required", field="status")
        if "assigned_to" in values:
            if not values["assigned_to"]:
                raise ValidationException(
                    "Task must be assigned to at least one user", field="assigned_to"
                )
            await self._require_known_assignees(values["assigned_to"])
        updated = await self._apply(task_id, values) if values else current
        return await self._commit(
            LifecycleOutcome(updated, task_updated_effects(updated, actor))
        )

    @traced("task.update_task_status")
    async def update_task_status(
        self, actor: UserResult, task_id: str, status: str
    ) -> TaskResult:
        """Set status (assignee or admin). Admins are notified when work starts."""
        current = await self._load(task_id)
        entity = _task_result_to_entity(current)
        self.guard.require_mutate_status(entity, actor)
        previous = entity.change_status(status)
        updated = await self._apply(task_id, {"status": entity.status})
        return await self._commit(
            LifecycleOutcome(
                updated,
                status_change_effects(updated, actor, previous, self.progress_status),
            )
        )

    @traced("task.move_to_trash")
    async def move_to_trash(self, actor: UserResult, task_id: str) -> TaskResult:
        """Soft-delete an active task and notify non-admin assignees."""
        current = await self._load(task_id)
        entity = _task_result_to_entity(current)
        self.guard.require_manage(entity, actor, "trash")
        entity.move_to_trash(self.clock())
        updated = await self._apply(task_id, entity.trash_values())
        logger.info("Task %s moved to trash by %s", task_id, actor.id)
        return await self._commit(
            LifecycleOutcome(updated, task_trashed_effects(updated, actor))
        )

    @traced("task.restore_task")
    async def restore_task(self, actor: UserResult, task_id: str) -> TaskResult:
        """Bring a trashed task back and notify non-admin assignees."""
        current = await self._load(task_id)
        entity = _task_result_to_entity(current)
        self.guard.require_manage(entity, actor, "restore")
        entity.restore()
        updated = await self._apply(task_id, entity.trash_values())
        logger.info("Task %s restored by %s", task_id, actor.id)
        return await self._commit(
            LifecycleOutcome(updated, task_restored_effects(updated, actor))
        )

    @traced("task.delete_from_trash")
    async def delete_from_trash(self, actor: UserResult, task_id: str) -> None:
        """Permanently delete one trashed task (creator only). No notification."""
        current = await self._load(task_id)
        entity = _task_result_to_entity(current)
        self.guard.require_purge(entity, actor)
        entity.ensure_in_trash()
        if not await self.task_repo.delete_by_id(task_id):
            raise ResourceNotFoundException("task", task_id)
        logger.info("Task %s permanently deleted by %s", task_id, actor.id)

    @traced("task.empty_trash")
    async def empty_trash(self, actor: UserResult) -> int:
        """Permanently delete every trashed task the actor created.

        Notifies non-admin assignees once per (task, recipient) pair; all
        recipients for the batch are resolved in one directory lookup.
        """
        trash_filter = TaskFilter(is_deleted=True, created_by=actor.id)
        trashed = await self.task_repo.find_many(trash_filter)
        if not trashed:
            return 0
        for task in trashed:
            self.guard.require_purge(_task_result_to_entity(task), actor)
        # Pin the purge to the rows loaded above; trash that appears meanwhile stays.
        deleted = await self.task_repo.delete_many(
            replace(trash_filter, ids=frozenset(t.id for t in trashed))
        )
        effects = [e for task in trashed for e in task_deleted_effects(task, actor)]
        add_span_attributes(deleted=deleted)
        await self.dispatcher.dispatch(effects)
        logger.info("Trash emptied by %s: %d task(s) deleted", actor.id, deleted)
        return deleted
