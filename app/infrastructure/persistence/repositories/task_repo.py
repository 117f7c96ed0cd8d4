"""Task store. Interface methods return application DTOs."""

from __future__ import annotations

from typing import Any

from sqlalchemy import ColumnElement, delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.task import TaskCreate, TaskFilter, TaskResult
from app.infrastructure.persistence.models.task import Task, TaskAssignee
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils import ensure_utc

_COLUMNS = {"title", "description", "status", "is_deleted", "deleted_at"}


def _to_result(t: Task) -> TaskResult:
    """Map Task ORM to TaskResult DTO."""
    return TaskResult(
        id=t.id,
        title=t.title,
        description=t.description,
        assigned_to=t.assigned_to,
        created_by=t.created_by,
        status=t.status,
        is_deleted=t.is_deleted,
        deleted_at=ensure_utc(t.deleted_at),
        created_at=ensure_utc(t.created_at),
        updated_at=ensure_utc(t.updated_at),
    )


def _conditions(task_filter: TaskFilter) -> list[ColumnElement[bool]]:
    """Translate TaskFilter into WHERE clauses. Each assignee id is its own EXISTS."""
    clauses: list[ColumnElement[bool]] = []
    if task_filter.is_deleted is not None:
        clauses.append(Task.is_deleted.is_(task_filter.is_deleted))
    if task_filter.created_by is not None:
        clauses.append(Task.created_by == task_filter.created_by)
    if task_filter.status is not None:
        clauses.append(Task.status == task_filter.status)
    if task_filter.ids is not None:
        clauses.append(Task.id.in_(sorted(task_filter.ids)))
    for user_id in sorted(task_filter.assigned_to):
        clauses.append(
            exists().where(
                TaskAssignee.task_id == Task.id, TaskAssignee.user_id == user_id
            )
        )
    return clauses


class TaskRepository(BaseRepository[Task]):
    """Task repository. Implements ITaskRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Task)

    async def insert(self, data: TaskCreate, created_by: str) -> TaskResult:
        task = Task(
            title=data.title,
            description=data.description,
            status=data.status,
            created_by=created_by,
            is_deleted=False,
            deleted_at=None,
        )
        task.assignees = [
            TaskAssignee(user_id=uid) for uid in sorted(data.assigned_to)
        ]
        return _to_result(await self._add(task))

    async def find_by_id(self, task_id: str) -> TaskResult | None:
        task = await self._get(task_id)
        return _to_result(task) if task else None

    async def find_many(self, task_filter: TaskFilter) -> list[TaskResult]:
        result = await self.db.execute(
            select(Task)
            .where(*_conditions(task_filter))
            .order_by(Task.created_at.desc(), Task.id)
        )
        return [_to_result(t) for t in result.scalars().all()]

    async def update_by_id(
        self, task_id: str, values: dict[str, Any]
    ) -> TaskResult | None:
        """Apply column values and/or replace the assignee set. Unknown keys raise ValueError."""
        unknown = set(values) - _COLUMNS - {"assigned_to"}
        if unknown:
            raise ValueError(f"Unknown task fields: {sorted(unknown)}")
        task = await self._get(task_id)
        if task is None:
            return None
        for key, value in values.items():
            if key == "assigned_to":
                task.set_assignees(frozenset(value))
            else:
                setattr(task, key, value)
        await self.db.flush()
        return _to_result(await self._reload(task_id))

    async def delete_by_id(self, task_id: str) -> bool:
        result = await self.db.execute(
            delete(Task)
            .where(Task.id == task_id)
            .execution_options(synchronize_session=False)
        )
        return (result.rowcount or 0) > 0

    async def delete_many(self, task_filter: TaskFilter) -> int:
        """Delete matching rows in one statement; assignee rows go by FK cascade."""
        result = await self.db.execute(
            delete(Task)
            .where(*_conditions(task_filter))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
