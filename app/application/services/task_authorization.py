"""Task authorization guard: pure predicates over already-loaded state (no I/O)."""

from __future__ import annotations

from app.application.dtos.user import UserResult
from app.domain.entities.task import TaskEntity
from app.domain.exceptions import AuthorizationException


class TaskAuthorizationGuard:
    """Decides whether the acting user may view or mutate a task.

    Purge is scoped to the creator only; admins get no override there.
    """

    @staticmethod
    def can_view(task: TaskEntity, actor: UserResult) -> bool:
        return actor.is_admin or task.is_assignee(actor.id) or task.is_owned_by(actor.id)

    @staticmethod
    def can_mutate_status(task: TaskEntity, actor: UserResult) -> bool:
        return actor.is_admin or task.is_assignee(actor.id)

    @staticmethod
    def can_manage(task: TaskEntity, actor: UserResult) -> bool:
        """General update, trash and restore: creator or admin."""
        return actor.is_admin or task.is_owned_by(actor.id)

    @staticmethod
    def can_purge(task: TaskEntity, actor: UserResult) -> bool:
        return task.is_owned_by(actor.id)

    def require_view(self, task: TaskEntity, actor: UserResult) -> None:
        """Raise AuthorizationException if actor may not view the task."""
        if not self.can_view(task, actor):
            raise AuthorizationException(
                message="You are not authorized to view this task",
                resource="task",
            )

    def require_mutate_status(self, task: TaskEntity, actor: UserResult) -> None:
        """Raise AuthorizationException if actor is neither assignee nor admin."""
        if not self.can_mutate_status(task, actor):
            raise AuthorizationException(
                message="You are not assigned to this task",
                resource="task",
            )

    def require_manage(self, task: TaskEntity, actor: UserResult, action: str) -> None:
        """Raise AuthorizationException if actor is neither creator nor admin."""
        if not self.can_manage(task, actor):
            raise AuthorizationException(resource="task", action=action)

    def require_purge(self, task: TaskEntity, actor: UserResult) -> None:
        """Raise AuthorizationException if actor did not create the task."""
        if not self.can_purge(task, actor):
            raise AuthorizationException(resource="task", action="purge")
