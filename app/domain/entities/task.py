"""Task domain entity.

A task is either active or in the trash. The persisted pair
(is_deleted, deleted_at) is derived from a single TrashState value, and the
only way to change it is through move_to_trash / restore, so the pairing
cannot drift.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.domain.enums import TaskStatus
from app.domain.exceptions import InvalidStateException, ValidationException


@dataclass(frozen=True)
class Active:
    """Task is visible to normal queries."""


@dataclass(frozen=True)
class Trashed:
    """Task was soft-deleted at `at`; restorable or purgeable."""

    at: datetime


TrashState = Active | Trashed


def trash_state_from_fields(is_deleted: bool, deleted_at: datetime | None) -> TrashState:
    """Build TrashState from persisted fields. Raises ValueError if the pair is inconsistent."""
    if is_deleted:
        if deleted_at is None:
            raise ValueError("is_deleted is set but deleted_at is missing")
        return Trashed(at=deleted_at)
    if deleted_at is not None:
        raise ValueError("deleted_at is set on a task that is not deleted")
    return Active()


@dataclass
class TaskEntity:
    """Domain entity for a task (assignment list, owner, status, trash state)."""

    id: str
    title: str
    description: str | None
    assigned_to: frozenset[str]
    created_by: str
    status: str = TaskStatus.TODO.value
    trash: TrashState = field(default_factory=Active)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate task business rules. Raises ValidationException if invalid."""
        if not self.id:
            raise ValidationException("Task ID is required", field="id")
        if not self.title or not self.title.strip():
            raise ValidationException("Task title is required", field="title")
        if not self.created_by:
            raise ValidationException("Task owner is required", field="created_by")

    @property
    def is_deleted(self) -> bool:
        return isinstance(self.trash, Trashed)

    @property
    def deleted_at(self) -> datetime | None:
        return self.trash.at if isinstance(self.trash, Trashed) else None

    def is_assignee(self, user_id: str) -> bool:
        return user_id in self.assigned_to

    def is_owned_by(self, user_id: str) -> bool:
        return self.created_by == user_id

    def move_to_trash(self, at: datetime) -> None:
        """Soft-delete the task.

        Raises:
            InvalidStateException: If the task is already in the trash.
        """
        if self.is_deleted:
            raise InvalidStateException(
                "Task is already in trash", "task", self.id, state="trashed"
            )
        self.trash = Trashed(at=at)

    def restore(self) -> None:
        """Bring a trashed task back.

        Raises:
            InvalidStateException: If the task is not in the trash.
        """
        self.ensure_in_trash()
        self.trash = Active()

    def ensure_in_trash(self) -> None:
        """Raise InvalidStateException unless the task is trashed (restore and purge precondition)."""
        if not self.is_deleted:
            raise InvalidStateException(
                "Task is not in trash", "task", self.id, state="active"
            )

    def trash_values(self) -> dict[str, Any]:
        """Return the persisted soft-delete fields for the current trash state."""
        return {"is_deleted": self.is_deleted, "deleted_at": self.deleted_at}

    def change_status(self, new_status: str) -> str:
        """Set status and return the previous one."""
        if not new_status or not new_status.strip():
            raise ValidationException("Task status is required", field="status")
        previous = self.status
        self.status = new_status
        return previous
