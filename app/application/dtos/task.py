"""DTOs for task use cases (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from app.domain.enums import TaskStatus


@dataclass(frozen=True)
class TaskCreate:
    """Input for creating a task. created_by is set from the acting user."""

    title: str
    assigned_to: frozenset[str]
    description: str | None = None
    status: str = TaskStatus.TODO.value


class _Unset(Enum):
    UNSET = "UNSET"


# Marks a TaskUpdate field that was not supplied; None is an explicit value.
UNSET = _Unset.UNSET


@dataclass(frozen=True)
class TaskUpdate:
    """Partial update of general task fields.

    Fields left at UNSET are unchanged. None clears description; for the
    other fields it is rejected by the lifecycle service.
    """

    title: str | None | _Unset = UNSET
    description: str | None | _Unset = UNSET
    assigned_to: frozenset[str] | None | _Unset = UNSET
    status: str | None | _Unset = UNSET

    def values(self) -> dict[str, object]:
        """Return only the fields that were supplied."""
        supplied = {
            "title": self.title,
            "description": self.description,
            "assigned_to": self.assigned_to,
            "status": self.status,
        }
        return {k: v for k, v in supplied.items() if v is not UNSET}


@dataclass(frozen=True)
class TaskFilter:
    """Store-level filter for find_many / delete_many.

    assigned_to is a containment filter: every listed id must be an assignee.
    ids, when set, restricts the match to exactly those task ids.
    """

    is_deleted: bool | None = None
    created_by: str | None = None
    status: str | None = None
    assigned_to: frozenset[str] = field(default_factory=frozenset)
    ids: frozenset[str] | None = None


@dataclass(frozen=True)
class TaskResult:
    """Task read-model returned by the task store."""

    id: str
    title: str
    description: str | None
    assigned_to: frozenset[str]
    created_by: str
    status: str
    is_deleted: bool
    deleted_at: datetime | None
    created_at: datetime
    updated_at: datetime
