"""Domain entities and aggregates.

Pure domain models; no ORM or persistence concerns.
"""

from app.domain.entities.task import (
    Active,
    TaskEntity,
    Trashed,
    TrashState,
    trash_state_from_fields,
)

__all__ = [
    "Active",
    "TaskEntity",
    "Trashed",
    "TrashState",
    "trash_state_from_fields",
]
