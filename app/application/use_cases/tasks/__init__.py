"""Task use cases: lifecycle (create/update/trash/restore/purge) and queries."""

from app.application.use_cases.tasks.task_lifecycle import (
    LifecycleOutcome,
    TaskLifecycleService,
)

__all__ = [
    "LifecycleOutcome",
    "TaskLifecycleService",
]
