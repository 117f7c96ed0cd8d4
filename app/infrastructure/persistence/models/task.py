"""Task ORM model with soft-delete fields and an assignee association table."""

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    SoftDeleteMixin,
    TimestampMixin,
)


class TaskAssignee(Base):
    """One (task, user) assignment. Table: task_assignee."""

    __tablename__ = "task_assignee"

    task_id: Mapped[str] = mapped_column(
        String, ForeignKey("task.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), primary_key=True, index=True
    )


class Task(CuidMixin, TimestampMixin, SoftDeleteMixin, Base):
    """Task. Table: task. Assignees live in task_assignee."""

    __tablename__ = "task"

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default="todo", server_default="todo"
    )
    assignees: Mapped[list[TaskAssignee]] = relationship(
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_task_trash_owner", "is_deleted", "created_by"),
        CheckConstraint(
            "(is_deleted AND deleted_at IS NOT NULL) OR (NOT is_deleted AND deleted_at IS NULL)",
            name="ck_task_trash_pair",
        ),
    )

    @property
    def assigned_to(self) -> frozenset[str]:
        return frozenset(a.user_id for a in self.assignees)

    def set_assignees(self, user_ids: frozenset[str]) -> None:
        """Replace the assignee set (orphans are deleted on flush)."""
        keep = [a for a in self.assignees if a.user_id in user_ids]
        known = {a.user_id for a in keep}
        keep.extend(TaskAssignee(user_id=uid) for uid in sorted(user_ids - known))
        self.assignees = keep
