"""Notification ORM model. One row per recipient."""

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CreatedAtMixin, CuidMixin


class Notification(CuidMixin, CreatedAtMixin, Base):
    """Notification. Table: notification.

    related_task / related_message are plain references, not foreign keys:
    a task_deleted notification outlives the task it reports.
    """

    __tablename__ = "notification"

    recipient_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    related_task: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    related_message: Mapped[str | None] = mapped_column(String, nullable=True)
    created_by: Mapped[str] = mapped_column(String, nullable=False)
    is_read: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    __table_args__ = (
        Index("ix_notification_recipient_created", "recipient_id", "created_at"),
        CheckConstraint(
            "related_task IS NULL OR related_message IS NULL",
            name="ck_notification_single_reference",
        ),
    )
