"""initial_schema_users_tasks_notifications_messages

Revision ID: 3f1c2a7b9d10
Revises:
Create Date: 2026-10-19 09:12:41.503218

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a7b9d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = True) -> list[sa.Column]:
    cols = [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        )
    ]
    if updated:
        cols.append(
            sa.Column(
                "updated_at",
                sa.DateTime(timezone=True),
                server_default=sa.text("now()"),
                nullable=False,
            )
        )
    return cols


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "app_user",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("role", sa.String(16), nullable=False, server_default="user"),
        sa.Column("image", sa.String(1000), nullable=True),
        sa.Column("job_title", sa.String(200), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_app_user_email"),
    )
    op.create_index("ix_app_user_role", "app_user", ["role"])
    op.create_index("ix_app_user_created_at", "app_user", ["created_at"])

    op.create_table(
        "task",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_by", sa.String(), nullable=False),
        sa.Column("status", sa.String(32), nullable=False, server_default="todo"),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["created_by"], ["app_user.id"]),
        sa.CheckConstraint(
            "(is_deleted AND deleted_at IS NOT NULL) OR (NOT is_deleted AND deleted_at IS NULL)",
            name="ck_task_trash_pair",
        ),
    )
    op.create_index("ix_task_created_by", "task", ["created_by"])
    op.create_index("ix_task_is_deleted", "task", ["is_deleted"])
    op.create_index("ix_task_created_at", "task", ["created_at"])
    op.create_index("ix_task_trash_owner", "task", ["is_deleted", "created_by"])

    op.create_table(
        "task_assignee",
        sa.Column("task_id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("task_id", "user_id"),
        sa.ForeignKeyConstraint(["task_id"], ["task.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_task_assignee_user_id", "task_assignee", ["user_id"])

    op.create_table(
        "message",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("sender_id", sa.String(), nullable=False),
        sa.Column("receiver_id", sa.String(), nullable=False),
        sa.Column("content", sa.String(1000), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("deleted_by", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["sender_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["receiver_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["deleted_by"], ["app_user.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_message_created_at", "message", ["created_at"])
    op.create_index("ix_message_sender_receiver", "message", ["sender_id", "receiver_id"])
    op.create_index("ix_message_receiver_created", "message", ["receiver_id", "created_at"])

    op.create_table(
        "conversation",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("participant_a", sa.String(), nullable=False),
        sa.Column("participant_b", sa.String(), nullable=False),
        sa.Column("last_message_id", sa.String(), nullable=True),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["participant_a"], ["app_user.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["participant_b"], ["app_user.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["last_message_id"], ["message.id"], ondelete="SET NULL"),
        sa.UniqueConstraint("participant_a", "participant_b", name="uq_conversation_pair"),
        sa.CheckConstraint("participant_a < participant_b", name="ck_conversation_sorted_pair"),
    )
    op.create_index("ix_conversation_created_at", "conversation", ["created_at"])

    # related_task / related_message are plain references: a task_deleted
    # notification is written after its task is gone.
    op.create_table(
        "notification",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("recipient_id", sa.String(), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("related_task", sa.String(), nullable=True),
        sa.Column("related_message", sa.String(), nullable=True),
        sa.Column("created_by", sa.String(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["recipient_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "related_task IS NULL OR related_message IS NULL",
            name="ck_notification_single_reference",
        ),
    )
    op.create_index("ix_notification_created_at", "notification", ["created_at"])
    op.create_index("ix_notification_related_task", "notification", ["related_task"])
    op.create_index(
        "ix_notification_recipient_created", "notification", ["recipient_id", "created_at"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("notification")
    op.drop_table("conversation")
    op.drop_table("message")
    op.drop_table("task_assignee")
    op.drop_table("task")
    op.drop_table("app_user")
