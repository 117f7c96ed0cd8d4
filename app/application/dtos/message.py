"""DTOs for direct messaging (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MessageResult:
    """Direct message between two users."""

    id: str
    sender: str
    receiver: str
    content: str
    is_read: bool
    is_deleted: bool
    created_at: datetime


@dataclass(frozen=True)
class ConversationResult:
    """Conversation between a sorted pair of participants."""

    id: str
    participants: tuple[str, str]
    last_message: str | None


@dataclass(frozen=True)
class InboxSender:
    """One entry of the inbox: a sender and a preview of their latest message."""

    sender_id: str
    name: str
    email: str
    image: str | None
    job_title: str | None
    last_message: MessageResult
