"""Direct message and conversation stores."""

from __future__ import annotations

from sqlalchemy import and_, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.message import ConversationResult, MessageResult
from app.infrastructure.persistence.models.message import Conversation, Message
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils import ensure_utc


def _message_to_result(m: Message) -> MessageResult:
    return MessageResult(
        id=m.id,
        sender=m.sender_id,
        receiver=m.receiver_id,
        content=m.content,
        is_read=m.is_read,
        is_deleted=m.is_deleted,
        created_at=ensure_utc(m.created_at),
    )


def _conversation_to_result(c: Conversation) -> ConversationResult:
    return ConversationResult(
        id=c.id,
        participants=(c.participant_a, c.participant_b),
        last_message=c.last_message_id,
    )


class MessageRepository(BaseRepository[Message]):
    """Message repository. Implements IMessageRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Message)

    async def create(self, sender: str, receiver: str, content: str) -> MessageResult:
        message = Message(
            sender_id=sender,
            receiver_id=receiver,
            content=content,
            is_read=False,
            is_deleted=False,
        )
        return _message_to_result(await self._add(message))

    async def find_by_id(self, message_id: str) -> MessageResult | None:
        m = await self._get(message_id)
        return _message_to_result(m) if m else None

    async def find_received(self, user_id: str) -> list[MessageResult]:
        result = await self.db.execute(
            select(Message)
            .where(Message.receiver_id == user_id, Message.is_deleted.is_(False))
            .order_by(Message.created_at.desc(), Message.id)
        )
        return [_message_to_result(m) for m in result.scalars().all()]

    async def find_between(self, user_a: str, user_b: str) -> list[MessageResult]:
        result = await self.db.execute(
            select(Message)
            .where(
                or_(
                    and_(Message.sender_id == user_a, Message.receiver_id == user_b),
                    and_(Message.sender_id == user_b, Message.receiver_id == user_a),
                ),
                Message.is_deleted.is_(False),
            )
            .order_by(Message.created_at.asc(), Message.id)
        )
        return [_message_to_result(m) for m in result.scalars().all()]

    async def mark_read_from(self, sender: str, receiver: str) -> int:
        result = await self.db.execute(
            update(Message)
            .where(
                Message.sender_id == sender,
                Message.receiver_id == receiver,
                Message.is_read.is_(False),
            )
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def soft_delete(
        self, user_id: str, message_ids: set[str] | None = None
    ) -> int:
        """Mark messages deleted by user_id. Only messages they sent or received match."""
        stmt = (
            update(Message)
            .where(
                or_(Message.sender_id == user_id, Message.receiver_id == user_id),
                Message.is_deleted.is_(False),
            )
            .values(is_deleted=True, deleted_by=user_id)
            .execution_options(synchronize_session=False)
        )
        if message_ids is not None:
            stmt = stmt.where(Message.id.in_(message_ids))
        result = await self.db.execute(stmt)
        return result.rowcount or 0


class ConversationRepository(BaseRepository[Conversation]):
    """Conversation repository. Implements IConversationRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Conversation)

    async def find_or_create(self, user_a: str, user_b: str) -> ConversationResult:
        first, second = sorted((user_a, user_b))
        result = await self.db.execute(
            select(Conversation).where(
                Conversation.participant_a == first,
                Conversation.participant_b == second,
            )
            .execution_options(populate_existing=True)
        )
        conversation = result.scalar_one_or_none()
        if conversation is None:
            conversation = await self._add(
                Conversation(participant_a=first, participant_b=second)
            )
        return _conversation_to_result(conversation)

    async def set_last_message(self, conversation_id: str, message_id: str) -> None:
        await self.db.execute(
            update(Conversation)
            .where(Conversation.id == conversation_id)
            .values(last_message_id=message_id, is_deleted=False)
            .execution_options(synchronize_session=False)
        )
