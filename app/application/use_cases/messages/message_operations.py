"""Direct messaging between two users.

Sending a message emits a message_received notification to the receiver
through the same dispatcher as task notifications. Admins are not filtered
out here: every receiver hears about their own messages.
"""

from __future__ import annotations

from app.application.dtos.message import InboxSender, MessageResult
from app.application.dtos.user import UserResult
from app.application.interfaces.repositories import (
    IConversationRepository,
    IMessageRepository,
    IUserDirectory,
)
from app.application.interfaces.services import INotificationDispatcher
from app.application.services.notification_dispatcher import NotificationEffect
from app.domain.enums import NotificationType
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import traced

logger = get_logger(__name__)

MAX_MESSAGE_LENGTH = 1000


class MessageService:
    """Send and read direct messages; keeps conversations pointing at their last message."""

    def __init__(
        self,
        message_repo: IMessageRepository,
        conversation_repo: IConversationRepository,
        user_directory: IUserDirectory,
        dispatcher: INotificationDispatcher,
    ) -> None:
        self.message_repo = message_repo
        self.conversation_repo = conversation_repo
        self.user_directory = user_directory
        self.dispatcher = dispatcher

    @traced("message.send")
    async def send_message(
        self, sender: UserResult, receiver_id: str, content: str
    ) -> MessageResult:
        """Store the message, update the conversation and notify the receiver."""
        if not content or not content.strip():
            raise ValidationException("Message content is required", field="content")
        if len(content) > MAX_MESSAGE_LENGTH:
            raise ValidationException(
                f"Message content exceeds {MAX_MESSAGE_LENGTH} characters",
                field="content",
            )
        if receiver_id == sender.id:
            raise ValidationException("Cannot send a message to yourself", field="receiver")
        receiver = await self.user_directory.get_by_id(receiver_id)
        if receiver is None:
            raise ResourceNotFoundException("user", receiver_id)

        message = await self.message_repo.create(sender.id, receiver.id, content)
        conversation = await self.conversation_repo.find_or_create(sender.id, receiver.id)
        await self.conversation_repo.set_last_message(conversation.id, message.id)

        await self.dispatcher.dispatch(
            [
                NotificationEffect.to_user(
                    receiver.id,
                    message=f"New message from {sender.name}",
                    type=NotificationType.MESSAGE_RECEIVED,
                    created_by=sender.id,
                    related_message=message.id,
                )
            ]
        )
        return message

    async def get_inbox_senders(self, user: UserResult) -> list[InboxSender]:
        """Return each distinct sender of messages to user, most recent conversation first."""
        received = await self.message_repo.find_received(user.id)
        latest: dict[str, MessageResult] = {}
        for message in received:
            latest.setdefault(message.sender, message)
        if not latest:
            return []
        senders = {
            u.id: u for u in await self.user_directory.get_many_by_ids(set(latest))
        }
        out: list[InboxSender] = []
        for sender_id, message in latest.items():
            sender = senders.get(sender_id)
            if sender is None:
                continue
            out.append(
                InboxSender(
                    sender_id=sender.id,
                    name=sender.name,
                    email=sender.email,
                    image=sender.image,
                    job_title=sender.job_title,
                    last_message=message,
                )
            )
        return out

    async def get_conversation(
        self, user: UserResult, other_user_id: str
    ) -> tuple[UserResult, list[MessageResult]]:
        """Return the other user and all messages between the two (oldest first).

        Unread messages from the other user to this user are marked read.
        """
        other = await self.user_directory.get_by_id(other_user_id)
        if other is None:
            raise ResourceNotFoundException("user", other_user_id)
        messages = await self.message_repo.find_between(user.id, other.id)
        marked = await self.message_repo.mark_read_from(other.id, user.id)
        if marked:
            logger.debug("Marked %d message(s) from %s as read", marked, other.id)
        return other, messages

    async def delete_messages(self, user: UserResult, message_ids: list[str]) -> int:
        """Soft-delete the listed messages the user sent or received."""
        if not message_ids:
            raise ValidationException(
                "Please provide message IDs to delete", field="message_ids"
            )
        count = await self.message_repo.soft_delete(user.id, set(message_ids))
        if count == 0:
            raise ResourceNotFoundException("message", ",".join(sorted(message_ids)))
        return count

    async def delete_all_messages(self, user: UserResult) -> int:
        """Soft-delete every message the user sent or received."""
        return await self.message_repo.soft_delete(user.id)
