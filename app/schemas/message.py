"""Direct message API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import UserId


class MessageSendRequest(BaseModel):
    receiver: UserId
    content: str = Field(..., min_length=1, max_length=1000)


class MessageDeleteRequest(BaseModel):
    message_ids: list[str] = Field(..., min_length=1)


class MessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    sender: str
    receiver: str
    content: str
    is_read: bool
    created_at: datetime


class ConversationUser(BaseModel):
    """The other participant of a conversation."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    image: str | None
    job_title: str | None


class ConversationResponse(BaseModel):
    user: ConversationUser
    messages: list[MessageResponse]


class InboxSenderResponse(BaseModel):
    """One inbox entry: a sender and the latest message they sent."""

    model_config = ConfigDict(from_attributes=True)

    sender_id: str
    name: str
    email: str
    image: str | None
    job_title: str | None
    last_message: MessageResponse
