"""Direct message API: thin routes delegating to MessageService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request

from app.api.v1.dependencies import (
    CurrentUser,
    get_message_service,
    get_message_service_for_write,
)
from app.application.use_cases.messages import MessageService
from app.core.limiter import limit_message_send, limit_writes
from app.schemas.common import ApiResponse, CountResponse, ok
from app.schemas.message import (
    ConversationResponse,
    ConversationUser,
    InboxSenderResponse,
    MessageDeleteRequest,
    MessageResponse,
    MessageSendRequest,
)

router = APIRouter()

UserIdPath = Annotated[str, Path(min_length=1, max_length=64)]
ReadService = Annotated[MessageService, Depends(get_message_service)]
WriteService = Annotated[MessageService, Depends(get_message_service_for_write)]


@router.get("/senders", response_model=ApiResponse[list[InboxSenderResponse]])
async def get_inbox_senders(current_user: CurrentUser, message_svc: ReadService):
    """Distinct senders of messages to the current user, latest first."""
    senders = await message_svc.get_inbox_senders(current_user)
    return ok([InboxSenderResponse.model_validate(s) for s in senders])


@router.get("/user/{user_id}", response_model=ApiResponse[ConversationResponse])
async def get_conversation(
    user_id: UserIdPath,
    current_user: CurrentUser,
    message_svc: WriteService,
):
    """Messages between the current user and user_id (oldest first); marks theirs read."""
    other, messages = await message_svc.get_conversation(current_user, user_id)
    return ok(
        ConversationResponse(
            user=ConversationUser.model_validate(other),
            messages=[MessageResponse.model_validate(m) for m in messages],
        )
    )


@router.post("", response_model=ApiResponse[MessageResponse], status_code=201)
@limit_message_send
async def send_message(
    request: Request,
    body: MessageSendRequest,
    current_user: CurrentUser,
    message_svc: WriteService,
):
    """Send a message; the receiver gets a message_received notification."""
    message = await message_svc.send_message(current_user, body.receiver, body.content)
    return ok(MessageResponse.model_validate(message))


@router.delete("/all", response_model=ApiResponse[CountResponse])
@limit_writes
async def delete_all_messages(
    request: Request,
    current_user: CurrentUser,
    message_svc: WriteService,
):
    deleted = await message_svc.delete_all_messages(current_user)
    return ok(CountResponse(deleted=deleted))


@router.delete("", response_model=ApiResponse[CountResponse])
@limit_writes
async def delete_messages(
    request: Request,
    body: MessageDeleteRequest,
    current_user: CurrentUser,
    message_svc: WriteService,
):
    """Soft-delete the listed messages the current user sent or received."""
    deleted = await message_svc.delete_messages(current_user, body.message_ids)
    return ok(CountResponse(deleted=deleted))
