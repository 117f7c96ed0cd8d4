"""Notification API: thin routes delegating to NotificationService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request

from app.api.v1.dependencies import (
    CurrentUser,
    get_notification_service,
    get_notification_service_for_write,
)
from app.application.use_cases.notifications import NotificationService
from app.core.limiter import limit_writes
from app.schemas.common import ApiResponse, CountResponse, DetailResponse, ok
from app.schemas.notification import NotificationCreateRequest, NotificationResponse

router = APIRouter()

ResourceId = Annotated[str, Path(min_length=1, max_length=64)]
ReadService = Annotated[NotificationService, Depends(get_notification_service)]
WriteService = Annotated[NotificationService, Depends(get_notification_service_for_write)]


@router.post("", response_model=ApiResponse[NotificationResponse], status_code=201)
@limit_writes
async def add_notification(
    request: Request,
    body: NotificationCreateRequest,
    current_user: CurrentUser,
    notification_svc: WriteService,
):
    """Create one notification; the referenced task or message must exist."""
    created = await notification_svc.add_notification(
        current_user,
        body.assigned_to,
        body.message,
        body.type,
        related_task=body.related_task,
        related_message=body.related_message,
    )
    return ok(NotificationResponse.model_validate(created))


@router.get("/user/{user_id}", response_model=ApiResponse[list[NotificationResponse]])
async def get_user_notifications(
    user_id: ResourceId,
    current_user: CurrentUser,
    notification_svc: ReadService,
):
    """Notifications addressed to user_id, newest first."""
    items = await notification_svc.list_for_user(current_user, user_id)
    return ok([NotificationResponse.model_validate(n) for n in items])


@router.delete("/user/{user_id}", response_model=ApiResponse[CountResponse])
@limit_writes
async def delete_user_notifications(
    request: Request,
    user_id: ResourceId,
    current_user: CurrentUser,
    notification_svc: WriteService,
):
    deleted = await notification_svc.delete_all_for_user(current_user, user_id)
    return ok(CountResponse(deleted=deleted))


@router.get("/{notification_id}", response_model=ApiResponse[NotificationResponse])
async def read_notification(
    notification_id: ResourceId,
    current_user: CurrentUser,
    notification_svc: WriteService,
):
    """Fetch one notification and mark it read."""
    notification = await notification_svc.read_notification(current_user, notification_id)
    return ok(NotificationResponse.model_validate(notification))


@router.delete("/{notification_id}", response_model=ApiResponse[DetailResponse])
@limit_writes
async def delete_notification(
    request: Request,
    notification_id: ResourceId,
    current_user: CurrentUser,
    notification_svc: WriteService,
):
    await notification_svc.delete_notification(current_user, notification_id)
    return ok(DetailResponse(message="Notification deleted"))
