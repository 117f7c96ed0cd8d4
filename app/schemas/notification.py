"""Notification API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain.enums import NotificationType
from app.schemas.common import UserId


class NotificationCreateRequest(BaseModel):
    """Request body for creating one notification by hand."""

    assigned_to: UserId
    message: str = Field(..., min_length=1, max_length=1000)
    type: NotificationType
    related_task: str | None = Field(default=None, max_length=64)
    related_message: str | None = Field(default=None, max_length=64)


class NotificationResponse(BaseModel):
    """Notification as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    assigned_to: list[str]
    message: str
    type: NotificationType
    related_task: str | None
    related_message: str | None
    created_by: str
    is_read: bool
    created_at: datetime

    @field_validator("assigned_to", mode="before")
    @classmethod
    def sort_assignees(cls, value: object) -> object:
        if isinstance(value, (set, frozenset)):
            return sorted(value)
        return value
