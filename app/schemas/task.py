"""Task API schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain.enums import TaskStatus
from app.schemas.common import UserId

TaskStatusValue = Annotated[str, Field(min_length=1, max_length=32)]


class TaskCreateRequest(BaseModel):
    """Request body for creating a task. The creator is the authenticated user."""

    title: str = Field(..., min_length=1, max_length=500)
    description: str | None = Field(default=None, max_length=10_000)
    assigned_to: list[UserId] = Field(..., min_length=1)
    status: TaskStatusValue = TaskStatus.TODO.value


class TaskUpdateRequest(BaseModel):
    """Request body for a general update. Omitted fields are unchanged; null clears description."""

    title: str | None = Field(default=None, min_length=1, max_length=500)
    description: str | None = Field(default=None, max_length=10_000)
    assigned_to: list[UserId] | None = Field(default=None, min_length=1)
    status: TaskStatusValue | None = None


class TaskStatusRequest(BaseModel):
    """Request body for PATCH /tasks/{id}/status."""

    status: TaskStatusValue


class TaskSearchRequest(BaseModel):
    """Filter for POST /tasks/search. assigned_to lists ids that must all be assignees."""

    assigned_to: list[UserId] = Field(default_factory=list)
    status: TaskStatusValue | None = None
    created_by: UserId | None = None


class TaskResponse(BaseModel):
    """Task as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None
    assigned_to: list[str]
    created_by: str
    status: str
    is_deleted: bool
    deleted_at: datetime | None
    created_at: datetime
    updated_at: datetime

    @field_validator("assigned_to", mode="before")
    @classmethod
    def sort_assignees(cls, value: object) -> object:
        if isinstance(value, (set, frozenset)):
            return sorted(value)
        return value
