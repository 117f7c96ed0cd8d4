"""Pydantic request/response schemas for the API."""

from app.schemas.common import ApiResponse, CountResponse, DetailResponse, ok
from app.schemas.health import HealthResponse, ReadinessResponse
from app.schemas.message import (
    ConversationResponse,
    InboxSenderResponse,
    MessageDeleteRequest,
    MessageResponse,
    MessageSendRequest,
)
from app.schemas.notification import NotificationCreateRequest, NotificationResponse
from app.schemas.task import (
    TaskCreateRequest,
    TaskResponse,
    TaskSearchRequest,
    TaskStatusRequest,
    TaskUpdateRequest,
)

__all__ = [
    "ApiResponse",
    "ConversationResponse",
    "CountResponse",
    "HealthResponse",
    "InboxSenderResponse",
    "MessageDeleteRequest",
    "DetailResponse",
    "MessageResponse",
    "MessageSendRequest",
    "NotificationCreateRequest",
    "NotificationResponse",
    "ReadinessResponse",
    "TaskCreateRequest",
    "TaskResponse",
    "TaskSearchRequest",
    "TaskStatusRequest",
    "TaskUpdateRequest",
    "ok",
]
