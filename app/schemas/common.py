"""Shared API schemas: the response envelope and bounded id types."""

from typing import Annotated, Generic, Literal, TypeVar

from pydantic import BaseModel, Field

UserId = Annotated[str, Field(min_length=1, max_length=64)]

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope for every successful response: {"status": "success", "payload": ...}."""

    status: Literal["success", "error"] = "success"
    payload: T


class CountResponse(BaseModel):
    """Payload for bulk deletes."""

    deleted: int


class DetailResponse(BaseModel):
    """Payload carrying only a human-readable message."""

    message: str


def ok(payload: T) -> ApiResponse[T]:
    """Wrap payload in a success envelope."""
    return ApiResponse(payload=payload)
