"""Liveness and readiness payloads. These two routes skip the envelope."""

from typing import Literal

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    version: str


class ReadinessResponse(BaseModel):
    """database is 'disabled' when DATABASE_BACKEND=none."""

    status: Literal["ok", "not_ready"] = "ok"
    database: Literal["ok", "disabled", "unavailable"]
