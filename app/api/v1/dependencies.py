"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, the authenticated user and the
application services. Routes depend only on these, not on infrastructure.

Read routes get a plain session (get_db); write routes get a session inside
one transaction (get_db_transactional). On write sessions the notification
dispatcher wraps fan-out in a SAVEPOINT, so a failed fan-out rolls back on
its own and the primary mutation still commits.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import UserResult
from app.application.interfaces.repositories import IUserDirectory
from app.application.services import NotificationDispatcher, RecipientResolver
from app.application.use_cases.messages import MessageService
from app.application.use_cases.notifications import NotificationService
from app.application.use_cases.tasks import TaskLifecycleService
from app.core.config import get_settings
from app.domain.exceptions import AuthenticationException
from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import (
    ConversationRepository,
    MessageRepository,
    NotificationRepository,
    TaskRepository,
    UserDirectory,
)
from app.infrastructure.security.jwt import verify_token

_http_bearer = HTTPBearer(auto_error=False)

ReadSession = Annotated[AsyncSession, Depends(get_db)]
WriteSession = Annotated[AsyncSession, Depends(get_db_transactional)]


# ---- Authentication ----


async def get_user_directory(db: ReadSession) -> UserDirectory:
    return UserDirectory(db)


async def get_token_subject(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> str:
    """Return the user id (sub) of a valid bearer token; raise 401 otherwise.

    Resolved before any database session so unauthenticated calls never touch the store.
    """
    if not credentials:
        raise AuthenticationException("Not authenticated")
    try:
        return verify_token(credentials.credentials)
    except ValueError as e:
        raise AuthenticationException("Invalid or expired token") from e


async def get_current_user(
    user_id: Annotated[str, Depends(get_token_subject)],
    directory: Annotated[IUserDirectory, Depends(get_user_directory)],
) -> UserResult:
    """Return the active user named by the token; raise 401 if unknown or inactive."""
    user = await directory.get_by_id(user_id)
    if user is None or not user.is_active:
        raise AuthenticationException("User not found or inactive")
    return user


CurrentUser = Annotated[UserResult, Depends(get_current_user)]


# ---- Service factories ----


def _dispatcher(db: AsyncSession, *, isolate: bool) -> NotificationDispatcher:
    return NotificationDispatcher(
        NotificationRepository(db),
        RecipientResolver(UserDirectory(db)),
        isolate=db.begin_nested if isolate else None,
    )


def _task_service(db: AsyncSession, *, isolate: bool) -> TaskLifecycleService:
    return TaskLifecycleService(
        TaskRepository(db),
        UserDirectory(db),
        _dispatcher(db, isolate=isolate),
        progress_status=get_settings().progress_notify_status,
    )


async def get_task_service(db: ReadSession) -> TaskLifecycleService:
    """Task lifecycle service on a read session (queries only)."""
    return _task_service(db, isolate=False)


async def get_task_service_for_write(db: WriteSession) -> TaskLifecycleService:
    """Task lifecycle service on a transactional session."""
    return _task_service(db, isolate=True)


def _notification_service(db: AsyncSession) -> NotificationService:
    return NotificationService(
        NotificationRepository(db), TaskRepository(db), MessageRepository(db)
    )


async def get_notification_service(db: ReadSession) -> NotificationService:
    return _notification_service(db)


async def get_notification_service_for_write(db: WriteSession) -> NotificationService:
    return _notification_service(db)


def _message_service(db: AsyncSession, *, isolate: bool) -> MessageService:
    return MessageService(
        MessageRepository(db),
        ConversationRepository(db),
        UserDirectory(db),
        _dispatcher(db, isolate=isolate),
    )


async def get_message_service(db: ReadSession) -> MessageService:
    return _message_service(db, isolate=False)


async def get_message_service_for_write(db: WriteSession) -> MessageService:
    """Message service on a transactional session (send, mark read, delete)."""
    return _message_service(db, isolate=True)
