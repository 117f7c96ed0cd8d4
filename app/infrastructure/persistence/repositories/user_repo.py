"""User directory backed by the app_user table. Read-only."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import UserResult
from app.domain.enums import UserRole
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import BaseRepository


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult."""
    return UserResult(
        id=u.id,
        role=UserRole(u.role),
        name=u.name,
        email=u.email,
        image=u.image,
        job_title=u.job_title,
        is_active=u.is_active,
    )


class UserDirectory(BaseRepository[User]):
    """User directory. Implements IUserDirectory."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_id(self, user_id: str) -> UserResult | None:
        user = await self._get(user_id)
        return _user_to_result(user) if user else None

    async def get_many_by_ids(self, user_ids: set[str]) -> list[UserResult]:
        if not user_ids:
            return []
        result = await self.db.execute(select(User).where(User.id.in_(user_ids)))
        return [_user_to_result(u) for u in result.scalars().all()]

    async def find_by_role(self, role: UserRole) -> list[UserResult]:
        result = await self.db.execute(
            select(User).where(User.role == role.value, User.is_active.is_(True))
        )
        return [_user_to_result(u) for u in result.scalars().all()]
