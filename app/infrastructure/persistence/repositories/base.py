"""Base repository: primary-key lookup, insert and reload helpers."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get, add and reload.

    Server-side defaults (created_at, updated_at) are only known after a
    flush, so writes go through add()/reload() which re-read the row.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _get(self, entity_id: str) -> ModelType | None:
        """Return a single ORM row by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def _reload(self, entity_id: str) -> ModelType:
        """Re-read a row (and its eager relationships) after a flush."""
        model: Any = self.model
        result = await self.db.execute(
            select(self.model)
            .where(model.id == entity_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def _add(self, obj: ModelType) -> ModelType:
        """Persist a new row and return it with server defaults populated."""
        self.db.add(obj)
        await self.db.flush()
        return await self._reload(obj.id)  # type: ignore[attr-defined]
