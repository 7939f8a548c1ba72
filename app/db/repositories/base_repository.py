"""
Base repository - generic async CRUD over one mapped class.
Subclasses add the model-specific queries; callers own the transaction.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Generic async repository. Subclasses define model-specific methods."""

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    async def get_by_id(self, id: Any) -> ModelType | None:
        """Fetch single entity by primary key (identity map first)."""
        return await self.session.get(self.model, id)

    async def get_many(self, *, skip: int = 0, limit: int = 20, order_by: tuple = ()) -> list[ModelType]:
        """Slice of the table; defaults to primary key order."""
        ordering = order_by or (self.model.id,)
        result = await self.session.execute(
            select(self.model).order_by(*ordering).offset(skip).limit(limit)
        )
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(self.model))
        return result.scalar_one()

    async def add(self, entity: ModelType) -> ModelType:
        """Persist new entity. Caller commits session."""
        self.session.add(entity)
        await self.session.flush()  # Assigns defaults (id) without committing
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity: ModelType) -> None:
        await self.session.delete(entity)
        await self.session.flush()
