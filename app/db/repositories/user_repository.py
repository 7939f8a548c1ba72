"""
User repository - the only code that reads or mutates persisted users.
"""

import logging
import uuid

from app.db.models.user import UserEntity
from app.db.repositories.base_repository import BaseRepository
from app.schemas.page import Page

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[UserEntity]):
    """User-specific data access: lookup, paging, insert, upsert, delete."""

    def __init__(self, session):
        super().__init__(session, UserEntity)

    async def find_by_id(self, user_id: uuid.UUID) -> UserEntity | None:
        return await self.get_by_id(user_id)

    async def get_page(self, page_number: int, page_size: int) -> Page[UserEntity]:
        """Page of users ordered by login (id breaks ties). page_number is 1-based."""
        total = await self.count()
        items = await self.get_many(
            skip=(page_number - 1) * page_size,
            limit=page_size,
            order_by=(UserEntity.login, UserEntity.id),
        )
        return Page(items=items, current_page=page_number, page_size=page_size, total_count=total)

    async def insert(self, entity: UserEntity) -> UserEntity:
        """Insert a new user. The repository assigns the identifier."""
        entity.id = uuid.uuid4()
        entity = await self.add(entity)
        logger.debug("Inserted user %s", entity.id)
        return entity

    async def update_or_insert(self, entity: UserEntity) -> bool:
        """Persist entity under its own id. Returns True when a new row was inserted."""
        existing = await self.get_by_id(entity.id)
        if existing is None:
            await self.add(entity)
            return True
        if existing is not entity:
            existing.login = entity.login
            existing.first_name = entity.first_name
            existing.last_name = entity.last_name
        await self.session.flush()
        return False

    async def delete_by_id(self, user_id: uuid.UUID) -> None:
        entity = await self.get_by_id(user_id)
        if entity is not None:
            await self.delete(entity)
