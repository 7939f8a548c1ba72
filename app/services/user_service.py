"""
User service - use cases behind the /users resource.
Validates and maps inputs, drives the repository; HTTP shaping stays in the endpoints.
"""

import logging
import uuid
from typing import Any

from app.core.errors import UnprocessableEntityError
from app.db.repositories.user_repository import UserRepository
from app.schemas.page import Page
from app.schemas.user import (
    LOGIN_CHARACTERS_MESSAGE,
    UserCreateDto,
    UserDto,
    UserUpdateDto,
    has_only_letters_or_digits,
)
from app.schemas.validation import validate_payload
from app.services import user_mapper
from app.services.json_patch import PatchError, PatchOperation, apply_patch

logger = logging.getLogger(__name__)

PATCH_ERROR_KEY = "UserUpdateDto"


class UserService:
    """Handles all user use cases: lookup, paging, create, upsert, patch, delete."""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def get_by_id(self, user_id: uuid.UUID) -> UserDto | None:
        entity = await self.user_repo.find_by_id(user_id)
        if entity is None:
            logger.debug("User %s not found", user_id)
            return None
        return user_mapper.to_user_dto(entity)

    async def get_page(self, page_number: int, page_size: int) -> Page[UserDto]:
        """Expects already normalized paging arguments."""
        page = await self.user_repo.get_page(page_number, page_size)
        logger.debug(
            "Users page %d/%d (size %d, total %d)",
            page.current_page, page.total_pages, page.page_size, page.total_count,
        )
        return page.map(user_mapper.to_user_dto)

    async def create(self, payload: Any) -> uuid.UUID:
        """Validate a create body and insert. Returns the id assigned by the repository."""
        dto = validate_payload(UserCreateDto, payload)
        if not has_only_letters_or_digits(dto.login):
            raise UnprocessableEntityError({"Login": [LOGIN_CHARACTERS_MESSAGE]})
        entity = await self.user_repo.insert(user_mapper.new_entity_from_create(dto))
        logger.info("Created user %s (login=%s)", entity.id, entity.login)
        return entity.id

    async def upsert(self, user_id: uuid.UUID, payload: Any) -> bool:
        """Replace the user at user_id, creating it if absent. Returns True on insertion."""
        dto = validate_payload(UserUpdateDto, payload)
        entity = await self.user_repo.find_by_id(user_id)
        if entity is None:
            entity = user_mapper.new_entity_with_id(user_id)
        user_mapper.apply_update(dto, entity)
        inserted = await self.user_repo.update_or_insert(entity)
        logger.info("%s user %s", "Inserted" if inserted else "Replaced", user_id)
        return inserted

    async def patch(self, user_id: uuid.UUID, operations: list[PatchOperation]) -> bool | None:
        """
        Apply patch operations to the user's update projection.

        Returns None when the user does not exist, otherwise whether the repository inserted.
        Nothing is written unless the patched projection validates.
        """
        entity = await self.user_repo.find_by_id(user_id)
        if entity is None:
            return None
        current = dict(user_mapper.to_update_dto(entity))
        try:
            patched = apply_patch(current, operations)
        except PatchError as exc:
            raise UnprocessableEntityError({PATCH_ERROR_KEY: [str(exc)]}) from exc
        dto = validate_payload(UserUpdateDto, patched)
        user_mapper.apply_update(dto, entity)
        inserted = await self.user_repo.update_or_insert(entity)
        logger.info("Patched user %s with %d operation(s)", user_id, len(operations))
        return inserted

    async def delete(self, user_id: uuid.UUID) -> bool:
        """Delete user. False when it does not exist."""
        entity = await self.user_repo.find_by_id(user_id)
        if entity is None:
            return False
        await self.user_repo.delete_by_id(user_id)
        logger.info("Deleted user %s", user_id)
        return True
