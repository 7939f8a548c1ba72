"""Field-by-field projections between user DTOs and the persisted entity."""

import uuid

from app.db.models.user import UserEntity
from app.schemas.user import UserCreateDto, UserDto, UserUpdateDto


def to_user_dto(entity: UserEntity) -> UserDto:
    return UserDto(
        id=entity.id,
        login=entity.login,
        first_name=entity.first_name,
        last_name=entity.last_name,
    )


def to_update_dto(entity: UserEntity) -> UserUpdateDto:
    # model_construct: the stored entity may not satisfy the DTO rules, PATCH re-validates afterwards
    return UserUpdateDto.model_construct(
        login=entity.login,
        first_name=entity.first_name,
        last_name=entity.last_name,
    )


def new_entity_from_create(dto: UserCreateDto) -> UserEntity:
    """New, unsaved entity. The repository assigns the id on insert."""
    return UserEntity(login=dto.login, first_name=dto.first_name, last_name=dto.last_name)


def new_entity_with_id(user_id: uuid.UUID) -> UserEntity:
    return UserEntity(id=user_id)


def apply_update(dto: UserUpdateDto, entity: UserEntity) -> UserEntity:
    """Copy every DTO field onto entity (full replacement, missing names become null)."""
    entity.login = dto.login
    entity.first_name = dto.first_name
    entity.last_name = dto.last_name
    return entity
