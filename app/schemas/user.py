"""User request/response schemas - API contract. Wire names are camelCase."""

import uuid

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

LOGIN_CHARACTERS_MESSAGE = "Login should contain only letters or digits"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserInputDto(CamelModel):
    """Fields shared by every user input body; login is required and non-blank."""

    login: str

    @field_validator("login")
    @classmethod
    def login_not_blank(cls, value: str) -> str:
        # Blank is treated the same as missing
        if not value.strip():
            raise ValueError("The Login field is required.")
        return value


class UserCreateDto(UserInputDto):
    first_name: str | None = "John"
    last_name: str | None = "Doe"


class UserUpdateDto(UserInputDto):
    """Body of PUT and the target shape of PATCH operations."""

    first_name: str | None = None
    last_name: str | None = None


class UserDto(CamelModel):
    id: uuid.UUID
    login: str
    first_name: str | None = None
    last_name: str | None = None


def has_only_letters_or_digits(login: str) -> bool:
    # isalnum() would also pass numeric symbols such as superscripts and fractions
    return all(ch.isalpha() or ch.isdecimal() for ch in login)
