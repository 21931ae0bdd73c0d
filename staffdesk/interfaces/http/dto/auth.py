from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from staffdesk.domain.users.entities import Role


class _Credentials(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)

    @field_validator("username")
    @classmethod
    def strip_username(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Username cannot be empty")
        return value


class RegisterRequestDTO(_Credentials):
    # Accepted from the client as-is; see DESIGN.md.
    role: Role = Role.USER


class LoginRequestDTO(_Credentials):
    pass


class MessageDTO(BaseModel):
    message: str


class LoginSuccessDTO(BaseModel):
    message: str = "Login successful"
    role: Role


class MeDTO(BaseModel):
    username: str
    role: Role
