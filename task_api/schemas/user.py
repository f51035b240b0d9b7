from sqlmodel import SQLModel
from pydantic import field_validator
import uuid


def _require_text(value, field: str):
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"{field} is required.")
    return value


class UserCreate(SQLModel):
    name: str
    email: str
    password: str

    @field_validator("name", "email", "password", mode="before")
    @classmethod
    def not_blank(cls, value, info):
        return _require_text(value, info.field_name)

    @field_validator("password")
    @classmethod
    def long_enough(cls, value: str) -> str:
        if len(value) < 8:
            raise ValueError("Password must be at least 8 characters long.")
        return value


class UserLogin(SQLModel):
    email: str
    password: str

    @field_validator("email", "password", mode="before")
    @classmethod
    def not_blank(cls, value, info):
        return _require_text(value, info.field_name)


class UserRead(SQLModel):
    id: uuid.UUID
    name: str
    email: str


class AuthResponse(SQLModel):
    message: str
    token: str
    user: UserRead


class Identity(SQLModel):
    """Authenticated caller, decoded from a bearer token."""

    id: uuid.UUID
    email: str
