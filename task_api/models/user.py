from sqlmodel import SQLModel, Field, Relationship
from typing import List
from datetime import datetime
import uuid

from .base import timestamp_field


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, nullable=False)
    password_hash: str = Field(nullable=False)
    name: str = Field(nullable=False)
    created_at: datetime = timestamp_field()

    # Deleting a user deletes every task it owns
    tasks: List["Task"] = Relationship(back_populates="user", cascade_delete=True)
