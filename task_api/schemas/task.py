from sqlmodel import SQLModel
from pydantic import field_validator
from typing import List, Optional, Type
from datetime import datetime
from enum import Enum
import uuid

from ..models.task import TaskStatus, TaskPriority


def choices_message(field: str, enum_cls: Type[Enum]) -> str:
    return f"{field} must be one of: {', '.join(member.value for member in enum_cls)}"


def check_choice(value, field: str, enum_cls: Type[Enum]):
    if value not in [member.value for member in enum_cls]:
        raise ValueError(choices_message(field, enum_cls))
    return value


class TaskCreate(SQLModel):
    title: str
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def title_not_blank(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("title is required.")
        return value.strip() if isinstance(value, str) else value

    @field_validator("description", "due_date", mode="before")
    @classmethod
    def empty_as_null(cls, value):
        return value or None

    # Unset, null and "" all fall back to the column default
    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, value):
        return check_choice(value, "status", TaskStatus) if value else None

    @field_validator("priority", mode="before")
    @classmethod
    def check_priority(cls, value):
        return check_choice(value, "priority", TaskPriority) if value else None


class TaskUpdate(SQLModel):
    """Partial update: only the fields present in the request body are applied."""

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def title_not_blank(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("title cannot be empty.")
        return value.strip() if isinstance(value, str) else value

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, value):
        return check_choice(value, "status", TaskStatus)

    @field_validator("priority", mode="before")
    @classmethod
    def check_priority(cls, value):
        return check_choice(value, "priority", TaskPriority)


class TaskRead(SQLModel):
    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class TaskResponse(SQLModel):
    message: str
    task: TaskRead


class TaskDetail(SQLModel):
    task: TaskRead


class TaskList(SQLModel):
    count: int
    tasks: List[TaskRead]


class MessageResponse(SQLModel):
    message: str
