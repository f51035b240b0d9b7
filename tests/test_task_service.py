# tests/test_task_service.py

from __future__ import annotations

import uuid

import pydantic
import pytest
from sqlalchemy import delete
from sqlmodel import Session

from task_api.core.exceptions import InvalidToken, NotFound, ValidationError
from task_api.models.task import TaskPriority, TaskStatus
from task_api.models.user import User
from task_api.schemas.task import TaskCreate, TaskUpdate
from task_api.schemas.user import Identity
from task_api.services.task_service import TaskService
from task_api.stores.task_store import TaskStore

from .helpers import FakeClock, identity_for, make_user


@pytest.fixture()
def service(session: Session) -> TaskService:
    return TaskService(TaskStore(session), clock=FakeClock())


@pytest.fixture()
def alice(session: Session):
    return identity_for(make_user(session, email="alice@x.com", name="Alice"))


@pytest.fixture()
def bob(session: Session):
    return identity_for(make_user(session, email="bob@x.com", name="Bob"))


def test_create_applies_defaults(service: TaskService, alice) -> None:
    task = service.create_task(alice, TaskCreate(title="  t1  "))

    assert task.title == "t1"
    assert task.status == TaskStatus.pending
    assert task.priority == TaskPriority.medium
    assert task.description is None
    assert task.due_date is None
    assert task.user_id == alice.id
    assert task.created_at == task.updated_at


def test_create_keeps_supplied_fields(service: TaskService, alice) -> None:
    task = service.create_task(
        alice,
        TaskCreate(
            title="Write report",
            description="quarterly",
            status="in_progress",
            priority="high",
            due_date="2024-12-31",
        ),
    )

    assert task.description == "quarterly"
    assert task.status == TaskStatus.in_progress
    assert task.priority == TaskPriority.high
    assert task.due_date == "2024-12-31"


def test_other_users_task_is_not_found(service: TaskService, alice, bob) -> None:
    task = service.create_task(alice, TaskCreate(title="private", description="secret"))

    with pytest.raises(NotFound):
        service.get_task(bob, task.id)
    with pytest.raises(NotFound):
        service.update_task(bob, task.id, TaskUpdate(title="hijacked"))
    with pytest.raises(NotFound):
        service.delete_task(bob, task.id)
    assert service.list_tasks(bob) == []

    unchanged = service.get_task(alice, task.id)
    assert unchanged.title == "private"
    assert unchanged.description == "secret"


def test_partial_update_only_touches_supplied_fields(service: TaskService, alice) -> None:
    task = service.create_task(
        alice,
        TaskCreate(title="t1", description="d", priority="low", due_date="2025-01-01"),
    )
    created_at, updated_at = task.created_at, task.updated_at

    updated = service.update_task(alice, task.id, TaskUpdate(status="completed"))

    assert updated.status == TaskStatus.completed
    assert updated.title == "t1"
    assert updated.description == "d"
    assert updated.priority == TaskPriority.low
    assert updated.due_date == "2025-01-01"
    assert updated.created_at == created_at
    assert updated.updated_at > updated_at


def test_updated_at_increases_on_every_update(service: TaskService, alice) -> None:
    task = service.create_task(alice, TaskCreate(title="t1"))
    stamps = [task.updated_at]
    for title in ("t2", "t3"):
        stamps.append(service.update_task(alice, task.id, TaskUpdate(title=title)).updated_at)

    assert stamps == sorted(stamps)
    assert len(set(stamps)) == 3


def test_explicit_null_overwrites(service: TaskService, alice) -> None:
    task = service.create_task(alice, TaskCreate(title="t1", description="d", due_date="2025-01-01"))

    updated = service.update_task(
        alice, task.id, TaskUpdate.model_validate({"description": None, "due_date": None})
    )

    assert updated.description is None
    assert updated.due_date is None
    assert updated.title == "t1"


def test_list_is_newest_first_and_filtered(service: TaskService, alice, bob) -> None:
    first = service.create_task(alice, TaskCreate(title="first"))
    second = service.create_task(alice, TaskCreate(title="second", status="completed"))
    third = service.create_task(alice, TaskCreate(title="third", priority="high"))
    service.create_task(bob, TaskCreate(title="bob's"))

    assert [t.id for t in service.list_tasks(alice)] == [third.id, second.id, first.id]
    assert [t.id for t in service.list_tasks(alice, status="pending")] == [third.id, first.id]
    assert [t.id for t in service.list_tasks(alice, priority="high")] == [third.id]
    assert [t.id for t in service.list_tasks(alice, status="pending", priority="low")] == []
    # Empty filter values count as absent
    assert len(service.list_tasks(alice, status="", priority="")) == 3


class _ExplodingStore(TaskStore):
    def list_by_owner(self, *args, **kwargs):
        raise AssertionError("query must not run for an invalid filter")


@pytest.mark.parametrize(
    "filters, message",
    [
        ({"status": "done"}, "status must be one of: pending, in_progress, completed"),
        ({"priority": "urgent"}, "priority must be one of: low, medium, high"),
    ],
)
def test_invalid_filter_is_rejected_before_querying(session: Session, alice, filters, message) -> None:
    service = TaskService(_ExplodingStore(session))
    with pytest.raises(ValidationError) as exc_info:
        service.list_tasks(alice, **filters)
    assert exc_info.value.message == message


def test_delete_removes_task(service: TaskService, alice) -> None:
    task = service.create_task(alice, TaskCreate(title="t1"))

    service.delete_task(alice, task.id)

    with pytest.raises(NotFound):
        service.get_task(alice, task.id)
    with pytest.raises(NotFound):
        service.delete_task(alice, task.id)


@pytest.mark.parametrize("task_id", ["not-a-uuid", "", str(uuid.uuid4())])
def test_unknown_or_malformed_id_is_not_found(service: TaskService, alice, task_id: str) -> None:
    with pytest.raises(NotFound):
        service.get_task(alice, task_id)


def test_deleting_user_cascades_to_tasks(session: Session, service: TaskService, alice, bob) -> None:
    task = service.create_task(alice, TaskCreate(title="t1"))
    bob_task = service.create_task(bob, TaskCreate(title="t2"))

    # Bypass the ORM so the database's ON DELETE CASCADE does the work
    session.connection().execute(delete(User).where(User.id == alice.id))
    session.commit()
    session.expire_all()

    assert TaskStore(session).find_by_id(task.id, alice.id) is None
    assert service.list_tasks(alice) == []
    assert service.get_task(bob, bob_task.id).title == "t2"


def test_deleting_user_through_orm_cascades(session: Session, service: TaskService, alice) -> None:
    task = service.create_task(alice, TaskCreate(title="t1"))

    session.delete(session.get(User, alice.id))
    session.commit()

    assert TaskStore(session).find_by_id(task.id, alice.id) is None


@pytest.mark.parametrize(
    "payload, message",
    [
        ({}, "title"),
        ({"title": "   "}, "title is required."),
        ({"title": None}, "title is required."),
        ({"title": "t", "status": "done"}, "status must be one of: pending, in_progress, completed"),
        ({"title": "t", "priority": "urgent"}, "priority must be one of: low, medium, high"),
    ],
)
def test_create_command_validation(payload: dict, message: str) -> None:
    with pytest.raises(pydantic.ValidationError) as exc_info:
        TaskCreate.model_validate(payload)
    assert message in str(exc_info.value)


def test_create_command_treats_empty_optionals_as_unset() -> None:
    data = TaskCreate.model_validate(
        {"title": "t", "status": "", "priority": None, "description": "", "due_date": ""}
    )
    assert data.status is None
    assert data.priority is None
    assert data.description is None
    assert data.due_date is None


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"title": ""}, "title cannot be empty."),
        ({"title": None}, "title cannot be empty."),
        ({"status": None}, "status must be one of"),
        ({"priority": "urgent"}, "priority must be one of"),
    ],
)
def test_update_command_validation(payload: dict, message: str) -> None:
    with pytest.raises(pydantic.ValidationError) as exc_info:
        TaskUpdate.model_validate(payload)
    assert message in str(exc_info.value)


def test_update_command_tracks_only_sent_fields() -> None:
    data = TaskUpdate.model_validate({"status": "completed", "description": None})
    assert data.model_dump(exclude_unset=True) == {
        "status": TaskStatus.completed,
        "description": None,
    }


def test_create_for_missing_owner_is_rejected(session: Session, service: TaskService, alice) -> None:
    ghost = Identity(id=uuid.uuid4(), email="ghost@x.com")

    with pytest.raises(InvalidToken):
        service.create_task(ghost, TaskCreate(title="t1"))

    # The rollback leaves the session usable for the next caller
    assert service.create_task(alice, TaskCreate(title="t2")).title == "t2"
