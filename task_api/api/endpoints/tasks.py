from fastapi import APIRouter, Depends, status
from typing import Optional

from task_api.schemas.task import (
    MessageResponse,
    TaskCreate,
    TaskDetail,
    TaskList,
    TaskRead,
    TaskResponse,
    TaskUpdate,
)
from task_api.schemas.user import Identity
from task_api.services.task_service import TaskService
from ..deps import get_current_identity, get_task_service

# Every route here requires a valid bearer token
router = APIRouter(prefix="/tasks")


@router.get("", response_model=TaskList)
def list_user_tasks(
    status: Optional[str] = None,
    priority: Optional[str] = None,
    identity: Identity = Depends(get_current_identity),
    service: TaskService = Depends(get_task_service),
):
    tasks = service.list_tasks(identity, status=status, priority=priority)
    return TaskList(count=len(tasks), tasks=[TaskRead.model_validate(t) for t in tasks])


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_create: TaskCreate,
    identity: Identity = Depends(get_current_identity),
    service: TaskService = Depends(get_task_service),
):
    task = service.create_task(identity, task_create)
    return TaskResponse(message="Task created.", task=TaskRead.model_validate(task))


@router.get("/{task_id}", response_model=TaskDetail)
def get_task(
    task_id: str,
    identity: Identity = Depends(get_current_identity),
    service: TaskService = Depends(get_task_service),
):
    return TaskDetail(task=TaskRead.model_validate(service.get_task(identity, task_id)))


@router.patch("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    task_update: TaskUpdate,
    identity: Identity = Depends(get_current_identity),
    service: TaskService = Depends(get_task_service),
):
    task = service.update_task(identity, task_id, task_update)
    return TaskResponse(message="Task updated.", task=TaskRead.model_validate(task))


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: str,
    identity: Identity = Depends(get_current_identity),
    service: TaskService = Depends(get_task_service),
):
    service.delete_task(identity, task_id)
    return MessageResponse(message="Task deleted.")
