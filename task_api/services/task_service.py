import uuid
from datetime import datetime
from typing import Callable, List, Optional

from ..core.exceptions import NotFound, ValidationError
from ..core.logger import setup_logger
from ..models.base import utcnow
from ..models.task import Task, TaskPriority, TaskStatus
from ..schemas.task import TaskCreate, TaskUpdate, choices_message
from ..schemas.user import Identity
from ..stores.task_store import TaskStore

logger = setup_logger(__name__)


def _parse_filter(value: Optional[str], field: str, enum_cls):
    if not value:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(choices_message(field, enum_cls))


def _parse_task_id(task_id) -> uuid.UUID:
    # Malformed ids are reported exactly like missing tasks
    if isinstance(task_id, uuid.UUID):
        return task_id
    try:
        return uuid.UUID(str(task_id))
    except ValueError:
        raise NotFound()


class TaskService:
    """Task CRUD, always scoped to the authenticated caller."""

    def __init__(self, store: TaskStore, clock: Callable[[], datetime] = utcnow):
        self.store = store
        self.clock = clock

    def list_tasks(
        self,
        identity: Identity,
        status: Optional[str] = None,
        priority: Optional[str] = None,
    ) -> List[Task]:
        # Filters are validated before any query runs
        status_filter = _parse_filter(status, "status", TaskStatus)
        priority_filter = _parse_filter(priority, "priority", TaskPriority)
        return self.store.list_by_owner(
            identity.id, status=status_filter, priority=priority_filter
        )

    def get_task(self, identity: Identity, task_id) -> Task:
        task = self.store.find_by_id(_parse_task_id(task_id), identity.id)
        if task is None:
            raise NotFound()
        return task

    def create_task(self, identity: Identity, data: TaskCreate) -> Task:
        now = self.clock()
        task = self.store.create(
            Task(
                user_id=identity.id,
                title=data.title,
                description=data.description,
                status=data.status or TaskStatus.pending,
                priority=data.priority or TaskPriority.medium,
                due_date=data.due_date,
                created_at=now,
                updated_at=now,
            )
        )
        logger.debug("User %s created task %s", identity.id, task.id)
        return task

    def update_task(self, identity: Identity, task_id, data: TaskUpdate) -> Task:
        # Merge, not replace: only fields present in the request are written
        fields = data.model_dump(exclude_unset=True)
        fields["updated_at"] = self.clock()

        task = self.store.update(_parse_task_id(task_id), identity.id, fields)
        if task is None:
            raise NotFound()
        logger.debug("User %s updated task %s (%s)", identity.id, task.id, ", ".join(sorted(fields)))
        return task

    def delete_task(self, identity: Identity, task_id) -> None:
        if not self.store.delete(_parse_task_id(task_id), identity.id):
            raise NotFound()
        logger.debug("User %s deleted task %s", identity.id, task_id)
