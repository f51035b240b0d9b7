import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, desc, select

from ..core.exceptions import InvalidToken
from ..core.logger import setup_logger
from ..models.task import Task, TaskPriority, TaskStatus

logger = setup_logger(__name__)


class TaskStore:
    """
    Persists tasks scoped to their owner.

    Every statement that targets a single task filters on both ``id`` and
    ``user_id``; a task owned by someone else is indistinguishable from a
    missing one.
    """

    def __init__(self, session: Session):
        self.session = session

    def _owned(self, task_id: uuid.UUID, owner_id: uuid.UUID):
        return select(Task).where(Task.id == task_id, Task.user_id == owner_id)

    def create(self, task: Task) -> Task:
        self.session.add(task)
        try:
            self.session.commit()
        except IntegrityError:
            # The only constraint a new task can break is the owner foreign key
            self.session.rollback()
            logger.info("Task rejected: owner %s no longer exists", task.user_id)
            raise InvalidToken("Token owner no longer exists.")
        self.session.refresh(task)
        return task

    def find_by_id(self, task_id: uuid.UUID, owner_id: uuid.UUID) -> Optional[Task]:
        return self.session.exec(self._owned(task_id, owner_id)).first()

    def list_by_owner(
        self,
        owner_id: uuid.UUID,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
    ) -> List[Task]:
        query = select(Task).where(Task.user_id == owner_id)
        if status is not None:
            query = query.where(Task.status == status)
        if priority is not None:
            query = query.where(Task.priority == priority)

        # Newest first
        return list(self.session.exec(query.order_by(desc(Task.created_at))).all())

    def update(
        self, task_id: uuid.UUID, owner_id: uuid.UUID, fields: Dict[str, Any]
    ) -> Optional[Task]:
        task = self.find_by_id(task_id, owner_id)
        if task is None:
            return None

        for key, value in fields.items():
            setattr(task, key, value)

        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        return task

    def delete(self, task_id: uuid.UUID, owner_id: uuid.UUID) -> bool:
        task = self.find_by_id(task_id, owner_id)
        if task is None:
            return False

        self.session.delete(task)
        self.session.commit()
        return True
