"""Data access for tasks.

Handlers only see the ``TaskRepository`` interface; ``SqlTaskRepository`` is
the SQLAlchemy implementation used in production.
"""

import logging
from abc import ABC, abstractmethod
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskapi.errors import RepositoryError, TaskNotFoundError
from taskapi.models.task import Task

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "done")


class TaskRepository(ABC):
    """Abstract interface for task storage."""

    @abstractmethod
    def list_all(self) -> List[Task]:
        """All tasks, ascending by id."""

    @abstractmethod
    def create(self, user_id: int, title: str) -> Task:
        """Store a new task; the store assigns id and done=False."""

    @abstractmethod
    def get_by_id(self, task_id: int) -> Task:
        """Return the task or raise TaskNotFoundError."""

    @abstractmethod
    def update_fields(self, task_id: int, changes: dict) -> bool:
        """Apply every field in ``changes`` in a single write.

        Returns whether a task with that id existed. An empty ``changes``
        writes nothing.
        """

    @abstractmethod
    def delete_by_id(self, task_id: int) -> int:
        """Remove the task, returning the number of rows removed."""

    def set_title(self, task_id: int, title: str) -> bool:
        return self.update_fields(task_id, {"title": title})

    def set_done(self, task_id: int, done: bool) -> bool:
        return self.update_fields(task_id, {"done": done})


class SqlTaskRepository(TaskRepository):
    def __init__(self, db: Session):
        self.db = db

    def _fail(self, op: str, exc: Exception) -> RepositoryError:
        self.db.rollback()
        return RepositoryError(f"{op}: {exc}")

    def list_all(self) -> List[Task]:
        try:
            return self.db.query(Task).order_by(Task.id).all()
        except SQLAlchemyError as e:
            raise self._fail("list tasks", e) from e

    def create(self, user_id: int, title: str) -> Task:
        task = Task(user_id=user_id, title=title, done=False)
        try:
            self.db.add(task)
            self.db.commit()
            self.db.refresh(task)
        except SQLAlchemyError as e:
            raise self._fail("create task", e) from e
        return task

    def get_by_id(self, task_id: int) -> Task:
        try:
            task = self.db.query(Task).filter(Task.id == task_id).first()
        except SQLAlchemyError as e:
            raise self._fail(f"get task {task_id}", e) from e
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def update_fields(self, task_id: int, changes: dict) -> bool:
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"cannot update {sorted(unknown)}")
        if not changes:
            return self.exists(task_id)
        try:
            matched = (
                self.db.query(Task)
                .filter(Task.id == task_id)
                .update(dict(changes), synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail(f"update task {task_id}", e) from e
        return matched > 0

    def delete_by_id(self, task_id: int) -> int:
        try:
            removed = (
                self.db.query(Task)
                .filter(Task.id == task_id)
                .delete(synchronize_session=False)
            )
            if removed > 1:
                # id is the primary key; anything else means the table is broken
                self.db.rollback()
                raise RepositoryError(f"delete task {task_id} matched {removed} rows")
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail(f"delete task {task_id}", e) from e
        return removed

    def exists(self, task_id: int) -> bool:
        try:
            return self.db.query(Task.id).filter(Task.id == task_id).first() is not None
        except SQLAlchemyError as e:
            raise self._fail(f"get task {task_id}", e) from e
