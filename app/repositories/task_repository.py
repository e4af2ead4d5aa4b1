# File: app/repositories/task_repository.py

"""
Task store.

Listing is newest-created first (id breaks ties). find_page pushes the
page/size window into the query but keeps the in-memory semantics of
paginate(): negative page or non-positive size gives an empty page, and a
page past the end is empty rather than an error. That includes windows
whose offset does not fit a 64-bit SQL integer.
"""

from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.models.task import Task

NEWEST_FIRST = (Task.created_at.desc(), Task.id.desc())

MAX_SQL_INT = 2**63 - 1


class TaskRepository:
    def __init__(self, db: Session):
        self.db = db

    def save(self, task: Task) -> Task:
        self.db.add(task)
        self.db.flush()
        return task

    def get(self, task_id: int) -> Optional[Task]:
        return self.db.get(Task, task_id)

    def get_or_raise(self, task_id: int) -> Task:
        task = self.get(task_id)
        if task is None:
            raise NotFoundError("Task not found")
        return task

    def find_all(self) -> list[Task]:
        return list(self.db.scalars(select(Task).order_by(*NEWEST_FIRST)).unique())

    def find_by_author_or_assignee(self, user_id: int) -> list[Task]:
        stmt = select(Task).where(_involves(user_id)).order_by(*NEWEST_FIRST)
        return list(self.db.scalars(stmt).unique())

    def find_page(self, page: int, size: int, user_id: Optional[int] = None) -> list[Task]:
        """
        One page of tasks; all tasks when user_id is None, otherwise the
        tasks that user authored or is assigned to.
        """
        if not window_fits(page, size):
            return []
        stmt = select(Task)
        if user_id is not None:
            stmt = stmt.where(_involves(user_id))
        stmt = stmt.order_by(*NEWEST_FIRST).offset(page * size).limit(min(size, MAX_SQL_INT))
        return list(self.db.scalars(stmt).unique())

    def delete(self, task: Task) -> None:
        self.db.delete(task)
        self.db.flush()


def window_fits(page: int, size: int) -> bool:
    """
    True when page/size describe a window worth querying: non-negative page,
    positive size and a start offset the database can represent.
    """
    return page >= 0 and size > 0 and page * size <= MAX_SQL_INT


def _involves(user_id: int):
    return or_(Task.author_id == user_id, Task.assignee_id == user_id)
