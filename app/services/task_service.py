# File: app/services/task_service.py

"""
Task use cases: load, authorize, mutate, respond.

Order of checks matters to callers:
  - admin-only actions (update, assign, delete) are refused before the task
    is looked up;
  - actions whose rule depends on the task (read, status update) look it up
    first, so a missing task is a 404 even for an outsider.

Reads go through task_cache. Every write commits, evicts all cached list
pages and stores the fresh task view under its key; a delete evicts it.
"""

import logging
from typing import Optional, Sequence, TypeVar

from sqlalchemy.orm import Session

from app.core.exceptions import InvalidArgumentError
from app.models.task import Task
from app.models.user import User
from app.repositories.task_repository import TaskRepository, window_fits
from app.repositories.user_repository import UserRepository
from app.schemas.task import TaskRead, TaskRequest, parse_status
from app.services.access_policy import Action, authorize, can_list_all_tasks
from app.services.cache import task_cache

log = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10


def paginate(items: Sequence[T], page: int, size: int) -> list[T]:
    """
    Slice one zero-based page out of `items`.

    Negative page, non-positive size or a page past the end all give [].
    """
    if page < 0 or size <= 0:
        return []
    start = page * size
    if start >= len(items):
        return []
    return list(items[start:start + size])


def _invalidate(task_id: int) -> None:
    task_cache.evict(("task", task_id))
    task_cache.evict_namespace("tasks")


def _refresh(task: Task) -> TaskRead:
    view = TaskRead.from_task(task)
    task_cache.evict_namespace("tasks")
    task_cache.put(("task", task.id), view)
    return view


def _load_task_view(db: Session, task_id: int) -> TaskRead:
    return task_cache.get_or_load(
        ("task", task_id),
        lambda: TaskRead.from_task(TaskRepository(db).get_or_raise(task_id)),
    )


def create_task(db: Session, payload: TaskRequest, actor: User) -> TaskRead:
    authorize(actor, Action.CREATE_TASK)

    assignee: Optional[User] = None
    if payload.assignee_id is not None:
        # picking an assignee up front is an assignment
        authorize(actor, Action.ASSIGN_TASK)
        assignee = UserRepository(db).get_or_raise(payload.assignee_id)

    task = Task(
        title=payload.title,
        description=payload.description,
        status=payload.status,
        priority=payload.priority,
        due_date=payload.due_date,
        author=actor,
        assignee=assignee,
    )
    TaskRepository(db).save(task)
    db.commit()
    view = _refresh(task)

    log.debug("Task %s created by %s", task.id, actor.email)
    return view


def get_task(db: Session, task_id: int, actor: User) -> TaskRead:
    task = _load_task_view(db, task_id)
    authorize(actor, Action.READ_TASK, task)
    return task


def update_task(db: Session, task_id: int, payload: TaskRequest, actor: User) -> TaskRead:
    """
    Full update, admin only. Assignees change status through
    update_task_status instead.
    """
    authorize(actor, Action.UPDATE_TASK)
    tasks = TaskRepository(db)
    task = tasks.get_or_raise(task_id)

    task.title = payload.title
    task.description = payload.description
    task.status = payload.status
    task.priority = payload.priority
    task.due_date = payload.due_date
    if "assignee_id" in payload.model_fields_set:
        task.assignee = (
            UserRepository(db).get_or_raise(payload.assignee_id)
            if payload.assignee_id is not None
            else None
        )

    tasks.save(task)
    db.commit()
    view = _refresh(task)

    log.debug("Task %s updated by %s", task_id, actor.email)
    return view


def update_task_status(db: Session, task_id: int, status: Optional[str], actor: User) -> TaskRead:
    tasks = TaskRepository(db)
    task = tasks.get_or_raise(task_id)
    authorize(actor, Action.UPDATE_TASK_STATUS, task)

    if status is None:
        raise InvalidArgumentError("Status is required")
    try:
        new_status = parse_status(status)
    except ValueError as exc:
        raise InvalidArgumentError(str(exc))

    task.status = new_status
    tasks.save(task)
    db.commit()
    view = _refresh(task)

    log.debug("Task %s status set to %s by %s", task_id, new_status.value, actor.email)
    return view


def assign_task(db: Session, task_id: int, assignee_id: int, actor: User) -> TaskRead:
    authorize(actor, Action.ASSIGN_TASK)
    tasks = TaskRepository(db)
    task = tasks.get_or_raise(task_id)
    task.assignee = UserRepository(db).get_or_raise(assignee_id)

    tasks.save(task)
    db.commit()
    view = _refresh(task)

    log.debug("Task %s assigned to user %s by admin %s", task_id, assignee_id, actor.email)
    return view


def delete_task(db: Session, task_id: int, actor: User) -> None:
    authorize(actor, Action.DELETE_TASK)
    tasks = TaskRepository(db)
    task = tasks.get_or_raise(task_id)

    tasks.delete(task)
    db.commit()
    _invalidate(task_id)

    log.debug("Task %s deleted by admin %s", task_id, actor.email)


def list_tasks(
    db: Session,
    actor: User,
    page: int = 0,
    size: int = DEFAULT_PAGE_SIZE,
) -> list[TaskRead]:
    """
    Admins page through every task; everyone else through the tasks they
    authored or are assigned to. Newest first.
    """
    if not window_fits(page, size):
        return []

    scope = None if can_list_all_tasks(actor) else actor.id

    def load() -> list[TaskRead]:
        rows = TaskRepository(db).find_page(page, size, user_id=scope)
        if not rows:
            log.debug("Page %s (size %s) is past the last task for %s", page, size, actor.email)
        return [TaskRead.from_task(t) for t in rows]

    return task_cache.get_or_load(("tasks", actor.id, page, size), load)
