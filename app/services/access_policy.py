# File: app/services/access_policy.py

"""
Access control policy.

Pure decision functions over (actor, resource). Nothing here touches the
database: callers load the task or comment first, so a missing resource
surfaces as NotFoundError before any AccessDeniedError.

Resources are read through their `author_id` / `assignee_id` attributes,
which both the ORM entities and the cached TaskRead DTOs expose.

| Action             | Allowed when                                   |
|--------------------|------------------------------------------------|
| CREATE_TASK        | any authenticated role                         |
| READ_TASK          | admin, task author, task assignee              |
| UPDATE_TASK        | admin (all fields)                             |
| UPDATE_TASK_STATUS | admin, task assignee                           |
| DELETE_TASK        | admin                                          |
| ASSIGN_TASK        | admin                                          |
| LIST_ALL_TASKS     | admin (others only see their own tasks)        |
| CREATE_COMMENT     | admin, task author, task assignee              |
| READ_COMMENTS      | admin, task author, task assignee              |
| DELETE_COMMENT     | admin, comment author                          |

A task author who is not the assignee can read and comment on the task but
can not modify it, not even its status.
"""

import enum
from typing import Any, Callable, Optional, Protocol

from app.core.exceptions import AccessDeniedError
from app.models.user import Role


class Actor(Protocol):
    id: int
    role: Role


class Action(str, enum.Enum):
    CREATE_TASK = "create_task"
    READ_TASK = "read_task"
    UPDATE_TASK = "update_task"
    UPDATE_TASK_STATUS = "update_task_status"
    DELETE_TASK = "delete_task"
    ASSIGN_TASK = "assign_task"
    LIST_ALL_TASKS = "list_all_tasks"
    CREATE_COMMENT = "create_comment"
    READ_COMMENTS = "read_comments"
    DELETE_COMMENT = "delete_comment"


def is_admin(actor: Actor) -> bool:
    return actor.role == Role.ADMIN


def is_task_author(actor: Actor, task: Any) -> bool:
    return task.author_id == actor.id


def is_task_assignee(actor: Actor, task: Any) -> bool:
    return task.assignee_id is not None and task.assignee_id == actor.id


# -----------------------------
# Tasks
# -----------------------------

def can_create_task(actor: Actor) -> bool:
    return actor.role in (Role.ADMIN, Role.USER)


def can_read_task(actor: Actor, task: Any) -> bool:
    return is_admin(actor) or is_task_author(actor, task) or is_task_assignee(actor, task)


def can_update_task(actor: Actor, task: Any = None) -> bool:
    return is_admin(actor)


def can_update_task_status(actor: Actor, task: Any) -> bool:
    return is_admin(actor) or is_task_assignee(actor, task)


def can_delete_task(actor: Actor, task: Any = None) -> bool:
    return is_admin(actor)


def can_assign_task(actor: Actor, task: Any = None) -> bool:
    return is_admin(actor)


def can_list_all_tasks(actor: Actor) -> bool:
    return is_admin(actor)


# -----------------------------
# Comments
# -----------------------------

def can_create_comment(actor: Actor, task: Any) -> bool:
    return is_admin(actor) or is_task_author(actor, task) or is_task_assignee(actor, task)


def can_read_comments(actor: Actor, task: Any) -> bool:
    return is_admin(actor) or is_task_author(actor, task) or is_task_assignee(actor, task)


def can_delete_comment(actor: Actor, comment: Any) -> bool:
    return is_admin(actor) or comment.author_id == actor.id


# -----------------------------
# Policy table
# -----------------------------

_RULES: dict[Action, Callable[..., bool]] = {
    Action.CREATE_TASK: lambda actor, _: can_create_task(actor),
    Action.READ_TASK: can_read_task,
    Action.UPDATE_TASK: can_update_task,
    Action.UPDATE_TASK_STATUS: can_update_task_status,
    Action.DELETE_TASK: can_delete_task,
    Action.ASSIGN_TASK: can_assign_task,
    Action.LIST_ALL_TASKS: lambda actor, _: can_list_all_tasks(actor),
    Action.CREATE_COMMENT: can_create_comment,
    Action.READ_COMMENTS: can_read_comments,
    Action.DELETE_COMMENT: can_delete_comment,
}

# Actions whose rule looks at the resource; the others can be decided
# before anything is loaded.
RESOURCE_ACTIONS = frozenset(
    {
        Action.READ_TASK,
        Action.UPDATE_TASK_STATUS,
        Action.CREATE_COMMENT,
        Action.READ_COMMENTS,
        Action.DELETE_COMMENT,
    }
)

DENIED_MESSAGES: dict[Action, str] = {
    Action.CREATE_TASK: "You do not have permission to create tasks",
    Action.READ_TASK: "You do not have permission to access this task",
    Action.UPDATE_TASK: "Only admins can perform this operation",
    Action.UPDATE_TASK_STATUS: "You do not have permission to modify this task",
    Action.DELETE_TASK: "Only admins can perform this operation",
    Action.ASSIGN_TASK: "Only admins can perform this operation",
    Action.LIST_ALL_TASKS: "Only admins can list all tasks",
    Action.CREATE_COMMENT: "You do not have permission to comment on this task",
    Action.READ_COMMENTS: "You do not have permission to view comments on this task",
    Action.DELETE_COMMENT: "You do not have permission to delete this comment",
}


def is_allowed(actor: Optional[Actor], action: Action, resource: Any = None) -> bool:
    if actor is None:
        return False
    if action in RESOURCE_ACTIONS and resource is None:
        raise ValueError(f"{action.value} needs the resource to decide")
    return _RULES[action](actor, resource)


def authorize(actor: Optional[Actor], action: Action, resource: Any = None) -> None:
    """
    Raise AccessDeniedError unless `actor` may perform `action` on `resource`.
    """
    if not is_allowed(actor, action, resource):
        raise AccessDeniedError(DENIED_MESSAGES[action])
