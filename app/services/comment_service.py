# File: app/services/comment_service.py

import logging

from sqlalchemy.orm import Session

from app.models.comment import Comment
from app.models.user import User
from app.repositories.comment_repository import CommentRepository
from app.repositories.task_repository import TaskRepository
from app.schemas.comment import CommentRead, CommentRequest
from app.services.access_policy import Action, authorize

log = logging.getLogger(__name__)


def add_comment(db: Session, task_id: int, payload: CommentRequest, actor: User) -> CommentRead:
    task = TaskRepository(db).get_or_raise(task_id)
    authorize(actor, Action.CREATE_COMMENT, task)

    comment = Comment(content=payload.content, task=task, author=actor)
    CommentRepository(db).save(comment)
    db.commit()

    log.debug("Comment %s added to task %s by %s", comment.id, task_id, actor.email)
    return CommentRead.from_comment(comment)


def list_comments(db: Session, task_id: int, actor: User) -> list[CommentRead]:
    task = TaskRepository(db).get_or_raise(task_id)
    authorize(actor, Action.READ_COMMENTS, task)
    return [CommentRead.from_comment(c) for c in CommentRepository(db).find_by_task_id(task_id)]


def delete_comment(db: Session, comment_id: int, actor: User) -> None:
    """
    The comment author or an admin may delete it. A second delete of the
    same id is a 404.
    """
    comments = CommentRepository(db)
    comment = comments.get_or_raise(comment_id)
    authorize(actor, Action.DELETE_COMMENT, comment)

    comments.delete(comment)
    db.commit()
    log.debug("Comment %s deleted by %s", comment_id, actor.email)
