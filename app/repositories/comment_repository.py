# File: app/repositories/comment_repository.py

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.models.comment import Comment


class CommentRepository:
    def __init__(self, db: Session):
        self.db = db

    def save(self, comment: Comment) -> Comment:
        self.db.add(comment)
        self.db.flush()
        return comment

    def get(self, comment_id: int) -> Optional[Comment]:
        return self.db.get(Comment, comment_id)

    def get_or_raise(self, comment_id: int) -> Comment:
        comment = self.get(comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        return comment

    def find_by_task_id(self, task_id: int) -> list[Comment]:
        stmt = (
            select(Comment)
            .where(Comment.task_id == task_id)
            .order_by(Comment.created_at, Comment.id)
        )
        return list(self.db.scalars(stmt).unique())

    def delete(self, comment: Comment) -> None:
        self.db.delete(comment)
        self.db.flush()
