# File: app/schemas/comment.py

from __future__ import annotations

from datetime import datetime

from pydantic import field_validator

from app.models.comment import Comment
from app.schemas.base import CamelModel


class CommentRequest(CamelModel):
    content: str

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Comment content is required")
        return v


class CommentRead(CamelModel):
    id: int
    content: str
    task_id: int
    author_id: int
    author_name: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> CommentRead:
        return cls(
            id=comment.id,
            content=comment.content,
            task_id=comment.task_id,
            author_id=comment.author_id,
            author_name=comment.author.full_name,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
