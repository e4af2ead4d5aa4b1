# File: app/api/routes/routes_comments.py

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_db
from app.models.user import User
from app.schemas.comment import CommentRead, CommentRequest
from app.services import comment_service

router = APIRouter()


@router.post("/{task_id}/comments", response_model=CommentRead, summary="Add a comment to a task")
def add_comment(
    task_id: int,
    payload: CommentRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return comment_service.add_comment(db, task_id, payload, current_user)


@router.get("/{task_id}", response_model=list[CommentRead], summary="Get task comments")
def list_comments(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return comment_service.list_comments(db, task_id, current_user)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a comment")
def delete_comment(
    comment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    comment_service.delete_comment(db, comment_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
