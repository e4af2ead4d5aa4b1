# File: app/api/routes/routes_tasks.py

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_db
from app.models.user import User
from app.schemas.task import TaskAssignRequest, TaskRead, TaskRequest, TaskStatusUpdate
from app.services import task_service

router = APIRouter()


@router.post("", response_model=TaskRead, summary="Create a new task")
def create_task(
    payload: TaskRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    The caller becomes the author. Only admins may set an assignee here.
    """
    return task_service.create_task(db, payload, current_user)


@router.get("", response_model=list[TaskRead], summary="List tasks")
def list_tasks(
    page: int = Query(0, description="Page number (0-based)"),
    size: int = Query(task_service.DEFAULT_PAGE_SIZE, description="Number of items per page"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Admins see all tasks; users see tasks they authored or are assigned to.
    """
    return task_service.list_tasks(db, current_user, page=page, size=size)


@router.get("/{task_id}", response_model=TaskRead, summary="Get task by ID")
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return task_service.get_task(db, task_id, current_user)


@router.put("/{task_id}", response_model=TaskRead, summary="Update a task")
def update_task(
    task_id: int,
    payload: TaskRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Rewrite every field of the task. Admin only; an assignee uses
    PATCH /{task_id}/status.
    """
    return task_service.update_task(db, task_id, payload, current_user)


@router.patch("/{task_id}/status", response_model=TaskRead, summary="Update task status")
def update_task_status(
    task_id: int,
    status_param: Optional[str] = Query(
        None,
        alias="status",
        description="PENDING, IN_PROGRESS, COMPLETED or CANCELLED (any case)",
    ),
    payload: Optional[TaskStatusUpdate] = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Status may come from the query string or a JSON body; the query string
    wins when both are present.
    """
    new_status = status_param if status_param is not None else (payload.status if payload else None)
    return task_service.update_task_status(db, task_id, new_status, current_user)


@router.patch("/{task_id}/assign", response_model=TaskRead, summary="Assign a task")
def assign_task(
    task_id: int,
    payload: TaskAssignRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return task_service.assign_task(db, task_id, payload.assignee_id, current_user)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a task")
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    task_service.delete_task(db, task_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
