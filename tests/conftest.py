# File: tests/conftest.py

"""
Shared fixtures.

The environment is pinned before anything from `app` is imported: an
in-memory SQLite database, a test signing key and cheap bcrypt rounds.
Every test starts from empty tables and an empty task cache.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-signing-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.pop("FIRST_ADMIN_EMAIL", None)
os.environ.pop("FIRST_ADMIN_PASSWORD", None)

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient

from app.core.security import create_access_token
from app.db.session import SessionLocal, engine
from app.main import app
from app.models.base import Base
from app.models.task import Task, TaskPriority, TaskStatus
from app.models.user import Role, User
from app.schemas.auth import RegisterRequest
from app.services import user_service
from app.services.cache import task_cache

DEFAULT_PASSWORD = "secret-pass"


@pytest.fixture(autouse=True)
def reset_state():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    task_cache.clear()
    yield
    task_cache.clear()


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture()
def make_user(db) -> Callable[..., User]:
    counter = {"n": 0}

    def _make_user(
        email: Optional[str] = None,
        *,
        role: Role = Role.USER,
        password: str = DEFAULT_PASSWORD,
        first_name: str = "Test",
        last_name: str = "User",
    ) -> User:
        counter["n"] += 1
        user = user_service.create_user(
            db,
            RegisterRequest(
                email=email or f"user{counter['n']}@tasks.io",
                password=password,
                first_name=first_name,
                last_name=last_name,
            ),
        )
        if role != Role.USER:
            user = user_service.set_role(db, user.id, role)
        return user

    return _make_user


@pytest.fixture()
def admin(make_user) -> User:
    return make_user("admin@tasks.io", role=Role.ADMIN, first_name="Ada", last_name="Admin")


@pytest.fixture()
def make_task(db) -> Callable[..., Task]:
    def _make_task(
        author: User,
        *,
        assignee: Optional[User] = None,
        title: str = "Test Task",
        status: TaskStatus = TaskStatus.PENDING,
        priority: TaskPriority = TaskPriority.MEDIUM,
    ) -> Task:
        task = Task(
            title=title,
            description="Task Description",
            status=status,
            priority=priority,
            due_date=datetime.now(timezone.utc) + timedelta(days=5),
            author=author,
            assignee=assignee,
        )
        db.add(task)
        db.commit()
        return task

    return _make_task


@pytest.fixture()
def auth_headers() -> Callable[[User], dict]:
    def _auth_headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.email)}"}

    return _auth_headers


@pytest.fixture()
def task_payload() -> Callable[..., dict]:
    def _task_payload(**overrides) -> dict:
        payload = {
            "title": "T1",
            "description": "first task",
            "status": "PENDING",
            "priority": "MEDIUM",
            "dueDate": (datetime.now(timezone.utc) + timedelta(days=5)).isoformat(),
        }
        payload.update(overrides)
        return payload

    return _task_payload
