# File: app/services/user_service.py

"""
User directory.

Registration always creates a USER; set_role is the administrative escape
hatch used by the bootstrap script and is not exposed over HTTP.
"""

import logging

from sqlalchemy.orm import Session

from app.core.exceptions import EmailTakenError, NotFoundError
from app.core.security import hash_password
from app.models.user import Role, User
from app.repositories.user_repository import UserRepository
from app.schemas.auth import RegisterRequest
from app.services.cache import task_cache

log = logging.getLogger(__name__)


def create_user(db: Session, registration: RegisterRequest) -> User:
    users = UserRepository(db)
    if users.exists_by_email(registration.email):
        raise EmailTakenError()

    user = User(
        email=registration.email,
        hashed_password=hash_password(registration.password),
        first_name=registration.first_name,
        last_name=registration.last_name,
        role=Role.USER,
    )
    users.save(user)
    db.commit()
    log.debug("Created user %s with id %s", user.email, user.id)
    return user


def get_user_by_id(db: Session, user_id: int) -> User:
    return UserRepository(db).get_or_raise(user_id)


def get_user_by_email(db: Session, email: str) -> User:
    user = UserRepository(db).get_by_email(email)
    if user is None:
        raise NotFoundError(f"User not found with email: {email}")
    return user


def list_users(db: Session) -> list[User]:
    return UserRepository(db).find_all()


def set_role(db: Session, user_id: int, role: Role) -> User:
    user = get_user_by_id(db, user_id)
    user.role = role
    db.commit()
    # cached task pages are scoped by the caller's role
    task_cache.evict_namespace("tasks")
    log.info("Role of user %s set to %s", user.email, role.value)
    return user
