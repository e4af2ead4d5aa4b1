"""
Database initialization helpers.

Models are imported here so their tables get registered on Base.metadata
(and so string relationship targets like "Comment" resolve).
"""

import logging

from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import engine
from app.models.base import Base
from app.models import comment, task, user  # noqa: F401
from app.models.user import Role, User
from app.repositories.user_repository import UserRepository
from app.schemas.auth import RegisterRequest
from app.services import user_service

log = logging.getLogger(__name__)


def init_db() -> None:
    """
    Create all tables based on SQLAlchemy models.
    """
    Base.metadata.create_all(bind=engine)


def ensure_admin(
    db: Session,
    *,
    email: str,
    password: str,
    first_name: str = "Admin",
    last_name: str = "User",
) -> User:
    """
    Create an ADMIN account, or promote the existing account with that email.

    The password of an existing account is left untouched.
    """
    existing = UserRepository(db).get_by_email(email)
    if existing is None:
        existing = user_service.create_user(
            db,
            RegisterRequest(
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
            ),
        )
    if existing.role != Role.ADMIN:
        existing = user_service.set_role(db, existing.id, Role.ADMIN)
        log.info("Granted ADMIN role to %s", email)
    return existing


def seed_initial_data(db: Session) -> None:
    """
    Create the bootstrap admin from FIRST_ADMIN_EMAIL / FIRST_ADMIN_PASSWORD,
    if both are configured.
    """
    if not (settings.first_admin_email and settings.first_admin_password):
        return
    ensure_admin(
        db,
        email=settings.first_admin_email,
        password=settings.first_admin_password,
    )
