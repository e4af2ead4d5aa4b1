# File: app/services/auth_service.py

"""
Authentication service.

  - User lookup + password verification
  - Token generation for registration and login
"""

import logging

from sqlalchemy.orm import Session

from app.core.exceptions import InvalidCredentialsError
from app.core.security import create_access_token, verify_password
from app.models.user import User
from app.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from app.services import user_service

log = logging.getLogger(__name__)


def authenticate_user(
    db: Session,
    *,
    email: str,
    password: str,
) -> User:
    """
    Return the user owning `email` when `password` matches.

    Unknown email -> NotFoundError (404), wrong password -> 401.
    """
    user = user_service.get_user_by_email(db, email)
    if not verify_password(password, user.hashed_password):
        log.warning("Rejected login for %s: bad password", email)
        raise InvalidCredentialsError()
    return user


def build_auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        token=create_access_token(user.email),
        user_id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role,
    )


def register_user(db: Session, payload: RegisterRequest) -> AuthResponse:
    user = user_service.create_user(db, payload)
    return build_auth_response(user)


def login_user(db: Session, payload: LoginRequest) -> AuthResponse:
    user = authenticate_user(db, email=payload.email, password=payload.password)
    return build_auth_response(user)
