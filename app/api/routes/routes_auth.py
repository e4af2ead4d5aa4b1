# File: app/api/routes/routes_auth.py

"""
Auth API routes: registration and login. Both are public.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from app.services import auth_service

log = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=AuthResponse, summary="Register a new user")
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """
    Create a USER account and return a token for it.

    400 if the email is already registered or the payload is invalid.
    """
    log.info("Registration request for %s", payload.email)
    response = auth_service.register_user(db, payload)
    log.info("Registered user %s", payload.email)
    return response


@router.post("/login", response_model=AuthResponse, summary="Authenticate user")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """
    Exchange email + password for a token.

    401 on a wrong password, 404 if no such user.
    """
    log.info("Login request for %s", payload.email)
    response = auth_service.login_user(db, payload)
    log.info("Logged in user %s", payload.email)
    return response
