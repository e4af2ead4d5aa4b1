# File: app/api/deps.py

"""
Request-scoped dependencies: DB session and the authenticated principal.

No Authorization header, a non-Bearer scheme or an empty credential means
"anonymous" (get_optional_user returns None). A Bearer token that does not
verify is a 401 right away.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidTokenError, UnauthenticatedError
from app.core.security import verify_access_token
from app.db.session import get_db
from app.models.user import User
from app.repositories.user_repository import UserRepository

log = logging.getLogger(__name__)

# auto_error=False: a missing or malformed header is not an error by itself
bearer_scheme = HTTPBearer(auto_error=False)

__all__ = ["get_db", "get_optional_user", "get_current_user"]


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Optional[User]:
    if credentials is None or not credentials.credentials:
        return None

    email = verify_access_token(credentials.credentials)
    user = UserRepository(db).get_by_email(email)
    if user is None:
        log.warning("Token subject %s no longer exists", email)
        raise InvalidTokenError("Token subject no longer exists")
    return user


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise UnauthenticatedError()
    return user
