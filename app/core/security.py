# File: app/core/security.py

"""
Security helpers for the Task Tracker API.

  - TokenService: issues and verifies HS256 JWTs (python-jose)
  - hash_password / verify_password: bcrypt with a per-hash salt

Tokens carry the user's email as `sub`, plus `iat` and `exp`. There is no
refresh or revocation: a token is valid until it expires.
"""

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Iterable, Optional

import bcrypt
from jose import JWTError, jwt

from app.core.config import settings
from app.core.exceptions import ExpiredTokenError, InvalidTokenError

# bcrypt only looks at the first 72 bytes of the password
BCRYPT_MAX_BYTES = 72


class TokenService:
    def __init__(
        self,
        secret_key: str,
        *,
        previous_keys: Iterable[str] = (),
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=24),
    ):
        if not secret_key:
            raise ValueError("A signing key is required.")
        self.secret_key = secret_key
        self.previous_keys = [k for k in previous_keys if k and k != secret_key]
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, subject: str, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": subject,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.ttl).timestamp()),
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str, now: Optional[datetime] = None) -> str:
        """
        Return the token subject.

        Raises InvalidTokenError when no configured key validates the
        signature (or the token is malformed), ExpiredTokenError when the
        signature is fine but `now` is past `exp`.
        """
        claims = None
        for key in [self.secret_key, *self.previous_keys]:
            try:
                # expiry is checked below against `now`, not the wall clock
                claims = jwt.decode(
                    token,
                    key,
                    algorithms=[self.algorithm],
                    options={"verify_exp": False},
                )
                break
            except JWTError:
                continue

        if claims is None:
            raise InvalidTokenError()

        subject = claims.get("sub")
        expires_at = claims.get("exp")
        if not isinstance(subject, str) or not subject or not isinstance(expires_at, (int, float)):
            raise InvalidTokenError("Token is missing required claims")

        current = now or datetime.now(timezone.utc)
        if current.timestamp() > expires_at:
            raise ExpiredTokenError()

        return subject


@lru_cache
def get_token_service() -> TokenService:
    return TokenService(
        settings.secret_key,
        previous_keys=settings.previous_secret_keys,
        algorithm=settings.algorithm,
        ttl=timedelta(minutes=settings.access_token_expire_minutes),
    )


def create_access_token(subject: str) -> str:
    return get_token_service().issue(subject)


def verify_access_token(token: str) -> str:
    return get_token_service().verify(token)


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=settings.bcrypt_rounds)).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(password), hashed_password.encode("utf-8"))
    except ValueError:
        # not a bcrypt hash
        return False
