# File: app/repositories/user_repository.py

from typing import Optional

from sqlalchemy import exists, select
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.models.user import User


class UserRepository:
    """
    Key lookups over the users table. Email lookups are case-sensitive.
    """

    def __init__(self, db: Session):
        self.db = db

    def save(self, user: User) -> User:
        self.db.add(user)
        self.db.flush()
        return user

    def get(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_or_raise(self, user_id: int) -> User:
        user = self.get(user_id)
        if user is None:
            raise NotFoundError(f"User not found with id: {user_id}")
        return user

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.scalars(select(User).where(User.email == email)).first()

    def exists_by_email(self, email: str) -> bool:
        return bool(self.db.scalar(select(exists().where(User.email == email))))

    def find_all(self) -> list[User]:
        return list(self.db.scalars(select(User).order_by(User.id)))
