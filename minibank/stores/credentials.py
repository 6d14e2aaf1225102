"""
minibank/stores/credentials.py

CredentialStore owns the 'users' table. It is a thin wrapper around one
SQLAlchemy Session: every write is committed or rolled back before the
method returns, and SQLAlchemy errors are translated into the minibank
error taxonomy so callers never see driver exceptions.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from minibank.errors import ConflictError, StoreError
from minibank.models.user import User

logger = logging.getLogger(__name__)


class CredentialStore:
    def __init__(self, db: Session):
        self.db = db

    def create_user(self, username: str, email: str, password: str) -> User:
        """
        Insert a new user with a salted hash of 'password'.

        Raises:
            ValueError: password exceeds bcrypt's byte limit (nothing written).
            ConflictError: the username is already taken.
            StoreError: any other database failure.
        """
        new_user = User(username=username, email=email)
        new_user.set_password(password)
        try:
            self.db.add(new_user)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning(f"Username already registered: {username}")
            raise ConflictError("Username already registered.")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error creating user {username}: {e}", exc_info=True)
            raise StoreError() from e
        self.db.refresh(new_user)
        return new_user

    def find_user_by_username(self, username: str) -> Optional[User]:
        """Return the User with this username, or None."""
        try:
            return self.db.execute(
                select(User).where(User.username == username)
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Database error looking up user {username}: {e}", exc_info=True)
            raise StoreError() from e

    def get_user(self, user_id: int) -> Optional[User]:
        try:
            return self.db.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error(f"Database error loading user {user_id}: {e}", exc_info=True)
            raise StoreError() from e
