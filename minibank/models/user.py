"""
minibank/models/user.py

Represents a registered MiniBank user. Each user can own many Accounts.
The password is kept only as a salted bcrypt hash; nothing in the API
schemas exposes 'password_hash'.
"""

from __future__ import annotations
from typing import List, TYPE_CHECKING
from sqlalchemy import Integer, String
from sqlalchemy.orm import relationship, Mapped, mapped_column

from minibank.database import Base
from minibank.utils.auth import hash_password, check_password

if TYPE_CHECKING:
    from minibank.models.account import Account


class User(Base):
    """
    The users table. Each user has:
      - An ID (PK)
      - A unique username used for login
      - An email address
      - A bcrypt password hash
      - A list of accounts
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    email: Mapped[str] = mapped_column(String(255), nullable=False)

    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    accounts: Mapped[List[Account]] = relationship(
        "Account",
        back_populates="user",
        doc="All accounts owned by this user."
    )

    def set_password(self, password: str) -> None:
        """
        Hash and store the user's password with bcrypt.
        Raises ValueError if the password is longer than 72 bytes.
        """
        self.password_hash = hash_password(password)

    def verify_password(self, password: str) -> bool:
        """
        Verify a plain-text password against the stored hash.
        """
        return check_password(password, self.password_hash)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"
