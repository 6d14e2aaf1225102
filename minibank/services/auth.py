"""
minibank/services/auth.py

Registration, login and token verification.

The service never sees a database session directly; it is handed a
CredentialStore for the current request. Passwords and hashes are never
logged or returned, and a successful register/login always yields a fresh
token bound to the user's id.
"""

import logging
from typing import Optional, Tuple

from pydantic import ValidationError as SchemaValidationError

from minibank.errors import AuthError, NotFoundError, ValidationError, from_schema_error
from minibank.models.user import User
from minibank.schemas.user import UserCreate
from minibank.stores.credentials import CredentialStore
from minibank.utils.auth import create_access_token, verify_access_token

logger = logging.getLogger(__name__)

# Same text for unknown user and wrong password, so usernames can't be probed.
INVALID_CREDENTIALS = "Invalid username or password."


def register(store: CredentialStore, username: str, email: str, password: str) -> Tuple[str, User]:
    """
    Create a user and log them in.

    Raises ValidationError for blank fields or an over-long password,
    ConflictError if the username is taken.
    """
    try:
        data = UserCreate(username=username, email=email, password=password)
    except SchemaValidationError as e:
        raise from_schema_error(e)

    logger.info(f"Registration attempt for username: {data.username}")
    try:
        user = store.create_user(data.username, data.email, data.password)
    except ValueError as e:
        raise ValidationError(f"password: {e}")

    logger.info(f"User created with ID: {user.id}")
    return create_access_token(user.id), user


def login(store: CredentialStore, username: str, password: str) -> Tuple[str, User]:
    """
    Check credentials and issue a token.

    Raises NotFoundError when the username is unknown and AuthError when the
    password does not match; both carry the same public message.
    """
    user = store.find_user_by_username(username)
    if user is None:
        logger.warning(f"Login failed: no user named {username}")
        raise NotFoundError(INVALID_CREDENTIALS)

    if not user.verify_password(password):
        logger.warning(f"Login failed: wrong password for user_id {user.id}")
        raise AuthError(INVALID_CREDENTIALS)

    logger.info(f"Login successful for user_id: {user.id}")
    return create_access_token(user.id), user


def verify_token(token: Optional[str]) -> Optional[int]:
    """Return the user id bound to 'token', or None. Never raises."""
    return verify_access_token(token)
