from datetime import datetime, timedelta, timezone
from typing import Optional
import logging

import bcrypt
from jose import JWTError, jwt

from minibank import config

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72

# --- Password Helper Functions ---

def hash_password(password: str) -> str:
    """
    Hash a plain-text password with a fresh bcrypt salt.

    Raises:
        ValueError: If the UTF-8 encoded password exceeds bcrypt's 72 byte limit.
    """
    raw = password.encode("utf-8")
    if len(raw) > BCRYPT_MAX_BYTES:
        raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=config.BCRYPT_ROUNDS)
    return bcrypt.hashpw(raw, salt).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    """
    Constant-time comparison of a plain-text password with a stored hash.
    Returns False for over-long passwords or a malformed hash instead of raising.
    """
    raw = password.encode("utf-8")
    if len(raw) > BCRYPT_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(raw, password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash.")
        return False

# --- JWT Helper Functions ---

def create_access_token(user_id: int) -> str:
    """
    Generate a signed identity token bound to a user id.

    Args:
        user_id (int): The id to embed as the 'sub' claim.

    Returns:
        str: Encoded JWT token.
    """
    expire = datetime.now(timezone.utc) + timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {"sub": str(user_id), "exp": expire}
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)


def verify_access_token(token: Optional[str]) -> Optional[int]:
    """
    Verify a JWT access token and return the user id it carries.

    Accepts the raw token or a full 'Bearer <token>' header value.
    Returns None for a missing, malformed, expired or forged token;
    this function never raises.
    """
    if not token:
        return None
    if token[:7].lower() == "bearer ":
        token = token[7:]
    token = token.strip()
    if not token:
        return None
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
        return int(payload["sub"])
    except (JWTError, KeyError, TypeError, ValueError):
        return None
