"""
minibank/config.py

Runtime settings for MiniBank, read once from the environment.
A .env file at the project root is loaded first, so local development
can keep secrets out of the shell profile.

Settings:
 - SECRET_KEY: HMAC secret for identity tokens
 - ACCESS_TOKEN_EXPIRE_MINUTES: token lifetime
 - BCRYPT_ROUNDS: cost factor for password hashing
 - DATABASE_URL: SQLAlchemy URL (defaults to a SQLite file)
 - CORS_ALLOW_ORIGINS: comma separated list of browser origins
 - OVERDRAFT_POLICY: "reject" (default) or "allow"
 - LOG_LEVEL, HOST, PORT
"""

import os
import logging
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(BASE_DIR)

load_dotenv(dotenv_path=os.path.join(PROJECT_ROOT, ".env"))

# ---------------------------------------------------------
# Tokens & passwords
# ---------------------------------------------------------
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    logger.warning("SECRET_KEY is not set. Using an insecure development key.")
    SECRET_KEY = "minibank-insecure-dev-key"

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", 12))

# ---------------------------------------------------------
# Database
# ---------------------------------------------------------
DATABASE_FILE = os.getenv("DATABASE_FILE", os.path.join(PROJECT_ROOT, "minibank.db"))
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DATABASE_FILE}")

# ---------------------------------------------------------
# HTTP
# ---------------------------------------------------------
default_origins = (
    "http://127.0.0.1:3000,"
    "http://localhost:3000,"
    "http://127.0.0.1:5173,"
    "http://localhost:5173"
)
raw_origins = os.getenv("CORS_ALLOW_ORIGINS", default_origins)
ALLOWED_ORIGINS = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]

HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", 4000))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# ---------------------------------------------------------
# Ledger policy
# ---------------------------------------------------------
OVERDRAFT_REJECT = "reject"
OVERDRAFT_ALLOW = "allow"
OVERDRAFT_POLICIES = {OVERDRAFT_REJECT, OVERDRAFT_ALLOW}

OVERDRAFT_POLICY = os.getenv("OVERDRAFT_POLICY", OVERDRAFT_REJECT).strip().lower()
if OVERDRAFT_POLICY not in OVERDRAFT_POLICIES:
    logger.warning(f"Unknown OVERDRAFT_POLICY={OVERDRAFT_POLICY!r}; falling back to '{OVERDRAFT_REJECT}'.")
    OVERDRAFT_POLICY = OVERDRAFT_REJECT
