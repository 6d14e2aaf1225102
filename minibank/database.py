#!/usr/bin/env python
"""
minibank/database.py

Sets up the SQLAlchemy engine, session factory and declarative Base for MiniBank.
Both the credential store (users) and the ledger store (accounts, transactions)
live in this one database, so a transaction insert and its balance update can
share a single database transaction.

Key Features:
- DATABASE_URL from minibank.config (SQLite file by default)
- get_db() for FastAPI dependency injection (one session per request)
- create_tables() registers every model and creates missing tables
"""

import os
import logging
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from minibank import config

logger = logging.getLogger(__name__)

# ------------------------------------------------------------------
# 1) Engine and Session Setup
# ------------------------------------------------------------------
def make_engine(url: str) -> Engine:
    """
    Build an engine for the given URL. SQLite connections are shared across
    request threads and wait on locks instead of failing immediately.
    """
    if url.startswith("sqlite"):
        db_path = url.split("sqlite:///", 1)[-1]
        db_dir = os.path.dirname(db_path)
        if db_dir and not os.path.exists(db_dir):
            os.makedirs(db_dir)
            logger.debug(f"Created directory for database: {db_dir}")
        return create_engine(
            url,
            connect_args={"check_same_thread": False, "timeout": 30},
        )
    return create_engine(url, pool_pre_ping=True)


engine = make_engine(config.DATABASE_URL)
logger.debug(f"SQLAlchemy engine created for {engine.url.render_as_string(hide_password=True)}")

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# ------------------------------------------------------------------
# 2) FastAPI Dependency Injection
# ------------------------------------------------------------------
def get_db():
    """
    Provides a DB session for the GraphQL context. Yields a SessionLocal
    instance and closes it after the request to prevent leaks.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# ------------------------------------------------------------------
# 3) Table Initialization
# ------------------------------------------------------------------
def create_tables(bind: Engine = None):
    """
    Creates the users, accounts and transactions tables if they are missing.
    Idempotent: existing tables and rows are left alone.
    """
    # Import models so they register with Base.metadata
    from minibank.models import user, account, transaction  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables created or verified.")
