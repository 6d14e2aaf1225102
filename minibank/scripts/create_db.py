#!/usr/bin/env python
"""
create_db.py

Creates the MiniBank tables (users, accounts, transactions) in the database
named by DATABASE_URL. Safe to run repeatedly.

Usage:
    python -m minibank.scripts.create_db
"""

import sys
import logging

from minibank.database import create_tables, engine

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main() -> int:
    try:
        print(f"Creating tables in {engine.url.render_as_string(hide_password=True)} ...")
        create_tables()
        print("Database tables created successfully.")
        return 0
    except Exception as e:
        logger.error(f"Error creating database tables: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
