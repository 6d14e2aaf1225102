# minibank/models/__init__.py

"""
Central import point for the ORM models, so callers can write
``from minibank.models import User, Account, Transaction``.
"""

from minibank.database import Base

# Credential store
from .user import User

# Ledger store
from .account import Account
from .transaction import Transaction
