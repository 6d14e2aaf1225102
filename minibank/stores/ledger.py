"""
minibank/stores/ledger.py

LedgerStore owns the 'accounts' and 'transactions' tables.

The one operation with a correctness burden is apply_transaction():
  1) INSERT the Transaction row (signed amount)
  2) UPDATE accounts SET balance = balance + :delta
Both statements run inside a single database transaction on the request's
session, and either both commit or both roll back. The increment is a
store-level expression, never a read-modify-write in Python, so concurrent
requests on the same account serialize in the database. When overdrafts are
refused, the "balance + delta >= 0" guard is part of the same UPDATE.

Balances are served as GraphQL Int, so the same UPDATE also keeps them
inside the signed 32-bit range.
"""

import logging
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from minibank.errors import BalanceLimitError, InsufficientFundsError, NotFoundError, StoreError
from minibank.models.account import Account
from minibank.models.transaction import Transaction

logger = logging.getLogger(__name__)

MAX_BALANCE = 2**31 - 1
MIN_BALANCE = -(2**31)


class LedgerStore:
    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------
    def create_account(self, user_id: int, account_type: str) -> Account:
        """Open an account for 'user_id' with a zero balance."""
        new_account = Account(user_id=user_id, account_type=account_type, balance=0)
        try:
            self.db.add(new_account)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error creating account for user {user_id}: {e}", exc_info=True)
            raise StoreError() from e
        self.db.refresh(new_account)
        return new_account

    def get_account(self, account_id: int) -> Optional[Account]:
        try:
            return self.db.get(Account, account_id)
        except SQLAlchemyError as e:
            logger.error(f"Database error loading account {account_id}: {e}", exc_info=True)
            raise StoreError() from e

    def find_accounts_by_owner(self, user_id: int) -> List[Account]:
        try:
            return list(
                self.db.execute(
                    select(Account).where(Account.user_id == user_id).order_by(Account.id)
                ).scalars()
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error listing accounts for user {user_id}: {e}", exc_info=True)
            raise StoreError() from e

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------
    def list_transactions(self, account_id: int) -> List[Transaction]:
        """Return the account's transactions, newest first."""
        try:
            return list(
                self.db.execute(
                    select(Transaction)
                    .where(Transaction.account_id == account_id)
                    .order_by(Transaction.id.desc())
                ).scalars()
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error listing transactions for account {account_id}: {e}", exc_info=True)
            raise StoreError() from e

    def apply_transaction(
        self,
        account_id: int,
        signed_amount: int,
        transaction_type: str,
        description: Optional[str] = None,
        allow_overdraft: bool = False,
    ) -> Transaction:
        """
        Record one balance change and apply it, atomically.

        Raises:
            NotFoundError: the account does not exist (nothing written).
            InsufficientFundsError: overdraft refused (nothing written).
            BalanceLimitError: the balance would leave [MIN_BALANCE, MAX_BALANCE].
            StoreError: any database failure (nothing written).
        """
        try:
            new_tx = self._insert_transaction(account_id, signed_amount, transaction_type, description)
            updated = self._increment_balance(account_id, signed_amount, allow_overdraft)
            if updated == 1:
                self.db.commit()
        except IntegrityError as e:
            # Foreign key on transactions.account_id, on backends that enforce it
            self.db.rollback()
            logger.info(f"Transaction refused, account {account_id} missing: {e}")
            raise NotFoundError("Account not found.") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Transaction on account {account_id} rolled back: {e}", exc_info=True)
            raise StoreError() from e
        except Exception:
            self.db.rollback()
            raise

        if updated != 1:
            self.db.rollback()
            if self.get_account(account_id) is None:
                raise NotFoundError("Account not found.")
            if signed_amount < 0 and not allow_overdraft:
                logger.warning(f"Overdraft refused on account {account_id} for {signed_amount}")
                raise InsufficientFundsError()
            logger.warning(f"Balance limit hit on account {account_id} for {signed_amount}")
            raise BalanceLimitError()

        self.db.refresh(new_tx)
        return new_tx

    def _insert_transaction(self, account_id, signed_amount, transaction_type, description) -> Transaction:
        new_tx = Transaction(
            account_id=account_id,
            amount=signed_amount,
            transaction_type=transaction_type,
            description=description,
        )
        self.db.add(new_tx)
        self.db.flush()
        return new_tx

    def _increment_balance(self, account_id, signed_amount, allow_overdraft) -> int:
        """Returns the number of rows updated (0 or 1)."""
        new_balance = Account.balance + signed_amount
        stmt = update(Account).where(Account.id == account_id).values(balance=new_balance)
        if signed_amount > 0:
            stmt = stmt.where(new_balance <= MAX_BALANCE)
        elif signed_amount < 0:
            stmt = stmt.where(new_balance >= (MIN_BALANCE if allow_overdraft else 0))
        result = self.db.execute(stmt.execution_options(synchronize_session=False))
        return result.rowcount
