# FILE: minibank/services/transaction.py

"""
minibank/services/transaction.py

Account and balance logic for MiniBank:
 - create_account / list_accounts for the authenticated user
 - perform_transaction: validate, authorize, derive the signed amount and
   hand it to LedgerStore.apply_transaction, which writes the Transaction
   row and the balance increment as one unit
 - list_transactions: history of one of the caller's accounts

Every function takes the caller's user_id as resolved from the identity
token. A None user_id means the request carried no valid token and is
rejected with AuthError before any store access.

Overdraft policy:
 - "reject" (default): a debit that would take the balance below zero is
   refused with InsufficientFundsError and nothing is written.
 - "allow": balances may go negative.
"""

import logging
from typing import List, Optional

from pydantic import ValidationError as SchemaValidationError

from minibank import config
from minibank.errors import AuthError, NotFoundError, from_schema_error
from minibank.models.account import Account
from minibank.models.transaction import Transaction
from minibank.schemas.account import AccountCreate
from minibank.schemas.transaction import TransactionCreate
from minibank.stores.ledger import LedgerStore

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------------------
# Public Functions
# ------------------------------------------------------------------------------
def create_account(ledger: LedgerStore, user_id: Optional[int], account_type: str) -> Account:
    """
    Open a zero-balance account owned by the caller.
    The account type is free text and is not validated.
    """
    _require_user(user_id)
    try:
        data = AccountCreate(user_id=user_id, account_type=account_type)
    except SchemaValidationError as e:
        raise from_schema_error(e)

    account = ledger.create_account(data.user_id, data.account_type)
    logger.info(f"Account {account.id} ({account.account_type}) opened for user_id {user_id}")
    return account


def list_accounts(ledger: LedgerStore, user_id: Optional[int]) -> List[Account]:
    """
    Return every account the caller owns. Order is by id, but callers
    should treat the result as a set.
    """
    _require_user(user_id)
    return ledger.find_accounts_by_owner(user_id)


def perform_transaction(
    ledger: LedgerStore,
    user_id: Optional[int],
    account_id: int,
    amount: int,
    transaction_type: str,
    description: Optional[str] = None,
    overdraft_policy: Optional[str] = None,
) -> Transaction:
    """
    Apply a deposit or withdrawal to one of the caller's accounts.

    Steps:
      1) Require an authenticated caller.
      2) Validate input: amount is a positive integer, type is not blank.
      3) Load the account and check the caller owns it.
      4) Derive the signed amount: 'deposit' => +amount, anything else => -amount.
      5) Insert the Transaction and increment the balance atomically.

    Raises:
        AuthError: no caller, or the account belongs to another user.
        ValidationError: bad amount or type (InsufficientFundsError on refused overdraft).
        NotFoundError: the account does not exist.
        StoreError: the database failed; nothing was written.
    """
    # 1) Auth gate
    _require_user(user_id)

    # 2) Input validation
    try:
        data = TransactionCreate(
            account_id=account_id,
            amount=amount,
            transaction_type=transaction_type,
            description=description,
        )
    except SchemaValidationError as e:
        raise from_schema_error(e)

    # 3) Ownership
    _get_owned_account(ledger, user_id, data.account_id)

    # 4) Sign is derived server-side, never taken from the client
    signed_amount = data.signed_amount()
    policy = overdraft_policy or config.OVERDRAFT_POLICY

    # 5) Atomic write
    new_tx = ledger.apply_transaction(
        data.account_id,
        signed_amount,
        data.transaction_type,
        data.description,
        allow_overdraft=(policy == config.OVERDRAFT_ALLOW),
    )
    logger.info(
        f"Transaction {new_tx.id} applied: account {data.account_id} "
        f"{data.transaction_type} {signed_amount:+d}"
    )
    return new_tx


def list_transactions(ledger: LedgerStore, user_id: Optional[int], account_id: int) -> List[Transaction]:
    """
    Return the history of one of the caller's accounts, newest first.
    """
    _require_user(user_id)
    _get_owned_account(ledger, user_id, account_id)
    return ledger.list_transactions(account_id)


# ------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------
def _require_user(user_id: Optional[int]) -> None:
    if user_id is None:
        raise AuthError("Not authenticated.")


def _get_owned_account(ledger: LedgerStore, user_id: int, account_id: int) -> Account:
    account = ledger.get_account(account_id)
    if account is None:
        raise NotFoundError("Account not found.")
    if account.user_id != user_id:
        logger.warning(f"User {user_id} denied access to account {account_id}")
        raise AuthError("Not authorized for this account.")
    return account
