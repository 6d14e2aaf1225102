"""
minibank/schemas/transaction.py

Input schema for a single balance change.

'amount' is a positive magnitude in minor currency units (cents). It must be
a real integer: floats and booleans are refused so that repeated additions
stay exact. The sign is never taken from the client; the service derives it
from 'transaction_type'.
"""

from typing import Optional
from pydantic import BaseModel, Field, StrictInt, field_validator

DEPOSIT = "deposit"
WITHDRAWAL = "withdrawal"


class TransactionCreate(BaseModel):
    account_id: int
    amount: StrictInt = Field(..., gt=0, description="Positive amount in minor units")
    transaction_type: str
    description: Optional[str] = None

    @field_validator("transaction_type")
    @classmethod
    def type_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("transaction type must not be empty")
        return v

    def signed_amount(self) -> int:
        """Deposits credit the account; every other type debits it."""
        return self.amount if self.transaction_type == DEPOSIT else -self.amount
