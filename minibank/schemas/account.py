"""
minibank/schemas/account.py

Input schema for opening an account. 'account_type' is free text chosen
by the client ("checking", "savings", ...) and is stored as given.
"""

from pydantic import BaseModel


class AccountCreate(BaseModel):
    user_id: int
    account_type: str
