"""
minibank/models/account.py

An Account holds money for exactly one User. The balance is an integer
amount of minor currency units (cents) and only ever changes through
LedgerStore.apply_transaction, which writes the matching Transaction row
in the same database transaction.

User => One-to-many => Account
Account => One-to-many => Transaction
"""

from sqlalchemy import Column, Integer, BigInteger, String, ForeignKey
from sqlalchemy.orm import relationship

from minibank.database import Base


class Account(Base):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)

    # Owner; never reassigned after creation
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Free-form label supplied by the client, e.g. "checking", "savings"
    account_type = Column(String(255), nullable=False)

    # Minor units; equals the sum of this account's transaction amounts
    balance = Column(BigInteger, nullable=False, default=0)

    user = relationship(
        "User",
        back_populates="accounts",
        doc="The user that owns this account."
    )

    transactions = relationship(
        "Transaction",
        back_populates="account",
        order_by="Transaction.id",
        doc="Every balance change applied to this account, oldest first."
    )

    def __repr__(self):
        return (
            f"<Account(id={self.id}, user_id={self.user_id}, "
            f"account_type={self.account_type}, balance={self.balance})>"
        )
