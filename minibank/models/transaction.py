"""
minibank/models/transaction.py

A Transaction is the immutable record of one balance change on one Account.
'amount' is signed: positive for deposits, negative for everything else.
Rows are append-only; no code path updates or deletes them.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, BigInteger, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from minibank.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)

    account_id = Column(
        Integer,
        ForeignKey("accounts.id"),
        nullable=False,
        index=True,
        doc="The account whose balance this row changed."
    )

    amount = Column(
        BigInteger,
        nullable=False,
        doc="Signed minor units; never zero."
    )

    transaction_type = Column(
        String(64),
        nullable=False,
        doc="'deposit', 'withdrawal' or another client label."
    )

    description = Column(Text, nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        default=_utcnow,
        nullable=False,
        doc="Auto-set creation time."
    )

    account = relationship("Account", back_populates="transactions")

    def __repr__(self):
        return (
            f"<Transaction(id={self.id}, account_id={self.account_id}, "
            f"amount={self.amount}, type={self.transaction_type})>"
        )
