"""
minibank/routers/gateway.py

GraphQL gateway for MiniBank, built with strawberry and mounted on FastAPI.

Every request gets a GatewayContext holding its own database session, the
caller's user id (resolved once from the 'Authorization: Bearer <token>'
header) and the overdraft policy. Resolvers only translate between GraphQL
types and the service layer; all rules live in minibank.services.

Errors:
 - minibank BankError subclasses reach the client as one GraphQL error with
   the public message and extensions.code set to the error kind.
 - Anything else is masked as "Unexpected error." and logged server-side.
"""

import asyncio
import logging
from functools import cached_property
from typing import Annotated, List, Optional

import strawberry
from fastapi import Depends, Header
from fastapi.concurrency import run_in_threadpool
from graphql import GraphQLError
from sqlalchemy.orm import Session
from strawberry.extensions import MaskErrors
from strawberry.fastapi import BaseContext, GraphQLRouter
from strawberry.schema.config import StrawberryConfig
from strawberry.types import Info

from minibank import config
from minibank.database import get_db
from minibank.errors import BankError
from minibank.services import auth as auth_service
from minibank.services import transaction as tx_service
from minibank.stores.credentials import CredentialStore
from minibank.stores.ledger import LedgerStore

logger = logging.getLogger(__name__)


# ---------------------------------------------------------
# Per-request context
# ---------------------------------------------------------
class GatewayContext(BaseContext):
    def __init__(self, db: Session, user_id: Optional[int], overdraft_policy: str):
        super().__init__()
        self.db = db
        self.user_id = user_id
        self.overdraft_policy = overdraft_policy
        self._db_lock: Optional[asyncio.Lock] = None

    @cached_property
    def credentials(self) -> CredentialStore:
        return CredentialStore(self.db)

    @cached_property
    def ledger(self) -> LedgerStore:
        return LedgerStore(self.db)

    async def run(self, func, *args, **kwargs):
        """
        Call a blocking service function in the threadpool so bcrypt and the
        database never stall the event loop. Calls from one request take turns
        on its session, since sibling query fields resolve concurrently.
        """
        if self._db_lock is None:
            self._db_lock = asyncio.Lock()
        async with self._db_lock:
            return await run_in_threadpool(func, *args, **kwargs)


def get_context(
    db: Session = Depends(get_db),
    authorization: Optional[str] = Header(default=None),
) -> GatewayContext:
    """
    FastAPI dependency that builds the GraphQL context.
    An absent or invalid token simply leaves user_id as None; resolvers that
    need an identity reject the request themselves.
    """
    return GatewayContext(
        db=db,
        user_id=auth_service.verify_token(authorization),
        overdraft_policy=config.OVERDRAFT_POLICY,
    )


# ---------------------------------------------------------
# GraphQL types
# ---------------------------------------------------------
@strawberry.type(name="User")
class UserType:
    id: int
    username: str
    email: str

    @classmethod
    def from_model(cls, user) -> "UserType":
        return cls(id=user.id, username=user.username, email=user.email)


@strawberry.type(name="AuthPayload")
class AuthPayload:
    token: str
    user: UserType


@strawberry.type(name="Account")
class AccountType:
    id: int
    account_type: str
    balance: int

    @classmethod
    def from_model(cls, account) -> "AccountType":
        return cls(id=account.id, account_type=account.account_type, balance=account.balance)


@strawberry.type(name="Transaction")
class TransactionType:
    id: int
    amount: int
    transaction_type: str
    description: Optional[str]

    @classmethod
    def from_model(cls, tx) -> "TransactionType":
        return cls(
            id=tx.id,
            amount=tx.amount,
            transaction_type=tx.transaction_type,
            description=tx.description,
        )


# ---------------------------------------------------------
# Queries & mutations
# ---------------------------------------------------------
@strawberry.type
class Query:
    @strawberry.field
    def hello(self) -> str:
        return "Hello world!"

    @strawberry.field(name="getUserAccounts")
    async def get_user_accounts(self, info: Info) -> List[AccountType]:
        ctx = info.context
        accounts = await ctx.run(tx_service.list_accounts, ctx.ledger, ctx.user_id)
        return [AccountType.from_model(a) for a in accounts]

    @strawberry.field(name="getAccountTransactions")
    async def get_account_transactions(
        self,
        info: Info,
        account_id: Annotated[int, strawberry.argument(name="accountId")],
    ) -> List[TransactionType]:
        ctx = info.context
        txs = await ctx.run(tx_service.list_transactions, ctx.ledger, ctx.user_id, account_id)
        return [TransactionType.from_model(t) for t in txs]


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def register(self, info: Info, username: str, email: str, password: str) -> AuthPayload:
        ctx = info.context
        token, user = await ctx.run(auth_service.register, ctx.credentials, username, email, password)
        return AuthPayload(token=token, user=UserType.from_model(user))

    @strawberry.mutation
    async def login(self, info: Info, username: str, password: str) -> AuthPayload:
        ctx = info.context
        token, user = await ctx.run(auth_service.login, ctx.credentials, username, password)
        return AuthPayload(token=token, user=UserType.from_model(user))

    @strawberry.mutation(name="createAccount")
    async def create_account(
        self,
        info: Info,
        account_type: Annotated[str, strawberry.argument(name="accountType")],
    ) -> AccountType:
        ctx = info.context
        account = await ctx.run(tx_service.create_account, ctx.ledger, ctx.user_id, account_type)
        return AccountType.from_model(account)

    @strawberry.mutation(name="performTransaction")
    async def perform_transaction(
        self,
        info: Info,
        account_id: Annotated[int, strawberry.argument(name="accountId")],
        amount: int,
        transaction_type: Annotated[str, strawberry.argument(name="type")],
        description: Optional[str] = None,
    ) -> TransactionType:
        ctx = info.context
        tx = await ctx.run(
            tx_service.perform_transaction,
            ctx.ledger,
            ctx.user_id,
            account_id,
            amount,
            transaction_type,
            description,
            overdraft_policy=ctx.overdraft_policy,
        )
        return TransactionType.from_model(tx)


# ---------------------------------------------------------
# Schema & router
# ---------------------------------------------------------
def should_mask_error(error: GraphQLError) -> bool:
    """Hide everything except minibank errors and GraphQL's own parse/validation errors."""
    original = error.original_error
    if original is None:
        return False
    return not isinstance(original, (BankError, GraphQLError))


class BankSchema(strawberry.Schema):
    def process_errors(self, errors, execution_context=None):
        for error in errors:
            original = error.original_error
            if isinstance(original, BankError):
                logger.info(f"{original.kind} error on {error.path}: {original.message}")
            elif original is None:
                logger.info(f"Rejected GraphQL request: {error.message}")
            else:
                logger.error(f"Unhandled error on {error.path}: {original!r}", exc_info=original)


schema = BankSchema(
    query=Query,
    mutation=Mutation,
    config=StrawberryConfig(auto_camel_case=False),
    extensions=[lambda: MaskErrors(should_mask_error=should_mask_error, error_message="Unexpected error.")],
)

router = GraphQLRouter(schema, context_getter=get_context)
