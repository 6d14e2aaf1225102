"""
minibank/errors.py

Error taxonomy shared by the stores, the services and the GraphQL gateway.

Every error carries a machine-readable ``kind`` and a ``message`` that is
safe to show to a client. ``str(err)`` is always the public message, so the
gateway can hand the exception straight to GraphQL; internal detail (raw
driver text, the distinction between "no such user" and "wrong password")
only ever reaches the server log.
"""

from typing import Optional


class BankError(Exception):
    """Base class for every error MiniBank reports to a caller."""

    kind = "INTERNAL"
    default_message = "Request failed."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def extensions(self) -> dict:
        # graphql-core copies this dict onto the GraphQL error it builds.
        return {"code": self.kind}


class ValidationError(BankError):
    """Malformed or missing input."""

    kind = "VALIDATION"
    default_message = "Invalid input."


class InsufficientFundsError(ValidationError):
    """A debit would take the balance below zero under the 'reject' policy."""

    default_message = "Insufficient funds."


class BalanceLimitError(ValidationError):
    """The balance would leave the range a GraphQL Int can carry."""

    default_message = "Balance limit exceeded."


class AuthError(BankError):
    """Missing or invalid identity, or access to someone else's resource."""

    kind = "AUTH"
    default_message = "Not authenticated."


class NotFoundError(BankError):
    kind = "NOT_FOUND"
    default_message = "Not found."


class ConflictError(BankError):
    kind = "CONFLICT"
    default_message = "Already exists."


class StoreError(BankError):
    """Persistence failure. The message never includes driver output."""

    kind = "STORE"
    default_message = "Storage is unavailable."


def from_schema_error(exc) -> ValidationError:
    """
    Turn a pydantic ValidationError into a minibank ValidationError whose
    message names the first offending field.
    """
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    msg = first.get("msg", "invalid value")
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return ValidationError(f"{field}: {msg}" if field else msg)
