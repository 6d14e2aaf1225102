"""MiniBank: register, log in, open accounts and move money over GraphQL."""

__version__ = "1.0.0"
