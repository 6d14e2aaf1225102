"""
minibank/schemas/user.py

Pydantic schema for registration input. The service layer builds one of
these from the raw GraphQL arguments; a schema failure becomes a
minibank ValidationError before anything touches the credential store.
"""

from pydantic import BaseModel, field_validator


class UserCreate(BaseModel):
    """
    Registration fields. All three are required and may not be blank.
    The raw 'password' is hashed by the User model before storing.
    """
    username: str
    email: str
    password: str

    @field_validator("username", "email")
    @classmethod
    def strip_and_require(cls, v: str, info) -> str:
        v = v.strip()
        if not v:
            raise ValueError(f"{info.field_name} must not be empty")
        return v

    @field_validator("password")
    @classmethod
    def password_required(cls, v: str) -> str:
        # Whitespace is significant in a password, so it is not stripped.
        if not v.strip():
            raise ValueError("password must not be empty")
        return v
