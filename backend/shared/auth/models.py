"""Customer account, token claim, and password check models."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Self

from pydantic import BaseModel, Field, model_validator


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class User(BaseModel, frozen=True):
    """Customer account stored in the user repository."""

    user_id: str
    email: str
    password_hash: str
    first_name: str
    last_name: str
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def _validate_account_fields(self) -> Self:
        if not self.password_hash:
            raise ValueError("Accounts must have a password hash")
        if self.email != self.email.lower():
            raise ValueError("Email must be stored lower-cased")
        return self

    def public_dict(self) -> dict[str, Any]:
        """Wire representation returned by the API. Never includes the hash."""
        return {
            "id": self.user_id,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


@dataclass(frozen=True)
class TokenClaims:
    """Claims carried by a verified session token."""

    user_id: str
    email: str
    issued_at: int  # epoch seconds
    expires_at: int  # epoch seconds


@dataclass
class PasswordCheck:
    valid: bool
    errors: list[str] = field(default_factory=list)
