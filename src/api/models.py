"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field

from domain.model.user import SafeUser


class UserRequest(BaseModel):
    """Request body carrying credentials.

    Fields are left untyped so that shape problems are reported by
    ``is_user_body_valid`` with a 400 instead of a schema error.
    """
    username: Any = None
    password: Any = None


class BiographyRequest(BaseModel):
    """Request body for a biography update."""
    username: Any = None
    biography: Any = None


class SafeUserResponse(BaseModel):
    """Public view of a user account. Never carries the password."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="User ID")
    username: str
    date_joined: datetime = Field(..., alias="dateJoined")
    biography: Optional[str] = None

    @classmethod
    def from_domain(cls, user: SafeUser) -> "SafeUserResponse":
        return cls(
            id=user.id,
            username=user.username,
            date_joined=user.date_joined,
            biography=user.biography,
        )


class ErrorResponse(BaseModel):
    error: str
