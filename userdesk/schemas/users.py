"""Request, response and result schemas for user account operations."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UserCreateRequest(BaseModel):
    """Body for creating a user. Length rules are enforced by the service, not here."""

    username: str = Field(..., description="Username (2-100 characters)")
    password: str = Field(..., description="Plain-text password; stored only as a hash")
    role: str | None = Field(default=None, description="Role; server default when omitted")


class UserResponse(BaseModel):
    """Secret-stripped user record."""

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: int
    username: str
    role: str
    pfp_filename: str | None = None
    suspended: int = 0
    seen_recovery_codes: int = 0
    created_at: datetime | None = None
    last_updated_at: datetime | None = None


class UsersListResponse(BaseModel):
    """Response for GET /users."""

    users: list[UserResponse]


class UserCountResponse(BaseModel):
    count: int


class CreateUserResult(BaseModel):
    """Outcome of UserService.create: the stripped record or an error message."""

    user: dict[str, Any] | None = None
    error: str | None = None


class UpdateUserResult(BaseModel):
    """
    Outcome of a generic update.

    code is the error class code on failure (e.g. "not_found", "validation").
    changes is the audit-safe change set; callers may discard it.
    """

    success: bool
    error: str | None = None
    code: str | None = None
    changes: dict[str, str] = Field(default_factory=dict)


class UpdateUserResponse(BaseModel):
    """HTTP response for a generic update."""

    success: bool
    error: str | None = None


class DirectSetResult(BaseModel):
    """Outcome of a privileged direct set."""

    user: dict[str, Any] | None = None
    message: str | None = None


class DeleteUserResponse(BaseModel):
    success: bool
