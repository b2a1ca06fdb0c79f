"""Pydantic request/response schemas."""

from userdesk.schemas.health import HealthResponse
from userdesk.schemas.users import (
    CreateUserResult,
    DeleteUserResponse,
    DirectSetResult,
    UpdateUserResponse,
    UpdateUserResult,
    UserCountResponse,
    UserCreateRequest,
    UserResponse,
    UsersListResponse,
)

__all__ = [
    "CreateUserResult",
    "DeleteUserResponse",
    "DirectSetResult",
    "HealthResponse",
    "UpdateUserResponse",
    "UpdateUserResult",
    "UserCountResponse",
    "UserCreateRequest",
    "UserResponse",
    "UsersListResponse",
]
