"""User account endpoints: create, list, count, fetch, generic update and delete.

The privileged direct-set path is intentionally not routed here.
"""

from functools import lru_cache
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status

from userdesk.core.config import get_settings
from userdesk.core.database import SessionLocal
from userdesk.schemas.users import (
    DeleteUserResponse,
    UpdateUserResponse,
    UserCountResponse,
    UserCreateRequest,
    UserResponse,
    UsersListResponse,
)
from userdesk.services.record_store import SqlAlchemyRecordStore
from userdesk.services.users import UserService

router = APIRouter()

# Result codes from the update pipeline mapped to HTTP status.
UPDATE_STATUS_BY_CODE = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "store": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "validation": status.HTTP_422_UNPROCESSABLE_CONTENT,
    "weak_credential": status.HTTP_422_UNPROCESSABLE_CONTENT,
}


@lru_cache
def get_user_service() -> UserService:
    """Dependency: the process-wide UserService bound to the configured database."""
    return UserService.from_settings(get_settings(), SqlAlchemyRecordStore(SessionLocal))


def _clause(role: str | None, suspended: int | None) -> dict[str, Any]:
    clause: dict[str, Any] = {}
    if role is not None:
        clause["role"] = role
    if suspended is not None:
        clause["suspended"] = suspended
    return clause


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreateRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Create a user. The response never includes the password hash."""
    result = service.create(body.username, body.password, body.role)
    if result.user is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error)
    return UserResponse.model_validate(result.user)


@router.get("", response_model=UsersListResponse)
def list_users(
    service: Annotated[UserService, Depends(get_user_service)],
    role: str | None = Query(None, description="Filter by role"),
    suspended: int | None = Query(None, ge=0, le=1, description="Filter by suspended flag"),
    limit: int | None = Query(None, ge=1, le=1000, description="Maximum users to return"),
) -> UsersListResponse:
    users = service.where(_clause(role, suspended), limit=limit)
    return UsersListResponse(users=[UserResponse.model_validate(u) for u in users])


@router.get("/count", response_model=UserCountResponse)
def count_users(
    service: Annotated[UserService, Depends(get_user_service)],
    role: str | None = Query(None, description="Filter by role"),
    suspended: int | None = Query(None, ge=0, le=1, description="Filter by suspended flag"),
) -> UserCountResponse:
    return UserCountResponse(count=service.count(_clause(role, suspended)))


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    user = service.get({"id": user_id})
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserResponse.model_validate(user)


@router.post("/{user_id}", response_model=UpdateUserResponse)
def update_user(
    user_id: int,
    response: Response,
    service: Annotated[UserService, Depends(get_user_service)],
    updates: Annotated[dict[str, Any], Body()],
) -> UpdateUserResponse:
    """
    Generic update. The body may be any JSON object, including a full user record;
    keys that are not writable are ignored.
    """
    result = service.update(user_id, updates)
    if not result.success:
        response.status_code = UPDATE_STATUS_BY_CODE.get(
            result.code, status.HTTP_400_BAD_REQUEST
        )
    return UpdateUserResponse(success=result.success, error=result.error)


@router.delete("/{user_id}", response_model=DeleteUserResponse)
def delete_user(
    user_id: int,
    service: Annotated[UserService, Depends(get_user_service)],
) -> DeleteUserResponse:
    return DeleteUserResponse(success=service.delete({"id": user_id}))
