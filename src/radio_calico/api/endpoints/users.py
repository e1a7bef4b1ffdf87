"""User registration endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from radio_calico.api.dependencies import SessionDep
from radio_calico.schemas.common import ErrorResponse, MessageResponse
from radio_calico.schemas.user import UserCreate, UserResponse
from radio_calico.services import user_service

router = APIRouter(prefix="/users", tags=["users"])

_NOT_FOUND = {404: {"model": ErrorResponse}}


@router.get("", response_model=list[UserResponse])
def list_users(db: SessionDep) -> list[UserResponse]:
    """List every registered user, newest first."""
    return [UserResponse.model_validate(user) for user in user_service.get_users(db)]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
    responses={400: {"model": ErrorResponse}},
)
def create_user(user: UserCreate, db: SessionDep) -> UserResponse:
    """Register a user; username and email must both be unused."""
    db_user = user_service.create_user(db, username=user.username, email=user.email)
    return UserResponse.model_validate(db_user)


@router.get("/{user_id}", response_model=UserResponse, responses=_NOT_FOUND)
def get_user(user_id: int, db: SessionDep) -> UserResponse:
    return UserResponse.model_validate(user_service.get_user(db, user_id))


@router.delete("/{user_id}", response_model=MessageResponse, responses=_NOT_FOUND)
def delete_user(user_id: int, db: SessionDep) -> MessageResponse:
    user_service.delete_user(db, user_id)
    return MessageResponse(message="User deleted successfully")
