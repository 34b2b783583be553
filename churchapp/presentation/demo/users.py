"""Demo registration server — the plain users table at the app root.

Successful mutations answer with a bare JSON string; errors are reported
as ``{"error": "..."}`` bodies, the shapes the demo front-ends read.
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from churchapp.application.schemas import UserRegister, UserResponse, UserUpdate
from churchapp.application.services import InvalidSortError, UserService
from churchapp.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from churchapp.infrastructure.dependencies import get_user_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Demo users"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.get("/users", response_model=list[UserResponse])
async def list_users(
    sort_by: str | None = Query(None, alias="sortBy"),
    service: UserService = Depends(get_user_service),
):
    """Return every user, optionally ordered by username or email."""
    try:
        users = await service.list_users(sort_by=sort_by)
    except InvalidSortError as e:
        return _error(status.HTTP_400_BAD_REQUEST, str(e))
    return [UserResponse.model_validate(u) for u in users]


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=str)
async def register_user(
    data: UserRegister,
    service: UserService = Depends(get_user_service),
):
    """Insert a user after checking that the email is not taken."""
    try:
        user = await service.register(data)
    except DuplicateEntityError:
        return _error(status.HTTP_400_BAD_REQUEST, "Email already exists")

    logger.info("Registered user id=%s", user.id)
    return "User registered successfully"


@router.put("/users/{user_id}/edit", response_model=str)
async def edit_user(
    user_id: int,
    data: UserUpdate,
    service: UserService = Depends(get_user_service),
):
    try:
        await service.update_user(user_id, data)
    except EntityNotFoundError:
        return _error(status.HTTP_404_NOT_FOUND, "User not found")
    except DuplicateEntityError:
        return _error(status.HTTP_400_BAD_REQUEST, "Email already exists")
    return "User updated successfully"


@router.delete("/users/{user_id}", response_model=str)
async def delete_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
):
    try:
        await service.delete_user(user_id)
    except EntityNotFoundError:
        return _error(status.HTTP_404_NOT_FOUND, "User not found")
    return "User deleted successfully."
