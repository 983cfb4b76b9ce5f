# =============================================================================
# app/routers/users.py - User CRUD Endpoints
# =============================================================================
# REST controller for user management. Mounted under /users in main.py.
#
# Routes:
# - GET    /users       - List all users
# - GET    /users/{id}  - Get user by ID
# - POST   /users       - Create new user
# - PUT    /users/{id}  - Replace user fields
# - PATCH  /users/{id}  - Update some user fields
# - DELETE /users/{id}  - Delete user
#
# Handlers contain no business logic: errors raised by UserService are
# turned into status codes by the handlers registered in main.py.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Response, status

from app.dependencies import UserServiceDep
from core.models.user import (
    UserCreate,
    UserList,
    UserReplace,
    UserResponse,
    UserUpdate,
)

router = APIRouter()

UserId = Annotated[str, Path(description="User id (24 character hex ObjectId)")]


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=UserList)
async def list_users(service: UserServiceDep):
    """List all users."""
    users = await service.list_users()
    return UserList(users=users, total=len(users))


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: UserId, service: UserServiceDep):
    """
    Get user details.

    Returns 404 if no user has this id.
    """
    return await service.get_user(user_id)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(request: UserCreate, service: UserServiceDep):
    """
    Create a new user.

    The id is assigned by the database and returned in the response.
    Returns 400 if a field is invalid or the email is already in use.
    """
    return await service.create_user(request)


@router.put("/{user_id}", response_model=UserResponse)
async def replace_user(user_id: UserId, request: UserReplace, service: UserServiceDep):
    """Replace every mutable field of a user."""
    return await service.replace_user(user_id, request)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(user_id: UserId, request: UserUpdate, service: UserServiceDep):
    """
    Update user details.

    Only the fields present in the body are changed.
    """
    return await service.update_user(user_id, request)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: UserId, service: UserServiceDep):
    """Delete a user. Returns 404 if no user has this id."""
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
