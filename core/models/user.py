# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for user operations:
# - UserCreate: Input for POST /users
# - UserReplace: Input for PUT /users/{id} (every mutable field)
# - UserUpdate: Input for PATCH /users/{id} (any subset of fields)
# - UserResponse: Output when returning a user to clients
# - UserList: Output for GET /users
#
# Shape checks (types, lengths, age range) live here. Business rules such as
# well-formed and unique email addresses are enforced by UserService.
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

# MongoDB collection holding user documents
USERS_COLLECTION = "users"


class UserCreate(BaseModel):
    """
    Schema for creating a new user.

    Example:
        {
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@example.com",
            "age": 36
        }
    """

    first_name: str = Field(
        ...,
        max_length=100,
        description="Given name"
    )

    last_name: str = Field(
        ...,
        max_length=100,
        description="Family name"
    )

    email: str = Field(
        ...,
        max_length=254,
        description="Email address, unique across users"
    )

    age: int | None = Field(
        default=None,
        ge=0,
        le=255,
        description="Age in years"
    )


class UserReplace(UserCreate):
    """Schema for replacing every mutable field of a user (PUT)."""


class UserUpdate(BaseModel):
    """
    Schema for a partial update (PATCH).

    Only fields present in the request body are written; use
    model_dump(exclude_unset=True) to get them.

    Example:
        {
            "email": "ada.lovelace@example.com"
        }
    """

    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    email: str | None = Field(default=None, max_length=254)
    age: int | None = Field(default=None, ge=0, le=255)


class UserResponse(BaseModel):
    """
    Schema for returning user data to clients.

    Returned by:
    - POST /users
    - GET /users/{id}
    - PUT/PATCH /users/{id}

    Example:
        {
            "id": "65a1f0c2e4b0a1b2c3d4e5f6",
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@example.com",
            "age": 36,
            "created_at": "2024-01-15T10:30:00+00:00",
            "updated_at": "2024-01-15T10:30:00+00:00"
        }
    """

    id: str = Field(..., description="Database-assigned identifier (hex ObjectId)")
    first_name: str
    last_name: str
    email: str
    age: int | None = Field(default=None)
    created_at: datetime | None = Field(
        default=None,
        description="When the user was created (null for records written without timestamps)"
    )
    updated_at: datetime | None = Field(
        default=None,
        description="When the user was last modified"
    )

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "UserResponse":
        """
        Build a response from a MongoDB document.

        Raises:
            pydantic.ValidationError: If the stored document is malformed
        """
        return cls(
            id=str(document["_id"]),
            first_name=document.get("first_name"),
            last_name=document.get("last_name"),
            email=document.get("email"),
            age=document.get("age"),
            created_at=document.get("created_at"),
            updated_at=document.get("updated_at") or document.get("created_at"),
        )


class UserList(BaseModel):
    """
    Schema for listing users.

    Returned by GET /users endpoint.
    """

    users: list[UserResponse] = Field(
        default_factory=list,
        description="List of users"
    )

    total: int = Field(
        default=0,
        ge=0,
        description="Number of users returned"
    )
