# =============================================================================
# core/services/user_service.py - User Business Logic
# =============================================================================
# Handles user CRUD operations and business rules:
# - required fields must not be blank
# - email must be well-formed and unique across users
# Invalid input is rejected before the repository is called.
# =============================================================================

import logging
from typing import Any

from pydantic import ValidationError

from app.exceptions import (
    EmailAlreadyExistsError,
    UserNotFoundError,
    ValidationFailedError,
)
from core.models.user import (
    UserCreate,
    UserReplace,
    UserResponse,
    UserUpdate,
)
from core.repositories.user_repository import UserRepository
from lib.utils import is_valid_email, parse_object_id, utc_now

logger = logging.getLogger(__name__)

REQUIRED_TEXT_FIELDS = ("first_name", "last_name", "email")


class UserService:
    """
    Service for user management operations.

    Provides a clean interface between API routes and the repository.
    Stateless apart from the repository handle.
    """

    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository

    async def list_users(self) -> list[UserResponse]:
        """
        Get all users.

        Stored documents that no longer match the schema are logged and
        skipped rather than failing the whole listing.
        """
        users = []
        for document in await self.repository.find_all():
            try:
                users.append(UserResponse.from_document(document))
            except ValidationError as e:
                logger.error("Skipping invalid user document %s: %s", document.get("_id"), e)
        return users

    async def get_user(self, user_id: str) -> UserResponse:
        """
        Get a user by ID.

        Raises:
            UserNotFoundError: If the user doesn't exist
        """
        document = await self.repository.find_by_id(user_id)
        if document is None:
            raise UserNotFoundError(user_id)
        return UserResponse.from_document(document)

    async def create_user(self, request: UserCreate) -> UserResponse:
        """
        Create a new user.

        Raises:
            ValidationFailedError: If a field is blank or the email is malformed
            EmailAlreadyExistsError: If the email is already taken
        """
        fields = _clean_fields(request.model_dump(), required=REQUIRED_TEXT_FIELDS)
        await self._ensure_email_available(fields["email"])

        now = utc_now()
        document = await self.repository.insert(
            {**fields, "created_at": now, "updated_at": now}
        )
        return UserResponse.from_document(document)

    async def replace_user(self, user_id: str, request: UserReplace) -> UserResponse:
        """
        Overwrite every mutable field of a user.

        Raises:
            ValidationFailedError: If a field is blank or the email is malformed
            EmailAlreadyExistsError: If another user has the email
            UserNotFoundError: If the user doesn't exist
        """
        fields = _clean_fields(request.model_dump(), required=REQUIRED_TEXT_FIELDS)
        return await self._apply_update(user_id, fields)

    async def update_user(self, user_id: str, request: UserUpdate) -> UserResponse:
        """
        Update only the fields present in the request.

        Last write wins: there is no version check.

        Raises:
            ValidationFailedError: If nothing is supplied or a value is invalid
            EmailAlreadyExistsError: If another user has the email
            UserNotFoundError: If the user doesn't exist
        """
        supplied = request.model_dump(exclude_unset=True)
        if not supplied:
            raise ValidationFailedError("No fields to update")

        # Explicit nulls are only meaningful for optional fields
        for name in REQUIRED_TEXT_FIELDS:
            if name in supplied and supplied[name] is None:
                raise ValidationFailedError(f"{name} cannot be null", field=name)

        fields = _clean_fields(supplied, required=tuple(
            name for name in REQUIRED_TEXT_FIELDS if name in supplied
        ))
        return await self._apply_update(user_id, fields)

    async def delete_user(self, user_id: str) -> None:
        """
        Delete a user.

        Raises:
            UserNotFoundError: If the user doesn't exist
        """
        if not await self.repository.delete(user_id):
            raise UserNotFoundError(user_id)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    async def _apply_update(self, user_id: str, fields: dict[str, Any]) -> UserResponse:
        # Not-found takes precedence over a conflicting email
        if await self.repository.find_by_id(user_id) is None:
            raise UserNotFoundError(user_id)

        if "email" in fields:
            await self._ensure_email_available(fields["email"], exclude_id=user_id)

        # The user can still disappear between the lookup and the write
        document = await self.repository.update(user_id, {**fields, "updated_at": utc_now()})
        if document is None:
            raise UserNotFoundError(user_id)
        return UserResponse.from_document(document)

    async def _ensure_email_available(self, email: str, exclude_id: str | None = None) -> None:
        existing = await self.repository.find_by_email(email)
        if existing is None:
            return
        # Compare ObjectIds: hex ids are case-insensitive
        if exclude_id is None or existing["_id"] != parse_object_id(exclude_id):
            raise EmailAlreadyExistsError(email)


def _clean_fields(fields: dict[str, Any], required: tuple[str, ...]) -> dict[str, Any]:
    """
    Strip text fields, reject blanks and normalize the email.

    Returns a new dict; ``fields`` is not modified.
    """
    cleaned = dict(fields)
    for name in required:
        value = (cleaned.get(name) or "").strip()
        if not value:
            raise ValidationFailedError(f"{name} is required", field=name)
        cleaned[name] = value

    if "email" in cleaned:
        email = cleaned["email"].lower()
        if not is_valid_email(email):
            raise ValidationFailedError(f"Invalid email address: {email}", field="email")
        cleaned["email"] = email

    return cleaned
