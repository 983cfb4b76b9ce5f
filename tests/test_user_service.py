# =============================================================================
# tests/test_user_service.py - User Service Tests
# =============================================================================
# Business rules of UserService, run against the in-memory repository.
# =============================================================================

from unittest.mock import AsyncMock

import pytest
from bson import ObjectId

from app.exceptions import (
    EmailAlreadyExistsError,
    StorageError,
    UserNotFoundError,
    ValidationFailedError,
)
from core.models.user import UserCreate, UserReplace, UserUpdate
from core.services.user_service import UserService


def new_user(**overrides) -> UserCreate:
    data = {"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com", "age": 36}
    data.update(overrides)
    return UserCreate(**data)


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_assigns_distinct_ids(self, user_service):
        first = await user_service.create_user(new_user(email="one@example.com"))
        second = await user_service.create_user(new_user(email="two@example.com"))

        assert first.id
        assert second.id
        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_sets_timestamps(self, user_service):
        user = await user_service.create_user(new_user())

        assert user.created_at == user.updated_at
        assert user.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_normalizes_fields(self, user_service):
        user = await user_service.create_user(
            new_user(first_name="  Ada ", email=" Ada@Example.COM ")
        )

        assert user.first_name == "Ada"
        assert user.email == "ada@example.com"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["first_name", "last_name", "email"])
    async def test_blank_required_field_rejected(self, user_service, user_repository, field):
        with pytest.raises(ValidationFailedError) as exc_info:
            await user_service.create_user(new_user(**{field: "   "}))

        assert exc_info.value.details == {"field": field}
        assert user_repository.insert_calls == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email", ["ada", "ada@", "@example.com", "ada@example", "a da@example.com"])
    async def test_malformed_email_rejected(self, user_service, user_repository, email):
        with pytest.raises(ValidationFailedError):
            await user_service.create_user(new_user(email=email))

        assert user_repository.insert_calls == 0

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, user_service, user_repository):
        await user_service.create_user(new_user())

        with pytest.raises(EmailAlreadyExistsError):
            await user_service.create_user(new_user(first_name="Another", email="ADA@example.com"))

        assert user_repository.insert_calls == 1


class TestGetUser:
    @pytest.mark.asyncio
    async def test_returns_created_user(self, user_service):
        created = await user_service.create_user(new_user())

        fetched = await user_service.get_user(created.id)

        assert fetched == created

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found(self, user_service):
        with pytest.raises(UserNotFoundError):
            await user_service.get_user(str(ObjectId()))

    @pytest.mark.asyncio
    async def test_invalid_id_is_not_found(self, user_service):
        with pytest.raises(UserNotFoundError):
            await user_service.get_user("definitely-not-an-id")


class TestListUsers:
    @pytest.mark.asyncio
    async def test_lists_all_users(self, user_service):
        await user_service.create_user(new_user(email="one@example.com"))
        await user_service.create_user(new_user(email="two@example.com"))

        users = await user_service.list_users()

        assert {user.email for user in users} == {"one@example.com", "two@example.com"}

    @pytest.mark.asyncio
    async def test_skips_invalid_documents(self, user_service, user_repository):
        await user_service.create_user(new_user())
        broken_id = ObjectId()
        user_repository.documents[broken_id] = {"_id": broken_id, "first_name": "Broken"}

        users = await user_service.list_users()

        assert [user.email for user in users] == ["ada@example.com"]

    @pytest.mark.asyncio
    async def test_keeps_documents_without_timestamps(self, user_service, user_repository):
        legacy_id = ObjectId()
        user_repository.documents[legacy_id] = {
            "_id": legacy_id,
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@example.com",
        }

        users = await user_service.list_users()
        fetched = await user_service.get_user(str(legacy_id))

        assert [user.id for user in users] == [str(legacy_id)]
        assert fetched.created_at is None


class TestUpdateUser:
    @pytest.mark.asyncio
    async def test_partial_update_then_read_returns_new_values(self, user_service):
        created = await user_service.create_user(new_user())

        await user_service.update_user(created.id, UserUpdate(age=37))
        fetched = await user_service.get_user(created.id)

        assert fetched.age == 37
        assert fetched.first_name == "Ada"
        assert fetched.id == created.id
        assert fetched.created_at == created.created_at
        assert fetched.updated_at >= created.updated_at

    @pytest.mark.asyncio
    async def test_last_write_wins(self, user_service):
        created = await user_service.create_user(new_user())

        await user_service.update_user(created.id, UserUpdate(first_name="First"))
        await user_service.update_user(created.id, UserUpdate(first_name="Second"))

        assert (await user_service.get_user(created.id)).first_name == "Second"

    @pytest.mark.asyncio
    async def test_empty_update_rejected(self, user_service):
        created = await user_service.create_user(new_user())

        with pytest.raises(ValidationFailedError):
            await user_service.update_user(created.id, UserUpdate())

    @pytest.mark.asyncio
    async def test_null_required_field_rejected(self, user_service):
        created = await user_service.create_user(new_user())

        with pytest.raises(ValidationFailedError):
            await user_service.update_user(created.id, UserUpdate(email=None))

    @pytest.mark.asyncio
    async def test_age_can_be_cleared(self, user_service):
        created = await user_service.create_user(new_user())

        updated = await user_service.update_user(created.id, UserUpdate(age=None))

        assert updated.age is None

    @pytest.mark.asyncio
    async def test_email_taken_by_other_user_rejected(self, user_service):
        await user_service.create_user(new_user(email="one@example.com"))
        second = await user_service.create_user(new_user(email="two@example.com"))

        with pytest.raises(EmailAlreadyExistsError):
            await user_service.update_user(second.id, UserUpdate(email="one@example.com"))

    @pytest.mark.asyncio
    async def test_keeping_own_email_allowed(self, user_service):
        created = await user_service.create_user(new_user())

        updated = await user_service.update_user(
            created.id, UserUpdate(email="ada@example.com", last_name="Byron")
        )

        assert updated.last_name == "Byron"

    @pytest.mark.asyncio
    async def test_keeping_own_email_with_uppercase_id_allowed(self, user_service):
        created = await user_service.create_user(new_user())

        updated = await user_service.update_user(
            created.id.upper(), UserUpdate(email="ada@example.com", age=40)
        )

        assert updated.id == created.id
        assert updated.age == 40

    @pytest.mark.asyncio
    async def test_unknown_user_is_not_found(self, user_service):
        with pytest.raises(UserNotFoundError):
            await user_service.update_user(str(ObjectId()), UserUpdate(age=1))

    @pytest.mark.asyncio
    async def test_unknown_user_checked_before_email(self, user_service):
        await user_service.create_user(new_user())

        with pytest.raises(UserNotFoundError):
            await user_service.update_user(str(ObjectId()), UserUpdate(email="ada@example.com"))


class TestReplaceUser:
    @pytest.mark.asyncio
    async def test_replaces_all_fields(self, user_service):
        created = await user_service.create_user(new_user())

        replaced = await user_service.replace_user(
            created.id,
            UserReplace(first_name="Grace", last_name="Hopper", email="grace@example.com"),
        )

        assert replaced.id == created.id
        assert replaced.first_name == "Grace"
        assert replaced.email == "grace@example.com"
        assert replaced.age is None

    @pytest.mark.asyncio
    async def test_unknown_user_is_not_found(self, user_service):
        with pytest.raises(UserNotFoundError):
            await user_service.replace_user(
                str(ObjectId()),
                UserReplace(first_name="Grace", last_name="Hopper", email="grace@example.com"),
            )


class TestDeleteUser:
    @pytest.mark.asyncio
    async def test_delete_then_read_is_not_found(self, user_service):
        created = await user_service.create_user(new_user())

        await user_service.delete_user(created.id)

        with pytest.raises(UserNotFoundError):
            await user_service.get_user(created.id)

    @pytest.mark.asyncio
    async def test_unknown_user_is_not_found(self, user_service):
        with pytest.raises(UserNotFoundError):
            await user_service.delete_user(str(ObjectId()))


class TestStorageErrors:
    @pytest.mark.asyncio
    async def test_storage_error_propagates(self):
        repository = AsyncMock()
        repository.find_by_id.side_effect = StorageError("find_by_id")
        service = UserService(repository)

        with pytest.raises(StorageError):
            await service.get_user(str(ObjectId()))
