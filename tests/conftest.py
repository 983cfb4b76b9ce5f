# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Settings built explicitly (never from the developer's .env file)
# - An in-memory stand-in for UserRepository
# - A TestClient wired to the real routers with MongoDB/Redis mocked out
# =============================================================================

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.dependencies import get_user_service
from app.main import create_app
from core.services.user_service import UserService
from lib.utils import parse_object_id

PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Every variable Settings reads; cleared so the host environment can't leak in
SETTINGS_ENV_VARS = (
    "BIND_ADDR",
    "BIND_PORT",
    "LOG_LEVEL",
    "RUST_LOG",
    "MONGODB_URI",
    "MONGODB_DATABASE",
    "MONGODB_TIMEOUT_SECS",
    "REDIS_URI",
    "REDIS_TIMEOUT_SECS",
    "REDIS_ENABLED",
    "RENDER_ENABLED",
    "TEMPLATES_DIR",
    "ASSETS_DIR",
    "ASSETS_PATH",
)


# =============================================================================
# Fakes
# =============================================================================

class InMemoryUserRepository:
    """Dict-backed repository with the same coroutine interface as UserRepository."""

    def __init__(self) -> None:
        self.documents: dict[ObjectId, dict[str, Any]] = {}
        self.insert_calls = 0

    async def find_all(self) -> list[dict[str, Any]]:
        return [dict(document) for document in self.documents.values()]

    async def find_by_id(self, user_id: str) -> dict[str, Any] | None:
        object_id = parse_object_id(user_id)
        document = self.documents.get(object_id)
        return dict(document) if document else None

    async def find_by_email(self, email: str) -> dict[str, Any] | None:
        for document in self.documents.values():
            if document.get("email") == email:
                return dict(document)
        return None

    async def insert(self, document: dict[str, Any]) -> dict[str, Any]:
        self.insert_calls += 1
        stored = {**document, "_id": ObjectId()}
        self.documents[stored["_id"]] = stored
        return dict(stored)

    async def update(self, user_id: str, fields: dict[str, Any]) -> dict[str, Any] | None:
        object_id = parse_object_id(user_id)
        if object_id not in self.documents:
            return None
        self.documents[object_id].update(fields)
        return dict(self.documents[object_id])

    async def delete(self, user_id: str) -> bool:
        object_id = parse_object_id(user_id)
        return self.documents.pop(object_id, None) is not None


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def clean_env(monkeypatch):
    """Remove every settings variable from the environment."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


@pytest.fixture
def settings(clean_env) -> Settings:
    """Settings pointing at the project's templates, with Redis disabled."""
    return Settings(
        _env_file=None,
        REDIS_ENABLED=False,
        TEMPLATES_DIR=PROJECT_ROOT / "templates",
        ASSETS_DIR=PROJECT_ROOT / "assets",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def user_service(user_repository) -> UserService:
    return UserService(user_repository)


@pytest.fixture
def app(settings, user_service):
    """Application with the MongoDB client mocked and the in-memory service injected."""
    application = create_app(settings, mongodb_client=MagicMock())
    application.dependency_overrides[get_user_service] = lambda: user_service
    return application


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def sample_user_payload() -> dict[str, Any]:
    """Valid body for POST /users."""
    return {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
        "age": 36,
    }
