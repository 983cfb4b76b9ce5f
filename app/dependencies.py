# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# The handles are created once in the application lifespan and stored on
# app.state; these functions hand them to route handlers via Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request
from fastapi.templating import Jinja2Templates

from app.config import Settings
from core.services.user_service import UserService
from lib.redis_client import CacheClient


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_user_service(request: Request) -> UserService:
    """
    Get the shared UserService instance.

    Returns the service created at startup.
    """
    return request.app.state.user_service


def get_cache(request: Request) -> CacheClient:
    """Get the shared cache wrapper (may wrap no client at all)."""
    return request.app.state.cache


def get_templates(request: Request) -> Jinja2Templates:
    """Get the Jinja2 template renderer."""
    return request.app.state.templates


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
CacheDep = Annotated[CacheClient, Depends(get_cache)]
TemplatesDep = Annotated[Jinja2Templates, Depends(get_templates)]
