# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: User CRUD request/response schemas
# - home.py: View model for the rendered home page
#
# These models define the "contract" between API and clients.
# =============================================================================

from .home import FIRST_HIT_KEY, HomePage
from .user import (
    USERS_COLLECTION,
    UserCreate,
    UserList,
    UserReplace,
    UserResponse,
    UserUpdate,
)

__all__ = [
    # Home
    "FIRST_HIT_KEY",
    "HomePage",
    # User
    "USERS_COLLECTION",
    "UserCreate",
    "UserList",
    "UserReplace",
    "UserResponse",
    "UserUpdate",
]
