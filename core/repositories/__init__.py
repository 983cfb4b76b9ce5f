# =============================================================================
# core/repositories/__init__.py - Repository Layer Exports
# =============================================================================

from .user_repository import UserRepository

__all__ = [
    "UserRepository",
]
