# =============================================================================
# app/routers/ - Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - users.py: User CRUD endpoints (JSON)
# - home.py: Server-rendered pages (HTML, optional)
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import home
from . import users

__all__ = [
    "health",
    "home",
    "users",
]
