# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable infrastructure:
# - mongodb_client.py: MongoDB client factory and health ping
# - redis_client.py: Redis client factory and optional cache wrapper
# - utils.py: Shared utilities (ObjectId parsing, email check, timestamps)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.mongodb_client import create_mongodb_client, get_database, ping_mongodb
from lib.redis_client import CacheClient, create_redis_client
from lib.utils import is_valid_email, parse_object_id, to_iso8601, utc_now

__all__ = [
    # MongoDB
    "create_mongodb_client",
    "get_database",
    "ping_mongodb",
    # Redis
    "CacheClient",
    "create_redis_client",
    # Utils
    "is_valid_email",
    "parse_object_id",
    "to_iso8601",
    "utc_now",
]
