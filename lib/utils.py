# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

import re
from datetime import datetime, timezone

from bson import ObjectId
from bson.errors import InvalidId


# Deliberately loose: one "@", no whitespace, a dot in the domain part
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


# =============================================================================
# ObjectId Utilities
# =============================================================================

def parse_object_id(value: str) -> ObjectId | None:
    """
    Parse a hex string into an ObjectId.

    Args:
        value: 24 character hex string from a URL path

    Returns:
        The ObjectId, or None when the string is not a valid id

    Example:
        parse_object_id("65a1f0c2e4b0a1b2c3d4e5f6")  # ObjectId(...)
        parse_object_id("not-an-id")                 # None
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


# =============================================================================
# Validation Utilities
# =============================================================================

def is_valid_email(value: str) -> bool:
    """Check that ``value`` looks like an email address."""
    return bool(EMAIL_PATTERN.match(value))


# =============================================================================
# Time Utilities
# =============================================================================

def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_iso8601(value: datetime) -> str:
    """
    Format a datetime as ISO-8601.

    Naive datetimes (as returned by MongoDB) are assumed to be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()
