# =============================================================================
# core/models/home.py - Home Page View Model
# =============================================================================
# Data substituted into templates/home.html. Built per request and thrown
# away once the page is rendered.
# =============================================================================

from pydantic import BaseModel, Field

# Redis key holding the timestamp of the first home page hit
FIRST_HIT_KEY = "first_hit"


class HomePage(BaseModel):
    """View model for GET /."""

    title: str = Field(default="Python web starter")

    first_hit: str = Field(
        ...,
        description="ISO-8601 timestamp of the first visit (or now without cache)"
    )

    cache_enabled: bool = Field(
        default=False,
        description="Whether first_hit came from the cache"
    )
