# =============================================================================
# app/routers/home.py - Server-rendered Pages
# =============================================================================
# HTML routes rendered with Jinja2. Only registered when RENDER_ENABLED is
# true; in JSON-only mode this router is never included.
# =============================================================================

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from app.dependencies import CacheDep, TemplatesDep
from core.models.home import FIRST_HIT_KEY, HomePage
from lib.redis_client import CacheClient
from lib.utils import to_iso8601, utc_now

router = APIRouter(include_in_schema=False)


async def _first_hit(cache: CacheClient) -> tuple[str, bool]:
    """
    Timestamp of the first page view, remembered in the cache.

    Without a cache every view is the "first" one. Concurrent first visits
    race on SET NX; the loser shows the winner's timestamp.
    """
    now = to_iso8601(utc_now())
    if not cache.is_available():
        return now, False

    cached = await cache.get(FIRST_HIT_KEY)
    if cached is not None:
        return cached, True

    if await cache.set(FIRST_HIT_KEY, now, nx=True):
        return now, True

    # Lost the race, or the cache failed
    cached = await cache.get(FIRST_HIT_KEY)
    if cached is not None:
        return cached, True
    return now, False


@router.get("/", response_class=HTMLResponse)
async def home(request: Request, templates: TemplatesDep, cache: CacheDep):
    """Serve the home page."""
    first_hit, cache_enabled = await _first_hit(cache)
    page = HomePage(first_hit=first_hit, cache_enabled=cache_enabled)
    return templates.TemplateResponse(
        request=request,
        name="home.html",
        context={"page": page},
    )
