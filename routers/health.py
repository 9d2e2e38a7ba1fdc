"""Health check router with a real iTunes connectivity probe."""

import asyncio
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from config.settings import Settings, get_settings
from core.dependencies import get_movie_search_api
from itunes.service import MovieSearchAPI

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

CHECK_TIMEOUT = 3.0


async def _check_itunes_api(api: MovieSearchAPI) -> str:
    """Ping the iTunes search endpoint via the shared client."""
    return "ok" if await api.check_api() else "error"


async def _run_check(coro) -> str:
    """Run a single health check with a timeout."""
    try:
        return await asyncio.wait_for(coro, timeout=CHECK_TIMEOUT)
    except TimeoutError:
        return "timeout"


@router.get(
    "/health",
    summary="Health check",
    responses={
        200: {"description": "Service is healthy"},
        503: {"description": "iTunes search endpoint is unreachable"},
    },
)
async def health_check(
    settings: Settings = Depends(get_settings),
    api: MovieSearchAPI = Depends(get_movie_search_api),
):
    """Health check with a connectivity probe for the search endpoint."""
    services = {"itunes_api": await _run_check(_check_itunes_api(api))}
    status = "healthy" if services["itunes_api"] == "ok" else "unhealthy"

    body = {
        "status": status,
        "version": settings.app_version,
        "services": services,
    }

    return JSONResponse(content=body, status_code=200 if status == "healthy" else 503)
