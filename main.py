"""Main application entry point for the Movie Search service."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request

from config.settings import get_settings
from core.dependencies import (
    close_movie_search_api,
    flush_posthog,
    get_movie_search_api,
    get_movie_session,
    shutdown_posthog,
)
from core.exceptions import MovieSearchError
from core.logging import setup_logging
from core.sentry import init_sentry
from itunes.router import router as itunes_router
from movies.router import router as movies_router
from routers.health import router as health_router

load_dotenv()

settings = get_settings()

init_sentry(
    dsn=settings.sentry_dsn,
    environment="production" if settings.log_level != "DEBUG" else "development",
    release=settings.app_version,
)

log_file = None
if settings.log_level != "DEBUG":
    log_dir = Path("/app/logs") if Path("/app/logs").exists() else Path("logs")
    log_file = log_dir / "movie-search.log"
setup_logging(level=settings.log_level, log_file=log_file)

logger = logging.getLogger(__name__)


async def preload_default_search() -> None:
    """Populate the search session with the default keyword results."""
    session = get_movie_session(settings, get_movie_search_api(settings))
    try:
        results = await session.load_default()
    except MovieSearchError as e:
        logger.warning(f"Default search for '{session.default_keyword}' failed: {e.message}")
        return
    logger.info(f"Default search loaded {len(results or ())} movies")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan with proper startup and shutdown."""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"iTunes search endpoint: {settings.itunes_search_url}")

    if settings.preload_default_search:
        await preload_default_search()

    yield

    logger.info("Shutting down application")
    shutdown_posthog()
    await close_movie_search_api()
    logger.info("All services shut down")


app = FastAPI(
    title=settings.app_name,
    description="iTunes movie search with artwork fetching",
    version=settings.app_version,
    lifespan=lifespan,
)


@app.middleware("http")
async def posthog_flush_middleware(request: Request, call_next):
    """Flush PostHog events after each request to prevent data loss."""
    response = await call_next(request)
    flush_posthog()
    return response


app.include_router(health_router, prefix="", tags=["health"])
app.include_router(itunes_router, prefix="/api/v1", tags=["itunes"])
app.include_router(movies_router, prefix="/api/v1", tags=["movies"])

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
