"""FastAPI dependency injection providers."""

import logging

from fastapi import Depends
from posthog import Posthog

from config.settings import Settings, get_settings
from itunes.service import MovieSearchAPI
from movies.session import MovieSearchSession

logger = logging.getLogger(__name__)

# Module-level instances for lifecycle management
_movie_search_api: MovieSearchAPI | None = None
_movie_session: MovieSearchSession | None = None
_posthog_client: Posthog | None = None


def get_movie_search_api(settings: Settings = Depends(get_settings)) -> MovieSearchAPI:
    """Get the shared iTunes movie search client.

    Args:
        settings: Application settings

    Returns:
        MovieSearchAPI: Client configured from settings
    """
    global _movie_search_api

    if _movie_search_api is None:
        _movie_search_api = MovieSearchAPI(
            search_url=settings.itunes_search_url,
            media=settings.itunes_media,
            limit=settings.itunes_search_limit,
            timeout=settings.itunes_timeout,
        )
        logger.info(
            f"Movie search client initialized ({settings.itunes_search_url}, "
            f"limit {settings.itunes_search_limit})"
        )

    return _movie_search_api


def get_movie_session(
    settings: Settings = Depends(get_settings),
    api: MovieSearchAPI = Depends(get_movie_search_api),
) -> MovieSearchSession:
    """Get the process-wide search session."""
    global _movie_session

    if _movie_session is None:
        _movie_session = MovieSearchSession(api, default_keyword=settings.default_keyword)

    return _movie_session


async def close_movie_search_api() -> None:
    """Close the movie search client and drop the session built on it."""
    global _movie_search_api
    global _movie_session
    if _movie_search_api:
        await _movie_search_api.close()
        _movie_search_api = None
    _movie_session = None


def get_posthog_client(settings: Settings = Depends(get_settings)) -> Posthog | None:
    """Get PostHog client instance.

    Args:
        settings: Application settings

    Returns:
        Optional[Posthog]: PostHog client if configured and enabled, None otherwise
    """
    global _posthog_client

    if not settings.enable_telemetry:
        logger.debug("Telemetry disabled")
        return None

    if not settings.posthog_api_key:
        logger.debug("POSTHOG_API_KEY not set - telemetry disabled")
        return None

    if _posthog_client is None:
        _posthog_client = Posthog(
            project_api_key=settings.posthog_api_key,
            host=settings.posthog_host,
        )
        logger.info(f"PostHog client initialized (host: {settings.posthog_host})")

    return _posthog_client


def flush_posthog() -> None:
    """Flush any buffered PostHog events."""
    if _posthog_client:
        _posthog_client.flush()


def shutdown_posthog() -> None:
    """Shutdown PostHog client gracefully."""
    global _posthog_client
    if _posthog_client:
        _posthog_client.shutdown()
        _posthog_client = None
        logger.info("PostHog client shutdown")
