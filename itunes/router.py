"""FastAPI router for iTunes movie search and artwork endpoints."""

import logging
import mimetypes

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response
from posthog import Posthog

from core.dependencies import get_movie_search_api, get_posthog_client
from core.exceptions import MalformedRequestError, MovieSearchError
from core.sentry import capture_exception
from core.telemetry import RequestTelemetry, init_request_stats
from itunes.models import MovieSearchResponse
from itunes.service import MovieSearchAPI

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/itunes", tags=["itunes"])


def search_error_to_http(error: MovieSearchError) -> HTTPException:
    """Map a classified search error to an HTTP error response."""
    if isinstance(error, MalformedRequestError):
        return HTTPException(status_code=400, detail=error.message)
    return HTTPException(status_code=502, detail=error.message)


def guess_media_type(url: str) -> str:
    """Guess an image media type from the artwork URL."""
    media_type, _ = mimetypes.guess_type(url)
    return media_type or "application/octet-stream"


@router.get(
    "/search",
    response_model=MovieSearchResponse,
    summary="Search iTunes for movies",
    responses={
        200: {"description": "Search results returned"},
        400: {"description": "Search request could not be formed"},
        502: {"description": "iTunes request or response decoding failed"},
    },
)
async def search_movies(
    keyword: str = Query(..., description="Free-text search keyword"),
    api: MovieSearchAPI = Depends(get_movie_search_api),
    posthog_client: Posthog | None = Depends(get_posthog_client),
) -> MovieSearchResponse:
    """Search for movies by keyword."""
    init_request_stats()
    telemetry = RequestTelemetry()

    try:
        with telemetry.track_step("search"):
            telemetry.record_api_call("itunes")
            movies = await api.search(keyword)
    except MovieSearchError as e:
        raise search_error_to_http(e) from e
    except Exception as e:
        logger.error(f"Movie search failed: {e}")
        capture_exception(e, {"keyword": keyword})
        raise HTTPException(status_code=500, detail="Internal server error") from e
    finally:
        if posthog_client:
            telemetry.send_to_posthog(posthog_client, {"keyword_length": len(keyword)})

    return MovieSearchResponse(keyword=keyword, results=movies, total=len(movies))


@router.get(
    "/artwork",
    summary="Fetch artwork image bytes",
    response_class=Response,
    responses={
        200: {"description": "Image bytes returned"},
        404: {"description": "Artwork unavailable"},
    },
)
async def get_artwork(
    url: str = Query(..., description="Artwork URL from a movie result"),
    api: MovieSearchAPI = Depends(get_movie_search_api),
    posthog_client: Posthog | None = Depends(get_posthog_client),
) -> Response:
    """Fetch artwork for a movie; failures yield 404 rather than an error."""
    init_request_stats()
    telemetry = RequestTelemetry()

    with telemetry.track_step("artwork"):
        telemetry.record_api_call("artwork")
        image = await api.fetch_artwork(url)

    if posthog_client:
        telemetry.send_to_posthog(posthog_client, {"found": image is not None})

    if image is None:
        raise HTTPException(status_code=404, detail="Artwork unavailable")
    return Response(content=image, media_type=guess_media_type(url))
