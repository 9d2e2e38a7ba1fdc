"""FastAPI router exposing the search session's current result set."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from core.dependencies import get_movie_session
from core.exceptions import MovieSearchError
from itunes.models import CurrentMoviesResponse
from itunes.router import search_error_to_http
from movies.session import MovieSearchSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/movies", tags=["movies"])


def _snapshot(session: MovieSearchSession) -> CurrentMoviesResponse:
    results = list(session.results)
    return CurrentMoviesResponse(
        keyword=session.keyword,
        results=results,
        total=len(results),
        last_error=session.last_error,
    )


@router.get(
    "/current",
    response_model=CurrentMoviesResponse,
    summary="Get the current result set",
)
async def get_current_movies(
    session: MovieSearchSession = Depends(get_movie_session),
) -> CurrentMoviesResponse:
    """Return the most recently applied results and the last error, if any."""
    return _snapshot(session)


@router.post(
    "/current",
    response_model=CurrentMoviesResponse,
    summary="Replace the current result set with a new search",
    responses={
        200: {"description": "Search applied"},
        400: {"description": "Search request could not be formed"},
        409: {"description": "Superseded by a newer search"},
        502: {"description": "iTunes request or response decoding failed"},
    },
)
async def replace_current_movies(
    keyword: str = Query(..., description="Free-text search keyword"),
    session: MovieSearchSession = Depends(get_movie_session),
) -> CurrentMoviesResponse:
    """Search and apply the results unless a newer search has started."""
    try:
        applied = await session.search(keyword)
    except MovieSearchError as e:
        raise search_error_to_http(e) from e

    if applied is None:
        raise HTTPException(status_code=409, detail="Superseded by a newer search")

    return _snapshot(session)
