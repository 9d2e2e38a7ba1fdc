"""Integration test fixtures.

Provides a real MovieSearchAPI whose HTTP client is served by an in-process
stub of the iTunes search and artwork endpoints.
"""

import json

import httpx
import pytest
import pytest_asyncio

from config.settings import Settings
from itunes.service import MovieSearchAPI
from movies.session import MovieSearchSession
from tests.factories import make_movie_payload, make_search_body

# ---------------------------------------------------------------------------
# Seed data -- representative iTunes movie results
# ---------------------------------------------------------------------------

CATALOG = {
    "holiday": [
        make_movie_payload(
            123,
            trackName="Holiday",
            artworkUrl100="https://artwork.example.com/holiday.jpg",
        ),
        make_movie_payload(
            456,
            artistName="Nancy Meyers",
            trackName="The Holiday",
            collectionId=789,
            longDescription="Two women swap homes for the holidays.",
            artworkUrl100="https://artwork.example.com/the-holiday.jpg",
        ),
    ],
    "star wars": [
        make_movie_payload(
            1001,
            artistName="George Lucas",
            trackName="Star Wars",
            artworkUrl100="https://artwork.example.com/missing.jpg",
        ),
    ],
}

ARTWORK = {
    "/holiday.jpg": b"\xff\xd8holiday",
    "/the-holiday.jpg": b"\xff\xd8the-holiday",
}


class StubItunes:
    """In-process stand-in for the iTunes search and artwork hosts."""

    def __init__(self):
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.host == "itunes.apple.com" and request.url.path == "/search":
            term = request.url.params.get("term", "")
            if term == "broken":
                return httpx.Response(200, content=b'{"resultCount": 1, "results": [{}]}')
            if term == "outage":
                raise httpx.ConnectError("connection reset", request=request)
            results = CATALOG.get(term.lower(), [])
            return httpx.Response(200, content=json.dumps(make_search_body(*results)).encode())

        if request.url.host == "artwork.example.com" and request.url.path in ARTWORK:
            return httpx.Response(
                200, content=ARTWORK[request.url.path], headers={"content-type": "image/jpeg"}
            )

        return httpx.Response(404)


@pytest.fixture
def stub_itunes():
    return StubItunes()


@pytest_asyncio.fixture
async def movie_search_api(stub_itunes):
    async with httpx.AsyncClient(transport=httpx.MockTransport(stub_itunes)) as client:
        yield MovieSearchAPI(client=client)


@pytest.fixture
def movie_session(movie_search_api):
    return MovieSearchSession(movie_search_api)


@pytest.fixture
def integration_settings():
    return Settings(
        _env_file=None,
        sentry_dsn=None,
        posthog_api_key=None,
        enable_telemetry=False,
        preload_default_search=False,
    )


@pytest.fixture
def app(movie_search_api, movie_session, integration_settings):
    from config.settings import get_settings
    from core.dependencies import get_movie_search_api, get_movie_session, get_posthog_client
    from main import app

    app.dependency_overrides[get_movie_search_api] = lambda: movie_search_api
    app.dependency_overrides[get_movie_session] = lambda: movie_session
    app.dependency_overrides[get_posthog_client] = lambda: None
    app.dependency_overrides[get_settings] = lambda: integration_settings
    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app):
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://test"
    ) as c:
        yield c
