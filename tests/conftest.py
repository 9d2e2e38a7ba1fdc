"""Shared test fixtures for pytest."""

from unittest.mock import AsyncMock

import pytest

from itunes.service import MovieSearchAPI
from tests.factories import make_movie


@pytest.fixture
def mock_movie_search_api():
    """Create a mock movie search client."""
    api = AsyncMock(spec=MovieSearchAPI)
    api.search = AsyncMock(return_value=[])
    api.fetch_artwork = AsyncMock(return_value=None)
    api.check_api = AsyncMock(return_value=True)
    return api


@pytest.fixture
def sample_movie():
    """Create a sample movie with only required fields."""
    return make_movie(track_id=123)


@pytest.fixture
def sample_movies():
    """Create multiple sample movies for testing."""
    return [
        make_movie(
            track_id=1,
            trackName="Holiday Inn",
            collectionId=10,
            longDescription="A musical.",
        ),
        make_movie(track_id=2, trackName="The Holiday"),
    ]
