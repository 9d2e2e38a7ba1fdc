"""Search session holding the current movie result set."""

import logging

from core.exceptions import MovieSearchError
from itunes.models import Movie
from itunes.service import MovieSearchAPI

logger = logging.getLogger(__name__)

DEFAULT_KEYWORD = "holiday"


class MovieSearchSession:
    """Current result set for a single consumer.

    Each search replaces the result set wholesale. Searches may overlap;
    every call is stamped with a generation number and only the most
    recently started search is allowed to apply its outcome.
    """

    def __init__(self, api: MovieSearchAPI, default_keyword: str = DEFAULT_KEYWORD):
        self.api = api
        self.default_keyword = default_keyword
        self.keyword: str | None = None
        self.last_error: str | None = None
        self._results: tuple[Movie, ...] = ()
        self._generation = 0

    @property
    def results(self) -> tuple[Movie, ...]:
        return self._results

    @property
    def generation(self) -> int:
        return self._generation

    async def search(self, keyword: str) -> tuple[Movie, ...] | None:
        """Run a search and apply its outcome if it is still the latest.

        Returns:
            The new result set, or None if a newer search started meanwhile

        Raises:
            MovieSearchError: If this search failed and is still the latest
        """
        self._generation += 1
        generation = self._generation

        try:
            movies = await self.api.search(keyword)
        except MovieSearchError as e:
            if generation != self._generation:
                logger.info(f"Discarding stale error for '{keyword}' (generation {generation})")
                return None
            self.last_error = e.message
            raise

        if generation != self._generation:
            logger.info(f"Discarding stale results for '{keyword}' (generation {generation})")
            return None

        self.keyword = keyword
        self._results = tuple(movies)
        self.last_error = None
        return self._results

    async def load_default(self) -> tuple[Movie, ...] | None:
        """Run the default keyword search."""
        return await self.search(self.default_keyword)
