"""iTunes movie search client: URL building, transport, decoding and artwork fetch."""

from __future__ import annotations

import logging
import time
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from core.exceptions import DecodeError, MalformedRequestError, TransportError
from core.sentry import add_itunes_breadcrumb
from core.telemetry import record_api_time, record_artwork_fetch, record_itunes_api_call
from itunes.models import Movie, SearchResponse

logger = logging.getLogger(__name__)

ITUNES_SEARCH_URL = "https://itunes.apple.com/search"
DEFAULT_MEDIA = "movie"
DEFAULT_LIMIT = 100
DEFAULT_TIMEOUT = 5.0
USER_AGENT = "MovieSearchService/1.0"


def encode_keyword(keyword: str) -> str:
    """Percent-encode a keyword for use as a query string value.

    Raises:
        MalformedRequestError: If the keyword cannot be represented as UTF-8
    """
    try:
        return quote(keyword, safe="")
    except UnicodeEncodeError as e:
        raise MalformedRequestError(
            "Keyword cannot be percent-encoded", details={"keyword": repr(keyword)}, cause=e
        ) from e


def decode_search_response(data: bytes) -> SearchResponse:
    """Decode a raw search response body.

    A mismatch between resultCount and the number of results is logged, not rejected.

    Raises:
        DecodeError: If the body is not JSON or does not match the expected shape
    """
    try:
        response = SearchResponse.model_validate_json(data)
    except ValidationError as e:
        raise DecodeError(
            f"Could not decode search response: {e.error_count()} error(s)",
            details={"errors": e.errors(include_url=False, include_input=False)},
            cause=e,
        ) from e

    if response.result_count != len(response.results):
        logger.warning(
            f"resultCount {response.result_count} does not match "
            f"{len(response.results)} decoded results"
        )
    return response


class MovieSearchAPI:
    """Client for the iTunes movie search endpoint.

    The HTTP client may be injected; an injected client is owned by the caller
    and is left open by close(). Otherwise one is created lazily on first use.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        search_url: str = ITUNES_SEARCH_URL,
        media: str = DEFAULT_MEDIA,
        limit: int = DEFAULT_LIMIT,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.search_url = search_url
        self.media = media
        self.limit = limit
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={"User-Agent": USER_AGENT},
                timeout=self.timeout,
                follow_redirects=True,
            )
            self._owns_client = True
        return self._client

    async def close(self):
        """Close the HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def build_search_url(self, keyword: str) -> httpx.URL:
        """Build the search URL for a raw keyword.

        Raises:
            MalformedRequestError: If the keyword cannot be encoded or the
                interpolated string is not an absolute http(s) URL
        """
        encoded = encode_keyword(keyword)
        url_string = f"{self.search_url}?media={self.media}&term={encoded}&limit={self.limit}"
        try:
            url = httpx.URL(url_string)
        except httpx.InvalidURL as e:
            raise MalformedRequestError(
                f"Invalid search URL: {url_string}", details={"url": url_string}, cause=e
            ) from e

        if url.scheme not in ("http", "https") or not url.host:
            raise MalformedRequestError(
                f"Invalid search URL: {url_string}", details={"url": url_string}
            )
        return url

    async def search(self, keyword: str) -> list[Movie]:
        """Search iTunes for movies matching a keyword.

        Exactly one outcome per call: the decoded results, or one of the
        classified errors below.

        Args:
            keyword: Free-text search keyword (not yet encoded)

        Returns:
            Movies in the order returned by iTunes

        Raises:
            MalformedRequestError: The request could not be formed; nothing was sent
            TransportError: The request failed, returned non-2xx, or had an empty body
            DecodeError: The body did not match the expected shape
        """
        url = self.build_search_url(keyword)
        client = self._get_client()

        logger.info(f"Searching iTunes for movies: '{keyword}'")
        add_itunes_breadcrumb("search", {"keyword": keyword})

        start = time.perf_counter()
        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            logger.error(f"iTunes search request failed: {type(e).__name__}: {e}")
            add_itunes_breadcrumb("search_error", {"error": str(e)}, level="error")
            raise TransportError(f"Search request failed: {e}", cause=e) from e
        finally:
            record_api_time((time.perf_counter() - start) * 1000)
            record_itunes_api_call()

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"iTunes search returned HTTP {response.status_code}")
            raise TransportError(
                f"Search returned HTTP {response.status_code}",
                details={"status_code": response.status_code},
                cause=e,
            ) from e

        if not response.content:
            logger.error("iTunes search returned an empty body")
            raise TransportError(
                "Search returned no data", details={"status_code": response.status_code}
            )

        movies = list(decode_search_response(response.content).results)
        logger.info(f"iTunes search found {len(movies)} movies for '{keyword}'")
        return movies

    async def fetch_artwork(self, url: str) -> bytes | None:
        """Fetch artwork image bytes.

        Failures are logged and reported as None; this never raises.
        """
        try:
            response = await self._get_client().get(url)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as e:
            # URL parsing failures (bad port, lone surrogates) surface before any I/O
            logger.warning(f"Artwork fetch failed for {url}: {type(e).__name__}: {e}")
            add_itunes_breadcrumb("artwork_error", {"url": url, "error": str(e)}, level="warning")
            record_artwork_fetch(success=False)
            return None

        if not response.content:
            logger.warning(f"Artwork fetch returned no data for {url}")
            add_itunes_breadcrumb(
                "artwork_error", {"url": url, "error": "empty body"}, level="warning"
            )
            record_artwork_fetch(success=False)
            return None

        record_artwork_fetch(success=True)
        return response.content

    async def check_api(self) -> bool:
        """Check iTunes search connectivity with a single-result query."""
        try:
            response = await self._get_client().get(
                self.search_url, params={"media": self.media, "term": "movie", "limit": 1}
            )
            return bool(response.status_code == 200)
        except Exception:
            return False
