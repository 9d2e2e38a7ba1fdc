"""Pydantic models for iTunes movie search responses."""

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, StrictInt, StrictStr

# Accept snake_case or wire (camelCase) names on input; never mutate after decode.
_ITUNES_CONFIG = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Movie(BaseModel):
    """A single movie entry returned by the iTunes search endpoint."""

    model_config = _ITUNES_CONFIG

    collection_id: StrictInt | None = Field(None, alias="collectionId")
    track_id: StrictInt = Field(alias="trackId")
    artist_name: StrictStr = Field(alias="artistName")
    track_name: StrictStr = Field(alias="trackName")
    artwork_url: HttpUrl = Field(alias="artworkUrl100")
    long_description: StrictStr | None = Field(None, alias="longDescription")


class SearchResponse(BaseModel):
    """Raw search envelope: declared count plus decoded results."""

    model_config = _ITUNES_CONFIG

    result_count: StrictInt = Field(alias="resultCount")
    results: tuple[Movie, ...]


class MovieSearchResponse(BaseModel):
    """Response for the search endpoint."""

    keyword: str
    results: list[Movie] = []
    total: int = 0


class CurrentMoviesResponse(BaseModel):
    """Snapshot of the search session's current result set."""

    keyword: str | None = None
    results: list[Movie] = []
    total: int = 0
    last_error: str | None = None
