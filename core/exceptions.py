"""Custom exception classes for the movie search service."""


class MovieSearchError(Exception):
    """Base exception for all movie search errors."""

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        cause: BaseException | None = None,
    ):
        self.message = message
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)


class MalformedRequestError(MovieSearchError):
    """Raised when the search request cannot be formed. No I/O is attempted."""

    pass


class TransportError(MovieSearchError):
    """Raised when the HTTP layer fails or returns no usable response."""

    pass


class DecodeError(MovieSearchError):
    """Raised when a response body does not match the expected JSON shape."""

    pass
