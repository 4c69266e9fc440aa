"""Exception classes for the Spotify library client."""

from typing import Optional


class SpotifyError(Exception):
    """Base exception for all Spotify library client errors."""

    pass


class SpotifyTransportError(SpotifyError):
    """Network or transport failure before a response was received.

    The underlying httpx exception is chained as ``__cause__``.
    """

    pass


class RequestCancelledError(SpotifyError):
    """The caller's RequestContext was cancelled before or during the request."""

    pass


class RequestTimeoutError(RequestCancelledError, TimeoutError):
    """The caller's RequestContext deadline passed before the request completed."""

    pass


class SpotifyDecodeError(SpotifyError, ValueError):
    """A successful response body could not be decoded into the expected shape."""

    pass


class SpotifyAPIError(SpotifyError):
    """Spotify returned a non-2xx HTTP status.

    Attributes:
        status: HTTP status code (taken from the error payload when present)
        message: Error message from the server
    """

    def __init__(self, status: int, message: str):
        """Initialize Spotify API error.

        Args:
            status: HTTP status code reported by Spotify
            message: Human-readable error message
        """
        self.status = status
        self.message = message
        super().__init__(f"Spotify API Error {status}: {message}")


class SpotifyBadRequestError(SpotifyAPIError):
    """Malformed request (HTTP 400), e.g. an invalid ID."""

    pass


class SpotifyAuthenticationError(SpotifyAPIError):
    """Missing, invalid or expired access token (HTTP 401)."""

    pass


class SpotifyAuthorizationError(SpotifyAPIError):
    """Token lacks the required scope (HTTP 403).

    Library reads need ``user-library-read``, writes ``user-library-modify``.
    """

    pass


class SpotifyNotFoundError(SpotifyAPIError):
    """Requested resource not found (HTTP 404)."""

    pass


class SpotifyRateLimitError(SpotifyAPIError):
    """Too many requests (HTTP 429).

    The client never retries; ``retry_after`` is exposed for the caller.
    """

    def __init__(self, status: int, message: str, retry_after: Optional[float] = None):
        super().__init__(status, message)
        self.retry_after = retry_after


class SpotifyServerError(SpotifyAPIError):
    """Spotify-side failure (HTTP 5xx)."""

    pass
