"""HTTP client for the Spotify Web API saved-library endpoints."""

import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx

from .auth import BearerTokenAuth
from .config import SpotifyConfig
from .context import RequestContext
from .exceptions import (
    RequestCancelledError,
    RequestTimeoutError,
    SpotifyAPIError,
    SpotifyAuthenticationError,
    SpotifyAuthorizationError,
    SpotifyBadRequestError,
    SpotifyDecodeError,
    SpotifyNotFoundError,
    SpotifyRateLimitError,
    SpotifyServerError,
    SpotifyTransportError,
)
from .models import ContainsResult, LibraryItemType, SpotifyErrorPayload

logger = logging.getLogger(__name__)

_STATUS_ERRORS = {
    400: SpotifyBadRequestError,
    401: SpotifyAuthenticationError,
    403: SpotifyAuthorizationError,
    404: SpotifyNotFoundError,
}


class SpotifyLibraryClient:
    """Synchronous HTTP client for the current user's saved tracks and albums.

    Every operation performs exactly one HTTP round trip. Nothing is retried,
    cached or paginated; each call is independent of every other call.

    Attributes:
        config: SpotifyConfig with API root and default timeout
        client: httpx.Client for HTTP requests

    Example:
        >>> config = SpotifyConfig(access_token="BQDx...")
        >>> with SpotifyLibraryClient(config) as client:
        ...     client.add_tracks_to_library("4iV5W9uYEdYUVa79Axb7Rh")
        ...     client.user_has_tracks("4iV5W9uYEdYUVa79Axb7Rh", "1301WleyT98MSxVHPZCA6M")
        [True, False]
    """

    def __init__(
        self,
        config: SpotifyConfig,
        auth: Optional[httpx.Auth] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize Spotify library client.

        Args:
            config: SpotifyConfig with API root and access token
            auth: Optional httpx.Auth replacing the static bearer token from
                config (e.g. a BearerTokenAuth over a refreshing token source)
            transport: Optional httpx transport; tests pass httpx.MockTransport
        """
        self.config = config
        self._base_url = config.base_url.rstrip("/")

        self.client = httpx.Client(
            auth=auth or BearerTokenAuth(config.access_token),
            transport=transport,
            timeout=httpx.Timeout(config.timeout),
            headers={
                "Accept": "application/json",
                "User-Agent": config.client_name,
            },
        )

        logger.info(f"Initialized Spotify library client for {self._base_url}")

    def _build_url(self, endpoint: str) -> str:
        """Build full URL for API endpoint.

        Args:
            endpoint: Path below the API root (e.g., "me/tracks/contains")
        """
        return f"{self._base_url}/{endpoint}"

    def _request_timeout(self, ctx: RequestContext) -> httpx.Timeout:
        """Per-request timeout: the configured timeout capped by the context deadline."""
        remaining = ctx.remaining()
        if remaining is None:
            return httpx.Timeout(self.config.timeout)
        return httpx.Timeout(min(self.config.timeout, remaining))

    def _send(
        self,
        ctx: Optional[RequestContext],
        method: str,
        endpoint: str,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """Send one request and return the fully read response.

        The context is checked before sending, once the response headers have
        arrived, and between body chunks. The returned response is buffered
        and already closed.

        Raises:
            RequestCancelledError: If the context was cancelled
            RequestTimeoutError: If the context deadline passed
            SpotifyTransportError: For network failures
            SpotifyAPIError: For non-2xx responses
        """
        ctx = ctx or RequestContext.background()
        _check(ctx, method, endpoint)

        request = self.client.build_request(
            method,
            self._build_url(endpoint),
            params=params,
            json=json,
            timeout=self._request_timeout(ctx),
        )

        logger.debug(f"{method} {request.url}")
        try:
            response = self.client.send(request, stream=True)
            try:
                _check(ctx, method, endpoint)
                chunks = []
                for chunk in response.iter_bytes():
                    chunks.append(chunk)
                    _check(ctx, method, endpoint)
            finally:
                response.close()
        except httpx.TimeoutException as e:
            if ctx.expired:
                logger.warning(f"{method} {endpoint} aborted: request deadline exceeded")
                raise RequestTimeoutError("request deadline exceeded") from e
            raise SpotifyTransportError(f"Timed out talking to Spotify: {e}") from e
        except httpx.DecodingError as e:
            raise SpotifyDecodeError(f"Could not decode response body: {e}") from e
        except httpx.TransportError as e:
            raise SpotifyTransportError(f"Error talking to Spotify: {e}") from e

        # iter_bytes() already undid any content-encoding
        headers = [
            (name, value)
            for name, value in response.headers.multi_items()
            if name.lower() not in ("content-encoding", "content-length")
        ]
        buffered = httpx.Response(
            status_code=response.status_code,
            headers=headers,
            content=b"".join(chunks),
            request=request,
        )
        self._handle_response(buffered)
        return buffered

    def _handle_response(self, response: httpx.Response) -> None:
        """Raise the typed API error for a non-2xx response.

        Raises:
            SpotifyBadRequestError: For HTTP 400
            SpotifyAuthenticationError: For HTTP 401
            SpotifyAuthorizationError: For HTTP 403
            SpotifyNotFoundError: For HTTP 404
            SpotifyRateLimitError: For HTTP 429
            SpotifyServerError: For HTTP 5xx
            SpotifyAPIError: For any other non-2xx status
        """
        if response.is_success:
            return

        payload = SpotifyErrorPayload.from_response(response)
        logger.error(f"Spotify API error {payload.status}: {payload.message}")

        http_status = response.status_code
        if http_status == 429:
            raise SpotifyRateLimitError(
                payload.status, payload.message, retry_after=_retry_after(response)
            )
        if http_status >= 500:
            raise SpotifyServerError(payload.status, payload.message)
        error_cls = _STATUS_ERRORS.get(http_status, SpotifyAPIError)
        raise error_cls(payload.status, payload.message)

    def _contains(
        self, item_type: LibraryItemType, ids: Sequence[str], ctx: Optional[RequestContext]
    ) -> ContainsResult:
        ids = _validate_ids(ids)
        logger.debug(f"Checking {len(ids)} {item_type.label}(s) in library")

        response = self._send(
            ctx, "GET", f"{item_type.value}/contains", params={"ids": ",".join(ids)}
        )

        try:
            data = response.json()
        except ValueError as e:
            raise SpotifyDecodeError(f"Invalid JSON in contains response: {e}") from e

        if not isinstance(data, list):
            raise SpotifyDecodeError(
                f"Expected a JSON array of booleans, got {type(data).__name__}"
            )
        if len(data) != len(ids):
            raise SpotifyDecodeError(f"Expected {len(ids)} results, got {len(data)}")
        if not all(isinstance(value, bool) for value in data):
            raise SpotifyDecodeError("Contains response holds non-boolean values")

        return data

    def _modify(
        self,
        method: str,
        item_type: LibraryItemType,
        ids: Sequence[str],
        ctx: Optional[RequestContext],
    ) -> None:
        ids = _validate_ids(ids)
        logger.debug(f"{method} {len(ids)} {item_type.label}(s): {', '.join(ids)}")

        self._send(ctx, method, item_type.value, json={"ids": ids})

        action = "Saved" if method == "PUT" else "Removed"
        logger.info(f"{action} {len(ids)} {item_type.label}(s) ({item_type.value})")

    def user_has_tracks(self, *ids: str, ctx: Optional[RequestContext] = None) -> ContainsResult:
        """Check whether tracks are saved in the current user's library.

        Args:
            *ids: Spotify track IDs
            ctx: Optional RequestContext for cancellation and deadline

        Returns:
            One boolean per ID, in the same order as ``ids``

        Raises:
            ValueError: If no IDs are given or an ID is empty
            SpotifyAPIError: For non-2xx responses
            SpotifyDecodeError: If the response is not a matching boolean array
        """
        return self._contains(LibraryItemType.TRACKS, ids, ctx)

    def add_tracks_to_library(self, *ids: str, ctx: Optional[RequestContext] = None) -> None:
        """Save tracks to the current user's library (``PUT /me/tracks``).

        Raises:
            ValueError: If no IDs are given or an ID is empty
            SpotifyAPIError: For non-2xx responses
        """
        self._modify("PUT", LibraryItemType.TRACKS, ids, ctx)

    def remove_tracks_from_library(self, *ids: str, ctx: Optional[RequestContext] = None) -> None:
        """Remove tracks from the current user's library (``DELETE /me/tracks``)."""
        self._modify("DELETE", LibraryItemType.TRACKS, ids, ctx)

    def user_has_albums(self, *ids: str, ctx: Optional[RequestContext] = None) -> ContainsResult:
        """Check whether albums are saved in the current user's library.

        Same contract as user_has_tracks().
        """
        return self._contains(LibraryItemType.ALBUMS, ids, ctx)

    def add_albums_to_library(self, *ids: str, ctx: Optional[RequestContext] = None) -> None:
        """Save albums to the current user's library (``PUT /me/albums``)."""
        self._modify("PUT", LibraryItemType.ALBUMS, ids, ctx)

    def remove_albums_from_library(self, *ids: str, ctx: Optional[RequestContext] = None) -> None:
        """Remove albums from the current user's library (``DELETE /me/albums``)."""
        self._modify("DELETE", LibraryItemType.ALBUMS, ids, ctx)

    def close(self):
        """Close HTTP client and release resources."""
        self.client.close()
        logger.info("Closed Spotify library client")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - automatically close client."""
        self.close()


def _check(ctx: RequestContext, method: str, endpoint: str) -> None:
    try:
        ctx.check()
    except RequestCancelledError as e:
        logger.warning(f"{method} {endpoint} aborted: {e}")
        raise


def _validate_ids(ids: Sequence[str]) -> List[str]:
    """Return ids as a list, rejecting an empty batch or empty/non-string IDs."""
    if not ids:
        raise ValueError("at least one ID is required")
    for item_id in ids:
        if not isinstance(item_id, str) or not item_id:
            raise ValueError(f"IDs must be non-empty strings, got {item_id!r}")
    return list(ids)


def _retry_after(response: httpx.Response) -> Optional[float]:
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None
