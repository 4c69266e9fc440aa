"""Spotify Web API client for the current user's saved tracks and albums."""

__version__ = "1.0.0"

from .auth import BearerTokenAuth
from .client import SpotifyLibraryClient
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
    SpotifyError,
    SpotifyNotFoundError,
    SpotifyRateLimitError,
    SpotifyServerError,
    SpotifyTransportError,
)
from .models import ContainsResult, LibraryItemType, SpotifyErrorPayload

__all__ = [
    # Client
    "SpotifyLibraryClient",
    "RequestContext",
    # Models
    "SpotifyConfig",
    "ContainsResult",
    "LibraryItemType",
    "SpotifyErrorPayload",
    # Authentication
    "BearerTokenAuth",
    # Exceptions
    "SpotifyError",
    "SpotifyTransportError",
    "RequestCancelledError",
    "RequestTimeoutError",
    "SpotifyDecodeError",
    "SpotifyAPIError",
    "SpotifyBadRequestError",
    "SpotifyAuthenticationError",
    "SpotifyAuthorizationError",
    "SpotifyNotFoundError",
    "SpotifyRateLimitError",
    "SpotifyServerError",
]
