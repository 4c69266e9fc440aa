"""Configuration management for the Spotify library client.

Configuration is read from environment variables. The CLI additionally loads
an optional ``.env`` file before calling SpotifyConfig.from_environment().
"""
import os
from dataclasses import dataclass

DEFAULT_API_URL = "https://api.spotify.com/v1"
DEFAULT_TIMEOUT = 30.0
DEFAULT_CLIENT_NAME = "spotify-library"


@dataclass
class SpotifyConfig:
    """Configuration for connecting to the Spotify Web API.

    Attributes:
        access_token: OAuth access token with the user-library-* scopes
        base_url: API root (e.g., "https://api.spotify.com/v1")
        timeout: Default per-request timeout in seconds
        client_name: Sent as the User-Agent header
    """

    access_token: str
    base_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    client_name: str = DEFAULT_CLIENT_NAME

    def __post_init__(self):
        """Validate configuration on initialization."""
        if not self.access_token:
            raise ValueError("access_token is required")
        if not self.base_url or not self.base_url.startswith(("http://", "https://")):
            raise ValueError("base_url must be a valid HTTP/HTTPS URL")
        if self.timeout <= 0:
            raise ValueError(f"Invalid timeout: {self.timeout}. Must be > 0")

        # Warn about insecure HTTP connections
        if not self.base_url.startswith("https://"):
            import warnings
            warnings.warn(
                "Using HTTP instead of HTTPS for Spotify connection. "
                "The access token will be transmitted insecurely.",
                UserWarning,
                stacklevel=2
            )

    @classmethod
    def from_environment(cls) -> 'SpotifyConfig':
        """Load configuration from environment variables.

        Returns:
            SpotifyConfig: Loaded configuration object

        Raises:
            EnvironmentError: If SPOTIFY_ACCESS_TOKEN is missing
            ValueError: If SPOTIFY_TIMEOUT is not a number
        """
        required = {
            'SPOTIFY_ACCESS_TOKEN': os.getenv('SPOTIFY_ACCESS_TOKEN'),
        }

        missing = [var for var, value in required.items() if not value]
        if missing:
            raise EnvironmentError(
                f"Required environment variables missing: {', '.join(missing)}\n"
                f"Example: export SPOTIFY_ACCESS_TOKEN='BQDx...'"
            )

        timeout_raw = os.getenv('SPOTIFY_TIMEOUT', str(DEFAULT_TIMEOUT))
        try:
            timeout = float(timeout_raw)
        except ValueError:
            raise ValueError(f"Invalid SPOTIFY_TIMEOUT: {timeout_raw!r}") from None

        return cls(
            access_token=required['SPOTIFY_ACCESS_TOKEN'],
            base_url=os.getenv('SPOTIFY_API_URL', DEFAULT_API_URL),
            timeout=timeout,
            client_name=os.getenv('SPOTIFY_CLIENT_NAME', DEFAULT_CLIENT_NAME),
        )
