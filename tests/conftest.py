"""
Pytest configuration for the spotify-library test suite.

Puts the src directory on the Python path so tests run without installing
the package, and provides shared client fixtures.
"""
import json
import sys
from pathlib import Path
from typing import Callable, List

import httpx
import pytest

src_dir = Path(__file__).parent.parent / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from spotify_library.client import SpotifyLibraryClient  # noqa: E402
from spotify_library.config import SpotifyConfig  # noqa: E402

ALBUM_ID_0 = "4iV5W9uYEdYUVa79Axb7Rh"
ALBUM_ID_1 = "1301WleyT98MSxVHPZCA6M"
ALBUM_ID_2 = "0udZHhCi7p1YzMlvI4fXoK"
ALBUM_ID_3 = "55nlbqqFVnSsArIeYSQlqx"

UNAUTHORIZED_BODY = """
{
  "error": {
    "status": 401,
    "message": "Invalid access token"
  }
}"""


class RecordingHandler:
    """MockTransport handler returning a canned response and recording requests.

    Args:
        status_code: HTTP status to return
        body: Raw response body
        validators: Callables run against every request before responding
    """

    def __init__(self, status_code: int = 200, body: str = "", validators: List[Callable] = ()):
        self.status_code = status_code
        self.body = body
        self.validators = list(validators)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for validator in self.validators:
            validator(request)
        return httpx.Response(self.status_code, content=self.body.encode("utf-8"))

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last_request.content)


@pytest.fixture
def spotify_config() -> SpotifyConfig:
    """Create test Spotify configuration."""
    return SpotifyConfig(
        access_token="test-token",
        base_url="https://api.spotify.test/v1",
        client_name="spotify-library-test",
    )


@pytest.fixture
def make_client(spotify_config):
    """Factory building a SpotifyLibraryClient over an httpx.MockTransport.

    Returns:
        Callable taking a handler (e.g. RecordingHandler) and returning a client
    """
    clients = []

    def _make(handler) -> SpotifyLibraryClient:
        client = SpotifyLibraryClient(spotify_config, transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()
