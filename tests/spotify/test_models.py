"""Unit tests for Spotify library data models and configuration."""

import httpx
import pytest

from spotify_library.config import DEFAULT_API_URL, SpotifyConfig
from spotify_library.models import LibraryItemType, SpotifyErrorPayload


# ============================================================================
# SpotifyConfig Tests
# ============================================================================


class TestSpotifyConfig:
    """Test suite for SpotifyConfig dataclass."""

    def test_defaults(self):
        config = SpotifyConfig(access_token="abc")

        assert config.base_url == "https://api.spotify.com/v1"
        assert config.timeout == 30.0
        assert config.client_name == "spotify-library"

    def test_missing_token_rejected(self):
        with pytest.raises(ValueError, match="access_token"):
            SpotifyConfig(access_token="")

    @pytest.mark.parametrize("url", ["", "ftp://api.spotify.com", "api.spotify.com/v1"])
    def test_invalid_url_rejected(self, url):
        with pytest.raises(ValueError, match="base_url"):
            SpotifyConfig(access_token="abc", base_url=url)

    @pytest.mark.parametrize("timeout", [0, -1.5])
    def test_invalid_timeout_rejected(self, timeout):
        with pytest.raises(ValueError, match="timeout"):
            SpotifyConfig(access_token="abc", timeout=timeout)

    def test_http_url_warns(self):
        with pytest.warns(UserWarning, match="insecurely"):
            SpotifyConfig(access_token="abc", base_url="http://localhost:8080/v1")


class TestSpotifyConfigFromEnvironment:
    """Test SpotifyConfig.from_environment()."""

    def test_loads_all_variables(self, monkeypatch):
        monkeypatch.setenv("SPOTIFY_ACCESS_TOKEN", "env-token")
        monkeypatch.setenv("SPOTIFY_API_URL", "https://proxy.example.com/v1")
        monkeypatch.setenv("SPOTIFY_TIMEOUT", "12.5")
        monkeypatch.setenv("SPOTIFY_CLIENT_NAME", "my-app")

        config = SpotifyConfig.from_environment()

        assert config.access_token == "env-token"
        assert config.base_url == "https://proxy.example.com/v1"
        assert config.timeout == 12.5
        assert config.client_name == "my-app"

    def test_defaults_for_optional_variables(self, monkeypatch):
        monkeypatch.setenv("SPOTIFY_ACCESS_TOKEN", "env-token")
        for var in ("SPOTIFY_API_URL", "SPOTIFY_TIMEOUT", "SPOTIFY_CLIENT_NAME"):
            monkeypatch.delenv(var, raising=False)

        config = SpotifyConfig.from_environment()

        assert config.base_url == DEFAULT_API_URL
        assert config.timeout == 30.0

    def test_missing_token_lists_variable(self, monkeypatch):
        monkeypatch.delenv("SPOTIFY_ACCESS_TOKEN", raising=False)

        with pytest.raises(EnvironmentError, match="SPOTIFY_ACCESS_TOKEN"):
            SpotifyConfig.from_environment()

    def test_bad_timeout(self, monkeypatch):
        monkeypatch.setenv("SPOTIFY_ACCESS_TOKEN", "env-token")
        monkeypatch.setenv("SPOTIFY_TIMEOUT", "soon")

        with pytest.raises(ValueError, match="SPOTIFY_TIMEOUT"):
            SpotifyConfig.from_environment()


# ============================================================================
# LibraryItemType Tests
# ============================================================================


class TestLibraryItemType:
    def test_paths(self):
        assert LibraryItemType.TRACKS.value == "me/tracks"
        assert LibraryItemType.ALBUMS.value == "me/albums"

    def test_labels(self):
        assert LibraryItemType.TRACKS.label == "track"
        assert LibraryItemType.ALBUMS.label == "album"


# ============================================================================
# SpotifyErrorPayload Tests
# ============================================================================


def _response(status_code: int, content: bytes) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=content,
        request=httpx.Request("PUT", "https://api.spotify.test/v1/me/tracks"),
    )


class TestSpotifyErrorPayload:
    """Test suite for SpotifyErrorPayload.from_response()."""

    def test_documented_shape(self):
        payload = SpotifyErrorPayload.from_response(
            _response(401, b'{"error": {"status": 401, "message": "Invalid access token"}}')
        )

        assert payload == SpotifyErrorPayload(status=401, message="Invalid access token")

    def test_payload_status_overrides_http_status(self):
        payload = SpotifyErrorPayload.from_response(
            _response(400, b'{"error": {"status": 404, "message": "Non existing id"}}')
        )

        assert payload.status == 404

    def test_missing_message_falls_back(self):
        payload = SpotifyErrorPayload.from_response(_response(403, b'{"error": {"status": 403}}'))

        assert payload.message == "Forbidden"

    def test_oauth_shape_without_description(self):
        payload = SpotifyErrorPayload.from_response(_response(400, b'{"error": "invalid_grant"}'))

        assert payload == SpotifyErrorPayload(status=400, message="invalid_grant")

    @pytest.mark.parametrize("content", [b"", b"<html/>", b"[1, 2]", b'{"detail": "x"}'])
    def test_unrecognised_body_uses_reason_phrase(self, content):
        payload = SpotifyErrorPayload.from_response(_response(500, content))

        assert payload == SpotifyErrorPayload(status=500, message="Internal Server Error")
