"""Data models for the Spotify library endpoints."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

import httpx

# One boolean per requested ID, in request order.
ContainsResult = List[bool]


class LibraryItemType(Enum):
    """Kind of saved item; the value is the endpoint path under the API root."""

    TRACKS = "me/tracks"
    ALBUMS = "me/albums"

    @property
    def label(self) -> str:
        """Singular noun used in log messages ("track", "album")."""
        return self.name.lower().rstrip("s")


@dataclass
class SpotifyErrorPayload:
    """Error details decoded from a non-2xx Spotify response.

    Attributes:
        status: HTTP status code
        message: Error message

    Spotify's regular error body is ``{"error": {"status": 401, "message": "..."}}``.
    The accounts service uses ``{"error": "invalid_client", "error_description": "..."}``
    instead; both are accepted.
    """

    status: int
    message: str

    @classmethod
    def from_response(cls, response: httpx.Response) -> "SpotifyErrorPayload":
        """Decode the error payload, falling back to the HTTP status line.

        Never raises: an undecodable body yields the status code and reason phrase.
        """
        status = response.status_code
        fallback = response.reason_phrase or "Unknown error"

        try:
            data: Any = response.json()
        except ValueError:
            return cls(status=status, message=fallback)

        if not isinstance(data, dict):
            return cls(status=status, message=fallback)

        error = data.get("error")
        if isinstance(error, dict):
            payload_status = error.get("status")
            if isinstance(payload_status, int) and not isinstance(payload_status, bool):
                status = payload_status
            message = error.get("message")
            return cls(status=status, message=message if isinstance(message, str) and message else fallback)

        if isinstance(error, str):
            description: Optional[str] = data.get("error_description")
            message = f"{error}: {description}" if description else error
            return cls(status=status, message=message)

        return cls(status=status, message=fallback)
