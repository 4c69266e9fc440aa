"""Bearer token authentication for the Spotify Web API.

Obtaining and refreshing tokens happens elsewhere (an OAuth flow, a token
cache, a secrets manager). This module only attaches an already-issued token
to outgoing requests.

Example:
    >>> import httpx
    >>> auth = BearerTokenAuth("BQDx...")
    >>> request = httpx.Request("GET", "https://api.spotify.com/v1/me/tracks")
    >>> next(auth.auth_flow(request)).headers["Authorization"]
    'Bearer BQDx...'

Security Notes:
    - The token is never logged; repr() masks all but the last four characters
"""

from typing import Callable, Generator, Union

import httpx

TokenSource = Union[str, Callable[[], str]]


class BearerTokenAuth(httpx.Auth):
    """httpx authentication hook adding ``Authorization: Bearer <token>``.

    Args:
        token: Access token string, or a zero-argument callable returning the
            current token (called once per request, so an external refresher
            can swap tokens without rebuilding the client)

    Raises:
        ValueError: If a static token is empty
    """

    def __init__(self, token: TokenSource):
        if isinstance(token, str) and not token:
            raise ValueError("access token is required")
        self._token = token

    def current_token(self) -> str:
        """Return the token to send with the next request.

        Raises:
            ValueError: If the token source produced an empty token
        """
        token = self._token() if callable(self._token) else self._token
        if not token:
            raise ValueError("token source returned an empty access token")
        return token

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self.current_token()}"
        yield request

    def __repr__(self) -> str:
        if callable(self._token):
            return "BearerTokenAuth(token=<callable>)"
        return f"BearerTokenAuth(token='...{self._token[-4:]}')"
