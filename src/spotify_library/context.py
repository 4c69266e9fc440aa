"""Cooperative cancellation and deadlines for library requests.

A RequestContext is handed to every client call. The client checks it before
sending, derives the HTTP timeout from the remaining time, and checks it again
while the response is being read. Cancelling from another thread aborts the
call at the next check point.

Example:
    >>> ctx = RequestContext.with_timeout(5.0)
    >>> client.user_has_tracks("4iV5W9uYEdYUVa79Axb7Rh", ctx=ctx)
    [True]
    >>> ctx.cancel()
    >>> client.add_tracks_to_library("4iV5W9uYEdYUVa79Axb7Rh", ctx=ctx)
    Traceback (most recent call last):
    ...
    RequestCancelledError: request cancelled
"""

import threading
import time
from typing import Optional

from .exceptions import RequestCancelledError, RequestTimeoutError


class RequestContext:
    """Cancellation token with an optional monotonic deadline.

    Attributes:
        deadline: time.monotonic() value after which the context is expired,
            or None for no deadline
    """

    def __init__(self, deadline: Optional[float] = None):
        self.deadline = deadline
        self._cancelled = threading.Event()

    @classmethod
    def background(cls) -> "RequestContext":
        """Return a context that is never cancelled and has no deadline."""
        return cls()

    @classmethod
    def with_timeout(cls, seconds: float) -> "RequestContext":
        """Return a context that expires ``seconds`` from now.

        Raises:
            ValueError: If seconds is negative
        """
        if seconds < 0:
            raise ValueError("timeout must be >= 0")
        return cls(deadline=time.monotonic() + seconds)

    @classmethod
    def with_deadline(cls, deadline: float) -> "RequestContext":
        """Return a context that expires at the given time.monotonic() value."""
        return cls(deadline=deadline)

    def cancel(self) -> None:
        """Cancel the context. Safe to call from any thread, more than once."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline (never negative), or None."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def check(self) -> None:
        """Raise if the context is no longer usable.

        Raises:
            RequestCancelledError: If cancel() has been called
            RequestTimeoutError: If the deadline has passed
        """
        if self.cancelled:
            raise RequestCancelledError("request cancelled")
        if self.expired:
            raise RequestTimeoutError("request deadline exceeded")

    def __repr__(self) -> str:
        return (
            f"RequestContext(cancelled={self.cancelled}, "
            f"remaining={self.remaining()})"
        )
