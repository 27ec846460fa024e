"""Process-wide holder for one provider instance's access token.

A cell is Absent (no token), Valid, or Expired (``now >= expires_at``).
``get_or_fetch`` makes callers that find the cell Absent or Expired share
exactly one fetch; the others wait for it and reuse its value. A failed fetch
is raised to every caller that waited on it, leaves the cell Absent, and the
next caller fetches again.

Cells outlive the event loop that created them and may be used from several
threads, each running its own loop. The in-flight fetch is therefore a
``concurrent.futures.Future`` guarded by a ``threading.Lock``, and waiters on
any loop await it through ``asyncio.wrap_future``.
"""
from __future__ import annotations

import asyncio
import concurrent.futures
import threading
import time
from typing import Awaitable, Callable, Optional

from .cached_token import CachedToken, Clock


Fetcher = Callable[[], Awaitable[CachedToken]]


def _consume_exception(fut: concurrent.futures.Future) -> None:
    if not fut.cancelled():
        fut.exception()


class TokenCell:
    """Single-flight cache for one access token.

    Attributes:
        key: Registry key of the owning provider instance (for logs).
    """

    def __init__(self, key: str = "", *, clock: Clock = time.time) -> None:
        self.key = key
        self._clock = clock
        self._token: Optional[CachedToken] = None
        self._inflight: Optional[concurrent.futures.Future] = None
        self._guard = threading.Lock()

    def _valid_locked(self) -> Optional[CachedToken]:
        token = self._token
        if token is None or token.is_expired(self._clock()):
            return None
        return token

    def peek(self) -> Optional[CachedToken]:
        """Return the stored token if it is still valid, else ``None``."""
        with self._guard:
            return self._valid_locked()

    def store(self, token: CachedToken) -> None:
        with self._guard:
            self._token = token

    def invalidate(self) -> bool:
        """Clear the cell; return True when a token was present."""
        with self._guard:
            had = self._token is not None
            self._token = None
            return had

    async def get_or_fetch(self, fetch: Fetcher) -> str:
        """Return a valid token value, fetching at most once per stale period.

        Exceptions raised by ``fetch`` propagate to the caller that ran it and
        to every caller waiting on it; nothing is stored.
        """
        while True:
            with self._guard:
                token = self._valid_locked()
                if token is not None:
                    return token.value
                fut = self._inflight
                owner = fut is None
                if owner:
                    fut = concurrent.futures.Future()
                    fut.add_done_callback(_consume_exception)
                    self._inflight = fut
            if owner:
                return await self._run_fetch(fut, fetch)
            try:
                token = await asyncio.shield(asyncio.wrap_future(fut))
            except asyncio.CancelledError:
                # The owner was cancelled, not this caller: start over.
                if fut.cancelled():
                    continue
                raise
            return token.value

    async def _run_fetch(self, fut: concurrent.futures.Future, fetch: Fetcher) -> str:
        try:
            token = await fetch()
        except asyncio.CancelledError:
            with self._guard:
                self._inflight = None
            fut.cancel()
            raise
        except Exception as e:
            with self._guard:
                self._inflight = None
            fut.set_exception(e)
            raise
        with self._guard:
            self._token = token
            self._inflight = None
        fut.set_result(token)
        return token.value


__all__ = ["TokenCell", "Fetcher"]
