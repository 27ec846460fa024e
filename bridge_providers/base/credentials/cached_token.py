"""Cached bearer token value object."""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional


Clock = Callable[[], float]


@dataclass(frozen=True)
class CachedToken:
    """An access token with an optional absolute expiry.

    Attributes:
        value: The token string sent to the provider.
        expires_at: Epoch seconds after which the token is stale; ``None``
            means valid until explicitly invalidated.
    """

    value: str
    expires_at: Optional[float] = None

    @classmethod
    def from_expires_in(
        cls, value: str, expires_in: Optional[float], *, clock: Clock = time.time
    ) -> "CachedToken":
        """Build a token expiring ``expires_in`` seconds from ``clock()``."""
        if expires_in is None:
            return cls(value=value)
        return cls(value=value, expires_at=clock() + float(expires_in))

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


__all__ = ["CachedToken", "Clock"]
