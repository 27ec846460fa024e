"""
Structured provider error exception type.

Wraps provider-specific failures with a normalized `ErrorCode` for consistent
handling and structured logging. Classified vendor error envelopes surface as
this type directly; the other members of the taxonomy subclass it (see
``failures.py``) so callers can catch a single base class.
"""
from __future__ import annotations

from typing import Any, Optional

from .error_code import ErrorCode


class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (e.g., ``"claude"``).
        model: Optional model name associated with the failure.
        kind: Provider-specific error kind/code taken from the vendor envelope
            (``"authentication_error"``, ``"110"``, ``"UNAUTHENTICATED"``...).
        status: HTTP status of the failed response, when one was received.
        retryable: Hint for upstream retry logic (not authoritative; nothing in
            this package retries).
        raw: Optional original exception or decoded payload for diagnostics.
    """

    default_code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        code: Optional[ErrorCode] = None,
        model: Optional[str] = None,
        kind: Optional[str] = None,
        status: Optional[int] = None,
        retryable: bool = False,
        raw: Any = None,
    ) -> None:
        super().__init__(message)
        self.code = code or self.default_code
        self.message = message
        self.provider = provider
        self.model = model
        self.kind = kind
        self.status = status
        self.retryable = retryable
        self.raw = raw

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return (
            f"{type(self).__name__}(code={self.code.value!r}, provider={self.provider!r}, "
            f"model={self.model!r}, kind={self.kind!r}, status={self.status!r}, "
            f"message={self.message!r})"
        )


__all__ = ["ProviderError"]
