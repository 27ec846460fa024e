"""
Error classification helpers mapping exceptions and HTTP statuses to
normalized ErrorCode values.

Also hosts the envelope-level helpers shared by the per-provider error
classifiers: ``format_envelope_message`` produces the normalized
``"{message} (kind: {kind})"`` text and ``unrecognized_response`` the generic
fallback for payloads no classifier recognizes.
"""
from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, Optional

import httpx

from .error_code import ErrorCode
from .failures import AuthError
from .provider_error import ProviderError


def _extract_status(exc: Exception) -> Optional[int]:
    """Attempt to extract an HTTP status code from a provider exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}


def code_for_status(status: Optional[int]) -> ErrorCode:
    """Map an HTTP status to an :class:`ErrorCode` (``UNKNOWN`` when unmapped)."""
    if status is None:
        return ErrorCode.UNKNOWN
    if status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if status >= 500:
        return ErrorCode.SERVER_ERROR
    return ErrorCode.UNKNOWN


def classify_exception(exc: Exception) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Timeout exceptions (stdlib and httpx).
        3. Other httpx transport failures.
        4. HTTP status mapping.
        5. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.TRANSIENT
    status = _extract_status(exc)
    if status is not None:
        return code_for_status(status)
    return ErrorCode.UNKNOWN


def format_envelope_message(message: str, kind: Any) -> str:
    """Return the normalized ``"{message} (kind: {kind})"`` error text."""
    return f"{message} (kind: {kind})"


def envelope_error(
    message: str,
    kind: Any,
    status: Optional[int],
    *,
    provider: str,
    model: Optional[str] = None,
    raw: Any = None,
) -> ProviderError:
    """Build the error for a recognized vendor envelope.

    Authentication statuses (401/403) produce :class:`AuthError` so callers
    can catch credential problems without inspecting codes.
    """
    code = code_for_status(status)
    cls = AuthError if code is ErrorCode.AUTH else ProviderError
    return cls(
        format_envelope_message(message, kind),
        provider=provider,
        model=model,
        code=code,
        kind=None if kind is None else str(kind),
        status=status,
        raw=raw,
    )


def render_raw(data: Any) -> str:
    """Render an error payload compactly for inclusion in messages."""
    if isinstance(data, str):
        return data
    try:
        return json.dumps(data, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError):
        return repr(data)


def unrecognized_response(
    data: Any, status: Optional[int], *, provider: str, model: Optional[str] = None
) -> ProviderError:
    """Build the fallback error for an envelope no classifier recognizes."""
    return ProviderError(
        f"Invalid response, status: {status}, data: {render_raw(data)}",
        provider=provider,
        model=model,
        code=code_for_status(status),
        status=status,
        raw=data,
    )


__all__ = [
    "classify_exception",
    "code_for_status",
    "envelope_error",
    "format_envelope_message",
    "render_raw",
    "unrecognized_response",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
