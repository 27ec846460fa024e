"""
Failure taxonomy built on :class:`ProviderError`.

Each subclass pins a default :class:`ErrorCode` so call sites only pass the
message and context. Grouping:

- ``RequestBuildError``: the request could not be assembled locally
  (unsupported content, unknown model). Nothing was sent.
- ``TransportError``: connection or I/O failure talking to the provider.
- ``AuthError``: the provider rejected credentials; ``CredentialFetchError``
  covers failures minting a token in the first place.
- ``MalformedResponseError``: a success status with an unexpected payload.
- ``StreamProtocolError``: unparseable frames or an unexpected content type.
"""
from __future__ import annotations

from typing import Iterable

from .error_code import ErrorCode
from .provider_error import ProviderError


class RequestBuildError(ProviderError):
    """The outbound request could not be built from the given inputs."""

    default_code = ErrorCode.VALIDATION


class UnsupportedContentError(RequestBuildError):
    """Message content the provider cannot accept (e.g. network images)."""

    default_code = ErrorCode.UNSUPPORTED

    @classmethod
    def network_images(
        cls, urls: Iterable[str], *, provider: str, model: str | None = None
    ) -> "UnsupportedContentError":
        """Build the error listing every offending network image URL."""
        listed = list(urls)
        return cls(
            f"The model does not support network images: {listed!r}",
            provider=provider,
            model=model,
            raw=listed,
        )


class UnknownModelError(RequestBuildError):
    """The configured model name has no entry in the provider's model table."""

    default_code = ErrorCode.NOT_FOUND


class TransportError(ProviderError):
    """Connection, write, or read failure below the HTTP response level."""

    default_code = ErrorCode.TRANSIENT


class AuthError(ProviderError):
    """Provider-signaled authentication rejection."""

    default_code = ErrorCode.AUTH


class CredentialFetchError(AuthError):
    """Failure fetching a bearer token from the provider's token endpoint."""


class MalformedResponseError(ProviderError):
    """A success response whose payload lacks the expected fields."""

    default_code = ErrorCode.MALFORMED_RESPONSE


class SafetyBlockedError(MalformedResponseError):
    """The provider withheld the answer because of its safety settings."""

    default_code = ErrorCode.CONTENT_FILTERED


class StreamProtocolError(ProviderError):
    """An unparseable stream frame or an unexpected streaming content type."""

    default_code = ErrorCode.STREAM_PROTOCOL


__all__ = [
    "RequestBuildError",
    "UnsupportedContentError",
    "UnknownModelError",
    "TransportError",
    "AuthError",
    "CredentialFetchError",
    "MalformedResponseError",
    "SafetyBlockedError",
    "StreamProtocolError",
]
