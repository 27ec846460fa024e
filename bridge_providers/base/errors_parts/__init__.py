"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `bridge_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .failures import (
    AuthError,
    CredentialFetchError,
    MalformedResponseError,
    RequestBuildError,
    SafetyBlockedError,
    StreamProtocolError,
    TransportError,
    UnknownModelError,
    UnsupportedContentError,
)
from .classification import (
    classify_exception,
    code_for_status,
    envelope_error,
    format_envelope_message,
    render_raw,
    unrecognized_response,
)

__all__ = [
    "ErrorCode",
    "ProviderError",
    "RequestBuildError",
    "UnsupportedContentError",
    "UnknownModelError",
    "TransportError",
    "AuthError",
    "CredentialFetchError",
    "MalformedResponseError",
    "SafetyBlockedError",
    "StreamProtocolError",
    "classify_exception",
    "code_for_status",
    "envelope_error",
    "format_envelope_message",
    "render_raw",
    "unrecognized_response",
]
