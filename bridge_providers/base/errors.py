"""Unified provider error taxonomy public surface.

This module re-exports the one-concern-per-file implementations under
``bridge_providers.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts import (
    AuthError,
    CredentialFetchError,
    ErrorCode,
    MalformedResponseError,
    ProviderError,
    RequestBuildError,
    SafetyBlockedError,
    StreamProtocolError,
    TransportError,
    UnknownModelError,
    UnsupportedContentError,
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
