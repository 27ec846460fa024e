"""Unit tests for error classification and the failure taxonomy."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from bridge_providers.base.errors import (
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
    unrecognized_response,
)


class _StatusError(Exception):
    def __init__(self, status_code: int):
        super().__init__(f"status {status_code}")
        self.status_code = status_code


@pytest.mark.parametrize(
    "status,code",
    [
        (400, ErrorCode.VALIDATION),
        (401, ErrorCode.AUTH),
        (403, ErrorCode.AUTH),
        (404, ErrorCode.NOT_FOUND),
        (429, ErrorCode.RATE_LIMIT),
        (500, ErrorCode.SERVER_ERROR),
        (503, ErrorCode.UNAVAILABLE),
        (599, ErrorCode.SERVER_ERROR),
        (418, ErrorCode.UNKNOWN),
        (None, ErrorCode.UNKNOWN),
    ],
)
def test_code_for_status(status, code):
    assert code_for_status(status) is code


def test_classify_exception_precedence():
    err = ProviderError("boom", provider="claude", code=ErrorCode.RATE_LIMIT)
    assert classify_exception(err) is ErrorCode.RATE_LIMIT
    assert classify_exception(asyncio.TimeoutError()) is ErrorCode.TIMEOUT
    assert classify_exception(httpx.ReadTimeout("slow")) is ErrorCode.TIMEOUT
    assert classify_exception(httpx.ConnectError("refused")) is ErrorCode.TRANSIENT
    assert classify_exception(_StatusError(401)) is ErrorCode.AUTH
    assert classify_exception(ValueError("x")) is ErrorCode.UNKNOWN


def test_taxonomy_default_codes_and_hierarchy():
    cases = [
        (RequestBuildError, ErrorCode.VALIDATION),
        (UnsupportedContentError, ErrorCode.UNSUPPORTED),
        (UnknownModelError, ErrorCode.NOT_FOUND),
        (TransportError, ErrorCode.TRANSIENT),
        (AuthError, ErrorCode.AUTH),
        (CredentialFetchError, ErrorCode.AUTH),
        (MalformedResponseError, ErrorCode.MALFORMED_RESPONSE),
        (SafetyBlockedError, ErrorCode.CONTENT_FILTERED),
        (StreamProtocolError, ErrorCode.STREAM_PROTOCOL),
    ]
    for cls, code in cases:
        err = cls("msg", provider="ernie")
        assert isinstance(err, ProviderError)
        assert err.code is code, cls.__name__
    assert issubclass(UnsupportedContentError, RequestBuildError)
    assert issubclass(CredentialFetchError, AuthError)
    assert issubclass(SafetyBlockedError, MalformedResponseError)


def test_provider_error_str_includes_context():
    err = ProviderError("bad key", provider="claude", model="claude-3-haiku-20240307", code=ErrorCode.AUTH)
    assert str(err) == "claude:claude-3-haiku-20240307 auth: bad key"
    assert str(ProviderError("x", provider="ollama")).startswith("ollama:- unknown")


def test_network_images_lists_every_url():
    urls = ["https://a.example/1.png", "https://b.example/2.png"]
    err = UnsupportedContentError.network_images(urls, provider="claude", model="m")
    assert "https://a.example/1.png" in err.message
    assert "https://b.example/2.png" in err.message
    assert err.raw == urls


def test_envelope_error_formats_kind_and_picks_auth_class():
    assert format_envelope_message("bad key", "auth") == "bad key (kind: auth)"
    err = envelope_error("bad key", "auth", 401, provider="claude")
    assert isinstance(err, AuthError)
    assert err.message == "bad key (kind: auth)"
    assert err.kind == "auth"
    assert err.status == 401

    other = envelope_error("overloaded", "overloaded_error", 529, provider="claude")
    assert type(other) is ProviderError
    assert other.code is ErrorCode.SERVER_ERROR


def test_unrecognized_response_embeds_status_and_body():
    err = unrecognized_response({"weird": True}, 502, provider="vertexai")
    assert err.message == 'Invalid response, status: 502, data: {"weird":true}'
    assert err.code is ErrorCode.TRANSIENT
    text_err = unrecognized_response("<html>gateway</html>", 504, provider="ollama")
    assert text_err.message.endswith("data: <html>gateway</html>")
