"""Shared response consumers.

``send_json`` performs a single-shot call and returns the decoded body.
``open_stream`` performs a streaming call and yields the live response once
its status is known to be 200.

On a non-200 status the full body is read and handed to the provider's
error classifier, whose :class:`ProviderError` is raised. ``httpx``
transport failures (connect, read, write, protocol) surface as
:class:`TransportError`; provider errors and exceptions from reply sinks
pass through unchanged.
"""
from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, AsyncIterator, Callable, Optional

import httpx

from ..errors import MalformedResponseError, ProviderError, TransportError, classify_exception
from ..logging import log_event
from .client import open_http_client
from .request import PreparedRequest

if TYPE_CHECKING:
    from ...config.provider_config import ExtraConfig


ErrorClassifier = Callable[[Any, Optional[int]], ProviderError]


def decode_body(content: bytes) -> Any:
    """Decode a response body as JSON, falling back to raw text."""
    text = content.decode("utf-8", errors="replace")
    try:
        return json.loads(text)
    except ValueError:
        return text


def media_type(response: httpx.Response) -> str:
    """Return the lower-cased media type of ``response`` without parameters."""
    return response.headers.get("content-type", "").split(";", 1)[0].strip().lower()


def _transport_error(exc: httpx.HTTPError, provider: str, model: Optional[str]) -> TransportError:
    return TransportError(
        f"{type(exc).__name__}: {exc}",
        provider=provider,
        model=model,
        code=classify_exception(exc),
        raw=exc,
    )


def _log_request(logger: Optional[logging.Logger], provider: str, request: PreparedRequest) -> None:
    if logger is None:
        return
    log_event(
        logger,
        f"{provider}.request",
        level=logging.DEBUG,
        method=request.method,
        url=request.log_url(),
        headers=request.log_headers(),
        body=request.json,
    )


async def send_json(
    request: PreparedRequest,
    *,
    provider: str,
    on_error: ErrorClassifier,
    model: Optional[str] = None,
    extra: Optional["ExtraConfig"] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    logger: Optional[logging.Logger] = None,
) -> Any:
    """Execute ``request`` and return the decoded JSON body of a 200 response."""
    _log_request(logger, provider, request)
    try:
        async with open_http_client(extra, transport) as client:
            response = await client.request(
                request.method, request.url, headers=request.headers, json=request.json
            )
    except httpx.HTTPError as e:
        raise _transport_error(e, provider, model) from e
    data = decode_body(response.content)
    if response.status_code != 200:
        raise on_error(data, response.status_code)
    if isinstance(data, str):
        raise MalformedResponseError(
            f"Invalid JSON response: {data}", provider=provider, model=model, status=200, raw=data
        )
    return data


@asynccontextmanager
async def open_stream(
    request: PreparedRequest,
    *,
    provider: str,
    on_error: ErrorClassifier,
    model: Optional[str] = None,
    extra: Optional["ExtraConfig"] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    logger: Optional[logging.Logger] = None,
) -> AsyncIterator[httpx.Response]:
    """Open a streaming call; yield the response after a 200 status.

    The connection is closed when the ``async with`` block exits, whether the
    body was fully consumed or not.
    """
    _log_request(logger, provider, request)
    try:
        async with open_http_client(extra, transport) as client:
            async with client.stream(
                request.method, request.url, headers=request.headers, json=request.json
            ) as response:
                if response.status_code != 200:
                    body = await response.aread()
                    raise on_error(decode_body(body), response.status_code)
                yield response
    except httpx.HTTPError as e:
        raise _transport_error(e, provider, model) from e


__all__ = ["ErrorClassifier", "decode_body", "media_type", "send_json", "open_stream"]
