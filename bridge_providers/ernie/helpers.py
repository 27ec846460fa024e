"""ERNIE helpers module.

Purpose:
- Request body construction, endpoint/token URL assembly, error
  classification and the single-shot / streaming consumers for Baidu's
  ERNIE chat endpoints.

Authentication:
- Every request carries ``?access_token=`` from the instance's token cell.
  ``error_code`` 110 (invalid) or 111 (expired) clears the cell and fails the
  current call with ``AuthError``; the next call fetches a fresh token.

Failure semantics:
- ERNIE reports errors inside HTTP 200 bodies, so the error envelope is
  checked on every decoded payload, including each stream event.
- When a streaming request is answered with a non-SSE content type the body
  is inspected: a JSON error envelope is classified, a single
  ``data: {...}`` body is decoded as one event, anything else is a
  ``StreamProtocolError``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Dict, Optional

from pydantic import ValidationError

from ..base.credentials import token_cell
from ..base.errors import (
    AuthError,
    CredentialFetchError,
    ErrorCode,
    MalformedResponseError,
    ProviderError,
    RequestBuildError,
    StreamProtocolError,
    UnknownModelError,
    UnsupportedContentError,
    code_for_status,
    format_envelope_message,
    unrecognized_response,
)
from ..base.interfaces import ReplySink
from ..base.logging import log_event
from ..base.models import Model, SendData
from ..base.streaming import aiter_sse
from ..base.transport import PreparedRequest, decode_body, media_type, open_stream, send_json
from ..base.utils.messages import patch_system_message
from ..config.defaults import ERNIE_API_BASE, ERNIE_AUTH_ERROR_CODES
from .models import endpoint_for
from .token import fetch_access_token
from .wire import ErnieError, ErnieMessage, ErnieRequest, ErnieResponse

if TYPE_CHECKING:
    from .client import ErnieClient

PROVIDER = "ernie"
EVENT_STREAM = "text/event-stream"
DATA_PREFIX = "data: "


def build_body(data: SendData, model: Model) -> Dict[str, Any]:
    """Translate ``SendData`` into an ERNIE chat body.

    The system message is folded into the next turn. ERNIE accepts text
    only: any image part is rejected.
    """
    messages = patch_system_message(data.messages)
    images = [img.url for m in messages for img in m.images()]
    if images:
        raise UnsupportedContentError(
            f"The model does not support images: {images!r}", provider=PROVIDER, model=model.name, raw=images
        )
    try:
        request = ErnieRequest(
            messages=[ErnieMessage(role=m.role, content=m.text_or_joined()) for m in messages],
            temperature=data.temperature,
            top_p=data.top_p,
            max_output_tokens=model.max_output_tokens,
            stream=True if data.stream else None,
        )
    except ValidationError as e:
        raise RequestBuildError(
            f"Cannot build ERNIE request: {e.errors()[0].get('msg', e)}", provider=PROVIDER, model=model.name, raw=e
        ) from e
    return model.merge_extra_fields(request.model_dump(exclude_none=True))


def chat_endpoint(model: Model) -> str:
    """Return the endpoint path of ``model``; unknown models are a build error."""
    endpoint = endpoint_for(model.name)
    if endpoint is None:
        raise UnknownModelError(f"Miss Model '{model.id()}'", provider=PROVIDER, model=model.name)
    return endpoint


def chat_url(model: Model, access_token: str) -> str:
    return f"{ERNIE_API_BASE}{chat_endpoint(model)}?access_token={access_token}"


async def access_token(client: "ErnieClient") -> str:
    """Return the cached token, fetching it once if absent or expired."""
    cell = token_cell(client.token_key)

    async def _fetch():
        api_key = client.config_value("api_key")
        if not api_key:
            raise CredentialFetchError("Miss api_key", provider=PROVIDER, model=client.model.name)
        secret_key = client.config_value("secret_key")
        if not secret_key:
            raise CredentialFetchError("Miss secret_key", provider=PROVIDER, model=client.model.name)
        return await fetch_access_token(
            api_key,
            secret_key,
            extra=client.config.extra,
            transport=client._transport,
            logger=client._logger,
        )

    return await cell.get_or_fetch(_fetch)


async def build_request(client: "ErnieClient", data: SendData) -> PreparedRequest:
    """Build the body first so content errors never cost a token fetch."""
    body = build_body(data, client.model)
    chat_endpoint(client.model)
    token = await access_token(client)
    return PreparedRequest(url=chat_url(client.model, token), json=body)


def catch_error(data: Any, *, model: Optional[str] = None, status: Optional[int] = None) -> Optional[ProviderError]:
    """Return the error carried by ``data``, or ``None`` when there is none."""
    if not isinstance(data, dict) or "error_code" not in data:
        return None
    try:
        env = ErnieError.model_validate(data)
    except ValidationError:
        return None
    auth = env.error_code in ERNIE_AUTH_ERROR_CODES
    cls = AuthError if auth else ProviderError
    return cls(
        format_envelope_message(env.error_msg, env.error_code),
        provider=PROVIDER,
        model=model,
        kind=str(env.error_code),
        status=status,
        code=ErrorCode.AUTH if auth else code_for_status(status),
        raw=data,
    )


def on_http_error(data: Any, status: Optional[int], *, model: Optional[str] = None) -> ProviderError:
    return catch_error(data, model=model, status=status) or unrecognized_response(
        data, status, provider=PROVIDER, model=model
    )


def invalidate_on_auth(client: "ErnieClient", err: ProviderError) -> None:
    """Clear the token cell when ``err`` reports an invalid or expired token."""
    if isinstance(err, AuthError) and err.kind is not None and err.kind.isdigit():
        if int(err.kind) in ERNIE_AUTH_ERROR_CODES and token_cell(client.token_key).invalidate():
            log_event(
                client._logger,
                "credential.invalidate",
                level=logging.WARNING,
                provider=PROVIDER,
                client=client.name,
                error_code=err.kind,
            )


def extract_text(data: Any, *, model: Optional[str] = None) -> str:
    if err := catch_error(data, model=model, status=200):
        raise err
    try:
        return ErnieResponse.model_validate(data).result
    except ValidationError as e:
        raise MalformedResponseError(
            f"Unexpected response {json.dumps(data, ensure_ascii=False)}", provider=PROVIDER, model=model, raw=data
        ) from e


def handle_event(payload: str, sink: ReplySink, *, model: Optional[str] = None) -> None:
    """Decode one event payload and forward its ``result`` text."""
    try:
        data = json.loads(payload)
    except ValueError as e:
        raise StreamProtocolError(f"Invalid event data: {payload!r}", provider=PROVIDER, model=model) from e
    if err := catch_error(data, model=model, status=200):
        raise err
    if isinstance(data, dict) and isinstance(data.get("result"), str):
        sink.text(data["result"])


async def chat_impl(client: "ErnieClient", data: SendData) -> str:
    model = client.model.name
    request = await build_request(client, replace(data, stream=False))
    try:
        body = await send_json(
            request,
            provider=PROVIDER,
            model=model,
            on_error=lambda d, s: on_http_error(d, s, model=model),
            extra=client.config.extra,
            transport=client._transport,
            logger=client._logger,
        )
        return extract_text(body, model=model)
    except ProviderError as e:
        invalidate_on_auth(client, e)
        raise


async def _consume_stream(response, sink: ReplySink, *, model: str) -> None:
    kind = media_type(response)
    if kind == EVENT_STREAM:
        async for message in aiter_sse(response.aiter_lines()):
            handle_event(message.data, sink, model=model)
        return
    content = await response.aread()
    if kind == "application/json":
        body = decode_body(content)
        if err := catch_error(body, model=model, status=response.status_code):
            raise err
        raise StreamProtocolError("Request failed", provider=PROVIDER, model=model, raw=body)
    text = content.decode("utf-8", errors="replace")
    if text.startswith(DATA_PREFIX):
        handle_event(text[len(DATA_PREFIX):].strip(), sink, model=model)
        return
    raise StreamProtocolError(f"Invalid response data: {text}", provider=PROVIDER, model=model, raw=text)


async def stream_chat_impl(client: "ErnieClient", data: SendData, sink: ReplySink) -> None:
    model = client.model.name
    request = await build_request(client, replace(data, stream=True))
    try:
        async with open_stream(
            request,
            provider=PROVIDER,
            model=model,
            on_error=lambda d, s: on_http_error(d, s, model=model),
            extra=client.config.extra,
            transport=client._transport,
            logger=client._logger,
        ) as response:
            await _consume_stream(response, sink, model=model)
    except ProviderError as e:
        invalidate_on_auth(client, e)
        raise


__all__ = [
    "build_body",
    "chat_endpoint",
    "chat_url",
    "access_token",
    "build_request",
    "catch_error",
    "on_http_error",
    "invalidate_on_auth",
    "extract_text",
    "handle_event",
    "chat_impl",
    "stream_chat_impl",
]
