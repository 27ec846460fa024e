"""Vertex AI helpers module.

Purpose:
- Request body construction (contents, safety settings, generation config),
  URL assembly, error classification and the single-shot / JSON-array
  streaming consumers for Gemini models on Vertex AI.

Authentication:
- Bearer token from the instance's token cell, minted from Application
  Default Credentials. An ``UNAUTHENTICATED`` error clears the cell and fails
  the current call with ``AuthError``.

Failure semantics:
- A response without text whose block/finish reason is ``SAFETY`` is a
  ``SafetyBlockedError``; other text-less responses are malformed for
  single-shot calls and skipped while streaming.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from pydantic import ValidationError

from ..base.credentials import token_cell
from ..base.errors import (
    AuthError,
    ErrorCode,
    MalformedResponseError,
    ProviderError,
    RequestBuildError,
    SafetyBlockedError,
    UnsupportedContentError,
    code_for_status,
    format_envelope_message,
    unrecognized_response,
)
from ..base.interfaces import ReplySink
from ..base.logging import log_event
from ..base.models import ImagePart, Message, Model, SendData
from ..base.streaming import aiter_json_array
from ..base.transport import PreparedRequest, open_stream, send_json
from ..base.utils.messages import network_image_urls, patch_system_message
from ..config.defaults import VERTEXAI_HARM_CATEGORIES, VERTEXAI_UNAUTHENTICATED
from .adc import fetch_access_token
from .wire import (
    Content,
    ErrorEnvelope,
    GenerationConfig,
    InlineData,
    Part,
    SafetySetting,
    VertexRequest,
    VertexResponse,
)

if TYPE_CHECKING:
    from .client import VertexAIClient

PROVIDER = "vertexai"
SAFETY = "SAFETY"
SAFETY_BLOCKED_MESSAGE = (
    "Blocked by safety settings, consider adjusting `block_threshold` in the client configuration"
)


def _parts(message: Message) -> List[Part]:
    if isinstance(message.content, str):
        return [Part(text=message.content)]
    parts: List[Part] = []
    for item in message.content:
        if isinstance(item, ImagePart):
            mime_type, payload = item.inline_data()  # type: ignore[misc] - network URLs rejected earlier
            parts.append(Part(inline_data=InlineData(mime_type=mime_type, data=payload)))
        else:
            parts.append(Part(text=item.text))
    return parts


def build_body(data: SendData, model: Model, block_threshold: Optional[str] = None) -> Dict[str, Any]:
    """Translate ``SendData`` into a ``generateContent`` body.

    The system message is folded into the next turn; every non-user role is
    sent as ``model``. ``safetySettings`` are emitted only when a
    ``block_threshold`` is configured.
    """
    messages = patch_system_message(data.messages)
    if urls := network_image_urls(messages):
        raise UnsupportedContentError.network_images(urls, provider=PROVIDER, model=model.name)
    safety = None
    if block_threshold:
        safety = [SafetySetting(category=c, threshold=block_threshold) for c in VERTEXAI_HARM_CATEGORIES]
    request = VertexRequest(
        contents=[Content(role="user" if m.role == "user" else "model", parts=_parts(m)) for m in messages],
        generationConfig=GenerationConfig(
            maxOutputTokens=model.max_output_tokens,
            temperature=data.temperature,
            topP=data.top_p,
        ),
        safetySettings=safety,
    )
    return model.merge_extra_fields(request.model_dump(exclude_none=True))


def chat_url(api_base: str, model: Model, stream: bool) -> str:
    verb = "streamGenerateContent" if stream else "generateContent"
    return f"{api_base.rstrip('/')}/{model.name}:{verb}"


async def access_token(client: "VertexAIClient") -> str:
    """Return the cached bearer token, fetching it once if absent or expired."""

    async def _fetch():
        return await fetch_access_token(
            client.config_value("adc_file"),
            extra=client.config.extra,
            transport=client._transport,
            logger=client._logger,
        )

    return await token_cell(client.token_key).get_or_fetch(_fetch)


async def build_request(client: "VertexAIClient", data: SendData) -> PreparedRequest:
    api_base = client.config_value("api_base")
    if not api_base:
        raise RequestBuildError("Miss api_base", provider=PROVIDER, model=client.model.name)
    body = build_body(data, client.model, client.config_value("block_threshold"))
    token = await access_token(client)
    return PreparedRequest(
        url=chat_url(api_base, client.model, data.stream),
        json=body,
        headers={"Authorization": f"Bearer {token}"},
    )


def catch_error(data: Any, status: Optional[int], *, model: Optional[str] = None) -> ProviderError:
    """Classify ``[{"error": {status, message}}]`` (or the bare object form)."""
    candidate = data[0] if isinstance(data, list) and data else data
    try:
        env = ErrorEnvelope.model_validate(candidate)
    except ValidationError:
        return unrecognized_response(data, status, provider=PROVIDER, model=model)
    auth = env.error.status == VERTEXAI_UNAUTHENTICATED
    code = ErrorCode.AUTH if auth else code_for_status(status)
    cls = AuthError if code is ErrorCode.AUTH else ProviderError
    return cls(
        format_envelope_message(env.error.message, env.error.status),
        provider=PROVIDER,
        model=model,
        code=code,
        kind=env.error.status,
        status=status,
        raw=data,
    )


def invalidate_on_auth(client: "VertexAIClient", err: ProviderError) -> None:
    if isinstance(err, AuthError) and err.kind == VERTEXAI_UNAUTHENTICATED:
        if token_cell(client.token_key).invalidate():
            log_event(
                client._logger,
                "credential.invalidate",
                level=logging.WARNING,
                provider=PROVIDER,
                client=client.name,
                error_code=err.kind,
            )


def _parse(data: Any, *, model: Optional[str]) -> VertexResponse:
    try:
        return VertexResponse.model_validate(data)
    except ValidationError as e:
        raise MalformedResponseError(
            f"Invalid response data: {json.dumps(data, ensure_ascii=False)}", provider=PROVIDER, model=model, raw=data
        ) from e


def _safety_error(data: Any, model: Optional[str]) -> SafetyBlockedError:
    return SafetyBlockedError(SAFETY_BLOCKED_MESSAGE, provider=PROVIDER, model=model, kind=SAFETY, raw=data)


def extract_text(data: Any, *, model: Optional[str] = None) -> str:
    """Return ``candidates[0].content.parts[0].text``."""
    resp = _parse(data, model=model)
    text = resp.first_text()
    if text is not None:
        return text
    if resp.block_reason() == SAFETY:
        raise _safety_error(data, model)
    raise MalformedResponseError(
        f"Invalid response data: {json.dumps(data, ensure_ascii=False)}", provider=PROVIDER, model=model, raw=data
    )


def handle_chunk(data: Any, sink: ReplySink, *, model: Optional[str] = None) -> None:
    """Forward one streamed element's text; raise on safety blocks or errors."""
    if isinstance(data, dict) and "error" in data:
        raise catch_error(data, None, model=model)
    resp = _parse(data, model=model)
    text = resp.first_text()
    if text is not None:
        sink.text(text)
    elif resp.block_reason() == SAFETY:
        raise _safety_error(data, model)


async def chat_impl(client: "VertexAIClient", data: SendData) -> str:
    model = client.model.name
    request = await build_request(client, replace(data, stream=False))
    try:
        body = await send_json(
            request,
            provider=PROVIDER,
            model=model,
            on_error=lambda d, s: catch_error(d, s, model=model),
            extra=client.config.extra,
            transport=client._transport,
            logger=client._logger,
        )
    except ProviderError as e:
        invalidate_on_auth(client, e)
        raise
    return extract_text(body, model=model)


async def stream_chat_impl(client: "VertexAIClient", data: SendData, sink: ReplySink) -> None:
    model = client.model.name
    request = await build_request(client, replace(data, stream=True))
    try:
        async with open_stream(
            request,
            provider=PROVIDER,
            model=model,
            on_error=lambda d, s: catch_error(d, s, model=model),
            extra=client.config.extra,
            transport=client._transport,
            logger=client._logger,
        ) as response:
            async for item in aiter_json_array(response.aiter_text(), provider=PROVIDER, model=model):
                handle_chunk(item, sink, model=model)
    except ProviderError as e:
        invalidate_on_auth(client, e)
        raise


__all__ = [
    "build_body",
    "chat_url",
    "access_token",
    "build_request",
    "catch_error",
    "invalidate_on_auth",
    "extract_text",
    "handle_chunk",
    "chat_impl",
    "stream_chat_impl",
]
