"""Ollama helpers module.

Purpose:
- Request body construction, request preparation, error classification and
  the single-shot / JSON-lines streaming consumers for the Ollama daemon's
  ``/api/chat`` endpoint.

Notes:
- The system message stays a native ``system`` chat message.
- Structured content is flattened: text parts joined with a blank line,
  inline images sent as raw base64 in ``images``.
- Every streamed line must be a JSON object with a boolean ``done``.
"""

from __future__ import annotations

import json
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Dict, Optional

from pydantic import ValidationError

from ..base.errors import (
    AuthError,
    ErrorCode,
    MalformedResponseError,
    ProviderError,
    RequestBuildError,
    StreamProtocolError,
    UnsupportedContentError,
    code_for_status,
    unrecognized_response,
)
from ..base.interfaces import ReplySink
from ..base.models import Message, Model, SendData
from ..base.streaming import aiter_json_lines
from ..base.transport import PreparedRequest, open_stream, send_json
from ..base.utils.messages import network_image_urls
from ..config.defaults import OLLAMA_DEFAULT_CHAT_ENDPOINT
from .wire import ErrorEnvelope, OllamaChunk, OllamaMessage, OllamaOptions, OllamaRequest, OllamaResponse

if TYPE_CHECKING:
    from .client import OllamaClient

PROVIDER = "ollama"


def _to_wire(message: Message) -> OllamaMessage:
    if isinstance(message.content, str):
        return OllamaMessage(role=message.role, content=message.content)
    images = [img.inline_data()[1] for img in message.images()]  # type: ignore[index] - network URLs rejected earlier
    return OllamaMessage(role=message.role, content=message.text_or_joined(), images=images)


def build_body(data: SendData, model: Model) -> Dict[str, Any]:
    """Translate ``SendData`` into an Ollama chat body (``stream`` always sent)."""
    if urls := network_image_urls(data.messages):
        raise UnsupportedContentError.network_images(urls, provider=PROVIDER, model=model.name)
    request = OllamaRequest(
        model=model.name,
        messages=[_to_wire(m) for m in data.messages],
        stream=data.stream,
        options=OllamaOptions(
            num_predict=model.max_output_tokens,
            temperature=data.temperature,
            top_p=data.top_p,
        ),
    )
    return model.merge_extra_fields(request.model_dump(exclude_none=True))


def build_request(client: "OllamaClient", data: SendData) -> PreparedRequest:
    api_base = client.config_value("api_base")
    if not api_base:
        raise RequestBuildError("Miss api_base", provider=PROVIDER, model=client.model.name)
    body = build_body(data, client.model)
    endpoint = client.config_value("chat_endpoint") or OLLAMA_DEFAULT_CHAT_ENDPOINT
    headers = {}
    if api_key := client.config_value("api_key"):
        headers["Authorization"] = api_key
    return PreparedRequest(url=f"{api_base.rstrip('/')}{endpoint}", json=body, headers=headers)


def catch_error(data: Any, status: Optional[int], *, model: Optional[str] = None) -> ProviderError:
    """Classify an ``{"error": "<text>"}`` payload; the text is the message."""
    try:
        env = ErrorEnvelope.model_validate(data)
    except ValidationError:
        return unrecognized_response(data, status, provider=PROVIDER, model=model)
    code = code_for_status(status)
    cls = AuthError if code is ErrorCode.AUTH else ProviderError
    return cls(env.error, provider=PROVIDER, model=model, code=code, kind="error", status=status, raw=data)


def extract_text(data: Any, *, model: Optional[str] = None) -> str:
    """Return ``message.content`` of a chat response."""
    try:
        return OllamaResponse.model_validate(data).message.content
    except ValidationError as e:
        raise MalformedResponseError(
            f"Invalid response data: {json.dumps(data, ensure_ascii=False)}", provider=PROVIDER, model=model, raw=data
        ) from e


def handle_chunk(data: Dict[str, Any], sink: ReplySink, *, model: Optional[str] = None) -> None:
    try:
        chunk = OllamaChunk.model_validate(data)
    except ValidationError as e:
        if "error" in data:
            raise catch_error(data, None, model=model) from e
        raise StreamProtocolError(
            f"Invalid response data: {json.dumps(data, ensure_ascii=False)}", provider=PROVIDER, model=model, raw=data
        ) from e
    if chunk.message is not None and chunk.message.content:
        sink.text(chunk.message.content)


async def chat_impl(client: "OllamaClient", data: SendData) -> str:
    request = build_request(client, replace(data, stream=False))
    model = client.model.name
    body = await send_json(
        request,
        provider=PROVIDER,
        model=model,
        on_error=lambda d, s: catch_error(d, s, model=model),
        extra=client.config.extra,
        transport=client._transport,
        logger=client._logger,
    )
    return extract_text(body, model=model)


async def stream_chat_impl(client: "OllamaClient", data: SendData, sink: ReplySink) -> None:
    request = build_request(client, replace(data, stream=True))
    model = client.model.name
    async with open_stream(
        request,
        provider=PROVIDER,
        model=model,
        on_error=lambda d, s: catch_error(d, s, model=model),
        extra=client.config.extra,
        transport=client._transport,
        logger=client._logger,
    ) as response:
        async for obj in aiter_json_lines(response.aiter_lines(), provider=PROVIDER, model=model):
            handle_chunk(obj, sink, model=model)


__all__ = [
    "build_body",
    "build_request",
    "catch_error",
    "extract_text",
    "handle_chunk",
    "chat_impl",
    "stream_chat_impl",
]
