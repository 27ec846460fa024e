"""Claude helpers module.

Purpose:
- Keep ``client.py`` lean: request body construction, request preparation,
  error classification, answer extraction, and the single-shot / SSE
  consumers for the Anthropic Messages API.

External dependencies:
- ``httpx`` through the shared transport consumers; ``pydantic`` wire models.

Failure semantics:
- Network images are rejected before anything is sent.
- Non-200 responses are classified from the ``{"error": {type, message}}``
  envelope; anything else gets the generic "Invalid response" error.
- A streaming response that is not ``text/event-stream`` is a
  ``StreamProtocolError`` carrying the body text.
"""

from __future__ import annotations

import json
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from pydantic import ValidationError

from ..base.errors import (
    MalformedResponseError,
    ProviderError,
    RequestBuildError,
    StreamProtocolError,
    UnsupportedContentError,
    envelope_error,
    unrecognized_response,
)
from ..base.interfaces import ReplySink
from ..base.models import ImagePart, Message, Model, SendData
from ..base.streaming import SSEMessage, aiter_sse
from ..base.transport import PreparedRequest, media_type, open_stream, send_json
from ..base.utils.messages import extract_system_message, network_image_urls, system_image_urls
from ..config.defaults import CLAUDE_API_BASE, CLAUDE_API_VERSION, CLAUDE_DEFAULT_MAX_TOKENS
from .wire import (
    ClaudeMessage,
    ClaudeRequest,
    ClaudeResponse,
    ErrorEnvelope,
    ImageBlock,
    ImageSource,
    TextBlock,
)

if TYPE_CHECKING:
    from .client import ClaudeClient

PROVIDER = "claude"
EVENT_STREAM = "text/event-stream"


def _content_blocks(message: Message) -> List[Union[TextBlock, ImageBlock]]:
    if isinstance(message.content, str):
        return [TextBlock(text=message.content)]
    blocks: List[Union[TextBlock, ImageBlock]] = []
    for part in message.content:
        if isinstance(part, ImagePart):
            mime_type, payload = part.inline_data()  # type: ignore[misc] - network URLs rejected earlier
            blocks.append(ImageBlock(source=ImageSource(media_type=mime_type, data=payload)))
        else:
            blocks.append(TextBlock(text=part.text))
    return blocks


def build_body(data: SendData, model: Model) -> Dict[str, Any]:
    """Translate ``SendData`` into a Messages API request body.

    The leading system message goes to ``system`` and must be text only;
    inline images become base64 ``source`` blocks; ``max_tokens`` falls back
    to 4096.
    """
    if urls := system_image_urls(data.messages):
        raise UnsupportedContentError(
            f"The system message cannot carry images: {urls!r}", provider=PROVIDER, model=model.name, raw=urls
        )
    system, messages = extract_system_message(data.messages)
    if urls := network_image_urls(messages):
        raise UnsupportedContentError.network_images(urls, provider=PROVIDER, model=model.name)
    try:
        request = ClaudeRequest(
            model=model.name,
            max_tokens=model.max_output_tokens or CLAUDE_DEFAULT_MAX_TOKENS,
            messages=[ClaudeMessage(role=m.role, content=_content_blocks(m)) for m in messages],
            system=system,
            temperature=data.temperature,
            top_p=data.top_p,
            stream=True if data.stream else None,
        )
    except ValidationError as e:
        raise RequestBuildError(
            f"Cannot build Claude request: {e.errors()[0].get('msg', e)}", provider=PROVIDER, model=model.name, raw=e
        ) from e
    return model.merge_extra_fields(request.model_dump(exclude_none=True))


def build_request(client: "ClaudeClient", data: SendData) -> PreparedRequest:
    """Prepare the POST to the Messages endpoint with version and key headers."""
    body = build_body(data, client.model)
    headers = {"anthropic-version": CLAUDE_API_VERSION}
    if api_key := client.config_value("api_key"):
        headers["x-api-key"] = api_key
    return PreparedRequest(url=client.config.api_base or CLAUDE_API_BASE, json=body, headers=headers)


def catch_error(data: Any, status: Optional[int], *, model: Optional[str] = None) -> ProviderError:
    """Classify a Claude error payload."""
    try:
        env = ErrorEnvelope.model_validate(data)
    except ValidationError:
        return unrecognized_response(data, status, provider=PROVIDER, model=model)
    return envelope_error(env.error.message, env.error.type, status, provider=PROVIDER, model=model, raw=data)


def extract_text(data: Any, *, model: Optional[str] = None) -> str:
    """Return ``content[0].text`` of a Messages API response."""
    try:
        resp = ClaudeResponse.model_validate(data)
    except ValidationError as e:
        raise MalformedResponseError(
            f"Invalid response data: {json.dumps(data, ensure_ascii=False)}",
            provider=PROVIDER,
            model=model,
            raw=data,
        ) from e
    if not resp.content or resp.content[0].text is None:
        raise MalformedResponseError(
            f"Invalid response data: {json.dumps(data, ensure_ascii=False)}",
            provider=PROVIDER,
            model=model,
            raw=data,
        )
    return resp.content[0].text


def handle_event(message: SSEMessage, sink: ReplySink, *, model: Optional[str] = None) -> None:
    """Forward the text of one SSE message; classify ``error`` events."""
    try:
        data = json.loads(message.data)
    except ValueError as e:
        raise StreamProtocolError(
            f"Invalid JSON in event '{message.event}': {message.data!r}", provider=PROVIDER, model=model
        ) from e
    if not isinstance(data, dict):
        return
    kind = data.get("type")
    if kind == "content_block_delta":
        text = (data.get("delta") or {}).get("text")
        if isinstance(text, str):
            sink.text(text)
    elif kind == "error" or message.event == "error":
        raise catch_error(data, None, model=model)


async def chat_impl(client: "ClaudeClient", data: SendData) -> str:
    """Single-shot call returning the answer text."""
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


async def stream_chat_impl(client: "ClaudeClient", data: SendData, sink: ReplySink) -> None:
    """Streaming call forwarding ``content_block_delta`` text to ``sink``."""
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
        if media_type(response) != EVENT_STREAM:
            text = (await response.aread()).decode("utf-8", errors="replace")
            raise StreamProtocolError(
                "The API server should return data as 'text/event-stream', but it isn't. "
                f"Check the client config. {text}",
                provider=PROVIDER,
                model=model,
                raw=text,
            )
        async for message in aiter_sse(response.aiter_lines()):
            handle_event(message, sink, model=model)


__all__ = [
    "build_body",
    "build_request",
    "catch_error",
    "extract_text",
    "handle_event",
    "chat_impl",
    "stream_chat_impl",
]
