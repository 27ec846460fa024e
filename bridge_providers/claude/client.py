"""Claude provider adapter.

Purpose:
    Implements single-shot and streaming chat against the Anthropic Messages
    API (``POST /v1/messages``) using the shared async ``httpx`` transport.

External dependencies:
    - HTTP client only (``httpx``); no vendor SDK.

Authentication:
    - ``x-api-key`` header from ``api_key`` (or ``<NAME>_API_KEY`` /
      ``ANTHROPIC_API_KEY``); the ``anthropic-version`` header is always sent.

Streaming:
    - Server-Sent Events; ``content_block_delta`` text is forwarded to the
      reply sink as it arrives.
"""

from __future__ import annotations

from typing import List

from ..base.client_base import BaseClient
from ..base.interfaces import ReplySink
from ..base.models import Model, SendData
from .helpers import (
    chat_impl as _chat_impl,
    stream_chat_impl as _stream_chat_impl,
)
from .models import list_models


class ClaudeClient(BaseClient):
    """Client for Anthropic's Claude models."""

    provider_name = "claude"

    def catalog(self) -> List[Model]:
        return list_models(self.name)

    async def _chat(self, data: SendData) -> str:
        return await _chat_impl(self, data)

    async def _stream(self, data: SendData, sink: ReplySink) -> None:
        await _stream_chat_impl(self, data, sink)


__all__ = ["ClaudeClient"]
