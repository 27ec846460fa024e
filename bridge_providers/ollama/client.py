"""Ollama provider adapter.

Purpose:
    Implements single-shot and streaming chat against an Ollama daemon's
    ``/api/chat`` endpoint (or a compatible proxy via ``chat_endpoint``).

Configuration:
    - ``api_base`` is required (e.g. ``http://localhost:11434``).
    - ``api_key`` is optional and sent verbatim as the ``Authorization``
      header, for daemons behind an authenticating proxy.
    - Ollama has no model catalog; models must be declared in config.

Streaming:
    - Newline-delimited JSON objects; ``message.content`` of each is forwarded.
"""

from __future__ import annotations

from ..base.client_base import BaseClient
from ..base.interfaces import ReplySink
from ..base.models import SendData
from .helpers import (
    chat_impl as _chat_impl,
    stream_chat_impl as _stream_chat_impl,
)


class OllamaClient(BaseClient):
    """Client for models served by Ollama."""

    provider_name = "ollama"

    async def _chat(self, data: SendData) -> str:
        return await _chat_impl(self, data)

    async def _stream(self, data: SendData, sink: ReplySink) -> None:
        await _stream_chat_impl(self, data, sink)


__all__ = ["OllamaClient"]
