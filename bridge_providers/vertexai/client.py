"""Vertex AI provider adapter.

Purpose:
    Implements single-shot and streaming chat against Gemini models on
    Vertex AI (``{api_base}/{model}:generateContent`` and
    ``:streamGenerateContent``).

Configuration:
    - ``api_base``: the publisher models URL, e.g.
      ``https://{location}-aiplatform.googleapis.com/v1/projects/{project}/locations/{location}/publishers/google/models``.
    - ``adc_file``: optional path to Application Default Credentials; the
      gcloud default location is used otherwise.
    - ``block_threshold``: optional safety threshold applied to every harm
      category (e.g. ``BLOCK_ONLY_HIGH``).
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


class VertexAIClient(BaseClient):
    """Client for Gemini models served by Vertex AI."""

    provider_name = "vertexai"

    def catalog(self) -> List[Model]:
        return list_models(self.name)

    async def _chat(self, data: SendData) -> str:
        return await _chat_impl(self, data)

    async def _stream(self, data: SendData, sink: ReplySink) -> None:
        await _stream_chat_impl(self, data, sink)


__all__ = ["VertexAIClient"]
