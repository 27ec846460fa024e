"""ERNIE provider adapter.

Purpose:
    Implements single-shot and streaming chat against Baidu's ERNIE
    (Qianfan ``wenxinworkshop``) endpoints.

Authentication:
    - ``api_key`` / ``secret_key`` (or ``<NAME>_API_KEY`` / ``<NAME>_SECRET_KEY``)
      are exchanged for an access token via OAuth client credentials. The token
      is shared process-wide by clients with the same name and refreshed on
      expiry or when the server reports it invalid.

Models:
    - Only models present in the static endpoint table can be called;
      configured models outside it fail with ``UnknownModelError``.
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


class ErnieClient(BaseClient):
    """Client for Baidu ERNIE models."""

    provider_name = "ernie"

    def catalog(self) -> List[Model]:
        return list_models(self.name)

    async def _chat(self, data: SendData) -> str:
        return await _chat_impl(self, data)

    async def _stream(self, data: SendData, sink: ReplySink) -> None:
        await _stream_chat_impl(self, data, sink)


__all__ = ["ErnieClient"]
