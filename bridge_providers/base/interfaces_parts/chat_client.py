"""ChatClient Protocol (single-class module).

Uniform contract implemented by every provider adapter.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import Model, SendData
from .reply_sink import ReplySink


@runtime_checkable
class ChatClient(Protocol):
    """A configured provider instance bound to one model.

    Attributes:
        provider_name: Provider tag (``claude``, ``ernie``, ``ollama``, ``vertexai``).
        model: The selected model descriptor.
    """

    provider_name: str
    model: Model

    async def send_message(self, data: SendData) -> str:  # pragma: no cover - interface
        """Return the complete answer text for ``data``."""
        ...

    async def send_message_streaming(self, data: SendData, sink: ReplySink) -> None:  # pragma: no cover - interface
        """Forward answer fragments to ``sink`` in arrival order."""
        ...
