"""bridge_providers package

One async chat interface over Claude, ERNIE, Ollama and Vertex AI.

Purpose:
    A caller builds a provider-agnostic :class:`SendData`, picks a client by
    provider tag, and either awaits the complete answer
    (``send_message``) or receives ordered fragments through a reply sink
    (``send_message_streaming``).

Public API (re-exported):
    - Version: ``__version__``
    - DTOs: :class:`Message`, :class:`TextPart`, :class:`ImagePart`,
      :class:`SendData`, :class:`Model`
    - Sinks: :class:`ReplyCollector`, :class:`CallbackSink`
    - Exceptions: :class:`ProviderError` and its subclasses, :class:`ErrorCode`
    - Factory: :func:`create`, :class:`ClientFactory`
    - Configuration: :func:`load_provider_config`, :class:`ProviderConfig`

Example::

    client = create("ollama", overrides={"api_base": "http://localhost:11434",
                                         "models": [{"name": "llama3"}]})
    text = await client.send_message(SendData([Message.user("hello")]))
"""

from typing import Any

from .base.errors import (
    AuthError,
    CredentialFetchError,
    ErrorCode,
    MalformedResponseError,
    ProviderError,
    RequestBuildError,
    SafetyBlockedError,
    StreamProtocolError,
    TransportError,
    UnknownModelError,
    UnsupportedContentError,
)
from .base.factory import ClientFactory, UnknownProviderError
from .base.interfaces import ChatClient, ReplySink
from .base.models import ImagePart, Message, Model, SendData, TextPart
from .base.streaming import CallbackSink, ReplyCollector
from .config import ExtraConfig, ModelConfig, ProviderConfig, load_provider_config

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "ProviderError",
    "ErrorCode",
    "AuthError",
    "CredentialFetchError",
    "MalformedResponseError",
    "RequestBuildError",
    "SafetyBlockedError",
    "StreamProtocolError",
    "TransportError",
    "UnknownModelError",
    "UnsupportedContentError",
    # DTOs
    "Message",
    "TextPart",
    "ImagePart",
    "SendData",
    "Model",
    # Contracts and sinks
    "ChatClient",
    "ReplySink",
    "ReplyCollector",
    "CallbackSink",
    # Configuration
    "ProviderConfig",
    "ModelConfig",
    "ExtraConfig",
    "load_provider_config",
    # Core helpers
    "create",
    "ClientFactory",
]


def create(provider_name: str, **kwargs: Any) -> ChatClient:
    """Instantiate a provider client via :class:`ClientFactory`.

    Parameters
    ----------
    provider_name:
        Provider tag (``"claude"``, ``"ernie"``, ``"ollama"``, ``"vertexai"``).
    **kwargs:
        Forwarded to :meth:`ClientFactory.create` (``config``, ``model``,
        ``name``, ``overrides``, ``transport``).

    Raises
    ------
    ProviderError
        For an unknown provider tag (code ``not_found``), or whatever the
        client constructor raises (e.g. :class:`UnknownModelError`).
    """
    try:
        return ClientFactory.create(provider_name, **kwargs)
    except UnknownProviderError as e:
        raise ProviderError(
            f"Failed to create provider '{provider_name}': {e}",
            provider=provider_name or "unknown",
            code=ErrorCode.NOT_FOUND,
        ) from e
