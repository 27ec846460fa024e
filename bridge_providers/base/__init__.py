"""
Providers Base Package

Exports provider-agnostic contracts, DTOs, errors, and the client factory.

- Interfaces: the ``ChatClient`` and ``ReplySink`` protocols
- Models (DTOs): messages, send data, model descriptors
- Errors: the ``ProviderError`` taxonomy
- Factory: lazy creation of provider clients by provider tag
"""

from .errors import (
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
from .factory import ClientFactory, UnknownProviderError, create_client
from .interfaces import ChatClient, ReplySink
from .models import ContentPart, ImagePart, Message, Model, Role, SendData, TextPart
from .streaming import CallbackSink, ReplyCollector

__all__ = [
    "AuthError",
    "CredentialFetchError",
    "ErrorCode",
    "MalformedResponseError",
    "ProviderError",
    "RequestBuildError",
    "SafetyBlockedError",
    "StreamProtocolError",
    "TransportError",
    "UnknownModelError",
    "UnsupportedContentError",
    "ClientFactory",
    "UnknownProviderError",
    "create_client",
    "ChatClient",
    "ReplySink",
    "ContentPart",
    "ImagePart",
    "Message",
    "Model",
    "Role",
    "SendData",
    "TextPart",
    "CallbackSink",
    "ReplyCollector",
]
