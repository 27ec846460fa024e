"""Interface protocols for provider clients (one class per module)."""

from .chat_client import ChatClient
from .reply_sink import ReplySink

__all__ = ["ChatClient", "ReplySink"]
