"""Claude (Anthropic Messages API) provider package."""

from .client import ClaudeClient
from .models import list_models

__all__ = ["ClaudeClient", "list_models"]
