"""bridge_providers.config.defaults
===============================

Central place for small, stable default values used across the
bridge_providers package: API endpoints, protocol constants, and fallbacks.
These can be overridden via configuration (``api_base``, ``chat_endpoint``,
model entries) but provide the values the providers document.

This module intentionally avoids importing from other provider packages to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Claude (Anthropic Messages API) ----
CLAUDE_API_BASE = "https://api.anthropic.com/v1/messages"
CLAUDE_API_VERSION = "2023-06-01"
# Used when the model declares no max_output_tokens; the API requires a value.
CLAUDE_DEFAULT_MAX_TOKENS = 4096

# ---- ERNIE (Baidu Qianfan) ----
ERNIE_API_BASE = "https://aip.baidubce.com/rpc/2.0/ai_custom/v1"
ERNIE_ACCESS_TOKEN_URL = "https://aip.baidubce.com/oauth/2.0/token"
# error_code values meaning the access token is invalid or expired.
ERNIE_AUTH_ERROR_CODES = frozenset({110, 111})

# ---- Ollama (local daemon) ----
OLLAMA_DEFAULT_CHAT_ENDPOINT = "/api/chat"

# ---- Vertex AI ----
VERTEXAI_TOKEN_URL = "https://oauth2.googleapis.com/token"
VERTEXAI_ADC_FILENAME = "application_default_credentials.json"
VERTEXAI_UNAUTHENTICATED = "UNAUTHENTICATED"
VERTEXAI_HARM_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)

# ---- Configuration sources ----
CONFIG_FILE_ENV = "BRIDGE_CONFIG_FILE"
DOTENV_FILE_ENV = "BRIDGE_DOTENV_FILE"


__all__ = [
    "CLAUDE_API_BASE",
    "CLAUDE_API_VERSION",
    "CLAUDE_DEFAULT_MAX_TOKENS",
    "ERNIE_API_BASE",
    "ERNIE_ACCESS_TOKEN_URL",
    "ERNIE_AUTH_ERROR_CODES",
    "OLLAMA_DEFAULT_CHAT_ENDPOINT",
    "VERTEXAI_TOKEN_URL",
    "VERTEXAI_ADC_FILENAME",
    "VERTEXAI_UNAUTHENTICATED",
    "VERTEXAI_HARM_CATEGORIES",
    "CONFIG_FILE_ENV",
    "DOTENV_FILE_ENV",
]
