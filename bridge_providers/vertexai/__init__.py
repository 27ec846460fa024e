"""Vertex AI (Gemini) provider package."""

from .client import VertexAIClient
from .models import VERTEXAI_MODELS, list_models

__all__ = ["VertexAIClient", "VERTEXAI_MODELS", "list_models"]
