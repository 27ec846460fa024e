"""Static Vertex AI (Gemini) model catalog."""
from __future__ import annotations

from typing import List

from ..base.models import Model, parse_capabilities

# (name, max_input_tokens, capabilities)
VERTEXAI_MODELS = (
    ("gemini-1.0-pro", 24568, "text"),
    ("gemini-1.0-pro-vision", 14336, "text,vision"),
    ("gemini-1.5-pro-preview-0409", 1000000, "text,vision"),
)


def list_models(client_name: str = "vertexai") -> List[Model]:
    return [
        Model(client_name=client_name, name=name, max_input_tokens=max_in, capabilities=parse_capabilities(caps))
        for name, max_in, caps in VERTEXAI_MODELS
    ]


__all__ = ["VERTEXAI_MODELS", "list_models"]
