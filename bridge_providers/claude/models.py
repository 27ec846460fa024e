"""Static Claude model catalog."""
from __future__ import annotations

from typing import List

from ..base.models import CAPABILITY_TEXT, CAPABILITY_VISION, Model

_TEXT_VISION = frozenset({CAPABILITY_TEXT, CAPABILITY_VISION})

# (name, max_input_tokens, capabilities)
CLAUDE_MODELS = (
    ("claude-3-opus-20240229", 200000, _TEXT_VISION),
    ("claude-3-sonnet-20240229", 200000, _TEXT_VISION),
    ("claude-3-haiku-20240307", 200000, _TEXT_VISION),
)


def list_models(client_name: str = "claude") -> List[Model]:
    """Return catalog descriptors bound to ``client_name``."""
    return [
        Model(client_name=client_name, name=name, max_input_tokens=max_in, capabilities=caps)
        for name, max_in, caps in CLAUDE_MODELS
    ]


__all__ = ["CLAUDE_MODELS", "list_models"]
