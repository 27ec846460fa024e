"""Static ERNIE model table: catalog descriptors and chat endpoints."""
from __future__ import annotations

from typing import List, Optional

from ..base.models import Model

# (name, chat endpoint, max_input_tokens, max_output_tokens)
ERNIE_MODELS = (
    ("ernie-4.0-8k", "/wenxinworkshop/chat/completions_pro", 5120, 2048),
    ("ernie-3.5-8k", "/wenxinworkshop/chat/ernie-3.5-8k-0205", 5120, 2048),
    ("ernie-3.5-4k", "/wenxinworkshop/chat/ernie-3.5-4k-0205", 2048, 2048),
    ("ernie-speed-8k", "/wenxinworkshop/chat/ernie_speed", 7168, 2048),
    ("ernie-speed-128k", "/wenxinworkshop/chat/ernie-speed-128k", 124000, 4096),
    ("ernie-lite-8k", "/wenxinworkshop/chat/ernie-lite-8k", 7168, 2048),
    ("ernie-tiny-8k", "/wenxinworkshop/chat/ernie-tiny-8k", 7168, 2048),
)


def endpoint_for(name: str) -> Optional[str]:
    """Return the chat endpoint path of model ``name``, or ``None``."""
    for model_name, endpoint, _, _ in ERNIE_MODELS:
        if model_name == name:
            return endpoint
    return None


def list_models(client_name: str = "ernie") -> List[Model]:
    return [
        Model(client_name=client_name, name=name, max_input_tokens=max_in, max_output_tokens=max_out)
        for name, _, max_in, max_out in ERNIE_MODELS
    ]


__all__ = ["ERNIE_MODELS", "endpoint_for", "list_models"]
