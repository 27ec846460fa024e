"""
Model descriptor DTO.

Represents one selectable model of a configured client: its name, token
limits, capability tags, and an optional opaque JSON fragment merged into the
request body for provider-specific passthrough. Descriptors come from a
provider's static catalog or from user configuration and are read-only during
a request.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Optional


CAPABILITY_TEXT = "text"
CAPABILITY_VISION = "vision"
KNOWN_CAPABILITIES = frozenset({CAPABILITY_TEXT, CAPABILITY_VISION})


def parse_capabilities(value: Optional[Iterable[str] | str]) -> FrozenSet[str]:
    """Parse ``"text,vision"`` or an iterable of tags into a capability set.

    Unknown tags are ignored; an empty result falls back to ``{"text"}``.
    """
    if value is None:
        return frozenset({CAPABILITY_TEXT})
    items = value.split(",") if isinstance(value, str) else value
    caps = frozenset(t.strip().lower() for t in items if t and t.strip().lower() in KNOWN_CAPABILITIES)
    return caps or frozenset({CAPABILITY_TEXT})


@dataclass(frozen=True)
class Model:
    """A model selectable on a configured client.

    Attributes:
        client_name: Name of the configured client owning the model.
        name: Provider-side model identifier.
        max_input_tokens: Optional context window size.
        max_output_tokens: Optional completion cap; body builders fall back to
            a provider constant when absent.
        capabilities: Capability tags (``text``, ``vision``).
        extra_fields: Optional JSON object shallow-merged into request bodies.
    """

    client_name: str
    name: str
    max_input_tokens: Optional[int] = None
    max_output_tokens: Optional[int] = None
    capabilities: FrozenSet[str] = field(default_factory=lambda: frozenset({CAPABILITY_TEXT}))
    extra_fields: Optional[Dict[str, Any]] = None

    def id(self) -> str:
        return f"{self.client_name}:{self.name}"

    def supports_vision(self) -> bool:
        return CAPABILITY_VISION in self.capabilities

    def merge_extra_fields(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Shallow-merge ``extra_fields`` into ``body``; extra fields win on collision.

        Returns the same ``body`` object for call chaining.
        """
        if self.extra_fields:
            body.update(copy.deepcopy(self.extra_fields))
        return body


__all__ = [
    "Model",
    "parse_capabilities",
    "CAPABILITY_TEXT",
    "CAPABILITY_VISION",
]
