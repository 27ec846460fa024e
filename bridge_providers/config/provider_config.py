"""Typed provider configuration.

``ProviderConfig`` is the validated, read-only view of one configured client
(a provider instance). It is produced by ``load_provider_config`` from the
merged configuration mapping, or constructed directly by callers.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..base.models import Model, parse_capabilities


class ModelConfig(BaseModel):
    """A user-declared model entry.

    Attributes
    ----------
    name:
        Provider-side model identifier.
    max_input_tokens / max_output_tokens:
        Optional token limits.
    capabilities:
        ``"text,vision"`` style string or list of tags.
    extra_fields:
        JSON object shallow-merged into the request body.
    """

    model_config = ConfigDict(extra="ignore")

    name: str
    max_input_tokens: Optional[int] = None
    max_output_tokens: Optional[int] = None
    capabilities: Optional[Union[str, List[str]]] = None
    extra_fields: Optional[Dict[str, Any]] = None

    def to_model(self, client_name: str) -> Model:
        return Model(
            client_name=client_name,
            name=self.name,
            max_input_tokens=self.max_input_tokens,
            max_output_tokens=self.max_output_tokens,
            capabilities=parse_capabilities(self.capabilities),
            extra_fields=dict(self.extra_fields) if self.extra_fields else None,
        )


class ExtraConfig(BaseModel):
    """Connection tuning shared by all providers.

    Attributes
    ----------
    proxy:
        Proxy URL for outbound requests (``http://``, ``https://``, ``socks5://``).
    connect_timeout:
        Seconds allowed for establishing a connection. Reads are unbounded;
        bounding the whole call is the caller's responsibility.
    """

    model_config = ConfigDict(extra="ignore")

    proxy: Optional[str] = None
    connect_timeout: Optional[float] = Field(default=None, gt=0)


class ProviderConfig(BaseModel):
    """Per-client provider settings.

    Only the fields meaningful to a given provider are read by its adapter:

    - Claude: ``api_key``, ``api_base``
    - ERNIE: ``api_key``, ``secret_key``
    - Ollama: ``api_base`` (required), ``api_key``, ``chat_endpoint``
    - Vertex AI: ``api_base`` (required), ``adc_file``, ``block_threshold``
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: Optional[str] = None
    name: Optional[str] = None
    api_base: Optional[str] = None
    api_key: Optional[str] = None
    secret_key: Optional[str] = None
    chat_endpoint: Optional[str] = None
    block_threshold: Optional[str] = None
    adc_file: Optional[str] = None
    models: List[ModelConfig] = Field(default_factory=list)
    extra: Optional[ExtraConfig] = None

    def client_name(self, default: str) -> str:
        """Return the configured client name, falling back to ``default``."""
        return self.name or default


__all__ = ["ProviderConfig", "ModelConfig", "ExtraConfig"]
