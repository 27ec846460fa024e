"""Client Factory utilities.

Purpose
-------
Centralize creation of provider clients implementing the ``ChatClient``
contract. Adapters are imported lazily using ``importlib`` so importing the
factory does not import every provider.

External dependencies
---------------------
- Standard library only (``importlib``).

Timeout and fallback semantics
------------------------------
- No timeouts are introduced here. The factory performs no retries or
  fallbacks; it either returns an instance or raises a clear error.

Scope
-----
Supported providers: ``claude``, ``ernie``, ``ollama``, ``vertexai``.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Optional, Tuple, Type, Union

from .models import Model


class UnknownProviderError(Exception):
    """Raised when a provider cannot be resolved or initialized.

    Failure modes include:
    - The provider name is not registered in the factory mapping.
    - The provider module cannot be imported or the client class is missing.
    """


def create_client(
    provider: str,
    config: Any = None,
    model: Union[str, Model, None] = None,
    **kwargs: Any,
) -> Any:
    """Compatibility helper that delegates to :meth:`ClientFactory.create`."""
    return ClientFactory.create(provider, config=config, model=model, **kwargs)


class ClientFactory:
    """Create provider clients based on a provider tag (e.g., ``"ernie"``).

    Design notes
    ------------
    - Uses ``importlib.import_module`` for explicit import semantics.
    - When no ``ProviderConfig`` is given it is loaded through
      ``bridge_providers.config.load_provider_config`` (defaults, config file,
      environment, overrides).
    - Errors raised by client constructors (e.g. ``UnknownModelError``) are
      not wrapped; they already carry provider context.
    """

    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "claude": {"module": "bridge_providers.claude.client", "class": "ClaudeClient"},
        "ernie": {"module": "bridge_providers.ernie.client", "class": "ErnieClient"},
        "ollama": {"module": "bridge_providers.ollama.client", "class": "OllamaClient"},
        "vertexai": {"module": "bridge_providers.vertexai.client", "class": "VertexAIClient"},
    }

    @classmethod
    def create(
        cls,
        provider: str,
        *,
        config: Any = None,
        model: Union[str, Model, None] = None,
        name: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
        transport: Any = None,
    ) -> Any:
        """Create a client instance.

        Parameters
        ----------
        provider:
            Provider tag (e.g., ``"claude"``).
        config:
            Optional ``ProviderConfig``; loaded from the configuration layer
            when omitted.
        model:
            Model name or descriptor; the first listed model when omitted.
        name:
            Client name used for env var lookup and the config file section.
        overrides:
            Explicit configuration values (highest precedence).
        transport:
            Optional ``httpx`` async transport (tests).

        Raises
        ------
        UnknownProviderError
            If the provider is unknown or its module/class cannot be loaded.
        """
        tag = (provider or "").lower().strip()
        spec = cls._PROVIDERS.get(tag)
        if not spec:
            raise UnknownProviderError(f"Unknown provider '{provider}'")

        module_path, class_name = spec["module"], spec["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:  # pragma: no cover - import failure path
            raise UnknownProviderError(
                f"Failed to import module '{module_path}' for provider '{provider}': {exc}"
            ) from exc
        try:
            klass: Type = getattr(mod, class_name)
        except AttributeError as exc:  # pragma: no cover - registry typo
            raise UnknownProviderError(
                f"Client class '{class_name}' not found in '{module_path}' for provider '{provider}'"
            ) from exc

        if config is None:
            from ..config import load_provider_config

            config = load_provider_config(tag, overrides, name)
        return klass(config, model, transport=transport)

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the supported provider tags in deterministic order."""
        return tuple(cls._PROVIDERS.keys())


__all__ = ["ClientFactory", "UnknownProviderError", "create_client"]
