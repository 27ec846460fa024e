"""Unified configuration layer for provider clients.

Goals
-----
* Centralize defaults (endpoints, chat paths).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by BRIDGE_CONFIG_FILE
    3. Environment variables (e.g. ERNIE_API_KEY, OLLAMA_API_BASE)
    4. In-code overrides passed to the helper
* Provide a single call site: ``get_provider_config(provider)``, plus
  ``load_provider_config`` returning the validated ``ProviderConfig``.

Environment Variable Conventions
--------------------------------
<NAME>_API_KEY, <NAME>_SECRET_KEY, <NAME>_API_BASE, <NAME>_CHAT_ENDPOINT,
<NAME>_ADC_FILE, <NAME>_BLOCK_THRESHOLD where NAME is the upper-cased client
name (defaults to the provider tag).

External Config File (Optional)
-------------------------------
If BRIDGE_CONFIG_FILE is set to a path, JSON is attempted first, then YAML.
Sections are keyed by client name, or listed under ``clients`` with a
``type`` tag::

    ernie:
      api_key: ...
      secret_key: ...
    clients:
      - type: ollama
        name: local
        api_base: http://localhost:11434
        models:
          - name: llama3
            max_input_tokens: 8192

Public API
----------
* get_provider_config(provider, overrides=None, name=None) -> dict
* load_provider_config(provider, overrides=None, name=None) -> ProviderConfig
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    CONFIG_FILE_ENV,
    DOTENV_FILE_ENV,
    OLLAMA_DEFAULT_CHAT_ENDPOINT,
)
from .env import env_overrides, is_placeholder
from .provider_config import ExtraConfig, ModelConfig, ProviderConfig


# -------------------- Defaults --------------------

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "claude": {},
    "ernie": {},
    "ollama": {"chat_endpoint": OLLAMA_DEFAULT_CHAT_ENDPOINT},
    "vertexai": {},
}


_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Lightweight .env loader (no external dependency).

    Parses KEY=VALUE lines, ignoring comments and blank lines. Safe to call
    multiple times. Existing environment variables are only replaced when
    their current value looks like a placeholder.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv(DOTENV_FILE_ENV, ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _parse_config_text(text: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            data = {}
    return data if isinstance(data, dict) else {}


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV)
    if not path or not Path(path).exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    _FILE_CACHE = _parse_config_text(Path(path).read_text(encoding="utf-8"))
    return _FILE_CACHE


def _file_section(provider: str, name: str) -> Dict[str, Any]:
    """Return the external config section for client ``name`` of ``provider``."""
    data = _load_external_config()
    section = data.get(name)
    if isinstance(section, dict):
        return dict(section)
    clients = data.get("clients")
    if isinstance(clients, list):
        for entry in clients:
            if not isinstance(entry, dict) or entry.get("type") != provider:
                continue
            if entry.get("name", provider) == name:
                return dict(entry)
    return {}


def reset_config_cache() -> None:
    """Forget the cached external config file and .env state (tests, reloads)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


def get_provider_config(
    provider: str,
    overrides: Optional[Dict[str, Any]] = None,
    name: Optional[str] = None,
) -> Dict[str, Any]:
    """Return merged configuration for a provider client.

    Merge order (later wins): defaults -> external config -> env vars -> overrides
    """
    _load_dotenv_once()
    provider = (provider or "").lower().strip()
    client = (name or provider).strip()
    cfg: Dict[str, Any] = {"type": provider, "name": client}

    # 1. Defaults
    cfg |= DEFAULTS.get(provider, {})

    # 2. External config file section
    cfg |= _file_section(provider, client)

    # 3. Env overrides
    cfg |= env_overrides(client, provider)

    # 4. Explicit overrides arg
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    return cfg


def load_provider_config(
    provider: str,
    overrides: Optional[Dict[str, Any]] = None,
    name: Optional[str] = None,
) -> ProviderConfig:
    """Validate the merged mapping for ``provider`` into a ``ProviderConfig``."""
    return ProviderConfig.model_validate(get_provider_config(provider, overrides, name))


__all__ = [
    "DEFAULTS",
    "ProviderConfig",
    "ModelConfig",
    "ExtraConfig",
    "get_provider_config",
    "load_provider_config",
    "reset_config_cache",
]
