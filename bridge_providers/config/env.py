"""bridge_providers.config.env
=========================

Centralized environment variable mapping for provider settings.

Purpose
-------
- Map configuration fields (``api_key``, ``secret_key``...) to environment
  variable suffixes. The prefix is the upper-cased client name, so a client
  named ``ernie`` reads ``ERNIE_API_KEY`` and ``ERNIE_SECRET_KEY``.
- Accept vendor-conventional aliases (``ANTHROPIC_API_KEY`` for Claude) with
  the canonical name taking precedence.

Failure Modes
-------------
Helpers never raise on unknown providers or unset variables; callers decide
how to proceed.
"""

from __future__ import annotations

import os
import re
from typing import Dict, Iterable, Optional, Tuple

# Config field -> env var suffix
ENV_FIELD_MAP: Dict[str, str] = {
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "secret_key": "SECRET_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "api_base": "API_BASE",
    "chat_endpoint": "CHAT_ENDPOINT",
    "adc_file": "ADC_FILE",
    "block_threshold": "BLOCK_THRESHOLD",
}

# (provider, field) -> extra env var names consulted after the canonical one
ENV_ALIASES: Dict[Tuple[str, str], Tuple[str, ...]] = {
    ("claude", "api_key"): ("ANTHROPIC_API_KEY",),
}


def env_prefix(name: str) -> str:
    """Return the env var prefix for a client name (``my-ernie`` -> ``MY_ERNIE``)."""
    return re.sub(r"[^A-Za-z0-9]", "_", (name or "").strip()).upper()


def get_env_var_candidates(name: str, field: str, provider: Optional[str] = None) -> Iterable[str]:
    """Yield env var names for ``field`` of client ``name`` in priority order."""
    suffix = ENV_FIELD_MAP.get(field)
    if suffix is None:
        return
    yield f"{env_prefix(name)}_{suffix}"
    for alias in ENV_ALIASES.get(((provider or name).lower(), field), ()):
        yield alias


def resolve_env_field(name: str, field: str, provider: Optional[str] = None) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_var_used)`` for the first non-empty candidate.

    ``(None, None)`` when nothing is set.
    """
    for var in get_env_var_candidates(name, field, provider):
        if val := os.environ.get(var):
            return val, var
    return None, None


def env_overrides(name: str, provider: Optional[str] = None) -> Dict[str, str]:
    """Collect every configured field present in the environment."""
    out: Dict[str, str] = {}
    for field in ENV_FIELD_MAP:
        val, _ = resolve_env_field(name, field, provider)
        if val is not None:
            out[field] = val
    return out


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder value.

    Heuristics: contains 'placeholder', 'changeme', or 'your_', compared
    case-insensitively after stripping surrounding spaces.
    """
    if not val:
        return False
    low = val.strip().lower()
    return any(marker in low for marker in ("placeholder", "changeme", "your_"))


__all__ = [
    "ENV_FIELD_MAP",
    "ENV_ALIASES",
    "env_prefix",
    "get_env_var_candidates",
    "resolve_env_field",
    "env_overrides",
    "is_placeholder",
]
