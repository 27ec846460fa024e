"""Pytest configuration for the bridge_providers test suite.

Every test starts from a clean process state: no cached access tokens, no
cached config file, and none of the provider environment variables a
developer machine may export. Network access is never needed; adapters get
an ``httpx.MockTransport`` through the ``transport`` argument.
"""

from __future__ import annotations

import json
import logging
from typing import Iterator, List

import pytest

from bridge_providers.base.credentials import reset_token_cells
from bridge_providers.base.logging import BASE_LOGGER_NAME
from bridge_providers.config import reset_config_cache
from bridge_providers.config.env import ENV_FIELD_MAP, env_prefix

_CLIENT_NAMES = ("claude", "ernie", "ollama", "vertexai", "local", "wenxin", "gemini")


@pytest.fixture(autouse=True)
def clean_state(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Reset token cells and config caches; isolate provider env vars."""
    for name in _CLIENT_NAMES:
        for suffix in ENV_FIELD_MAP.values():
            monkeypatch.delenv(f"{env_prefix(name)}_{suffix}", raising=False)
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.delenv("BRIDGE_CONFIG_FILE", raising=False)
    # point the .env loader at a file that does not exist
    monkeypatch.setenv("BRIDGE_DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_token_cells()
    reset_config_cache()
    yield
    reset_token_cells()
    reset_config_cache()


@pytest.fixture()
def log_capture() -> Iterator[List[logging.LogRecord]]:
    """Collect records emitted under the shared ``bridge`` logger."""
    records: List[logging.LogRecord] = []
    handler = logging.Handler()
    handler.emit = lambda record: records.append(record)  # type: ignore
    logger = logging.getLogger(BASE_LOGGER_NAME)
    logger.addHandler(handler)
    try:
        yield records
    finally:
        logger.removeHandler(handler)


@pytest.fixture()
def log_events(log_capture):
    """Return a callable decoding captured JSON log lines into dicts."""

    def _events(name: str = None):
        out = []
        for record in log_capture:
            try:
                payload = json.loads(record.getMessage())
            except ValueError:
                continue
            if name is None or payload.get("event") == name:
                out.append(payload)
        return out

    return _events
