"""Tests for the merged configuration layer (defaults, file, env, overrides)."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from bridge_providers.config import (
    ProviderConfig,
    get_provider_config,
    load_provider_config,
    reset_config_cache,
)


def test_defaults_carry_type_name_and_chat_endpoint():
    cfg = get_provider_config("ollama")
    assert cfg == {"type": "ollama", "name": "ollama", "chat_endpoint": "/api/chat"}


def test_json_file_section_keyed_by_name(tmp_path, monkeypatch):
    path = tmp_path / "bridge.json"
    path.write_text(json.dumps({"ernie": {"api_key": "file-key", "secret_key": "file-secret"}}), encoding="utf-8")
    monkeypatch.setenv("BRIDGE_CONFIG_FILE", str(path))
    reset_config_cache()
    cfg = load_provider_config("ernie")
    assert cfg.api_key == "file-key"
    assert cfg.secret_key == "file-secret"


def test_yaml_clients_list_with_models(tmp_path, monkeypatch):
    path = tmp_path / "bridge.yaml"
    path.write_text(
        "clients:\n"
        "  - type: ollama\n"
        "    name: local\n"
        "    api_base: http://localhost:11434\n"
        "    extra:\n"
        "      connect_timeout: 5\n"
        "    models:\n"
        "      - name: llava\n"
        "        capabilities: text,vision\n"
        "        max_output_tokens: 512\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("BRIDGE_CONFIG_FILE", str(path))
    reset_config_cache()
    cfg = load_provider_config("ollama", name="local")
    assert cfg.name == "local"
    assert cfg.api_base == "http://localhost:11434"
    assert cfg.extra is not None and cfg.extra.connect_timeout == 5
    model = cfg.models[0].to_model(cfg.client_name("ollama"))
    assert model.id() == "local:llava"
    assert model.supports_vision()
    assert model.max_output_tokens == 512


def test_env_beats_file_and_overrides_beat_env(tmp_path, monkeypatch):
    path = tmp_path / "bridge.json"
    path.write_text(json.dumps({"ollama": {"api_base": "http://file:11434"}}), encoding="utf-8")
    monkeypatch.setenv("BRIDGE_CONFIG_FILE", str(path))
    reset_config_cache()
    assert get_provider_config("ollama")["api_base"] == "http://file:11434"

    monkeypatch.setenv("OLLAMA_API_BASE", "http://env:11434")
    assert get_provider_config("ollama")["api_base"] == "http://env:11434"

    cfg = get_provider_config("ollama", overrides={"api_base": "http://override:11434", "api_key": None})
    assert cfg["api_base"] == "http://override:11434"
    assert "api_key" not in cfg


def test_dotenv_file_fills_missing_vars(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("# comment\nERNIE_API_KEY='from-dotenv'\n\nERNIE_SECRET_KEY=s\n", encoding="utf-8")
    monkeypatch.setenv("BRIDGE_DOTENV_FILE", str(env_file))
    reset_config_cache()
    cfg = get_provider_config("ernie")
    assert cfg["api_key"] == "from-dotenv"
    assert cfg["secret_key"] == "s"


def test_provider_config_validation():
    with pytest.raises(ValidationError):
        ProviderConfig.model_validate({"extra": {"connect_timeout": 0}})
    cfg = ProviderConfig.model_validate({"type": "claude", "unknown": 1})
    assert cfg.client_name("claude") == "claude"
    with pytest.raises(ValidationError):
        cfg.api_key = "mutated"  # type: ignore[misc]
