"""Shared base for provider clients.

Purpose:
    Hold what every adapter needs regardless of wire format: the validated
    ``ProviderConfig``, the selected ``Model``, an injectable HTTP transport,
    a structured logger, and the start/end/error lifecycle logging around
    ``send_message`` and ``send_message_streaming``.

Subclasses implement ``_chat`` and ``_stream`` (normally by delegating to
their ``helpers`` module) and ``catalog`` for model selection.

Failure semantics:
    Errors are logged once at the lifecycle boundary (``chat.error`` or
    ``stream.error``) and re-raised unchanged. Nothing is retried.
"""
from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, List, Optional, Union

import httpx

from .errors import ProviderError, UnknownModelError, classify_exception
from .interfaces import ReplySink
from .logging import LogContext, get_logger, normalized_log_event
from .models import Model, SendData

if TYPE_CHECKING:
    from ..config.provider_config import ProviderConfig


class _CountingSink:
    """Forward fragments to the caller's sink while counting them."""

    def __init__(self, sink: ReplySink) -> None:
        self._sink = sink
        self.count = 0
        self.first_at: Optional[float] = None

    def text(self, fragment: str) -> None:
        if self.first_at is None:
            self.first_at = time.perf_counter()
        self._sink.text(fragment)
        self.count += 1


class BaseClient:
    """Configured provider instance bound to one model."""

    provider_name: str = ""

    def __init__(
        self,
        config: "ProviderConfig",
        model: Union[str, Model, None] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config
        self.name = config.client_name(self.provider_name)
        self._transport = transport
        self._logger: logging.Logger = get_logger(self.provider_name)
        self.model = self._select_model(model)

    # ---- model selection ----
    def catalog(self) -> List[Model]:
        """Static models known for this provider (empty when none)."""
        return []

    def list_models(self) -> List[Model]:
        """Configured models when declared, else the provider catalog."""
        if self.config.models:
            return [m.to_model(self.name) for m in self.config.models]
        return self.catalog()

    def _select_model(self, model: Union[str, Model, None]) -> Model:
        if isinstance(model, Model):
            return model
        models = self.list_models()
        if not models:
            raise UnknownModelError(
                f"No models configured for client '{self.name}'", provider=self.provider_name, model=model
            )
        if model is None:
            return models[0]
        for candidate in models:
            if candidate.name == model:
                return candidate
        raise UnknownModelError(
            f"Unknown model '{model}' for client '{self.name}'", provider=self.provider_name, model=model
        )

    # ---- shared state ----
    @property
    def token_key(self) -> str:
        """Registry key of this instance's access-token cell."""
        return f"{self.provider_name}:{self.name}"

    def config_value(self, field: str) -> Optional[str]:
        """Return ``config.<field>``, falling back to ``<NAME>_<FIELD>`` in the env."""
        value = getattr(self.config, field, None)
        if value:
            return value
        from ..config.env import resolve_env_field

        value, _ = resolve_env_field(self.name, field, self.provider_name)
        return value

    def log_context(self, stream: bool) -> LogContext:
        return LogContext(provider=self.provider_name, model=self.model.name, client=self.name, stream=stream)

    def _log_failure(self, event: str, ctx: LogContext, exc: Exception, **fields) -> None:
        code = exc.code.value if isinstance(exc, ProviderError) else classify_exception(exc).value
        message = exc.message if isinstance(exc, ProviderError) else str(exc)
        normalized_log_event(
            self._logger,
            event,
            ctx,
            phase="finalize",
            error_code=code,
            level=logging.WARNING,
            error=message,
            error_type=type(exc).__name__,
            **fields,
        )

    # ---- public contract ----
    async def send_message(self, data: SendData) -> str:
        """Return the complete answer text for ``data``."""
        ctx = self.log_context(stream=False)
        normalized_log_event(
            self._logger,
            "chat.start",
            ctx,
            phase="start",
            messages=len(data.messages),
            temperature=data.temperature,
            top_p=data.top_p,
        )
        t0 = time.perf_counter()
        try:
            text = await self._chat(data)
        except Exception as e:
            self._log_failure("chat.error", ctx, e, emitted=False)
            raise
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            emitted=True,
            latency_ms=round((time.perf_counter() - t0) * 1000, 2),
            chars=len(text),
        )
        return text

    async def send_message_streaming(self, data: SendData, sink: ReplySink) -> None:
        """Forward answer fragments to ``sink`` in arrival order."""
        ctx = self.log_context(stream=True)
        normalized_log_event(
            self._logger,
            "stream.start",
            ctx,
            phase="start",
            messages=len(data.messages),
            temperature=data.temperature,
            top_p=data.top_p,
        )
        counting = _CountingSink(sink)
        t0 = time.perf_counter()
        try:
            await self._stream(data, counting)
        except Exception as e:
            self._log_failure("stream.error", ctx, e, emitted=counting.count)
            raise
        ttft = None if counting.first_at is None else round((counting.first_at - t0) * 1000, 2)
        normalized_log_event(
            self._logger,
            "stream.end",
            ctx,
            phase="finalize",
            emitted=counting.count,
            time_to_first_token_ms=ttft,
            total_duration_ms=round((time.perf_counter() - t0) * 1000, 2),
        )

    # ---- provider hooks ----
    async def _chat(self, data: SendData) -> str:  # pragma: no cover - abstract
        raise NotImplementedError

    async def _stream(self, data: SendData, sink: ReplySink) -> None:  # pragma: no cover - abstract
        raise NotImplementedError


__all__ = ["BaseClient"]
