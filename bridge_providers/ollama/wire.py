"""Typed request/response shapes of the Ollama ``/api/chat`` endpoint."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool


class OllamaMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str
    images: Optional[List[str]] = None


class OllamaOptions(BaseModel):
    num_predict: Optional[int] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None


class OllamaRequest(BaseModel):
    model: str
    messages: List[OllamaMessage]
    stream: bool
    options: OllamaOptions = Field(default_factory=OllamaOptions)


class ResponseMessage(BaseModel):
    model_config = ConfigDict(extra="allow")

    content: str


class OllamaResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    message: ResponseMessage


class OllamaChunk(BaseModel):
    """One JSON line of a streamed reply; ``done`` is required."""

    model_config = ConfigDict(extra="allow")

    done: StrictBool
    message: Optional[ResponseMessage] = None


class ErrorEnvelope(BaseModel):
    model_config = ConfigDict(extra="allow")

    error: str


__all__ = [
    "OllamaMessage",
    "OllamaOptions",
    "OllamaRequest",
    "ResponseMessage",
    "OllamaResponse",
    "OllamaChunk",
    "ErrorEnvelope",
]
