"""Typed request/response shapes of the Anthropic Messages API."""
from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict


class ImageSource(BaseModel):
    type: Literal["base64"] = "base64"
    media_type: str
    data: str


class TextBlock(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ImageBlock(BaseModel):
    type: Literal["image"] = "image"
    source: ImageSource


class ClaudeMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: List[Union[TextBlock, ImageBlock]]


class ClaudeRequest(BaseModel):
    model: str
    max_tokens: int
    messages: List[ClaudeMessage]
    system: Optional[str] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    stream: Optional[bool] = None


class ResponseBlock(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: Optional[str] = None
    text: Optional[str] = None


class ClaudeResponse(BaseModel):
    """Only the fields the adapter reads; the rest is ignored."""

    model_config = ConfigDict(extra="allow")

    content: List[ResponseBlock]


class ErrorBody(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str
    message: str


class ErrorEnvelope(BaseModel):
    model_config = ConfigDict(extra="allow")

    error: ErrorBody


__all__ = [
    "ImageSource",
    "TextBlock",
    "ImageBlock",
    "ClaudeMessage",
    "ClaudeRequest",
    "ResponseBlock",
    "ClaudeResponse",
    "ErrorBody",
    "ErrorEnvelope",
]
