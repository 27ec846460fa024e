"""Typed request/response shapes of the ERNIE (Qianfan) chat API."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict


class ErnieMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ErnieRequest(BaseModel):
    messages: List[ErnieMessage]
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    max_output_tokens: Optional[int] = None
    stream: Optional[bool] = None


class ErnieResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    result: str


class ErnieError(BaseModel):
    """Error envelope; returned with HTTP 200 as often as not."""

    model_config = ConfigDict(extra="allow")

    error_code: int
    error_msg: str


class TokenResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    access_token: Optional[str] = None
    expires_in: Optional[float] = None
    error: Optional[str] = None
    error_description: Optional[str] = None


__all__ = ["ErnieMessage", "ErnieRequest", "ErnieResponse", "ErnieError", "TokenResponse"]
