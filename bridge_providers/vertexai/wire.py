"""Typed request/response shapes of the Vertex AI ``generateContent`` API."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class InlineData(BaseModel):
    mime_type: str
    data: str


class Part(BaseModel):
    model_config = ConfigDict(extra="allow")

    text: Optional[str] = None
    inline_data: Optional[InlineData] = None


class Content(BaseModel):
    role: Literal["user", "model"]
    parts: List[Part]


class SafetySetting(BaseModel):
    category: str
    threshold: str


class GenerationConfig(BaseModel):
    maxOutputTokens: Optional[int] = None
    temperature: Optional[float] = None
    topP: Optional[float] = None


class VertexRequest(BaseModel):
    contents: List[Content]
    generationConfig: GenerationConfig = Field(default_factory=GenerationConfig)
    safetySettings: Optional[List[SafetySetting]] = None


class CandidateContent(BaseModel):
    model_config = ConfigDict(extra="allow")

    parts: List[Part] = Field(default_factory=list)


class Candidate(BaseModel):
    model_config = ConfigDict(extra="allow")

    content: Optional[CandidateContent] = None
    finishReason: Optional[str] = None


class PromptFeedback(BaseModel):
    model_config = ConfigDict(extra="allow")

    blockReason: Optional[str] = None


class VertexResponse(BaseModel):
    """One response object (or one element of a streamed array)."""

    model_config = ConfigDict(extra="allow")

    candidates: List[Candidate] = Field(default_factory=list)
    promptFeedback: Optional[PromptFeedback] = None

    def first_text(self) -> Optional[str]:
        if not self.candidates or self.candidates[0].content is None:
            return None
        parts = self.candidates[0].content.parts
        return parts[0].text if parts else None

    def block_reason(self) -> Optional[str]:
        if self.promptFeedback is not None and self.promptFeedback.blockReason:
            return self.promptFeedback.blockReason
        if self.candidates:
            return self.candidates[0].finishReason
        return None


class ErrorBody(BaseModel):
    model_config = ConfigDict(extra="allow")

    status: str
    message: str


class ErrorEnvelope(BaseModel):
    model_config = ConfigDict(extra="allow")

    error: ErrorBody


class TokenResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    access_token: Optional[str] = None
    expires_in: Optional[float] = None
    error_description: Optional[str] = None


__all__ = [
    "InlineData",
    "Part",
    "Content",
    "SafetySetting",
    "GenerationConfig",
    "VertexRequest",
    "CandidateContent",
    "Candidate",
    "PromptFeedback",
    "VertexResponse",
    "ErrorBody",
    "ErrorEnvelope",
    "TokenResponse",
]
