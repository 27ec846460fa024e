"""
Message DTO used across providers.

Defines the `Message` dataclass and the `Role` literal representing the sender
role. Content may be either plain text or a list of `ContentPart` objects for
multi-part (text + image) turns. Helpers are provided for common inspection
and text-flattening needs.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Union

from .content_part import ContentPart, ImagePart, TextPart


# Message roles used across providers.
Role = Literal["system", "user", "assistant"]
ROLES = ("system", "user", "assistant")


@dataclass(frozen=True)
class Message:
    """A chat message used by provider-agnostic DTOs.

    Summary:
        Represents a normalized chat turn where ``content`` can be a raw
        string or an ordered list of structured content parts. Body builders
        map this DTO into each provider's wire shape.

    Attributes:
        role: ``"system"``, ``"user"``, or ``"assistant"``.
        content: Either a plain text string or a list of `ContentPart` items.

    Methods:
        is_structured: Returns True when content is a list of parts.
        text_or_joined: Produces a plain text view for providers that require
            flattened content.
        images: Returns the image parts in order.
    """

    role: Role
    content: Union[str, List[ContentPart]]

    def __post_init__(self) -> None:
        if self.role not in ROLES:
            raise ValueError(f"Invalid message role '{self.role}', expected one of {ROLES}")

    @classmethod
    def system(cls, text: str) -> "Message":
        return cls(role="system", content=text)

    @classmethod
    def user(cls, content: Union[str, List[ContentPart]]) -> "Message":
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, text: str) -> "Message":
        return cls(role="assistant", content=text)

    def is_system(self) -> bool:
        return self.role == "system"

    def is_structured(self) -> bool:
        """Return True if the message content is a structured list of parts."""
        return isinstance(self.content, list)

    def text_or_joined(self, separator: str = "\n\n") -> str:
        """Return the text of the message, joining text parts with ``separator``.

        Image parts are skipped.
        """
        if isinstance(self.content, str):
            return self.content
        return separator.join(p.text for p in self.content if isinstance(p, TextPart))

    def images(self) -> List[ImagePart]:
        if isinstance(self.content, str):
            return []
        return [p for p in self.content if isinstance(p, ImagePart)]

    def to_dict(self) -> Dict[str, Any]:
        """Return the OpenAI-style ``{role, content}`` mapping."""
        if isinstance(self.content, str):
            return {"role": self.role, "content": self.content}
        return {"role": self.role, "content": [p.to_dict() for p in self.content]}


__all__ = [
    "Message",
    "Role",
    "ROLES",
]
