"""
Structured content parts for multi-part chat messages.

A message's content is either plain text or an ordered list of parts. Two
part kinds exist: ``TextPart`` carrying text and ``ImagePart`` carrying an
image URL. The URL is either a ``data:<mime>;base64,<payload>`` URI holding
the image inline, or a network URL that adapters never download.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, Tuple, Union


ContentPartType = Literal["text", "image_url"]

_DATA_PREFIX = "data:"
_BASE64_MARKER = ";base64,"


@dataclass(frozen=True)
class TextPart:
    """A text segment of a multi-part message."""

    text: str
    type: ContentPartType = "text"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "text": self.text}


@dataclass(frozen=True)
class ImagePart:
    """An image reference within a multi-part message.

    Attributes:
        url: ``data:`` URI with a base64 payload, or a network URL.

    Methods:
        inline_data: Return ``(mime_type, base64_payload)`` for ``data:`` URIs
            and ``None`` for network URLs.
        is_inline: True when the image is embedded in the URL itself.
    """

    url: str
    type: ContentPartType = "image_url"

    def inline_data(self) -> Optional[Tuple[str, str]]:
        """Split a ``data:`` URI into ``(mime_type, base64_payload)``.

        The payload is returned exactly as embedded; no decoding or
        re-encoding happens so the bytes reach the provider unchanged.
        """
        return split_data_url(self.url)

    def is_inline(self) -> bool:
        return self.inline_data() is not None

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "image_url": {"url": self.url}}


ContentPart = Union[TextPart, ImagePart]


def split_data_url(url: str) -> Optional[Tuple[str, str]]:
    """Return ``(mime_type, payload)`` for a base64 ``data:`` URI, else ``None``."""
    if not url.startswith(_DATA_PREFIX):
        return None
    head, sep, payload = url[len(_DATA_PREFIX):].partition(_BASE64_MARKER)
    if not sep:
        return None
    return head, payload


__all__ = [
    "ContentPart",
    "ContentPartType",
    "TextPart",
    "ImagePart",
    "split_data_url",
]
