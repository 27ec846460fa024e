"""Message list transforms shared by the body builders.

Providers differ in where a system prompt goes. Claude has a dedicated
field (``extract_system_message``); ERNIE and Vertex AI have none, so the
prompt is folded into the following turn (``patch_system_message``). Both
return new lists and never mutate the caller's messages.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from ..models import Message, TextPart

SYSTEM_SEPARATOR = "\n\n"


def extract_system_message(messages: Iterable[Message]) -> Tuple[Optional[str], List[Message]]:
    """Split a leading system message off the conversation.

    Returns ``(system_text, remaining_messages)``; ``system_text`` is ``None``
    when the first message is not a system message. Callers whose system
    field is text only should check ``system_image_urls`` first.
    """
    items = list(messages)
    if items and items[0].is_system():
        return items[0].text_or_joined(), items[1:]
    return None, items


def system_image_urls(messages: Iterable[Message]) -> List[str]:
    """Return the image URLs carried by a leading system message."""
    items = list(messages)
    if items and items[0].is_system():
        return [img.url for img in items[0].images()]
    return []


def patch_system_message(messages: Iterable[Message]) -> List[Message]:
    """Fold a leading system message into the next message.

    ``"{system}\\n\\n{text}"`` for text content; leading parts for
    structured content. A system message that carries images keeps its parts
    so the body builder can send or reject them. A system message with
    nothing after it is sent as a user message.
    """
    items = list(messages)
    if not items or not items[0].is_system():
        return items
    head, rest = items[0], items[1:]
    if head.images():
        leading = list(head.content)
        if not rest:
            return [Message.user(leading)]
        first = rest[0]
        tail = [TextPart(first.content)] if isinstance(first.content, str) else list(first.content)
        return [Message(role=first.role, content=[*leading, *tail]), *rest[1:]]
    system = head.text_or_joined()
    if not rest:
        return [Message.user(system)]
    first = rest[0]
    if isinstance(first.content, str):
        patched = Message(role=first.role, content=f"{system}{SYSTEM_SEPARATOR}{first.content}")
    else:
        patched = Message(role=first.role, content=[TextPart(system), *first.content])
    return [patched, *rest[1:]]


def network_image_urls(messages: Iterable[Message]) -> List[str]:
    """Return every non-inline image URL, in message order."""
    return [img.url for m in messages for img in m.images() if not img.is_inline()]


__all__ = [
    "SYSTEM_SEPARATOR",
    "extract_system_message",
    "system_image_urls",
    "patch_system_message",
    "network_image_urls",
]
