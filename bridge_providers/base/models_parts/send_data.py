"""
SendData DTO: the payload handed to a provider adapter for one call.

Carries the ordered messages, optional sampling parameters, and the
streaming flag. Instances are frozen; body builders work on a copy of the
message list so the caller's value is never mutated.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .message import Message


@dataclass(frozen=True)
class SendData:
    """Normalized chat payload consumed by exactly one body builder call.

    Attributes:
        messages: Ordered chat turns; stored as a tuple.
        temperature: Sampling temperature, sent only when set.
        top_p: Nucleus sampling parameter, sent only when set.
        stream: Whether the caller wants incremental delivery.
    """

    messages: Tuple[Message, ...] = field(default_factory=tuple)
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    stream: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.messages, tuple):
            object.__setattr__(self, "messages", tuple(self.messages))

    def message_list(self) -> List[Message]:
        """Return a fresh, mutable copy of the messages."""
        return list(self.messages)


__all__ = ["SendData"]
