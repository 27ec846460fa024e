"""Reply sink implementations.

A sink receives answer fragments in arrival order. ``ReplyCollector`` keeps
them; ``CallbackSink`` forwards each one to a callable (e.g. a terminal
renderer). Exceptions raised by the callable propagate to the streaming call.
"""
from __future__ import annotations

from typing import Callable, List


class ReplyCollector:
    """Accumulate fragments; ``value()`` returns their concatenation."""

    def __init__(self) -> None:
        self.fragments: List[str] = []

    def text(self, fragment: str) -> None:
        self.fragments.append(fragment)

    def value(self) -> str:
        return "".join(self.fragments)

    def __str__(self) -> str:
        return self.value()


class CallbackSink:
    """Forward each fragment to ``callback``."""

    def __init__(self, callback: Callable[[str], None]) -> None:
        self._callback = callback
        self.count = 0

    def text(self, fragment: str) -> None:
        self._callback(fragment)
        self.count += 1


__all__ = ["ReplyCollector", "CallbackSink"]
