"""ReplySink Protocol (single-class module)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ReplySink(Protocol):
    """Receiver of streamed answer fragments.

    ``text`` is called once per fragment, in arrival order, as soon as the
    fragment is decoded. An exception raised here aborts the stream and is
    re-raised from ``send_message_streaming`` unchanged.
    """

    def text(self, fragment: str) -> None:  # pragma: no cover - interface
        ...
