"""Server-Sent Events framing.

``SSEDecoder`` turns text lines into :class:`SSEMessage` values following the
event-stream rules: ``event:``, ``data:`` (multiple lines joined with
``"\\n"``), ``id:``, comment lines starting with ``:``, a single optional
space after the colon, and dispatch on a blank line. ``retry:`` and unknown
fields are ignored. A message still pending when the stream ends is
dispatched rather than dropped; some servers omit the final blank line.

Parsing the ``data`` payload is left to the provider.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import AsyncIterable, AsyncIterator, List, Optional


@dataclass(frozen=True)
class SSEMessage:
    """One dispatched event."""

    event: str = "message"
    data: str = ""
    id: Optional[str] = None


class SSEDecoder:
    """Incremental line-oriented SSE decoder."""

    def __init__(self) -> None:
        self._event: Optional[str] = None
        self._data: List[str] = []
        self._last_id: Optional[str] = None

    def decode(self, line: str) -> Optional[SSEMessage]:
        """Consume one line (without terminator); return a message on dispatch."""
        line = line.rstrip("\r\n")
        if not line:
            return self._dispatch()
        if line.startswith(":"):
            return None
        field, sep, value = line.partition(":")
        if sep and value.startswith(" "):
            value = value[1:]
        if field == "event":
            self._event = value
        elif field == "data":
            self._data.append(value)
        elif field == "id":
            if "\0" not in value:
                self._last_id = value
        return None

    def flush(self) -> Optional[SSEMessage]:
        """Dispatch whatever is pending at end of stream."""
        return self._dispatch()

    def _dispatch(self) -> Optional[SSEMessage]:
        if not self._data and self._event is None:
            return None
        if not self._data:
            # An event with no data lines is not dispatched.
            self._event = None
            return None
        msg = SSEMessage(event=self._event or "message", data="\n".join(self._data), id=self._last_id)
        self._event = None
        self._data = []
        return msg


async def aiter_sse(lines: AsyncIterable[str]) -> AsyncIterator[SSEMessage]:
    """Yield SSE messages from an async iterable of text lines.

    Typically fed with ``httpx.Response.aiter_lines()``.
    """
    decoder = SSEDecoder()
    async for line in lines:
        msg = decoder.decode(line)
        if msg is not None:
            yield msg
    msg = decoder.flush()
    if msg is not None:
        yield msg


__all__ = ["SSEMessage", "SSEDecoder", "aiter_sse"]
