"""Decoders for JSON-framed streaming bodies.

Two framings are supported:

- JSON lines: one JSON object per newline-terminated line (Ollama).
- JSON array: a single top-level array streamed element by element
  (Vertex AI ``streamGenerateContent``). :class:`JsonArrayDecoder` buffers
  text and yields each element as soon as its closing bracket arrives.

Both raise :class:`StreamProtocolError` on malformed frames.
"""
from __future__ import annotations

import json
from typing import Any, AsyncIterable, AsyncIterator, Dict, List, Optional

from ..errors import StreamProtocolError


async def aiter_json_lines(
    lines: AsyncIterable[str], *, provider: str, model: Optional[str] = None
) -> AsyncIterator[Dict[str, Any]]:
    """Yield one decoded JSON object per non-empty line."""
    async for line in lines:
        line = line.strip()
        if not line:
            continue
        try:
            obj = json.loads(line)
        except ValueError as e:
            raise StreamProtocolError(
                f"Invalid JSON line in stream: {line!r}", provider=provider, model=model, raw=line
            ) from e
        if not isinstance(obj, dict):
            raise StreamProtocolError(
                f"Expected a JSON object per line, got: {line!r}", provider=provider, model=model, raw=line
            )
        yield obj


class JsonArrayDecoder:
    """Incremental decoder for a streamed top-level JSON array.

    ``feed`` returns the elements completed by the new text; ``close`` checks
    the array was terminated. Errors are raised as ``ValueError``.
    """

    def __init__(self) -> None:
        self._decoder = json.JSONDecoder()
        self._buf = ""
        self._started = False
        self._finished = False

    def feed(self, text: str) -> List[Any]:
        self._buf += text
        out: List[Any] = []
        while True:
            s = self._buf.lstrip()
            self._buf = s
            if not s:
                return out
            if self._finished:
                raise ValueError(f"unexpected data after end of array: {s[:64]!r}")
            if not self._started:
                if s[0] != "[":
                    raise ValueError(f"expected '[' at start of stream, got: {s[:64]!r}")
                self._started = True
                self._buf = s[1:]
                continue
            if s[0] == ",":
                self._buf = s[1:]
                continue
            if s[0] == "]":
                self._finished = True
                self._buf = s[1:]
                continue
            try:
                value, end = self._decoder.raw_decode(s)
            except json.JSONDecodeError:
                # incomplete element; wait for more text
                return out
            if end == len(s) and not isinstance(value, (dict, list)):
                # a bare scalar may continue in the next chunk
                return out
            out.append(value)
            self._buf = s[end:]

    def close(self) -> None:
        if not self._started:
            raise ValueError("empty stream, expected a JSON array")
        if not self._finished or self._buf.strip():
            raise ValueError(f"truncated JSON array stream: {self._buf[:64]!r}")


async def aiter_json_array(
    chunks: AsyncIterable[str], *, provider: str, model: Optional[str] = None
) -> AsyncIterator[Any]:
    """Yield array elements from text chunks (e.g. ``Response.aiter_text()``)."""
    decoder = JsonArrayDecoder()
    try:
        async for chunk in chunks:
            for item in decoder.feed(chunk):
                yield item
        decoder.close()
    except ValueError as e:
        raise StreamProtocolError(
            f"Invalid JSON array stream: {e}", provider=provider, model=model
        ) from e


__all__ = ["aiter_json_lines", "aiter_json_array", "JsonArrayDecoder"]
