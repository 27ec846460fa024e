"""Streaming primitives: stream framings and reply sinks."""

from .sse import SSEDecoder, SSEMessage, aiter_sse
from .json_stream import JsonArrayDecoder, aiter_json_array, aiter_json_lines
from .reply import CallbackSink, ReplyCollector

__all__ = [
    "SSEMessage",
    "SSEDecoder",
    "aiter_sse",
    "JsonArrayDecoder",
    "aiter_json_lines",
    "aiter_json_array",
    "ReplyCollector",
    "CallbackSink",
]
