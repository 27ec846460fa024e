"""Shared testing utilities for adapter tests.

Purpose:
    Build ``httpx.MockTransport`` instances that record every request and
    answer from a routing function, plus small helpers to compose response
    bodies (JSON, SSE, JSON lines).

Exports:
    - assert_true(condition, message)
    - Recorder: callable handler keeping the requests it served
    - json_response / sse_response / text_response
    - sse_body / json_lines_body
    - request_json
"""
from __future__ import annotations

import json
from typing import Any, Callable, Iterable, List, Optional, Tuple

import httpx

Handler = Callable[[httpx.Request], httpx.Response]


def assert_true(condition: bool, message: str) -> None:
    """Raise AssertionError with ``message`` if ``condition`` is False."""
    if not condition:
        raise AssertionError(message)


class Recorder:
    """Mock transport handler that remembers the requests it answered."""

    def __init__(self, handler: Handler) -> None:
        self._handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def to(self, fragment: str) -> List[httpx.Request]:
        """Requests whose URL contains ``fragment``."""
        return [r for r in self.requests if fragment in str(r.url)]


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content.decode("utf-8"))


def json_response(data: Any, status: int = 200) -> httpx.Response:
    return httpx.Response(status, json=data)


def text_response(text: str, status: int = 200, content_type: str = "text/plain") -> httpx.Response:
    return httpx.Response(status, content=text.encode("utf-8"), headers={"content-type": content_type})


def sse_body(events: Iterable[Tuple[Optional[str], Any]]) -> str:
    """Render ``(event, data)`` pairs as an event stream; dict data is JSON."""
    out = []
    for event, data in events:
        if event:
            out.append(f"event: {event}\n")
        payload = data if isinstance(data, str) else json.dumps(data)
        out.append(f"data: {payload}\n\n")
    return "".join(out)


def sse_response(events: Iterable[Tuple[Optional[str], Any]], status: int = 200) -> httpx.Response:
    return text_response(sse_body(events), status, content_type="text/event-stream")


def json_lines_body(objects: Iterable[Any]) -> str:
    return "".join(json.dumps(o) + "\n" for o in objects)
