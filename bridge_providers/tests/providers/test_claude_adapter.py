"""Tests for the Claude adapter: body building, single-shot and SSE streaming."""

from __future__ import annotations

import pytest

from bridge_providers.base.errors import (
    AuthError,
    MalformedResponseError,
    ProviderError,
    RequestBuildError,
    StreamProtocolError,
    UnsupportedContentError,
)
from bridge_providers.base.factory import ClientFactory
from bridge_providers.base.models import ImagePart, Message, Model, SendData, TextPart
from bridge_providers.base.streaming import ReplyCollector
from bridge_providers.claude.helpers import build_body
from bridge_providers.config.defaults import CLAUDE_API_BASE, CLAUDE_API_VERSION

from bridge_providers.tests.utils import Recorder, json_response, request_json, sse_response, text_response

MODEL = Model("claude", "claude-3-haiku-20240307")
HELLO = {"id": "msg_1", "type": "message", "content": [{"type": "text", "text": "hello"}]}


def _client(handler, **overrides):
    rec = Recorder(handler)
    client = ClientFactory.create("claude", overrides={"api_key": "sk-test", **overrides}, transport=rec.transport)
    return client, rec


def _stream_events():
    return [
        ("message_start", {"type": "message_start", "message": {"id": "msg_1"}}),
        ("content_block_start", {"type": "content_block_start", "index": 0}),
        ("ping", {"type": "ping"}),
        ("content_block_delta", {"type": "content_block_delta", "delta": {"type": "text_delta", "text": "hel"}}),
        ("content_block_delta", {"type": "content_block_delta", "delta": {"type": "text_delta", "text": "lo"}}),
        ("message_stop", {"type": "message_stop"}),
    ]


def test_build_body_moves_system_and_defaults_max_tokens():
    data = SendData([Message.system("be terse"), Message.user("hi")], temperature=0.3)
    body = build_body(data, MODEL)
    assert body == {
        "model": "claude-3-haiku-20240307",
        "max_tokens": 4096,
        "system": "be terse",
        "messages": [{"role": "user", "content": [{"type": "text", "text": "hi"}]}],
        "temperature": 0.3,
    }


def test_build_body_inline_image_payload_unchanged():
    data = SendData([Message.user([TextPart("what is this"), ImagePart("data:image/png;base64,iVBORw0K")])])
    content = build_body(data, MODEL)["messages"][0]["content"]
    assert content[1] == {"type": "image", "source": {"type": "base64", "media_type": "image/png", "data": "iVBORw0K"}}


def test_build_body_rejects_network_images_and_misplaced_system():
    data = SendData([Message.user([ImagePart("https://a/1.png"), ImagePart("https://b/2.png")])])
    with pytest.raises(UnsupportedContentError) as exc:
        build_body(data, MODEL)
    assert "https://a/1.png" in exc.value.message and "https://b/2.png" in exc.value.message

    with pytest.raises(RequestBuildError):
        build_body(SendData([Message.user("hi"), Message.system("late")]), MODEL)


def test_build_body_extra_fields_and_output_cap():
    model = Model("claude", "claude-3-opus-20240229", max_output_tokens=1024, extra_fields={"metadata": {"user_id": "u1"}})
    body = build_body(SendData([Message.user("hi")], stream=True), model)
    assert body["max_tokens"] == 1024
    assert body["metadata"] == {"user_id": "u1"}
    assert body["stream"] is True


def test_build_body_rejects_images_in_system_message():
    system = Message("system", [TextPart("describe like this"), ImagePart("data:image/png;base64,iVBORw0K")])
    with pytest.raises(UnsupportedContentError) as exc:
        build_body(SendData([system, Message.user("hi")]), MODEL)
    assert "data:image/png;base64,iVBORw0K" in exc.value.message
    assert exc.value.provider == "claude"


@pytest.mark.asyncio
async def test_send_message_returns_text_and_sends_headers():
    client, rec = _client(lambda r: json_response(HELLO))
    assert await client.send_message(SendData([Message.user("hi")], stream=True)) == "hello"
    req = rec.requests[0]
    assert str(req.url) == CLAUDE_API_BASE
    assert req.headers["x-api-key"] == "sk-test"
    assert req.headers["anthropic-version"] == CLAUDE_API_VERSION
    assert "stream" not in request_json(req)


@pytest.mark.asyncio
async def test_send_message_auth_error():
    client, _ = _client(lambda r: json_response({"error": {"type": "auth", "message": "bad key"}}, status=401))
    with pytest.raises(AuthError) as exc:
        await client.send_message(SendData([Message.user("hi")]))
    assert "bad key" in exc.value.message and "auth" in exc.value.message
    assert exc.value.status == 401


@pytest.mark.asyncio
async def test_unrecognized_error_and_empty_content():
    client, _ = _client(lambda r: text_response("upstream down", status=502))
    with pytest.raises(ProviderError) as exc:
        await client.send_message(SendData([Message.user("hi")]))
    assert exc.value.message == "Invalid response, status: 502, data: upstream down"

    client, _ = _client(lambda r: json_response({"content": []}))
    with pytest.raises(MalformedResponseError):
        await client.send_message(SendData([Message.user("hi")]))


@pytest.mark.asyncio
async def test_send_message_accepts_blocks_without_type():
    client, _ = _client(lambda r: json_response({"content": [{"text": "hello"}]}))
    assert await client.send_message(SendData([Message.user("hi")])) == "hello"


@pytest.mark.asyncio
async def test_api_key_from_vendor_env_alias(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")
    rec = Recorder(lambda r: json_response(HELLO))
    client = ClientFactory.create("claude", transport=rec.transport)
    await client.send_message(SendData([Message.user("hi")]))
    assert rec.requests[0].headers["x-api-key"] == "sk-env"


@pytest.mark.asyncio
async def test_streaming_concatenation_matches_single_shot():
    client, rec = _client(lambda r: sse_response(_stream_events()))
    sink = ReplyCollector()
    await client.send_message_streaming(SendData([Message.user("hi")]), sink)
    assert sink.fragments == ["hel", "lo"]
    assert sink.value() == "hello"
    assert request_json(rec.requests[0])["stream"] is True


@pytest.mark.asyncio
async def test_streaming_error_event_and_content_type_mismatch():
    events = _stream_events()[:4] + [
        ("error", {"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}})
    ]
    client, _ = _client(lambda r: sse_response(events))
    sink = ReplyCollector()
    with pytest.raises(ProviderError) as exc:
        await client.send_message_streaming(SendData([Message.user("hi")]), sink)
    assert exc.value.message == "Overloaded (kind: overloaded_error)"
    assert sink.value() == "hel"

    client, _ = _client(lambda r: json_response({"unexpected": True}))
    with pytest.raises(StreamProtocolError) as exc:
        await client.send_message_streaming(SendData([Message.user("hi")]), ReplyCollector())
    assert "text/event-stream" in exc.value.message
    assert '{"unexpected"' in exc.value.message


@pytest.mark.asyncio
async def test_lifecycle_events_are_logged(log_events):
    client, _ = _client(lambda r: sse_response(_stream_events()))
    await client.send_message_streaming(SendData([Message.user("hi")]), ReplyCollector())
    start, end = log_events("stream.start")[-1], log_events("stream.end")[-1]
    assert start["provider"] == "claude" and start["phase"] == "start"
    assert end["emitted"] == 2 and end["stream"] is True

    client, _ = _client(lambda r: json_response({"error": {"type": "auth", "message": "bad key"}}, status=401))
    with pytest.raises(AuthError):
        await client.send_message(SendData([Message.user("hi")]))
    failure = log_events("chat.error")[-1]
    assert failure["error_code"] == "auth"
    assert failure["error_type"] == "AuthError"
