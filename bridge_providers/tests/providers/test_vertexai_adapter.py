"""Tests for the Vertex AI adapter: ADC tokens, safety handling, JSON-array streaming."""

from __future__ import annotations

import json

import httpx
import pytest

from bridge_providers.base.credentials import token_cell
from bridge_providers.base.errors import (
    AuthError,
    CredentialFetchError,
    ErrorCode,
    MalformedResponseError,
    RequestBuildError,
    SafetyBlockedError,
    StreamProtocolError,
)
from bridge_providers.base.factory import ClientFactory
from bridge_providers.base.models import ImagePart, Message, Model, SendData, TextPart
from bridge_providers.base.streaming import ReplyCollector
from bridge_providers.config.defaults import VERTEXAI_HARM_CATEGORIES
from bridge_providers.vertexai.helpers import SAFETY_BLOCKED_MESSAGE, build_body

from bridge_providers.tests.utils import Recorder, json_response, request_json

API_BASE = "https://us-central1-aiplatform.googleapis.com/v1/projects/p/locations/us-central1/publishers/google/models"
TOKEN_HOST = "oauth2.googleapis.com"
MODEL = Model("vertexai", "gemini-1.0-pro-vision", max_output_tokens=2048)


def _candidate(text=None, finish=None):
    cand = {}
    if text is not None:
        cand["content"] = {"role": "model", "parts": [{"text": text}]}
    if finish:
        cand["finishReason"] = finish
    return {"candidates": [cand]}


def _chunked(body: str, size: int = 7) -> httpx.Response:
    async def gen():
        for i in range(0, len(body), size):
            yield body[i : i + size].encode("utf-8")

    return httpx.Response(200, content=gen(), headers={"content-type": "application/json; charset=UTF-8"})


@pytest.fixture()
def adc_file(tmp_path):
    path = tmp_path / "adc.json"
    path.write_text(
        json.dumps({"client_id": "cid", "client_secret": "cs", "refresh_token": "rt", "type": "authorized_user"}),
        encoding="utf-8",
    )
    return str(path)


@pytest.fixture()
def make_client(adc_file):
    def _make(chat, **overrides):
        issued = []

        def handle(request):
            if TOKEN_HOST in str(request.url):
                issued.append(f"ya29.t{len(issued) + 1}")
                return json_response({"access_token": issued[-1], "expires_in": 3599, "token_type": "Bearer"})
            return chat(request)

        rec = Recorder(handle)
        cfg = {"api_base": API_BASE, "adc_file": adc_file}
        cfg.update(overrides)
        return ClientFactory.create("vertexai", overrides=cfg, transport=rec.transport), rec

    return _make


def test_build_body_contents_and_generation_config():
    data = SendData(
        [
            Message.system("S"),
            Message.user([TextPart("what is it"), ImagePart("data:image/png;base64,iVBOR")]),
            Message.assistant("a cat"),
            Message.user("sure?"),
        ],
        temperature=0.5,
        top_p=0.9,
    )
    body = build_body(data, MODEL)
    assert body["contents"] == [
        {"role": "user", "parts": [{"text": "S"}, {"text": "what is it"}, {"inline_data": {"mime_type": "image/png", "data": "iVBOR"}}]},
        {"role": "model", "parts": [{"text": "a cat"}]},
        {"role": "user", "parts": [{"text": "sure?"}]},
    ]
    assert body["generationConfig"] == {"maxOutputTokens": 2048, "temperature": 0.5, "topP": 0.9}
    assert "safetySettings" not in body


def test_build_body_safety_settings_when_threshold_set():
    body = build_body(SendData([Message.user("hi")]), Model("vertexai", "gemini-1.0-pro"), "BLOCK_ONLY_HIGH")
    assert [s["category"] for s in body["safetySettings"]] == list(VERTEXAI_HARM_CATEGORIES)
    assert {s["threshold"] for s in body["safetySettings"]} == {"BLOCK_ONLY_HIGH"}
    assert body["generationConfig"] == {}


@pytest.mark.asyncio
async def test_send_message_hello(make_client):
    client, rec = make_client(lambda r: json_response(_candidate("hello", "STOP")), block_threshold="BLOCK_NONE")
    assert await client.send_message(SendData([Message.user("hi")])) == "hello"
    chat = rec.requests[-1]
    assert str(chat.url) == f"{API_BASE}/gemini-1.0-pro:generateContent"
    assert chat.headers["authorization"] == "Bearer ya29.t1"
    assert request_json(chat)["safetySettings"][0]["threshold"] == "BLOCK_NONE"


@pytest.mark.asyncio
async def test_safety_block_single_shot(make_client):
    client, _ = make_client(lambda r: json_response(_candidate(finish="SAFETY")))
    with pytest.raises(SafetyBlockedError) as exc:
        await client.send_message(SendData([Message.user("hi")]))
    assert exc.value.message == SAFETY_BLOCKED_MESSAGE
    assert exc.value.code is ErrorCode.CONTENT_FILTERED

    client, _ = make_client(lambda r: json_response({"promptFeedback": {"blockReason": "SAFETY"}}))
    with pytest.raises(SafetyBlockedError):
        await client.send_message(SendData([Message.user("hi")]))

    client, _ = make_client(lambda r: json_response({"candidates": []}))
    with pytest.raises(MalformedResponseError) as exc:
        await client.send_message(SendData([Message.user("hi")]))
    assert not isinstance(exc.value, SafetyBlockedError)


@pytest.mark.asyncio
async def test_unauthenticated_clears_token(make_client, log_events):
    replies = iter(
        [
            json_response(
                [{"error": {"code": 401, "message": "Request had invalid authentication credentials.", "status": "UNAUTHENTICATED"}}],
                status=401,
            ),
            json_response(_candidate("hello")),
        ]
    )
    client, rec = make_client(lambda r: next(replies))
    with pytest.raises(AuthError) as exc:
        await client.send_message(SendData([Message.user("hi")]))
    assert exc.value.message == "Request had invalid authentication credentials. (kind: UNAUTHENTICATED)"
    assert token_cell(client.token_key).peek() is None
    assert log_events("credential.invalidate")[-1]["provider"] == "vertexai"

    assert await client.send_message(SendData([Message.user("hi")])) == "hello"
    assert rec.requests[-1].headers["authorization"] == "Bearer ya29.t2"


@pytest.mark.asyncio
async def test_permission_denied_keeps_token(make_client):
    client, _ = make_client(
        lambda r: json_response({"error": {"code": 403, "message": "denied", "status": "PERMISSION_DENIED"}}, status=403)
    )
    with pytest.raises(AuthError) as exc:
        await client.send_message(SendData([Message.user("hi")]))
    assert exc.value.kind == "PERMISSION_DENIED"
    assert token_cell(client.token_key).peek() is not None


@pytest.mark.asyncio
async def test_configuration_failures(make_client, tmp_path):
    client, rec = make_client(lambda r: json_response(_candidate("x")), api_base=None)
    # overrides drop None values, so api_base stays unset
    with pytest.raises(RequestBuildError):
        await client.send_message(SendData([Message.user("hi")]))
    assert rec.requests == []

    client, rec = make_client(lambda r: json_response(_candidate("x")), adc_file=str(tmp_path / "absent.json"))
    with pytest.raises(CredentialFetchError):
        await client.send_message(SendData([Message.user("hi")]))
    assert rec.requests == []


@pytest.mark.asyncio
async def test_streaming_json_array_concatenation(make_client):
    elements = [_candidate("hel"), _candidate("lo"), {"usageMetadata": {"totalTokenCount": 7}}]
    body = "[" + ",\r\n".join(json.dumps(e) for e in elements) + "]"
    client, rec = make_client(lambda r: _chunked(body))
    sink = ReplyCollector()
    await client.send_message_streaming(SendData([Message.user("hi")]), sink)
    assert sink.value() == "hello"
    assert str(rec.requests[-1].url) == f"{API_BASE}/gemini-1.0-pro:streamGenerateContent"


@pytest.mark.asyncio
async def test_streaming_safety_and_truncation(make_client):
    body = "[" + json.dumps(_candidate("par")) + "," + json.dumps(_candidate(finish="SAFETY")) + "]"
    client, _ = make_client(lambda r: _chunked(body))
    sink = ReplyCollector()
    with pytest.raises(SafetyBlockedError):
        await client.send_message_streaming(SendData([Message.user("hi")]), sink)
    assert sink.value() == "par"

    client, _ = make_client(lambda r: _chunked("[" + json.dumps(_candidate("par")) + ","))
    with pytest.raises(StreamProtocolError):
        await client.send_message_streaming(SendData([Message.user("hi")]), ReplyCollector())
