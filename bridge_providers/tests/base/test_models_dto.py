"""Tests for the provider-agnostic DTOs (messages, parts, send data, models)."""

from __future__ import annotations

import pytest

from bridge_providers.base.models import (
    CAPABILITY_TEXT,
    CAPABILITY_VISION,
    ImagePart,
    Message,
    Model,
    SendData,
    TextPart,
    parse_capabilities,
    split_data_url,
)


def test_split_data_url_keeps_payload_verbatim():
    assert split_data_url("data:image/png;base64,iVBORw0KGgo=") == ("image/png", "iVBORw0KGgo=")
    assert split_data_url("https://example.com/cat.png") is None
    assert split_data_url("data:text/plain,hello") is None


def test_image_part_inline_detection():
    inline = ImagePart("data:image/jpeg;base64,/9j/4AAQ")
    remote = ImagePart("https://example.com/cat.jpg")
    assert inline.is_inline() and inline.inline_data() == ("image/jpeg", "/9j/4AAQ")
    assert not remote.is_inline()
    assert remote.to_dict() == {"type": "image_url", "image_url": {"url": "https://example.com/cat.jpg"}}


def test_message_rejects_unknown_role():
    with pytest.raises(ValueError):
        Message(role="tool", content="x")  # type: ignore[arg-type]


def test_message_text_views():
    msg = Message.user([TextPart("describe"), ImagePart("data:image/png;base64,AAAA"), TextPart("briefly")])
    assert msg.is_structured()
    assert msg.text_or_joined() == "describe\n\nbriefly"
    assert [p.url for p in msg.images()] == ["data:image/png;base64,AAAA"]
    assert Message.system("be terse").is_system()
    assert Message.assistant("ok").to_dict() == {"role": "assistant", "content": "ok"}


def test_send_data_is_frozen_and_stores_tuple():
    msgs = [Message.user("hi")]
    data = SendData(msgs, temperature=0.2)
    assert isinstance(data.messages, tuple)
    msgs.append(Message.user("later"))
    assert len(data.messages) == 1
    copy = data.message_list()
    copy.clear()
    assert len(data.messages) == 1
    with pytest.raises(Exception):
        data.stream = True  # type: ignore[misc]


def test_parse_capabilities():
    assert parse_capabilities("text,vision") == {CAPABILITY_TEXT, CAPABILITY_VISION}
    assert parse_capabilities(["Vision"]) == {CAPABILITY_VISION}
    assert parse_capabilities(None) == {CAPABILITY_TEXT}
    assert parse_capabilities("bogus") == {CAPABILITY_TEXT}


def test_model_id_and_extra_fields_merge():
    model = Model("local", "llama3", extra_fields={"keep_alive": "5m", "stream": "override"})
    assert model.id() == "local:llama3"
    assert not model.supports_vision()
    body = {"model": "llama3", "stream": False}
    merged = model.merge_extra_fields(body)
    assert merged is body
    assert body == {"model": "llama3", "stream": "override", "keep_alive": "5m"}
    assert Model("c", "m").merge_extra_fields({"a": 1}) == {"a": 1}
