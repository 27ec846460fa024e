"""Tests for system message extraction/patching and network image detection."""

from __future__ import annotations

from bridge_providers.base.models import ImagePart, Message, TextPart
from bridge_providers.base.utils.messages import (
    extract_system_message,
    network_image_urls,
    patch_system_message,
    system_image_urls,
)


def test_extract_system_message_only_takes_leading():
    msgs = [Message.system("sys"), Message.user("hi")]
    system, rest = extract_system_message(msgs)
    assert system == "sys"
    assert rest == [Message.user("hi")]

    system, rest = extract_system_message([Message.user("hi")])
    assert system is None and rest == [Message.user("hi")]


def test_patch_system_message_text_and_structured():
    patched = patch_system_message([Message.system("S"), Message.user("U"), Message.assistant("A")])
    assert patched[0] == Message.user("S\n\nU")
    assert patched[1] == Message.assistant("A")

    img = ImagePart("data:image/png;base64,AAAA")
    patched = patch_system_message([Message.system("S"), Message.user([TextPart("U"), img])])
    assert patched[0].content == [TextPart("S"), TextPart("U"), img]


def test_patch_lone_system_becomes_user_and_input_untouched():
    original = [Message.system("only")]
    assert patch_system_message(original) == [Message.user("only")]
    assert original == [Message.system("only")]
    assert patch_system_message([]) == []


def test_patch_keeps_images_of_structured_system_message():
    img = ImagePart("data:image/png;base64,AAAA")
    system = Message("system", [TextPart("S"), img])

    patched = patch_system_message([system, Message.user("U")])
    assert patched == [Message.user([TextPart("S"), img, TextPart("U")])]

    patched = patch_system_message([system, Message.user([TextPart("U")])])
    assert patched[0].content == [TextPart("S"), img, TextPart("U")]

    assert patch_system_message([system]) == [Message.user([TextPart("S"), img])]
    assert system_image_urls([system, Message.user("U")]) == ["data:image/png;base64,AAAA"]
    assert system_image_urls([Message.user([img])]) == []

    system, rest = extract_system_message([Message("system", [TextPart("a"), TextPart("b")]), Message.user("U")])
    assert system == "a\n\nb"


def test_network_image_urls_in_order():
    msgs = [
        Message.user([ImagePart("https://x/1.png"), ImagePart("data:image/png;base64,AA")]),
        Message.user("text"),
        Message.user([ImagePart("https://x/2.png")]),
    ]
    assert network_image_urls(msgs) == ["https://x/1.png", "https://x/2.png"]
