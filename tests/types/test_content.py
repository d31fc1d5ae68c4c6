import pytest
from pydantic import ValidationError

from mcp_engine.types import (
    Annotations,
    AudioContent,
    BlobResourceContents,
    EmbeddedResource,
    ImageContent,
    ResourceLink,
    TextContent,
    TextResourceContents,
    audio_content,
    decode_content,
    embedded_resource_content,
    encode_content,
    image_content,
    resource_link_content,
    text_content,
)


def test_text_content():
    assert encode_content(text_content("hello")) == {"type": "text", "text": "hello"}


def test_text_content_with_annotations():
    block = text_content("hello", Annotations(audience=["user"], priority=0.5))

    assert encode_content(block) == {"type": "text", "text": "hello", "annotations": {"audience": ["user"], "priority": 0.5}}


def test_image_and_audio_use_mime_type_alias():
    assert encode_content(image_content("aGk=", "image/png")) == {"type": "image", "data": "aGk=", "mimeType": "image/png"}
    assert encode_content(audio_content("aGk=", "audio/wav")) == {"type": "audio", "data": "aGk=", "mimeType": "audio/wav"}


def test_resource_link_only_carries_supplied_fields():
    assert encode_content(resource_link_content("file:///a.txt")) == {"type": "resource_link", "uri": "file:///a.txt"}
    assert encode_content(resource_link_content("file:///a.txt", name="a", mime_type="text/plain")) == {
        "type": "resource_link",
        "uri": "file:///a.txt",
        "name": "a",
        "mimeType": "text/plain",
    }


def test_embedded_resource_from_model_and_dict():
    from_model = embedded_resource_content(TextResourceContents(uri="file:///a.txt", text="body"))
    from_dict = embedded_resource_content({"uri": "file:///b.bin", "blob": "AAE=", "mimeType": "application/octet-stream"})

    assert encode_content(from_model) == {"type": "resource", "resource": {"uri": "file:///a.txt", "text": "body"}}
    assert isinstance(from_dict.resource, BlobResourceContents)
    assert from_dict.resource.mime_type == "application/octet-stream"


@pytest.mark.parametrize(
    ("wire", "expected_type"),
    [
        ({"type": "text", "text": "hi"}, TextContent),
        ({"type": "image", "data": "aGk=", "mimeType": "image/png"}, ImageContent),
        ({"type": "audio", "data": "aGk=", "mimeType": "audio/wav"}, AudioContent),
        ({"type": "resource_link", "uri": "file:///a", "description": "a file"}, ResourceLink),
        ({"type": "resource", "resource": {"uri": "file:///a", "text": "x"}}, EmbeddedResource),
    ],
)
def test_decode_selects_variant_by_type(wire: dict, expected_type: type):
    block = decode_content(wire)

    assert isinstance(block, expected_type)
    assert encode_content(block) == wire


def test_decode_rejects_unknown_type():
    with pytest.raises(ValidationError):
        decode_content({"type": "video", "data": "x"})


def test_decode_rejects_missing_required_field():
    with pytest.raises(ValidationError):
        decode_content({"type": "image", "data": "aGk="})
