"""MCP Content Types - Content block types used in prompts and tool results.

Every block is a closed variant keyed by its ``type`` string. Optional fields
that were never supplied are dropped from the encoded form rather than sent
as ``null``.
"""

from typing import Annotated, Any, Literal

from pydantic import Field, TypeAdapter

from mcp_engine.types.base import MCPModel
from mcp_engine.types.common import Annotations
from mcp_engine.types.resources import BlobResourceContents, TextResourceContents


class TextContent(MCPModel):
    """Text provided to or from an LLM."""

    type: Literal["text"] = "text"
    text: str
    annotations: Annotations | None = None


class ImageContent(MCPModel):
    """An image provided to or from an LLM."""

    type: Literal["image"] = "image"
    data: str  # base64 encoded
    mime_type: Annotated[str, Field(alias="mimeType")]
    annotations: Annotations | None = None


class AudioContent(MCPModel):
    """Audio provided to or from an LLM."""

    type: Literal["audio"] = "audio"
    data: str  # base64 encoded
    mime_type: Annotated[str, Field(alias="mimeType")]
    annotations: Annotations | None = None


class ResourceLink(MCPModel):
    """A link to another resource, included in content."""

    type: Literal["resource_link"] = "resource_link"
    uri: str
    name: str | None = None
    description: str | None = None
    mime_type: Annotated[str | None, Field(alias="mimeType")] = None
    annotations: Annotations | None = None


class EmbeddedResource(MCPModel):
    """The contents of a resource, embedded into a prompt or tool call result."""

    type: Literal["resource"] = "resource"
    resource: TextResourceContents | BlobResourceContents
    annotations: Annotations | None = None


ContentBlock = Annotated[
    TextContent | ImageContent | AudioContent | ResourceLink | EmbeddedResource,
    Field(discriminator="type"),
]

ContentBlockAdapter: TypeAdapter[ContentBlock] = TypeAdapter(ContentBlock)


def text_content(text: str, annotations: Annotations | None = None) -> TextContent:
    return TextContent(text=text, annotations=annotations)


def image_content(data: str, mime_type: str, annotations: Annotations | None = None) -> ImageContent:
    return ImageContent(data=data, mime_type=mime_type, annotations=annotations)


def audio_content(data: str, mime_type: str, annotations: Annotations | None = None) -> AudioContent:
    return AudioContent(data=data, mime_type=mime_type, annotations=annotations)


def resource_link_content(
    uri: str,
    name: str | None = None,
    description: str | None = None,
    mime_type: str | None = None,
    annotations: Annotations | None = None,
) -> ResourceLink:
    return ResourceLink(uri=uri, name=name, description=description, mime_type=mime_type, annotations=annotations)


def embedded_resource_content(
    resource: TextResourceContents | BlobResourceContents | dict[str, Any],
    annotations: Annotations | None = None,
) -> EmbeddedResource:
    return EmbeddedResource.model_validate({"resource": resource, "annotations": annotations})


def encode_content(block: ContentBlock) -> dict[str, Any]:
    """Encode a content block to its wire dict."""
    return block.to_wire()


def decode_content(data: dict[str, Any]) -> ContentBlock:
    """Decode a wire dict back into the matching content block."""
    return ContentBlockAdapter.validate_python(data)
