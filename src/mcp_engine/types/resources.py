"""MCP Resource Types - Types for resources, templates and their contents."""

from typing import Annotated

from pydantic import Field

from mcp_engine.types.base import MCPModel, RequestParams, Result
from mcp_engine.types.common import Annotations


class ResourceContents(MCPModel):
    """The contents of a specific resource or sub-resource."""

    uri: str
    mime_type: Annotated[str | None, Field(alias="mimeType")] = None


class TextResourceContents(ResourceContents):
    """Text contents of a resource."""

    text: str


class BlobResourceContents(ResourceContents):
    """Binary contents of a resource (base64 encoded)."""

    blob: str


class Resource(MCPModel):
    """A known resource that the server is capable of reading."""

    uri: str
    name: str | None = None
    title: str | None = None
    description: str | None = None
    mime_type: Annotated[str | None, Field(alias="mimeType")] = None
    annotations: Annotations | None = None
    size: int | None = None


class ResourceTemplate(MCPModel):
    """A template description for resources available on the server."""

    uri_template: Annotated[str, Field(alias="uriTemplate")]
    name: str | None = None
    title: str | None = None
    description: str | None = None
    mime_type: Annotated[str | None, Field(alias="mimeType")] = None
    annotations: Annotations | None = None


class ListResourcesResult(Result):
    resources: list[Resource]


class ListResourceTemplatesResult(Result):
    resource_templates: Annotated[list[ResourceTemplate], Field(alias="resourceTemplates")]


class ReadResourceRequestParams(RequestParams):
    uri: str


class ReadResourceResult(Result):
    contents: list[TextResourceContents | BlobResourceContents]


class SubscribeRequestParams(RequestParams):
    uri: str


class UnsubscribeRequestParams(RequestParams):
    uri: str
