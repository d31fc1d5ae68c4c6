"""MCP Common Types - Shared types used across the protocol."""

from typing import Annotated, Any, Literal

from pydantic import Field

from mcp_engine.types.base import MCPModel


class Annotations(MCPModel):
    """Optional annotations for the client."""

    audience: list[Literal["user", "assistant"]] | None = None
    priority: Annotated[float | None, Field(ge=0.0, le=1.0)] = None
    last_modified: Annotated[str | None, Field(alias="lastModified")] = None


class Implementation(MCPModel):
    """Describes the name and version of an MCP implementation."""

    name: str
    version: str
    title: str | None = None


class ClientCapabilities(MCPModel):
    """Capabilities that a client may support."""

    experimental: dict[str, Any] | None = None
    roots: dict[str, Any] | None = None
    sampling: dict[str, Any] | None = None
    elicitation: dict[str, Any] | None = None


class ListChangedCapability(MCPModel):
    list_changed: Annotated[bool, Field(alias="listChanged")] = True


class ResourcesCapability(ListChangedCapability):
    subscribe: bool = True


class ServerCapabilities(MCPModel):
    """Capabilities that the server advertises during initialize.

    ``progress`` is always present and reports whether the host turned
    progress reporting on.
    """

    tools: ListChangedCapability = Field(default_factory=ListChangedCapability)
    prompts: ListChangedCapability = Field(default_factory=ListChangedCapability)
    resources: ResourcesCapability = Field(default_factory=ResourcesCapability)
    progress: bool = False
    experimental: dict[str, Any] | None = None
