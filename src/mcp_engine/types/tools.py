"""MCP Tools Types - Types for tool listing and invocation."""

from typing import Annotated, Any

from pydantic import Field

from mcp_engine.types.base import MCPModel, RequestParams, Result
from mcp_engine.types.content import ContentBlock


class ToolAnnotations(MCPModel):
    """Additional properties describing a Tool to clients."""

    destructive_hint: Annotated[bool | None, Field(alias="destructiveHint")] = None
    idempotent_hint: Annotated[bool | None, Field(alias="idempotentHint")] = None
    open_world_hint: Annotated[bool | None, Field(alias="openWorldHint")] = None
    read_only_hint: Annotated[bool | None, Field(alias="readOnlyHint")] = None
    title: str | None = None


class Tool(MCPModel):
    """Definition of a tool the server provides."""

    name: str
    title: str | None = None
    description: str = ""
    input_schema: Annotated[dict[str, Any], Field(alias="inputSchema", default_factory=lambda: {"type": "object"})]
    output_schema: Annotated[dict[str, Any] | None, Field(alias="outputSchema")] = None
    annotations: ToolAnnotations | None = None


class ListToolsResult(Result):
    """Server's response to a tools/list request.

    ``nextCursor`` is always emitted, as ``null`` when there is no further page.
    """

    tools: list[Tool]
    next_cursor: Annotated[str | None, Field(alias="nextCursor")] = None

    def to_wire(self) -> dict[str, Any]:
        return {"tools": [tool.to_wire() for tool in self.tools], "nextCursor": self.next_cursor}


class ListRequestParams(RequestParams):
    """Parameters shared by every */list request."""

    cursor: str | None = None


class CallToolRequestParams(RequestParams):
    """Parameters for tools/call request."""

    name: str
    arguments: dict[str, Any] | None = None


class CallToolResult(Result):
    """Server's response to a tools/call request."""

    content: list[ContentBlock] = Field(default_factory=list)
    structured_content: Annotated[dict[str, Any] | None, Field(alias="structuredContent")] = None
    is_error: Annotated[bool, Field(alias="isError")] = False


ToolResult = CallToolResult
