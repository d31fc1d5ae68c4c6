"""MCP Base Types - Core type definitions shared by every message shape."""

from typing import Annotated, Any, Final

from pydantic import BaseModel, ConfigDict, Field

LATEST_PROTOCOL_VERSION: Final[str] = "2025-06-18"

# Opaque identifier correlating progress notifications with an in-flight call
ProgressToken = str | int


class MCPModel(BaseModel):
    """Base class for all MCP domain types. Allows extra fields for forward compatibility."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Dump with wire aliases, omitting every field that was left unset."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class RequestMeta(MCPModel):
    """Metadata for MCP requests."""

    progress_token: Annotated[ProgressToken | None, Field(alias="progressToken")] = None


class RequestParams(MCPModel):
    """Base class for MCP request parameters with _meta support."""

    meta: Annotated[RequestMeta | None, Field(alias="_meta")] = None


class Result(MCPModel):
    """Base class for MCP results."""


class EmptyResult(Result):
    """A response that indicates success but carries no data."""
