"""MCP Prompt Types - Types for prompt listing and rendering."""

from typing import Any, Literal

from pydantic import Field

from mcp_engine.types.base import MCPModel, RequestParams, Result
from mcp_engine.types.content import ContentBlock

Role = Literal["user", "assistant"]


class PromptArgument(MCPModel):
    """An argument that a prompt template accepts."""

    name: str
    description: str | None = None
    required: bool = False


class Prompt(MCPModel):
    """A prompt or prompt template that the server offers."""

    name: str
    title: str | None = None
    description: str | None = None
    arguments: list[PromptArgument] = Field(default_factory=list)

    def missing_arguments(self, arguments: dict[str, Any] | None) -> list[str]:
        """Names of required arguments absent from ``arguments``, in declaration order."""
        supplied = arguments or {}
        return [arg.name for arg in self.arguments if arg.required and arg.name not in supplied]


class PromptMessage(MCPModel):
    """Describes a message returned as part of a prompt."""

    role: Role
    content: ContentBlock


class ListPromptsResult(Result):
    prompts: list[Prompt]


class GetPromptRequestParams(RequestParams):
    name: str
    arguments: dict[str, Any] | None = None


class GetPromptResult(Result):
    description: str | None = None
    messages: list[PromptMessage]
