"""Minimal MCP server over stdio. Run with: python examples/echo_stdio_server.py"""

from typing import Any

import anyio

from mcp_engine import McpServer, Prompt, PromptArgument, PromptMessage, Resource, TextContent
from mcp_engine.transport import run_stdio
from mcp_engine.utilities.logging import configure_logging

server = McpServer("echo-stdio", "0.1.0")


@server.tool(input_schema={"type": "object", "properties": {"text": {"type": "string"}}, "required": ["text"]})
def echo(arguments: dict[str, Any]) -> str:
    """Returns its input unchanged"""
    return arguments["text"]


@server.prompt(
    Prompt(
        name="summarize",
        description="Asks the model for a one-paragraph summary",
        arguments=[PromptArgument(name="text", required=True)],
    )
)
def summarize(arguments: dict[str, Any]) -> list[PromptMessage]:
    return [PromptMessage(role="user", content=TextContent(text=f"Summarize:\n\n{arguments['text']}"))]


@server.resource(Resource(uri="echo://readme", name="readme", mime_type="text/plain"))
def readme(uri: str) -> str:
    return "This server echoes text back."


if __name__ == "__main__":
    configure_logging(server.settings.log_level)
    anyio.run(run_stdio, server)
