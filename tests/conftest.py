import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from mcp_engine import McpServer, NotificationQueue, Prompt, PromptArgument, PromptMessage, TextContent, Tool
from tests.helpers import initialize


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Keep MCP_ENGINE_* variables and stray .env files out of ServerSettings."""
    for key in list(os.environ):
        if key.startswith("MCP_ENGINE_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture
def server() -> McpServer:
    """A server with one simple tool and one prompt requiring an argument."""
    server = McpServer("TestServer", "1.0.0")

    def secret_fetcher(arguments: dict[str, Any]) -> str:
        recipient = arguments.get("recipient", "friend")
        return f"Leet greetings from the universe! Hello, {recipient}!"

    server.register_tool(
        Tool(
            name="secret_fetcher",
            description="Delivers a secret greeting",
            input_schema={
                "type": "object",
                "properties": {"recipient": {"type": "string", "description": "Who to greet (optional)"}},
                "required": [],
                "additionalProperties": False,
            },
        ),
        secret_fetcher,
    )

    def code_review(arguments: dict[str, Any]) -> list[PromptMessage]:
        return [PromptMessage(role="user", content=TextContent(text=f"Please review this code:\n\n{arguments['code']}"))]

    server.register_prompt(
        Prompt(
            name="code_review",
            description="Asks the LLM to analyze code quality",
            arguments=[PromptArgument(name="code", description="The code to review", required=True)],
        ),
        code_review,
    )
    return server


@pytest.fixture
def ready_server(server: McpServer) -> McpServer:
    initialize(server)
    return server


@pytest.fixture
def notifications(server: McpServer) -> NotificationQueue:
    queue = NotificationQueue()
    server.set_notification_callback(queue)
    return queue
