import io
import json
import threading
from typing import Any

import anyio
import pytest

from mcp_engine import CallToolResult, McpServer, ProgressReporter, TextContent, Tool
from mcp_engine.transport import run_stdio
from tests.helpers import init_message

pytestmark = pytest.mark.anyio


async def serve(server: McpServer, *messages: dict[str, Any] | str) -> list[dict[str, Any]]:
    lines = [message if isinstance(message, str) else json.dumps(message) for message in messages]
    stdin = anyio.wrap_file(io.StringIO("\n".join(lines) + "\n"))
    stdout = anyio.wrap_file(io.StringIO())

    await run_stdio(server, stdin, stdout)

    return [json.loads(line) for line in stdout.wrapped.getvalue().splitlines()]


async def test_replies_in_order(server: McpServer):
    written = await serve(
        server,
        init_message(),
        {"jsonrpc": "2.0", "method": "notifications/initialized"},
        {"jsonrpc": "2.0", "id": 2, "method": "tools/list"},
        {"jsonrpc": "2.0", "id": 3, "method": "tools/call", "params": {"name": "secret_fetcher", "arguments": {}}},
    )

    assert [message["id"] for message in written] == [1, 2, 3]
    assert written[2]["result"]["content"][0]["text"] == "Leet greetings from the universe! Hello, friend!"


async def test_blank_lines_are_skipped_and_errors_are_written(server: McpServer):
    written = await serve(server, "", "   ", "{not json")

    assert written == [{"jsonrpc": "2.0", "id": 0, "error": {"code": -32700, "message": "Invalid JSON"}}]


async def test_notifications_precede_the_reply():
    server = McpServer("s", "1")
    server.enable_progress()

    def add_tool(arguments: dict[str, Any], report: ProgressReporter) -> CallToolResult:
        report(0.5, "registering")
        server.register_tool(Tool(name="added"), lambda args: "ok")
        return CallToolResult(content=[TextContent(text="done")])

    server.register_progress_tool(Tool(name="add_tool"), add_tool)

    written = await serve(
        server,
        init_message(),
        {
            "jsonrpc": "2.0",
            "id": 2,
            "method": "tools/call",
            "params": {"name": "add_tool", "arguments": {}, "_meta": {"progressToken": "p-1"}},
        },
    )

    assert [message.get("method", message.get("id")) for message in written] == [
        1,
        "notifications/progress",
        "notifications/tools/list_changed",
        2,
    ]
    assert written[1]["params"] == {"progressToken": "p-1", "progress": 0.5, "message": "registering"}


async def test_installs_its_own_sink(server: McpServer):
    seen: list[dict[str, Any]] = []
    server.set_notification_callback(seen.append)

    await serve(server, init_message())

    server.register_tool(Tool(name="late"), lambda args: "ok")
    assert seen == []


async def test_handlers_run_off_the_event_loop_thread(server: McpServer):
    handler_threads: list[int] = []

    def where(arguments: dict[str, Any]) -> str:
        handler_threads.append(threading.get_ident())
        return "ok"

    server.register_tool(Tool(name="where"), where)

    written = await serve(
        server,
        init_message(),
        {"jsonrpc": "2.0", "id": 2, "method": "tools/call", "params": {"name": "where"}},
    )

    assert written[-1]["result"]["content"][0]["text"] == "ok"
    assert handler_threads and handler_threads[0] != threading.get_ident()
