"""MCP server over HTTP whose finance tool can be switched on and off at runtime.

Run with: python examples/toggle_http_server.py
"""

from typing import Any

import uvicorn

from mcp_engine import CallToolResult, HandlerKind, McpServer, ProgressReporter, TextContent, Tool
from mcp_engine.transport import create_http_app
from mcp_engine.utilities.logging import configure_logging, get_logger

logger = get_logger("examples.toggle_http")

server = McpServer("toggle-http", "0.1.0")
server.enable_progress()

FINANCE_TOOL = Tool(name="fetch_bitcoin_price", description="Fetch the current bitcoin price (mocked)")


def fetch_bitcoin_price(arguments: dict[str, Any]) -> str:
    return "BTC/USD: 123456.78"


@server.tool(
    input_schema={
        "type": "object",
        "properties": {"category": {"type": "string"}, "enabled": {"type": "boolean"}},
        "required": ["category", "enabled"],
    },
    kind=HandlerKind.RICH,
)
def toggle_category(arguments: dict[str, Any]) -> CallToolResult:
    """Enable or disable a category of tools"""
    if arguments["category"] != "finance":
        raise ValueError(f"Unknown category: {arguments['category']}")
    if arguments["enabled"]:
        if not server.registry.has_tool(FINANCE_TOOL.name):
            server.register_tool(FINANCE_TOOL, fetch_bitcoin_price)
    else:
        server.unregister_tool(FINANCE_TOOL.name)
    return CallToolResult(
        content=[TextContent(text=f"finance enabled: {server.registry.has_tool(FINANCE_TOOL.name)}")],
        structured_content={"tool_list_version": server.tool_list_version},
    )


@server.tool(kind=HandlerKind.PROGRESS)
def countdown(arguments: dict[str, Any], report: ProgressReporter) -> CallToolResult:
    """Counts down from ``steps`` and reports progress along the way"""
    steps = int(arguments.get("steps", 5))
    for step in range(steps):
        report((step + 1) / steps, f"step {step + 1} of {steps}", total=steps, current=step + 1)
    return CallToolResult(content=[TextContent(text="liftoff")])


# list-changed and progress notifications need a push channel; plain HTTP only logs them
server.set_notification_callback(lambda notification: logger.info("Notification: %s", notification["method"]))

if __name__ == "__main__":
    configure_logging(server.settings.log_level)
    uvicorn.run(create_http_app(server), host=server.settings.host, port=server.settings.port)
