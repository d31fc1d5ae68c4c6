"""Thin hosts that move messages between a channel and :class:`McpServer`."""

from mcp_engine.transport.http import create_http_app
from mcp_engine.transport.stdio import run_stdio

__all__ = ["create_http_app", "run_stdio"]
