"""Message builders shared by the test-suite."""

import json
from itertools import count
from typing import Any

from mcp_engine import McpResult, McpServer

_ids = count(100)


def init_message(request_id: int = 1) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "method": "initialize",
        "params": {
            "protocolVersion": "2025-06-18",
            "capabilities": {},
            "clientInfo": {"name": "test-client", "version": "1.0"},
        },
    }


def initialize(server: McpServer) -> McpResult:
    result = server.handle(json.dumps(init_message()))
    assert not result.is_error
    return result


def send(server: McpServer, method: str, params: dict[str, Any] | None = None) -> McpResult:
    message: dict[str, Any] = {"jsonrpc": "2.0", "id": next(_ids), "method": method}
    if params is not None:
        message["params"] = params
    return server.handle(json.dumps(message))


def result_of(outcome: McpResult) -> dict[str, Any]:
    assert outcome.response is not None, outcome.error
    return outcome.response.result


def error_of(outcome: McpResult) -> dict[str, Any]:
    assert outcome.error is not None, outcome.response
    return outcome.error.error.model_dump(exclude_none=True)
