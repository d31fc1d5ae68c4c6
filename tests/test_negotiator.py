import json

import pytest

from mcp_engine import McpServer, ServerSettings, Tool
from mcp_engine.types import LATEST_PROTOCOL_VERSION, PARSE_ERROR
from tests.helpers import error_of, init_message, result_of, send


def test_initialize_result_shape():
    server = McpServer("TestServer", "1.0.0")

    result = result_of(server.handle(json.dumps(init_message())))

    assert result == {
        "protocolVersion": LATEST_PROTOCOL_VERSION,
        "capabilities": {
            "tools": {"listChanged": True},
            "prompts": {"listChanged": True},
            "resources": {"listChanged": True, "subscribe": True},
            "progress": False,
        },
        "serverInfo": {"name": "TestServer", "version": "1.0.0"},
    }
    assert server.initialized


def test_initialize_echoes_request_id():
    server = McpServer("s", "1")

    wire = server.handle(json.dumps(init_message(request_id=42))).to_wire()

    assert wire is not None
    assert wire["id"] == 42
    assert wire["jsonrpc"] == "2.0"


def test_progress_capability_tracks_enable_progress():
    server = McpServer("s", "1")
    server.enable_progress()

    result = result_of(server.handle(json.dumps(init_message())))

    assert result["capabilities"]["progress"] is True


def test_capabilities_follow_settings():
    settings = ServerSettings(enable_progress=True, resources_subscribe=False, prompts_list_changed=False)
    server = McpServer("s", "1", settings=settings, instructions="Use the tools wisely.")

    result = result_of(server.handle(json.dumps(init_message())))

    assert result["capabilities"]["progress"] is True
    assert result["capabilities"]["resources"] == {"listChanged": True, "subscribe": False}
    assert result["capabilities"]["prompts"] == {"listChanged": False}
    assert result["instructions"] == "Use the tools wisely."


def test_client_info_is_recorded():
    server = McpServer("s", "1")
    server.handle(json.dumps(init_message()))

    assert server.negotiator.client_info is not None
    assert server.negotiator.client_info.name == "test-client"
    assert server.negotiator.client_protocol_version == "2025-06-18"


def test_repeated_initialize_keeps_registered_state():
    server = McpServer("s", "1")
    server.handle(json.dumps(init_message()))
    server.register_tool(Tool(name="kept"), lambda args: "still here")
    version = server.tool_list_version

    again = server.handle(json.dumps(init_message(request_id=2)))

    assert not again.is_error
    assert server.tool_list_version == version
    assert [tool["name"] for tool in result_of(send(server, "tools/list"))["tools"]] == ["kept"]


@pytest.mark.parametrize(
    "params",
    [
        {},
        {"capabilities": {}, "clientInfo": {"name": "c", "version": "1"}},
        {"protocolVersion": 2025, "capabilities": {}, "clientInfo": {"name": "c", "version": "1"}},
        {"protocolVersion": "2025-06-18", "capabilities": {}},
    ],
)
def test_malformed_initialize_params(params: dict):
    server = McpServer("s", "1")

    outcome = send(server, "initialize", params)

    assert error_of(outcome)["code"] == PARSE_ERROR
    assert not server.initialized


def test_initialized_notification_has_no_reply():
    server = McpServer("s", "1")
    server.handle(json.dumps(init_message()))

    outcome = server.handle(json.dumps({"jsonrpc": "2.0", "method": "notifications/initialized"}))

    assert outcome.to_wire() is None
    assert not outcome.should_reply
