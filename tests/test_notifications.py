import logging

import pytest

from mcp_engine import McpServer, NotificationHub, NotificationQueue, ProgressReporter
from mcp_engine.types import notifications as methods


@pytest.fixture
def queue() -> NotificationQueue:
    return NotificationQueue()


@pytest.fixture
def hub(queue: NotificationQueue) -> NotificationHub:
    return NotificationHub(queue, progress_enabled=True)


def test_progress_shape(hub: NotificationHub, queue: NotificationQueue):
    assert hub.report_progress("tok", 0.5, "half way", total=10, current=5)

    assert queue.drain() == [
        {
            "jsonrpc": "2.0",
            "method": "notifications/progress",
            "params": {"progressToken": "tok", "progress": 0.5, "message": "half way", "total": 10, "current": 5},
        }
    ]


def test_progress_omits_unset_fields(hub: NotificationHub, queue: NotificationQueue):
    hub.report_progress(3)

    assert queue.drain() == [{"jsonrpc": "2.0", "method": "notifications/progress", "params": {"progressToken": 3}}]


@pytest.mark.parametrize("progress", [0.0, 1.0])
def test_progress_bounds_are_inclusive(hub: NotificationHub, queue: NotificationQueue, progress: float):
    assert hub.report_progress("tok", progress)
    assert len(queue) == 1


@pytest.mark.parametrize("progress", [1.5, -0.1])
def test_out_of_range_progress_is_dropped(hub: NotificationHub, queue: NotificationQueue, progress: float):
    assert hub.report_progress("tok", progress) is False
    assert queue.drain() == []


def test_progress_is_dropped_while_disabled(queue: NotificationQueue):
    hub = NotificationHub(queue)

    assert hub.report_progress("tok", 0.5) is False
    hub.enable_progress()
    assert hub.report_progress("tok", 0.5)
    hub.enable_progress(False)
    assert hub.report_progress("tok", 0.5) is False

    assert len(queue) == 1


def test_reporter_is_bound_to_its_token(hub: NotificationHub, queue: NotificationQueue):
    reporter = hub.reporter("job-1")

    assert isinstance(reporter, ProgressReporter)
    reporter(0.25, "quarter")
    reporter(current=2, total=8)

    tokens = [notification["params"]["progressToken"] for notification in queue.drain()]
    assert tokens == ["job-1", "job-1"]


def test_emit_without_sink_returns_false():
    hub = NotificationHub(progress_enabled=True)

    assert not hub.has_sink
    assert hub.list_changed(methods.TOOLS_LIST_CHANGED) is False
    assert hub.report_progress("tok", 0.1) is False


def test_sink_failures_are_logged_and_swallowed(caplog: pytest.LogCaptureFixture):
    def broken(notification: dict) -> None:
        raise RuntimeError("socket closed")

    hub = NotificationHub(broken)

    with caplog.at_level(logging.ERROR, logger="mcp_engine.notifications"):
        assert hub.list_changed(methods.PROMPTS_LIST_CHANGED) is False

    assert "Notification sink failed" in caplog.text


def test_set_sink_replaces_and_removes(queue: NotificationQueue):
    hub = NotificationHub()
    hub.set_sink(queue)
    hub.resource_updated("file:///a")
    hub.set_sink(None)
    hub.resource_updated("file:///b")

    assert queue.drain() == [
        {"jsonrpc": "2.0", "method": "notifications/resources/updated", "params": {"uri": "file:///a"}}
    ]


def test_queue_drains_in_order(queue: NotificationQueue):
    for index in range(3):
        queue({"index": index})

    assert len(queue) == 3
    assert [item["index"] for item in queue.drain()] == [0, 1, 2]
    assert queue.drain() == []


def test_server_report_progress_facade(queue: NotificationQueue):
    server = McpServer("s", "1", notification_sink=queue)

    assert server.report_progress("tok", 0.5) is False
    server.enable_progress()
    assert server.report_progress("tok", 0.5, "working")

    assert queue.drain()[0]["params"] == {"progressToken": "tok", "progress": 0.5, "message": "working"}


def test_resource_updated_requires_subscription(queue: NotificationQueue):
    server = McpServer("s", "1", notification_sink=queue)
    server.register_resource({"uri": "file:///a"}, lambda uri: "a")
    queue.drain()

    assert server.notify_resource_updated("file:///a") is False
    server.registry.subscribe("file:///a")
    assert server.notify_resource_updated("file:///a")

    assert queue.drain() == [
        {"jsonrpc": "2.0", "method": "notifications/resources/updated", "params": {"uri": "file:///a"}}
    ]
