"""Stdio host - run an McpServer over newline-delimited JSON-RPC on stdin/stdout.

Messages are handled strictly one at a time, each on a worker thread so a slow
handler never blocks the event loop. Notifications raised while a message is
handled are written before that message's reply.
"""

from __future__ import annotations

import json
import sys
from io import TextIOWrapper

import anyio
import anyio.to_thread

from mcp_engine.notifications import NotificationQueue
from mcp_engine.server import McpServer
from mcp_engine.utilities.logging import get_logger

logger = get_logger(__name__)


class _NonClosingTextIOWrapper(TextIOWrapper):
    """Text wrapper that never closes the process' real stdio handle."""

    def close(self) -> None:
        if self.closed:
            return
        if self.writable():
            self.flush()


async def run_stdio(
    server: McpServer,
    stdin: anyio.AsyncFile[str] | None = None,
    stdout: anyio.AsyncFile[str] | None = None,
) -> None:
    """Serve ``server`` until stdin is exhausted.

    Installs a :class:`NotificationQueue` as the server's notification sink.
    """
    if stdin is None:
        stdin = anyio.wrap_file(_NonClosingTextIOWrapper(sys.stdin.buffer, encoding="utf-8"))
    if stdout is None:
        stdout = anyio.wrap_file(_NonClosingTextIOWrapper(sys.stdout.buffer, encoding="utf-8"))

    queue = NotificationQueue()
    server.set_notification_callback(queue)
    logger.info("Stdio server %r starting", server.name)

    async def write_line(data: str) -> None:
        await stdout.write(data + "\n")
        await stdout.flush()

    async for raw_line in stdin:
        line = raw_line.strip()
        if not line:
            continue
        logger.debug("Received: %s", line)

        result = await anyio.to_thread.run_sync(server.handle, line)

        for notification in queue.drain():
            await write_line(json.dumps(notification, separators=(",", ":")))
        if (reply := result.to_json()) is not None:
            logger.debug("Sent: %s", reply)
            await write_line(reply)

    # registrations made outside a message still reach the client
    for notification in queue.drain():
        await write_line(json.dumps(notification, separators=(",", ":")))
    logger.info("Stdio server %r shutting down", server.name)
