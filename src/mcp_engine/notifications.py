"""Outbound notification hub.

The host installs one sink. Every server-initiated notification (list changes,
resource updates, progress) is shaped as a JSON-RPC notification object and
handed to that sink. Hosts that push can forward each object immediately;
hosts that poll can install a :class:`NotificationQueue` and drain it after
each message.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from mcp_engine.types import notifications as methods
from mcp_engine.types.base import MCPModel, ProgressToken
from mcp_engine.types.notifications import (
    ProgressNotificationParams,
    ResourceUpdatedNotificationParams,
    ServerNotificationMethod,
    make_notification,
)

logger = logging.getLogger(__name__)

NotificationSink = Callable[[dict[str, Any]], None]


class NotificationQueue:
    """Sink that buffers notifications until the host drains them."""

    def __init__(self) -> None:
        self._pending: deque[dict[str, Any]] = deque()
        self._lock = threading.Lock()

    def __call__(self, notification: dict[str, Any]) -> None:
        with self._lock:
            self._pending.append(notification)

    def __len__(self) -> int:
        with self._lock:
            return len(self._pending)

    def drain(self) -> list[dict[str, Any]]:
        """Remove and return everything queued so far, oldest first."""
        with self._lock:
            drained = list(self._pending)
            self._pending.clear()
        return drained


class NotificationHub:
    """Single outbound channel for server-initiated notifications.

    Deliveries to the sink are serialized, so a sink need not be thread-safe
    and notifications raised by one call reach the sink in emission order.
    """

    def __init__(self, sink: NotificationSink | None = None, *, progress_enabled: bool = False) -> None:
        self._sink = sink
        self._progress_enabled = progress_enabled
        self._lock = threading.RLock()

    @property
    def has_sink(self) -> bool:
        return self._sink is not None

    def set_sink(self, sink: NotificationSink | None) -> None:
        with self._lock:
            self._sink = sink

    @property
    def progress_enabled(self) -> bool:
        return self._progress_enabled

    def enable_progress(self, enabled: bool = True) -> None:
        with self._lock:
            self._progress_enabled = enabled
        logger.debug("Progress reporting %s", "enabled" if enabled else "disabled")

    def emit(self, method: ServerNotificationMethod, params: MCPModel | None = None) -> bool:
        """Hand one notification to the sink. Returns False when nothing was delivered."""
        notification = make_notification(method, params)
        with self._lock:
            sink = self._sink
            if sink is None:
                return False
            try:
                sink(notification)
            except Exception:
                logger.exception("Notification sink failed for %s", method)
                return False
        return True

    def list_changed(self, method: ServerNotificationMethod) -> bool:
        return self.emit(method)

    def resource_updated(self, uri: str) -> bool:
        return self.emit(methods.RESOURCE_UPDATED, ResourceUpdatedNotificationParams(uri=uri))

    def report_progress(
        self,
        progress_token: ProgressToken,
        progress: float | None = None,
        status: str | None = None,
        total: float | None = None,
        current: float | None = None,
    ) -> bool:
        """Emit a progress notification.

        Reports are dropped without error while progress is disabled, and
        whenever ``progress`` falls outside ``[0.0, 1.0]``.
        """
        if not self._progress_enabled:
            return False
        if progress is not None and not 0.0 <= progress <= 1.0:
            logger.debug("Dropping out-of-range progress %r for token %r", progress, progress_token)
            return False
        params = ProgressNotificationParams(
            progress_token=progress_token,
            progress=progress,
            message=status,
            total=total,
            current=current,
        )
        return self.emit(methods.PROGRESS, params)

    def reporter(self, progress_token: ProgressToken) -> ProgressReporter:
        return ProgressReporter(self, progress_token)


@dataclass(frozen=True)
class ProgressReporter:
    """Progress callback handed to progress-enabled handlers, bound to one token."""

    hub: NotificationHub
    progress_token: ProgressToken

    def __call__(
        self,
        progress: float | None = None,
        status: str | None = None,
        total: float | None = None,
        current: float | None = None,
    ) -> bool:
        return self.hub.report_progress(self.progress_token, progress, status, total, current)
