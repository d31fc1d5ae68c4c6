"""What :meth:`McpServer.handle` hands back to a transport."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from mcp_engine.types.json_rpc import ErrorData, JSONRPCErrorResponse, JSONRPCResultResponse, RequestId


@dataclass(frozen=True)
class McpResult:
    """Exactly one of ``response`` or ``error`` is set.

    Notifications come back as a placeholder success with ``notification``
    set; transports must not transmit it. Errors are always transmitted,
    including errors raised for malformed notifications.
    """

    response: JSONRPCResultResponse | None = None
    error: JSONRPCErrorResponse | None = None
    notification: bool = False

    @classmethod
    def success(cls, request_id: RequestId, result: dict[str, Any]) -> McpResult:
        return cls(response=JSONRPCResultResponse(id=request_id, result=result))

    @classmethod
    def failure(cls, request_id: RequestId, error: ErrorData) -> McpResult:
        return cls(error=JSONRPCErrorResponse(id=request_id, error=error))

    @classmethod
    def no_reply(cls) -> McpResult:
        return cls(response=JSONRPCResultResponse(id=0, result={}), notification=True)

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def should_reply(self) -> bool:
        return self.is_error or not self.notification

    def to_wire(self) -> dict[str, Any] | None:
        """The JSON object to send, or None when nothing should be sent."""
        if self.error is not None:
            return self.error.to_wire()
        if self.notification or self.response is None:
            return None
        return self.response.to_wire()

    def to_json(self) -> str | None:
        wire = self.to_wire()
        if wire is None:
            return None
        return json.dumps(wire, separators=(",", ":"))
