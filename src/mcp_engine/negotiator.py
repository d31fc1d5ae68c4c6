"""The ``initialize`` handshake."""

from __future__ import annotations

import logging
import threading
from typing import Any

from mcp_engine.exceptions import not_initialized
from mcp_engine.notifications import NotificationHub
from mcp_engine.settings import ServerSettings
from mcp_engine.types.base import LATEST_PROTOCOL_VERSION
from mcp_engine.types.common import ClientCapabilities, Implementation, ServerCapabilities
from mcp_engine.types.initialize import InitializeRequestParams, InitializeResult

logger = logging.getLogger(__name__)


class CapabilityNegotiator:
    """Validates the client's handshake and answers with the server's identity and capabilities.

    Repeated ``initialize`` requests are accepted: some clients resend the
    handshake, and answering again never resets registered state.
    """

    def __init__(self, server_info: Implementation, settings: ServerSettings, hub: NotificationHub) -> None:
        self.server_info = server_info
        self.settings = settings
        self._hub = hub
        self._lock = threading.Lock()
        self._initialized = False
        self.client_info: Implementation | None = None
        self.client_capabilities: ClientCapabilities | None = None
        self.client_protocol_version: str | None = None

    @property
    def initialized(self) -> bool:
        return self._initialized

    def capabilities(self) -> ServerCapabilities:
        return self.settings.capabilities(progress=self._hub.progress_enabled)

    def initialize(self, params: dict[str, Any] | None) -> InitializeResult:
        """Run the handshake.

        Raises:
            pydantic.ValidationError: ``params`` lacks a protocol version string,
                a capabilities object or a client info object.
        """
        parsed = InitializeRequestParams.model_validate(params or {})
        with self._lock:
            if self._initialized:
                logger.info("Repeated initialize from %s; keeping existing state", parsed.client_info.name)
            self._initialized = True
            self.client_info = parsed.client_info
            self.client_capabilities = parsed.capabilities
            self.client_protocol_version = parsed.protocol_version

        logger.debug(
            "Initialized for client %s %s (protocol %s)",
            parsed.client_info.name,
            parsed.client_info.version,
            parsed.protocol_version,
        )
        return InitializeResult(
            protocol_version=LATEST_PROTOCOL_VERSION,
            capabilities=self.capabilities(),
            server_info=self.server_info,
            instructions=self.settings.instructions,
        )

    def require_initialized(self) -> None:
        if not self._initialized:
            raise not_initialized()
