"""Server configuration.

All settings can be configured via environment variables with the prefix
``MCP_ENGINE_``. For example, ``MCP_ENGINE_ENABLE_PROGRESS=true`` turns on
progress reporting.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from mcp_engine.types.common import ListChangedCapability, ResourcesCapability, ServerCapabilities


class ServerSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MCP_ENGINE_",
        env_file=".env",
        extra="ignore",
    )

    name: str = "mcp-engine"
    version: str = "0.1.0"
    instructions: str | None = None

    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # capability flags
    enable_progress: bool = False
    tools_list_changed: bool = True
    prompts_list_changed: bool = True
    resources_list_changed: bool = True
    resources_subscribe: bool = True

    # HTTP host settings
    host: str = "127.0.0.1"
    port: int = 8097
    http_path: str = "/mcp"

    def capabilities(self, *, progress: bool | None = None) -> ServerCapabilities:
        """Build the capability object advertised during initialize."""
        return ServerCapabilities(
            tools=ListChangedCapability(list_changed=self.tools_list_changed),
            prompts=ListChangedCapability(list_changed=self.prompts_list_changed),
            resources=ResourcesCapability(
                list_changed=self.resources_list_changed,
                subscribe=self.resources_subscribe,
            ),
            progress=self.enable_progress if progress is None else progress,
        )
