"""Server-to-client notification shapes."""

from typing import Annotated, Any, Literal

from pydantic import Field

from mcp_engine.types.base import MCPModel, ProgressToken
from mcp_engine.types.json_rpc import JSONRPCNotification

ServerNotificationMethod = Literal[
    "notifications/progress",
    "notifications/resources/updated",
    "notifications/resources/list_changed",
    "notifications/tools/list_changed",
    "notifications/prompts/list_changed",
]

TOOLS_LIST_CHANGED: ServerNotificationMethod = "notifications/tools/list_changed"
PROMPTS_LIST_CHANGED: ServerNotificationMethod = "notifications/prompts/list_changed"
RESOURCES_LIST_CHANGED: ServerNotificationMethod = "notifications/resources/list_changed"
RESOURCE_UPDATED: ServerNotificationMethod = "notifications/resources/updated"
PROGRESS: ServerNotificationMethod = "notifications/progress"


class ProgressNotificationParams(MCPModel):
    """Parameters for a notifications/progress notification."""

    progress_token: Annotated[ProgressToken, Field(alias="progressToken")]
    progress: float | None = None
    message: str | None = None
    total: float | None = None
    current: float | None = None


class ResourceUpdatedNotificationParams(MCPModel):
    uri: str


def make_notification(method: ServerNotificationMethod, params: MCPModel | None = None) -> dict[str, Any]:
    """Shape a server notification as the JSON object handed to the sink."""
    notification = JSONRPCNotification(method=method, params=params.to_wire() if params is not None else None)
    return notification.to_wire()
