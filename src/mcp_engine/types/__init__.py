"""Wire types for the MCP server engine."""

from mcp_engine.types.base import (
    LATEST_PROTOCOL_VERSION,
    EmptyResult,
    MCPModel,
    ProgressToken,
    RequestMeta,
    RequestParams,
    Result,
)
from mcp_engine.types.common import (
    Annotations,
    ClientCapabilities,
    Implementation,
    ListChangedCapability,
    ResourcesCapability,
    ServerCapabilities,
)
from mcp_engine.types.content import (
    AudioContent,
    ContentBlock,
    ContentBlockAdapter,
    EmbeddedResource,
    ImageContent,
    ResourceLink,
    TextContent,
    audio_content,
    decode_content,
    embedded_resource_content,
    encode_content,
    image_content,
    resource_link_content,
    text_content,
)
from mcp_engine.types.initialize import InitializeRequestParams, InitializeResult
from mcp_engine.types.json_rpc import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    JSONRPC_VERSION,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    RESOURCE_NOT_FOUND,
    SERVER_NOT_INITIALIZED,
    ErrorData,
    JSONRPCErrorResponse,
    JSONRPCNotification,
    JSONRPCRequest,
    JSONRPCResponse,
    JSONRPCResultResponse,
    RequestId,
)
from mcp_engine.types.notifications import (
    ProgressNotificationParams,
    ResourceUpdatedNotificationParams,
    ServerNotificationMethod,
    make_notification,
)
from mcp_engine.types.prompts import (
    GetPromptRequestParams,
    GetPromptResult,
    ListPromptsResult,
    Prompt,
    PromptArgument,
    PromptMessage,
    Role,
)
from mcp_engine.types.resources import (
    BlobResourceContents,
    ListResourcesResult,
    ListResourceTemplatesResult,
    ReadResourceRequestParams,
    ReadResourceResult,
    Resource,
    ResourceContents,
    ResourceTemplate,
    SubscribeRequestParams,
    TextResourceContents,
    UnsubscribeRequestParams,
)
from mcp_engine.types.tools import (
    CallToolRequestParams,
    CallToolResult,
    ListRequestParams,
    ListToolsResult,
    Tool,
    ToolAnnotations,
    ToolResult,
)

__all__ = [
    "LATEST_PROTOCOL_VERSION",
    "JSONRPC_VERSION",
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
    "SERVER_NOT_INITIALIZED",
    "RESOURCE_NOT_FOUND",
    "Annotations",
    "AudioContent",
    "BlobResourceContents",
    "CallToolRequestParams",
    "CallToolResult",
    "ClientCapabilities",
    "ContentBlock",
    "ContentBlockAdapter",
    "EmbeddedResource",
    "EmptyResult",
    "ErrorData",
    "GetPromptRequestParams",
    "GetPromptResult",
    "ImageContent",
    "Implementation",
    "InitializeRequestParams",
    "InitializeResult",
    "JSONRPCErrorResponse",
    "JSONRPCNotification",
    "JSONRPCRequest",
    "JSONRPCResponse",
    "JSONRPCResultResponse",
    "ListChangedCapability",
    "ListPromptsResult",
    "ListRequestParams",
    "ListResourcesResult",
    "ListResourceTemplatesResult",
    "ListToolsResult",
    "MCPModel",
    "ProgressNotificationParams",
    "ProgressToken",
    "Prompt",
    "PromptArgument",
    "PromptMessage",
    "ReadResourceRequestParams",
    "ReadResourceResult",
    "RequestId",
    "RequestMeta",
    "RequestParams",
    "Resource",
    "ResourceContents",
    "ResourceLink",
    "ResourceTemplate",
    "ResourceUpdatedNotificationParams",
    "ResourcesCapability",
    "Result",
    "Role",
    "ServerCapabilities",
    "ServerNotificationMethod",
    "SubscribeRequestParams",
    "TextContent",
    "TextResourceContents",
    "Tool",
    "ToolAnnotations",
    "ToolResult",
    "UnsubscribeRequestParams",
    "audio_content",
    "decode_content",
    "embedded_resource_content",
    "encode_content",
    "image_content",
    "make_notification",
    "resource_link_content",
    "text_content",
]
