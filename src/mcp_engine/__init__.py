"""A transport-agnostic engine for the Model Context Protocol (MCP).

The engine accepts one JSON-RPC message as text and returns a response, an
error, or nothing (for notifications). Hosts register tools, prompts and
resources on an :class:`McpServer` and plug it into whatever channel they
own.

## Example

```python
from mcp_engine import McpServer

server = McpServer("Demo", "1.0.0")

@server.tool(input_schema={"type": "object", "properties": {"name": {"type": "string"}}})
def echo(arguments: dict) -> str:
    \"\"\"Say hi\"\"\"
    return f"hi, {arguments['name']}"

result = server.handle('{"jsonrpc":"2.0","id":1,"method":"ping"}')
print(result.to_json())
```
"""

from mcp_engine.exceptions import McpError
from mcp_engine.notifications import NotificationHub, NotificationQueue, NotificationSink, ProgressReporter
from mcp_engine.registry import HandlerKind, Registry, ToolBinding
from mcp_engine.result import McpResult
from mcp_engine.server import McpServer
from mcp_engine.settings import ServerSettings
from mcp_engine.types import (
    LATEST_PROTOCOL_VERSION,
    Annotations,
    AudioContent,
    BlobResourceContents,
    CallToolResult,
    EmbeddedResource,
    ImageContent,
    Prompt,
    PromptArgument,
    PromptMessage,
    Resource,
    ResourceLink,
    ResourceTemplate,
    TextContent,
    TextResourceContents,
    Tool,
    ToolAnnotations,
    ToolResult,
    audio_content,
    embedded_resource_content,
    image_content,
    resource_link_content,
    text_content,
)

__all__ = [
    "LATEST_PROTOCOL_VERSION",
    "Annotations",
    "AudioContent",
    "BlobResourceContents",
    "CallToolResult",
    "EmbeddedResource",
    "HandlerKind",
    "ImageContent",
    "McpError",
    "McpResult",
    "McpServer",
    "NotificationHub",
    "NotificationQueue",
    "NotificationSink",
    "ProgressReporter",
    "Prompt",
    "PromptArgument",
    "PromptMessage",
    "Registry",
    "Resource",
    "ResourceLink",
    "ResourceTemplate",
    "ServerSettings",
    "TextContent",
    "TextResourceContents",
    "Tool",
    "ToolAnnotations",
    "ToolBinding",
    "ToolResult",
    "audio_content",
    "embedded_resource_content",
    "image_content",
    "resource_link_content",
    "text_content",
]
