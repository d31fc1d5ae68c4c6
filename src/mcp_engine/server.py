"""
MCP Server Module

This module provides the transport-agnostic protocol engine. A transport hands
:meth:`McpServer.handle` one JSON-RPC message as text and gets back an
:class:`~mcp_engine.result.McpResult` describing what, if anything, to send.

Usage:
1. Create a server:
   server = McpServer("your_server_name", "1.0.0")

2. Register tools, prompts and resources:
   @server.tool(description="Greets someone")
   def greet(arguments: dict) -> str:
       return f"hi, {arguments['name']}"

   server.register_prompt(
       Prompt(name="review", arguments=[PromptArgument(name="code", required=True)]),
       lambda args: [PromptMessage(role="user", content=TextContent(text=args["code"]))],
   )

   server.register_resource(Resource(uri="cfg://app", name="app"), lambda uri: "debug=false")

3. Feed it messages from any transport:
   result = server.handle(line)
   if (reply := result.to_json()) is not None:
       write(reply)

Handlers are plain synchronous callables. Any exception they raise is turned
into a -32603 error response; the engine never lets a handler fault escape
:meth:`McpServer.handle`.
"""

from __future__ import annotations

import base64
import json
import logging
from collections.abc import Callable, Mapping
from typing import Any, TypeVar
from uuid import uuid4

from pydantic import ValidationError

from mcp_engine.exceptions import (
    McpError,
    handler_failed,
    invalid_params,
    invalid_request,
    method_not_found,
    parse_error,
    resource_not_found,
)
from mcp_engine.negotiator import CapabilityNegotiator
from mcp_engine.notifications import NotificationHub, NotificationSink, ProgressReporter
from mcp_engine.registry import (
    HandlerKind,
    ProgressResourceHandler,
    ProgressToolHandler,
    PromptHandler,
    Registry,
    ResourceHandler,
    ResourcePayload,
    RichToolHandler,
    SimpleToolHandler,
)
from mcp_engine.result import McpResult
from mcp_engine.settings import ServerSettings
from mcp_engine.types.base import ProgressToken, RequestParams
from mcp_engine.types.common import Implementation
from mcp_engine.types.content import TextContent
from mcp_engine.types.json_rpc import INTERNAL_ERROR, ErrorData, JSONRPCRequest
from mcp_engine.types.prompts import GetPromptRequestParams, GetPromptResult, ListPromptsResult, Prompt, PromptMessage
from mcp_engine.types.resources import (
    BlobResourceContents,
    ListResourcesResult,
    ListResourceTemplatesResult,
    ReadResourceRequestParams,
    ReadResourceResult,
    Resource,
    ResourceTemplate,
    SubscribeRequestParams,
    TextResourceContents,
    UnsubscribeRequestParams,
)
from mcp_engine.types.tools import CallToolRequestParams, CallToolResult, ListRequestParams, ListToolsResult, Tool

logger = logging.getLogger(__name__)

RequestHandler = Callable[[JSONRPCRequest], dict[str, Any]]
NotificationHandler = Callable[[dict[str, Any] | None], None]
HandlerT = TypeVar("HandlerT", bound=Callable[..., Any])


class McpServer:
    def __init__(
        self,
        name: str | None = None,
        version: str | None = None,
        *,
        instructions: str | None = None,
        settings: ServerSettings | None = None,
        notification_sink: NotificationSink | None = None,
    ) -> None:
        settings = settings or ServerSettings()
        overrides = {
            key: value
            for key, value in (("name", name), ("version", version), ("instructions", instructions))
            if value is not None
        }
        if overrides:
            settings = settings.model_copy(update=overrides)
        self.settings = settings

        self.hub = NotificationHub(notification_sink, progress_enabled=settings.enable_progress)
        self.registry = Registry(
            self.hub,
            tools_list_changed=settings.tools_list_changed,
            prompts_list_changed=settings.prompts_list_changed,
            resources_list_changed=settings.resources_list_changed,
        )
        self.negotiator = CapabilityNegotiator(
            Implementation(name=settings.name, version=settings.version),
            settings,
            self.hub,
        )

        # method -> (handler, requires initialize)
        self.request_handlers: dict[str, tuple[RequestHandler, bool]] = {
            "initialize": (self._initialize, False),
            "ping": (self._ping, False),
            "tools/list": (self._list_tools, True),
            "tools/call": (self._call_tool, True),
            "prompts/list": (self._list_prompts, True),
            "prompts/get": (self._get_prompt, True),
            "resources/list": (self._list_resources, True),
            "resources/read": (self._read_resource, True),
            "resources/subscribe": (self._subscribe, True),
            "resources/unsubscribe": (self._unsubscribe, True),
            "resources/templates/list": (self._list_resource_templates, True),
        }
        if not settings.resources_subscribe:
            del self.request_handlers["resources/subscribe"]
            del self.request_handlers["resources/unsubscribe"]
        self.notification_handlers: dict[str, NotificationHandler] = {
            "notifications/initialized": self._initialized_notification,
        }
        logger.debug("Initializing server %r", settings.name)

    @property
    def name(self) -> str:
        return self.settings.name

    @property
    def version(self) -> str:
        return self.settings.version

    @property
    def initialized(self) -> bool:
        return self.negotiator.initialized

    @property
    def tool_list_version(self) -> int:
        return self.registry.version

    # ----- dispatch -----

    def handle(self, raw_message: str | bytes) -> McpResult:
        """Classify, validate and route one incoming JSON-RPC message."""
        try:
            parsed = json.loads(raw_message)
        except (ValueError, TypeError):
            logger.debug("Rejecting unparseable message")
            return McpResult.failure(0, parse_error().error)

        if not isinstance(parsed, dict):
            return McpResult.failure(0, invalid_request().error)

        if "id" not in parsed:
            return self._handle_notification(parsed)
        return self._handle_request(parsed)

    def _handle_notification(self, message: dict[str, Any]) -> McpResult:
        method = message.get("method")
        if message.get("jsonrpc") != "2.0" or not isinstance(method, str):
            return McpResult.failure(0, invalid_request().error)

        handler = self.notification_handlers.get(method)
        if handler is None:
            logger.debug("Ignoring unknown notification %s", method)
            return McpResult.no_reply()

        params = message.get("params")
        try:
            handler(params if isinstance(params, dict) else None)
        except Exception:
            logger.exception("Uncaught exception in notification handler for %s", method)
        return McpResult.no_reply()

    def _handle_request(self, message: dict[str, Any]) -> McpResult:
        request_id = message["id"]
        if isinstance(request_id, bool) or not isinstance(request_id, (int, str)):
            return McpResult.failure(0, invalid_request().error)
        if message.get("jsonrpc") != "2.0":
            return McpResult.failure(request_id, invalid_request("Invalid JSON-RPC version").error)
        if not isinstance(message.get("method"), str):
            return McpResult.failure(request_id, invalid_request().error)

        try:
            request = JSONRPCRequest.model_validate(message)
        except ValidationError:
            return McpResult.failure(request_id, invalid_request().error)

        logger.debug("Processing request %s (id=%r)", request.method, request.id)
        try:
            entry = self.request_handlers.get(request.method)
            if entry is None:
                raise method_not_found(request.method)
            handler, requires_init = entry
            if requires_init:
                self.negotiator.require_initialized()
            result = handler(request)
        except McpError as err:
            return McpResult.failure(request.id, err.error)
        except ValidationError as err:
            logger.debug("Invalid params for %s: %s", request.method, err)
            return McpResult.failure(request.id, parse_error().error)
        except Exception as err:
            logger.exception("Internal error while handling %s", request.method)
            return McpResult.failure(request.id, ErrorData(code=INTERNAL_ERROR, message=f"Internal error: {err}"))

        return McpResult.success(request.id, result)

    # ----- request handlers -----

    def _initialize(self, request: JSONRPCRequest) -> dict[str, Any]:
        return self.negotiator.initialize(request.params).to_wire()

    def _ping(self, request: JSONRPCRequest) -> dict[str, Any]:
        return {}

    def _list_tools(self, request: JSONRPCRequest) -> dict[str, Any]:
        ListRequestParams.model_validate(request.params or {})
        return ListToolsResult(tools=self.registry.tools()).to_wire()

    def _call_tool(self, request: JSONRPCRequest) -> dict[str, Any]:
        params = CallToolRequestParams.model_validate(request.params or {})
        binding = self.registry.lookup_tool(params.name, progress_enabled=self.hub.progress_enabled)
        if binding is None:
            raise invalid_params("Unknown tool name")

        arguments = params.arguments or {}
        logger.debug("Calling %s tool %r", binding.kind.value, params.name)
        try:
            if binding.kind is HandlerKind.PROGRESS:
                outcome = binding.handler(arguments, self._reporter_for(params))
            else:
                outcome = binding.handler(arguments)
            result = _coerce_tool_result(outcome, binding.kind)
        except Exception as exc:
            logger.exception("Tool %r failed", params.name)
            raise handler_failed("Tool execution failed", exc) from exc
        return result.to_wire()

    def _list_prompts(self, request: JSONRPCRequest) -> dict[str, Any]:
        ListRequestParams.model_validate(request.params or {})
        return ListPromptsResult(prompts=self.registry.prompts()).to_wire()

    def _get_prompt(self, request: JSONRPCRequest) -> dict[str, Any]:
        params = GetPromptRequestParams.model_validate(request.params or {})
        binding = self.registry.lookup_prompt(params.name)
        if binding is None:
            raise invalid_params("Unknown prompt name")

        missing = binding.prompt.missing_arguments(params.arguments)
        if missing:
            raise invalid_params(f"Missing required argument: {missing[0]}")

        try:
            messages = [
                message if isinstance(message, PromptMessage) else PromptMessage.model_validate(message)
                for message in binding.handler(params.arguments or {})
            ]
        except Exception as exc:
            logger.exception("Prompt %r failed", params.name)
            raise handler_failed("Prompt execution failed", exc) from exc
        return GetPromptResult(description=binding.prompt.description, messages=messages).to_wire()

    def _list_resources(self, request: JSONRPCRequest) -> dict[str, Any]:
        ListRequestParams.model_validate(request.params or {})
        return ListResourcesResult(resources=self.registry.resources()).to_wire()

    def _list_resource_templates(self, request: JSONRPCRequest) -> dict[str, Any]:
        ListRequestParams.model_validate(request.params or {})
        return ListResourceTemplatesResult(resource_templates=self.registry.resource_templates()).to_wire()

    def _read_resource(self, request: JSONRPCRequest) -> dict[str, Any]:
        params = ReadResourceRequestParams.model_validate(request.params or {})
        binding = self.registry.lookup_resource(params.uri)
        if binding is None:
            raise resource_not_found(params.uri)

        try:
            if binding.kind is HandlerKind.PROGRESS:
                payload = binding.handler(params.uri, self._reporter_for(params))
            else:
                payload = binding.handler(params.uri)
            contents = _coerce_resource_contents(payload, binding.resource)
        except Exception as exc:
            logger.exception("Resource %r failed", params.uri)
            raise handler_failed("Resource read failed", exc) from exc
        return ReadResourceResult(contents=[contents]).to_wire()

    def _subscribe(self, request: JSONRPCRequest) -> dict[str, Any]:
        params = SubscribeRequestParams.model_validate(request.params or {})
        if not self.registry.subscribe(params.uri):
            raise resource_not_found(params.uri)
        return {}

    def _unsubscribe(self, request: JSONRPCRequest) -> dict[str, Any]:
        params = UnsubscribeRequestParams.model_validate(request.params or {})
        if not self.registry.unsubscribe(params.uri):
            raise resource_not_found(params.uri)
        return {}

    def _initialized_notification(self, params: dict[str, Any] | None) -> None:
        if not self.initialized:
            logger.debug("Received notifications/initialized before initialize")

    def _reporter_for(self, params: RequestParams) -> ProgressReporter:
        token: ProgressToken | None = None
        if params.meta is not None:
            token = params.meta.progress_token
        return self.hub.reporter(token if token is not None else uuid4().hex)

    # ----- registration -----

    def set_notification_callback(self, sink: NotificationSink | None) -> None:
        """Install (or with None, remove) the outbound notification sink."""
        self.hub.set_sink(sink)

    def enable_progress(self, enabled: bool = True) -> None:
        self.hub.enable_progress(enabled)

    def report_progress(
        self,
        progress_token: ProgressToken,
        progress: float | None = None,
        status: str | None = None,
        total: float | None = None,
        current: float | None = None,
    ) -> bool:
        return self.hub.report_progress(progress_token, progress, status, total, current)

    def register_tool(self, tool: Tool | Mapping[str, Any], handler: SimpleToolHandler) -> int:
        return self.registry.register_tool(tool, handler)

    def register_rich_tool(self, tool: Tool | Mapping[str, Any], handler: RichToolHandler) -> int:
        return self.registry.register_rich_tool(tool, handler)

    def register_progress_tool(self, tool: Tool | Mapping[str, Any], handler: ProgressToolHandler) -> int:
        return self.registry.register_progress_tool(tool, handler)

    def unregister_tool(self, name: str) -> int:
        return self.registry.unregister_tool(name)

    def notify_tools_list_changed(self) -> None:
        self.registry.notify_tools_list_changed()

    def register_prompt(self, prompt: Prompt | Mapping[str, Any], handler: PromptHandler) -> int:
        return self.registry.register_prompt(prompt, handler)

    def unregister_prompt(self, name: str) -> int:
        return self.registry.unregister_prompt(name)

    def register_resource(self, resource: Resource | Mapping[str, Any], handler: ResourceHandler) -> int:
        return self.registry.register_resource(resource, handler)

    def register_progress_resource(
        self, resource: Resource | Mapping[str, Any], handler: ProgressResourceHandler
    ) -> int:
        return self.registry.register_progress_resource(resource, handler)

    def unregister_resource(self, uri: str) -> int:
        return self.registry.unregister_resource(uri)

    def register_resource_template(self, template: ResourceTemplate | Mapping[str, Any]) -> int:
        return self.registry.register_resource_template(template)

    def unregister_resource_template(self, uri_template: str) -> int:
        return self.registry.unregister_resource_template(uri_template)

    def notify_resource_updated(self, uri: str) -> bool:
        return self.registry.notify_resource_updated(uri)

    def tool(
        self,
        name: str | None = None,
        *,
        title: str | None = None,
        description: str | None = None,
        input_schema: dict[str, Any] | None = None,
        output_schema: dict[str, Any] | None = None,
        kind: HandlerKind = HandlerKind.SIMPLE,
    ) -> Callable[[HandlerT], HandlerT]:
        """Decorator registering a function as a tool.

        The name defaults to the function name and the description to its
        docstring. ``kind`` selects how the function is called.
        """

        def decorator(fn: HandlerT) -> HandlerT:
            tool = Tool(
                name=name or fn.__name__,
                title=title,
                description=description if description is not None else (fn.__doc__ or "").strip(),
                input_schema=input_schema or {"type": "object"},
                output_schema=output_schema,
            )
            if kind is HandlerKind.PROGRESS:
                self.register_progress_tool(tool, fn)
            elif kind is HandlerKind.RICH:
                self.register_rich_tool(tool, fn)
            else:
                self.register_tool(tool, fn)
            return fn

        return decorator

    def prompt(self, prompt: Prompt | Mapping[str, Any]) -> Callable[[HandlerT], HandlerT]:
        def decorator(fn: HandlerT) -> HandlerT:
            self.register_prompt(prompt, fn)
            return fn

        return decorator

    def resource(self, resource: Resource | Mapping[str, Any]) -> Callable[[HandlerT], HandlerT]:
        def decorator(fn: HandlerT) -> HandlerT:
            self.register_resource(resource, fn)
            return fn

        return decorator


def _coerce_tool_result(outcome: Any, kind: HandlerKind) -> CallToolResult:
    if kind is HandlerKind.SIMPLE:
        text = outcome if isinstance(outcome, str) else json.dumps(outcome)
        return CallToolResult(content=[TextContent(text=text)], is_error=False)
    if isinstance(outcome, CallToolResult):
        return outcome
    if isinstance(outcome, Mapping):
        return CallToolResult.model_validate(outcome)
    raise TypeError(f"Unexpected return type from tool: {type(outcome).__name__}")


def _coerce_resource_contents(
    payload: ResourcePayload, resource: Resource
) -> TextResourceContents | BlobResourceContents:
    if isinstance(payload, (TextResourceContents, BlobResourceContents)):
        return payload
    if isinstance(payload, str):
        return TextResourceContents(uri=resource.uri, mime_type=resource.mime_type, text=payload)
    if isinstance(payload, bytes):
        blob = base64.b64encode(payload).decode("ascii")
        return BlobResourceContents(uri=resource.uri, mime_type=resource.mime_type, blob=blob)
    raise TypeError(f"Unexpected return type from resource: {type(payload).__name__}")
