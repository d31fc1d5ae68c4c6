"""Tool, prompt and resource registry.

A synchronous core guarded by a single ``threading.RLock``, so it can be
shared by a sequential channel and by a concurrent HTTP host alike. Lookups
hand back immutable bindings; handlers are invoked by the caller after the
lock has been released.

Every successful mutation bumps the list version. Registration is
insert-or-replace and always counts as a mutation; removing a key that is not
registered is a no-op and leaves the version untouched.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeAlias

from mcp_engine.notifications import NotificationHub, ProgressReporter
from mcp_engine.types import notifications as methods
from mcp_engine.types.prompts import Prompt, PromptMessage
from mcp_engine.types.resources import BlobResourceContents, Resource, ResourceTemplate, TextResourceContents
from mcp_engine.types.tools import CallToolResult, Tool

logger = logging.getLogger(__name__)

Arguments: TypeAlias = dict[str, Any]
ResourcePayload: TypeAlias = str | bytes | TextResourceContents | BlobResourceContents

SimpleToolHandler = Callable[[Arguments], Any]
RichToolHandler = Callable[[Arguments], CallToolResult]
ProgressToolHandler = Callable[[Arguments, ProgressReporter], CallToolResult]
PromptHandler = Callable[[Arguments], list[PromptMessage]]
ResourceHandler = Callable[[str], ResourcePayload]
ProgressResourceHandler = Callable[[str, ProgressReporter], ResourcePayload]


class HandlerKind(str, Enum):
    """How a handler is invoked. Declaration order is the tools/call priority."""

    PROGRESS = "progress"
    RICH = "rich"
    SIMPLE = "simple"


TOOL_HANDLER_PRIORITY: tuple[HandlerKind, ...] = (HandlerKind.PROGRESS, HandlerKind.RICH, HandlerKind.SIMPLE)


@dataclass(frozen=True)
class ToolBinding:
    tool: Tool
    kind: HandlerKind
    handler: Callable[..., Any]


@dataclass(frozen=True)
class PromptBinding:
    prompt: Prompt
    handler: PromptHandler


@dataclass(frozen=True)
class ResourceBinding:
    resource: Resource
    kind: HandlerKind
    handler: Callable[..., ResourcePayload]


class Registry:
    def __init__(
        self,
        hub: NotificationHub | None = None,
        *,
        tools_list_changed: bool = True,
        prompts_list_changed: bool = True,
        resources_list_changed: bool = True,
    ) -> None:
        self._hub = hub or NotificationHub()
        self._announce = {
            methods.TOOLS_LIST_CHANGED: tools_list_changed,
            methods.PROMPTS_LIST_CHANGED: prompts_list_changed,
            methods.RESOURCES_LIST_CHANGED: resources_list_changed,
        }
        self._lock = threading.RLock()
        self._version = 1

        self._tools: dict[str, Tool] = {}
        self._tool_handlers: dict[str, dict[HandlerKind, Callable[..., Any]]] = {}
        self._prompts: dict[str, PromptBinding] = {}
        self._resources: dict[str, ResourceBinding] = {}
        self._templates: dict[str, ResourceTemplate] = {}
        self._subscriptions: set[str] = set()

    @property
    def hub(self) -> NotificationHub:
        return self._hub

    @property
    def version(self) -> int:
        with self._lock:
            return self._version

    def _bump(self) -> int:
        self._version += 1
        return self._version

    def _announce_change(self, method: methods.ServerNotificationMethod) -> None:
        if self._announce[method]:
            self._hub.list_changed(method)

    # ----- tools -----

    def _put_tool(self, tool: Tool | Mapping[str, Any], kind: HandlerKind, handler: Callable[..., Any]) -> int:
        tool = tool if isinstance(tool, Tool) else Tool.model_validate(tool)
        with self._lock:
            self._tools[tool.name] = tool
            self._tool_handlers.setdefault(tool.name, {})[kind] = handler
            version = self._bump()
        logger.debug("Registered %s tool %r (version %d)", kind.value, tool.name, version)
        self._announce_change(methods.TOOLS_LIST_CHANGED)
        return version

    def register_tool(self, tool: Tool | Mapping[str, Any], handler: SimpleToolHandler) -> int:
        """Bind a handler whose return value becomes a single text content block."""
        return self._put_tool(tool, HandlerKind.SIMPLE, handler)

    def register_rich_tool(self, tool: Tool | Mapping[str, Any], handler: RichToolHandler) -> int:
        return self._put_tool(tool, HandlerKind.RICH, handler)

    def register_progress_tool(self, tool: Tool | Mapping[str, Any], handler: ProgressToolHandler) -> int:
        return self._put_tool(tool, HandlerKind.PROGRESS, handler)

    def unregister_tool(self, name: str) -> int:
        with self._lock:
            if name not in self._tools:
                return self._version
            del self._tools[name]
            self._tool_handlers.pop(name, None)
            version = self._bump()
        logger.debug("Unregistered tool %r (version %d)", name, version)
        self._announce_change(methods.TOOLS_LIST_CHANGED)
        return version

    def has_tool(self, name: str) -> bool:
        with self._lock:
            return name in self._tools

    def tools(self) -> list[Tool]:
        with self._lock:
            return list(self._tools.values())

    def lookup_tool(self, name: str, *, progress_enabled: bool = True) -> ToolBinding | None:
        """Resolve the handler that tools/call should run for ``name``.

        While progress is disabled a progress handler only runs when it is the
        sole binding for ``name``; otherwise rich and simple handlers win.
        """
        with self._lock:
            tool = self._tools.get(name)
            handlers = self._tool_handlers.get(name, {})
            if tool is None:
                return None
            for kind in TOOL_HANDLER_PRIORITY:
                if kind is HandlerKind.PROGRESS and not progress_enabled and len(handlers) > 1:
                    continue
                if kind in handlers:
                    return ToolBinding(tool, kind, handlers[kind])
        return None

    def notify_tools_list_changed(self) -> None:
        self._announce_change(methods.TOOLS_LIST_CHANGED)

    # ----- prompts -----

    def register_prompt(self, prompt: Prompt | Mapping[str, Any], handler: PromptHandler) -> int:
        prompt = prompt if isinstance(prompt, Prompt) else Prompt.model_validate(prompt)
        with self._lock:
            self._prompts[prompt.name] = PromptBinding(prompt, handler)
            version = self._bump()
        logger.debug("Registered prompt %r (version %d)", prompt.name, version)
        self._announce_change(methods.PROMPTS_LIST_CHANGED)
        return version

    def unregister_prompt(self, name: str) -> int:
        with self._lock:
            if self._prompts.pop(name, None) is None:
                return self._version
            version = self._bump()
        self._announce_change(methods.PROMPTS_LIST_CHANGED)
        return version

    def prompts(self) -> list[Prompt]:
        with self._lock:
            return [binding.prompt for binding in self._prompts.values()]

    def lookup_prompt(self, name: str) -> PromptBinding | None:
        with self._lock:
            return self._prompts.get(name)

    # ----- resources -----

    def _put_resource(
        self, resource: Resource | Mapping[str, Any], kind: HandlerKind, handler: Callable[..., ResourcePayload]
    ) -> int:
        resource = resource if isinstance(resource, Resource) else Resource.model_validate(resource)
        with self._lock:
            self._resources[resource.uri] = ResourceBinding(resource, kind, handler)
            version = self._bump()
        logger.debug("Registered resource %r (version %d)", resource.uri, version)
        self._announce_change(methods.RESOURCES_LIST_CHANGED)
        return version

    def register_resource(self, resource: Resource | Mapping[str, Any], handler: ResourceHandler) -> int:
        return self._put_resource(resource, HandlerKind.SIMPLE, handler)

    def register_progress_resource(
        self, resource: Resource | Mapping[str, Any], handler: ProgressResourceHandler
    ) -> int:
        return self._put_resource(resource, HandlerKind.PROGRESS, handler)

    def unregister_resource(self, uri: str) -> int:
        with self._lock:
            if self._resources.pop(uri, None) is None:
                return self._version
            self._subscriptions.discard(uri)
            version = self._bump()
        self._announce_change(methods.RESOURCES_LIST_CHANGED)
        return version

    def resources(self) -> list[Resource]:
        with self._lock:
            return [binding.resource for binding in self._resources.values()]

    def lookup_resource(self, uri: str) -> ResourceBinding | None:
        with self._lock:
            return self._resources.get(uri)

    def register_resource_template(self, template: ResourceTemplate | Mapping[str, Any]) -> int:
        template = template if isinstance(template, ResourceTemplate) else ResourceTemplate.model_validate(template)
        with self._lock:
            self._templates[template.uri_template] = template
            version = self._bump()
        self._announce_change(methods.RESOURCES_LIST_CHANGED)
        return version

    def unregister_resource_template(self, uri_template: str) -> int:
        with self._lock:
            if self._templates.pop(uri_template, None) is None:
                return self._version
            version = self._bump()
        self._announce_change(methods.RESOURCES_LIST_CHANGED)
        return version

    def resource_templates(self) -> list[ResourceTemplate]:
        with self._lock:
            return list(self._templates.values())

    # ----- subscriptions -----

    def subscribe(self, uri: str) -> bool:
        """Mark ``uri`` as subscribed. Returns False for an unknown resource."""
        with self._lock:
            if uri not in self._resources:
                return False
            self._subscriptions.add(uri)
        logger.debug("Subscribed to %r", uri)
        return True

    def unsubscribe(self, uri: str) -> bool:
        with self._lock:
            if uri not in self._resources:
                return False
            self._subscriptions.discard(uri)
        return True

    def is_subscribed(self, uri: str) -> bool:
        with self._lock:
            return uri in self._subscriptions

    def notify_resource_updated(self, uri: str) -> bool:
        """Emit resources/updated, but only for a subscribed URI."""
        if not self.is_subscribed(uri):
            return False
        return self._hub.resource_updated(uri)
