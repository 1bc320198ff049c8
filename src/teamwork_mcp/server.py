"""
MCP server assembly shared by the stdio and HTTP transports.

``ToolServer`` is the sink ToolsetGroups register into. It wraps the SDK's
low-level ``Server`` and only installs the tool handlers (and therefore only
advertises the tools capability) once at least one tool was added.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Iterable, List, Optional, Sequence

from mcp import types
from mcp.server.lowlevel import Server

from teamwork_mcp import twdesk, twprojects
from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.config import ServerConfig
from teamwork_mcp.core.context import current_bearer_token
from teamwork_mcp.core.observability import log_event
from teamwork_mcp.core.results import result_text
from teamwork_mcp.core.toolsets import (
    METHOD_ALL,
    ServerTool,
    ToolsetEnableError,
    ToolsetGroup,
)

log = logging.getLogger("teamwork_mcp.server")

SERVER_NAME = "Teamwork.com"


class NotAuthenticatedError(Exception):
    """A tool was called without any bearer token available."""


class ToolCallError(Exception):
    """Carries the text of an error result up to the protocol layer."""


class ToolServer:
    def __init__(
        self, name: str, version: str, *, default_token: Optional[str] = None
    ) -> None:
        self.server = Server(name, version=version)
        self.default_token = default_token or None
        self._tools: Dict[str, ServerTool] = {}
        self._handlers_installed = False

    @property
    def tools(self) -> List[types.Tool]:
        return [t.tool for t in self._tools.values()]

    def add_tools(self, *tools: ServerTool) -> None:
        for server_tool in tools:
            self._tools[server_tool.tool.name] = server_tool
            log_event("tool_registered", logger=log, tool=server_tool.tool.name)
        if self._tools and not self._handlers_installed:
            self._install_handlers()

    def _install_handlers(self) -> None:
        @self.server.list_tools()
        async def list_tools() -> List[types.Tool]:
            return self.tools

        # tools validate their own arguments through the binder
        @self.server.call_tool(validate_input=False)
        async def call_tool(
            name: str, arguments: Dict[str, Any]
        ) -> Sequence[types.ContentBlock]:
            result = await self.call(name, arguments)
            if result.isError:
                raise ToolCallError(result_text(result))
            return result.content

        self._handlers_installed = True

    async def call(
        self, name: str, arguments: Optional[Dict[str, Any]]
    ) -> types.CallToolResult:
        """Run a registered tool; unknown names raise KeyError."""
        server_tool = self._tools.get(name)
        if server_tool is None:
            raise KeyError(f"unknown tool: {name}")
        if not (current_bearer_token() or self.default_token):
            raise NotAuthenticatedError("not authenticated")

        start = time.perf_counter()
        status = "error"
        try:
            result = await server_tool.handler(arguments or {})
            status = "error_result" if result.isError else "ok"
            return result
        finally:
            log_event(
                "tool_call",
                logger=log,
                tool=name,
                status=status,
                duration_ms=int((time.perf_counter() - start) * 1000),
            )


def new_client(config: ServerConfig) -> TeamworkClient:
    return TeamworkClient(
        base_url=config.api_url,
        bearer_token=config.bearer_token,
        timeout_seconds=config.timeout_seconds,
        user_agent=config.user_agent,
    )


def default_groups(config: ServerConfig, client: TeamworkClient) -> List[ToolsetGroup]:
    return [
        twprojects.default_toolset_group(config.read_only, config.allow_delete, client),
        twdesk.default_toolset_group(client, config.read_only),
    ]


def enable_methods(groups: Sequence[ToolsetGroup], methods: Iterable[str]) -> None:
    """
    Enable each requested method on the groups that own it.
    Every token must belong to at least one group; otherwise nothing is enabled
    and ToolsetEnableError lists the unknown tokens.
    """
    methods = list(methods)
    if METHOD_ALL in methods:
        for group in groups:
            group.enable_toolsets(METHOD_ALL)
        return

    routed: List[List[str]] = [[] for _ in groups]
    invalid: List[str] = []
    for method in methods:
        owners = [
            i
            for i, group in enumerate(groups)
            if any(t.contains(method) for t in group.toolsets)
        ]
        if not owners:
            invalid.append(method)
        for i in owners:
            routed[i].append(method)
    if invalid:
        raise ToolsetEnableError(invalid)

    for group, requested in zip(groups, routed):
        if requested:
            group.enable_toolsets(*requested)


def new_mcp_server(config: ServerConfig, *groups: ToolsetGroup) -> ToolServer:
    tool_server = ToolServer(
        SERVER_NAME, config.version.lstrip("v"), default_token=config.bearer_token
    )
    if any(group.has_tools() for group in groups):
        for group in groups:
            group.register_all(tool_server)
    return tool_server


def build_server(
    config: ServerConfig, client: Optional[TeamworkClient] = None
) -> ToolServer:
    """Construct the groups, enable the configured methods and build the server."""
    client = client or new_client(config)
    groups = default_groups(config, client)
    enable_methods(groups, config.toolsets)
    return new_mcp_server(config, *groups)


__all__ = [
    "SERVER_NAME",
    "NotAuthenticatedError",
    "ToolCallError",
    "ToolServer",
    "new_client",
    "default_groups",
    "enable_methods",
    "new_mcp_server",
    "build_server",
]
