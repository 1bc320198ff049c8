"""teamwork_mcp package exports."""

from .core.client import (
    RetryConfig,
    TeamworkClient,
    TeamworkClientError,
    TeamworkHTTPError,
    TeamworkParseError,
)
from .core.config import ServerConfig
from .core.toolsets import Method, Toolset, ToolsetGroup, register_method
from .server import ToolServer, build_server, enable_methods, new_mcp_server

__all__ = [
    # Client
    "TeamworkClient",
    "RetryConfig",
    # Exceptions
    "TeamworkClientError",
    "TeamworkHTTPError",
    "TeamworkParseError",
    # Toolsets
    "Method",
    "Toolset",
    "ToolsetGroup",
    "register_method",
    # Server utilities
    "ServerConfig",
    "ToolServer",
    "build_server",
    "enable_methods",
    "new_mcp_server",
]
