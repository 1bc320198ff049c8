"""Core domain surface for teamwork-mcp (transport-agnostic)."""

from .client import (
    ContextBearerAuth,
    RetryConfig,
    TeamworkClient,
    TeamworkClientError,
    TeamworkHTTPError,
    TeamworkParseError,
)
from .config import ConfigError, ServerConfig, load_env_config, parse_methods
from .context import (
    MissingBearerTokenError,
    RequestContext,
    apply_request_context,
    bearer_token_from_header,
    current_bearer_token,
    ensure_request_id,
    get_context,
    reset_context,
)
from .errors import (
    ToolExecutionError,
    ToolServerError,
    handle_api_error,
    tool_handler,
)
from .params import InvalidParamsError, ParamError, bind, restrict_values
from .results import error_result, json_result, text_result
from .toolsets import (
    METHOD_ALL,
    DuplicateMethodError,
    DuplicateToolError,
    DuplicateToolsetError,
    Method,
    MethodRegistry,
    ServerTool,
    Toolset,
    ToolsetEnableError,
    ToolsetError,
    ToolsetGroup,
    UnregisteredMethodError,
    is_registered,
    register_method,
)

__all__ = [
    # Client
    "TeamworkClient",
    "RetryConfig",
    "ContextBearerAuth",
    # Exceptions
    "TeamworkClientError",
    "TeamworkHTTPError",
    "TeamworkParseError",
    "ToolServerError",
    "ToolExecutionError",
    "InvalidParamsError",
    "ParamError",
    "ToolsetError",
    "DuplicateMethodError",
    "UnregisteredMethodError",
    "DuplicateToolError",
    "DuplicateToolsetError",
    "ToolsetEnableError",
    "ConfigError",
    "MissingBearerTokenError",
    # Toolsets
    "Method",
    "METHOD_ALL",
    "MethodRegistry",
    "ServerTool",
    "Toolset",
    "ToolsetGroup",
    "register_method",
    "is_registered",
    # Binding and results
    "bind",
    "restrict_values",
    "handle_api_error",
    "tool_handler",
    "text_result",
    "json_result",
    "error_result",
    # Config
    "ServerConfig",
    "load_env_config",
    "parse_methods",
    # Context
    "RequestContext",
    "apply_request_context",
    "reset_context",
    "get_context",
    "ensure_request_id",
    "bearer_token_from_header",
    "current_bearer_token",
]
