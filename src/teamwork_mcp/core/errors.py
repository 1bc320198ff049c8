from __future__ import annotations

import functools
from typing import Any, Awaitable, Callable, Mapping

from mcp import types

from .client import TeamworkClientError, TeamworkHTTPError, TeamworkParseError
from .params import InvalidParamsError, ParamError
from .results import error_result
from .toolsets import (
    DuplicateMethodError,
    DuplicateToolError,
    DuplicateToolsetError,
    ToolsetEnableError,
    ToolsetError,
    UnregisteredMethodError,
)


class ToolServerError(Exception):
    """The remote API failed on its side (5xx); the call fails at protocol level."""


class ToolExecutionError(Exception):
    """A tool could not complete for reasons other than an HTTP status."""


def handle_api_error(exc: Exception, label: str) -> types.CallToolResult:
    """
    Classify a client failure.
    - 5xx raises ToolServerError
    - 4xx returns a "bad request" error result
    - other statuses return an "unexpected HTTP status" error result
    - anything else raises ToolExecutionError prefixed with ``label``
    """
    if isinstance(exc, TeamworkHTTPError):
        if exc.status_code >= 500:
            raise ToolServerError(f"server error: {exc}") from exc
        if exc.status_code >= 400:
            return error_result("bad request", exc)
        return error_result("unexpected HTTP status", exc)
    raise ToolExecutionError(f"{label}: {exc}") from exc


Handler = Callable[[Mapping[str, Any]], Awaitable[types.CallToolResult]]


def tool_handler(label: str) -> Callable[[Handler], Handler]:
    """
    Decorate a tool coroutine so binding and API failures are classified.
    ``label`` describes the operation, e.g. "failed to create tag".
    """

    def decorator(func: Handler) -> Handler:
        @functools.wraps(func)
        async def wrapper(arguments: Mapping[str, Any]) -> types.CallToolResult:
            try:
                return await func(arguments)
            except InvalidParamsError as exc:
                return error_result("invalid parameters", exc)
            except TeamworkClientError as exc:
                return handle_api_error(exc, label)

        return wrapper

    return decorator


__all__ = [
    "TeamworkClientError",
    "TeamworkHTTPError",
    "TeamworkParseError",
    "ParamError",
    "InvalidParamsError",
    "ToolsetError",
    "DuplicateMethodError",
    "UnregisteredMethodError",
    "DuplicateToolError",
    "DuplicateToolsetError",
    "ToolsetEnableError",
    "ToolServerError",
    "ToolExecutionError",
    "handle_api_error",
    "tool_handler",
]
