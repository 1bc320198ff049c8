"""Helpers building ``CallToolResult`` values."""

from __future__ import annotations

import json
from typing import Any

from mcp import types

from .client import TeamworkParseError


def text_result(message: str) -> types.CallToolResult:
    return types.CallToolResult(content=[types.TextContent(type="text", text=message)])


def json_result(payload: Any) -> types.CallToolResult:
    """Encode an API payload as the text of a successful result."""
    return text_result(json.dumps(payload, default=str))


def error_result(message: str, exc: BaseException | None = None) -> types.CallToolResult:
    if exc is not None:
        message = f"{message}: {exc}"
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=message)],
        isError=True,
    )


def response_id(payload: Any, *path: str) -> int:
    """
    Dig the ID of a created entity out of an API payload.
    Legacy endpoints return IDs as strings; both forms are accepted.
    """
    value = payload
    for key in path:
        value = value.get(key) if isinstance(value, dict) else None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise TeamworkParseError(
            f"missing {'.'.join(path)} in response: {payload!r}"
        ) from None


def result_text(result: types.CallToolResult) -> str:
    """Concatenated text content of a result."""
    return "\n".join(
        block.text for block in result.content if isinstance(block, types.TextContent)
    )


__all__ = [
    "text_result",
    "json_result",
    "error_result",
    "response_id",
    "result_text",
]
