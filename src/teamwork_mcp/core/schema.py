"""
Small builders for tool input schemas.

    new_tool(
        METHOD_TAG_GET,
        title="Get Tag",
        description="...",
        properties={"id": integer("The ID of the tag to get.")},
        required=["id"],
        read_only=True,
    )
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional, Sequence

from mcp import types

Schema = Dict[str, Any]


def string(
    description: str,
    *,
    enum: Optional[Sequence[str]] = None,
    format: Optional[str] = None,
) -> Schema:
    schema: Schema = {"type": "string", "description": description}
    if enum:
        schema["enum"] = list(enum)
    if format:
        schema["format"] = format
    return schema


def integer(description: str) -> Schema:
    return {"type": "integer", "description": description}


def number(description: str) -> Schema:
    return {"type": "number", "description": description}


def boolean(description: str) -> Schema:
    return {"type": "boolean", "description": description}


def array(items: Schema, description: str) -> Schema:
    return {"type": "array", "items": items, "description": description}


def integer_list(description: str) -> Schema:
    return array({"type": "integer"}, description)


def obj(
    properties: Mapping[str, Schema],
    description: str,
    *,
    required: Iterable[str] = (),
) -> Schema:
    schema: Schema = {
        "type": "object",
        "properties": dict(properties),
        "description": description,
    }
    required = list(required)
    if required:
        schema["required"] = required
    return schema


def pagination() -> Dict[str, Schema]:
    """``page`` and ``page_size`` shared by every list tool."""
    return {
        "page": integer("Page number for pagination of results."),
        "page_size": integer("Number of results per page for pagination."),
    }


def new_tool(
    name: str,
    *,
    title: str,
    description: str,
    properties: Optional[Mapping[str, Schema]] = None,
    required: Iterable[str] = (),
    read_only: bool = False,
    destructive: bool = False,
) -> types.Tool:
    input_schema: Schema = {"type": "object", "properties": dict(properties or {})}
    required = list(required)
    if required:
        input_schema["required"] = required

    annotations = types.ToolAnnotations(title=title)
    if read_only:
        annotations = types.ToolAnnotations(title=title, readOnlyHint=True)
    elif destructive:
        annotations = types.ToolAnnotations(title=title, destructiveHint=True)

    return types.Tool(
        name=str(name),
        description=description,
        inputSchema=input_schema,
        annotations=annotations,
    )


__all__ = [
    "Schema",
    "string",
    "integer",
    "number",
    "boolean",
    "array",
    "integer_list",
    "obj",
    "pagination",
    "new_tool",
]
