"""
Desk files.

Creating a file is two steps: the file record is created through the API,
which answers with a pre-signed ``uploadURL``, then the decoded bytes are
PUT to that URL. The record is left in place if the upload fails.
"""

from __future__ import annotations

import base64
import binascii
from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient, TeamworkParseError
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import (
    bind,
    optional_param,
    required_param,
    restrict_values,
)
from teamwork_mcp.core.results import response_id, text_result
from teamwork_mcp.core.schema import new_tool, string
from teamwork_mcp.core.toolsets import Method, ServerTool, register_method

from .meta import desk_path
from .models import FileRequest

METHOD_FILE_CREATE = register_method(Method("twdesk-create_file"))

DISPOSITIONS = ("attachment", "inline")


def _decode(value: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"invalid base64 data: {exc}") from exc


def base64_data(value: str) -> None:
    if not value:
        raise ValueError("file data (base64 encoded) is required")
    _decode(value)


def _upload_url(payload: Mapping[str, Any]) -> str:
    record = payload.get("file")
    url = record.get("uploadURL") if isinstance(record, dict) else None
    if not url:
        raise TeamworkParseError(f"missing file.uploadURL in response: {payload!r}")
    return url


def file_create(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to create file")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = FileRequest()
        bind(
            arguments,
            required_param(request, "name", attr="filename"),
            required_param(request, "mimeType", attr="mime_type"),
            required_param(request, "data", base64_data),
            optional_param(request, "disposition", restrict_values(*DISPOSITIONS)),
        )
        payload = await client.post(
            desk_path("files.json"),
            json={"file": request.body()},
            tool=METHOD_FILE_CREATE,
        )
        file_id = response_id(payload, "file", "id")
        await client.upload(
            _upload_url(payload),
            _decode(request.data),
            content_type=request.mime_type,
            tool=METHOD_FILE_CREATE,
        )
        return text_result(f"File created successfully with ID {file_id}")

    tool = new_tool(
        METHOD_FILE_CREATE,
        title="Create File",
        description=(
            "Upload a new file to Teamwork Desk, enabling attachment to tickets, "
            "articles, or other resources."
        ),
        properties={
            "name": string("The name of the file."),
            "mimeType": string("The MIME type of the file."),
            "disposition": string(
                "The disposition of the file.", enum=DISPOSITIONS
            ),
            "data": string("The content of the file as a base64-encoded string."),
        },
        required=["name", "mimeType", "data"],
    )
    return ServerTool(tool=tool, handler=handle)
