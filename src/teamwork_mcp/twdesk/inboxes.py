"""Desk inboxes: the mailboxes tickets are routed to."""

from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import bind, optional_list_param, required_numeric_param
from teamwork_mcp.core.results import json_result
from teamwork_mcp.core.schema import array, integer, new_tool
from teamwork_mcp.core.toolsets import Method, ServerTool, register_method

from .meta import desk_path, list_query, pagination_params, pagination_properties
from .models import DeskListQuery, InboxFilters, PathID

METHOD_INBOX_GET = register_method(Method("twdesk-get_inbox"))
METHOD_INBOX_LIST = register_method(Method("twdesk-list_inboxes"))


def inbox_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get inbox")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        payload = await client.get(
            desk_path(f"inboxes/{request.id}.json"), tool=METHOD_INBOX_GET
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_INBOX_GET,
        title="Get Inbox",
        description=(
            "Retrieve detailed information about a specific inbox in Teamwork Desk "
            "by its ID."
        ),
        properties={"id": integer("The ID of the inbox to retrieve.")},
        required=["id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def inbox_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list inboxes")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        query = DeskListQuery()
        filters = InboxFilters()
        bind(
            arguments,
            optional_list_param(filters, "name", attr="names"),
            optional_list_param(filters, "email", attr="emails"),
            *pagination_params(query),
        )
        payload = await client.get(
            desk_path("inboxes.json"),
            params=list_query(query, filters),
            tool=METHOD_INBOX_LIST,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_INBOX_LIST,
        title="List Inboxes",
        description=(
            "List all inboxes in Teamwork Desk, optionally filtered by name or "
            "email address."
        ),
        properties={
            "name": array({"type": "string"}, "The inbox names to filter by."),
            "email": array(
                {"type": "string"}, "The inbox email addresses to filter by."
            ),
            **pagination_properties(),
        },
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)
