"""Desk users: the agents who work tickets."""

from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import (
    bind,
    optional_list_param,
    optional_numeric_list_param,
    optional_param,
    required_numeric_param,
)
from teamwork_mcp.core.results import json_result
from teamwork_mcp.core.schema import array, boolean, integer, integer_list, new_tool
from teamwork_mcp.core.toolsets import Method, ServerTool, register_method

from .meta import desk_path, list_query, pagination_params, pagination_properties
from .models import DeskListQuery, PathID, UserFilters

METHOD_USER_GET = register_method(Method("twdesk-get_user"))
METHOD_USER_LIST = register_method(Method("twdesk-list_users"))


def user_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get user")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        payload = await client.get(
            desk_path(f"users/{request.id}.json"), tool=METHOD_USER_GET
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_USER_GET,
        title="Get User",
        description=(
            "Retrieve detailed information about a specific Teamwork Desk user "
            "(agent) by their ID."
        ),
        properties={"id": integer("The ID of the user to retrieve.")},
        required=["id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def user_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list users")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        query = DeskListQuery()
        filters = UserFilters()
        bind(
            arguments,
            optional_list_param(filters, "firstName", attr="first_names"),
            optional_list_param(filters, "lastName", attr="last_names"),
            optional_list_param(filters, "email", attr="emails"),
            optional_numeric_list_param(filters, "inboxIDs", attr="inbox_ids"),
            optional_param(filters, "isPartTime", kind=bool, attr="part_time"),
            *pagination_params(query),
        )
        payload = await client.get(
            desk_path("users.json"),
            params=list_query(query, filters),
            tool=METHOD_USER_LIST,
        )
        return json_result(payload)

    strings = {"type": "string"}
    tool = new_tool(
        METHOD_USER_LIST,
        title="List Users",
        description=(
            "List Teamwork Desk users (agents), with optional filters for name, "
            "email, inbox membership and part-time status."
        ),
        properties={
            "firstName": array(strings, "The first names of the users to filter by."),
            "lastName": array(strings, "The last names of the users to filter by."),
            "email": array(strings, "The email addresses of the users to filter by."),
            "inboxIDs": integer_list(
                "The IDs of the inboxes the users belong to. "
                "They can be found by using the 'twdesk-list_inboxes' tool."
            ),
            "isPartTime": boolean("Only list part-time users."),
            **pagination_properties(),
        },
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)
