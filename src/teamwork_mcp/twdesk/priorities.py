"""Desk ticket priorities."""

from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import (
    bind,
    optional_list_param,
    optional_param,
    required_numeric_param,
    required_param,
)
from teamwork_mcp.core.results import json_result, response_id, text_result
from teamwork_mcp.core.schema import array, integer, new_tool, string
from teamwork_mcp.core.toolsets import Method, ServerTool, register_method

from .meta import desk_path, list_query, pagination_params, pagination_properties
from .models import DeskListQuery, NamedFilters, PathID, PriorityRequest

METHOD_PRIORITY_CREATE = register_method(Method("twdesk-create_priority"))
METHOD_PRIORITY_UPDATE = register_method(Method("twdesk-update_priority"))
METHOD_PRIORITY_GET = register_method(Method("twdesk-get_priority"))
METHOD_PRIORITY_LIST = register_method(Method("twdesk-list_priorities"))


def priority_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get priority")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        payload = await client.get(
            desk_path(f"ticketpriorities/{request.id}.json"), tool=METHOD_PRIORITY_GET
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_PRIORITY_GET,
        title="Get Priority",
        description=(
            "Retrieve detailed information about a specific priority in Teamwork "
            "Desk by its ID. Useful for inspecting priority attributes or "
            "troubleshooting ticket routing."
        ),
        properties={"id": integer("The ID of the priority to retrieve.")},
        required=["id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def priority_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list priorities")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        query = DeskListQuery()
        filters = NamedFilters()
        bind(
            arguments,
            optional_list_param(filters, "name"),
            optional_list_param(filters, "color"),
            *pagination_params(query),
        )
        payload = await client.get(
            desk_path("ticketpriorities.json"),
            params=list_query(query, filters),
            tool=METHOD_PRIORITY_LIST,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_PRIORITY_LIST,
        title="List Priorities",
        description=(
            "List all available priorities in Teamwork Desk, with optional filters "
            "for name and color."
        ),
        properties={
            "name": array({"type": "string"}, "The name of the priority to filter by."),
            "color": array(
                {"type": "string"}, "The color of the priority to filter by."
            ),
            **pagination_properties(),
        },
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def priority_create(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to create priority")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PriorityRequest()
        bind(
            arguments,
            required_param(request, "name"),
            optional_param(request, "color"),
        )
        payload = await client.post(
            desk_path("ticketpriorities.json"),
            json={"ticketpriority": request.body()},
            tool=METHOD_PRIORITY_CREATE,
        )
        priority_id = response_id(payload, "ticketpriority", "id")
        return text_result(f"Priority created successfully with ID {priority_id}")

    tool = new_tool(
        METHOD_PRIORITY_CREATE,
        title="Create Priority",
        description=(
            "Create a new priority in Teamwork Desk by specifying its name and "
            "color. Useful for introducing new escalation levels."
        ),
        properties={
            "name": string("The name of the priority."),
            "color": string("The color of the priority."),
        },
        required=["name"],
    )
    return ServerTool(tool=tool, handler=handle)


def priority_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to update priority")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PriorityRequest()
        bind(
            arguments,
            required_numeric_param(request, "id"),
            optional_param(request, "name"),
            optional_param(request, "color"),
        )
        await client.patch(
            desk_path(f"ticketpriorities/{request.id}.json"),
            json={"ticketpriority": request.body()},
            tool=METHOD_PRIORITY_UPDATE,
        )
        return text_result("Priority updated successfully")

    tool = new_tool(
        METHOD_PRIORITY_UPDATE,
        title="Update Priority",
        description=(
            "Update an existing priority in Teamwork Desk by ID, allowing changes "
            "to its name and color."
        ),
        properties={
            "id": integer("The ID of the priority to update."),
            "name": string("The new name of the priority."),
            "color": string("The color of the priority."),
        },
        required=["id"],
    )
    return ServerTool(tool=tool, handler=handle)
