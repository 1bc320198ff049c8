"""Desk ticket statuses."""

from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import (
    bind,
    optional_list_param,
    optional_numeric_param,
    optional_param,
    required_numeric_param,
    required_param,
)
from teamwork_mcp.core.results import json_result, response_id, text_result
from teamwork_mcp.core.schema import array, integer, new_tool, string
from teamwork_mcp.core.toolsets import Method, ServerTool, register_method

from .meta import desk_path, list_query, pagination_params, pagination_properties
from .models import DeskListQuery, NamedFilters, PathID, StatusRequest

METHOD_STATUS_CREATE = register_method(Method("twdesk-create_status"))
METHOD_STATUS_UPDATE = register_method(Method("twdesk-update_status"))
METHOD_STATUS_GET = register_method(Method("twdesk-get_status"))
METHOD_STATUS_LIST = register_method(Method("twdesk-list_statuses"))


def status_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get status")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        payload = await client.get(
            desk_path(f"ticketstatuses/{request.id}.json"), tool=METHOD_STATUS_GET
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_STATUS_GET,
        title="Get Status",
        description=(
            "Retrieve detailed information about a specific status in Teamwork Desk "
            "by its ID. Useful for auditing status usage, troubleshooting ticket "
            "workflows, or integrating Desk status data into automation workflows."
        ),
        properties={"id": integer("The ID of the status to retrieve.")},
        required=["id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def status_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list statuses")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        query = DeskListQuery()
        filters = NamedFilters()
        bind(
            arguments,
            optional_list_param(filters, "name"),
            optional_list_param(filters, "color"),
            optional_list_param(filters, "code"),
            *pagination_params(query),
        )
        payload = await client.get(
            desk_path("ticketstatuses.json"),
            params=list_query(query, filters),
            tool=METHOD_STATUS_LIST,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_STATUS_LIST,
        title="List Statuses",
        description=(
            "List all statuses in Teamwork Desk, with optional filters for name, "
            "color, and code. Enables users to audit, analyze, or synchronize status "
            "configurations for ticket management, reporting, or integration "
            "scenarios."
        ),
        properties={
            "name": array({"type": "string"}, "The names of the statuses to filter by."),
            "color": array({"type": "string"}, "The colors of the statuses to filter by."),
            "code": array({"type": "string"}, "The codes of the statuses to filter by."),
            **pagination_properties(),
        },
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def status_create(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to create status")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = StatusRequest()
        bind(
            arguments,
            required_param(request, "name"),
            optional_param(request, "color"),
            optional_numeric_param(request, "displayOrder", attr="display_order"),
        )
        payload = await client.post(
            desk_path("ticketstatuses.json"),
            json={"ticketstatus": request.body()},
            tool=METHOD_STATUS_CREATE,
        )
        status_id = response_id(payload, "ticketstatus", "id")
        return text_result(f"Status created successfully with ID {status_id}")

    tool = new_tool(
        METHOD_STATUS_CREATE,
        title="Create Status",
        description=(
            "Create a new status in Teamwork Desk by specifying its name, color, and "
            "display order. Useful for customizing ticket workflows or introducing "
            "new resolution states."
        ),
        properties={
            "name": string("The name of the status."),
            "color": string("The color of the status."),
            "displayOrder": integer("The display order of the status."),
        },
        required=["name"],
    )
    return ServerTool(tool=tool, handler=handle)


def status_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to update status")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = StatusRequest()
        bind(
            arguments,
            required_numeric_param(request, "id"),
            optional_param(request, "name"),
            optional_param(request, "color"),
            optional_numeric_param(request, "displayOrder", attr="display_order"),
        )
        await client.patch(
            desk_path(f"ticketstatuses/{request.id}.json"),
            json={"ticketstatus": request.body()},
            tool=METHOD_STATUS_UPDATE,
        )
        return text_result("Status updated successfully")

    tool = new_tool(
        METHOD_STATUS_UPDATE,
        title="Update Status",
        description=(
            "Update an existing status in Teamwork Desk by ID, allowing changes to "
            "its name, color, and display order."
        ),
        properties={
            "id": integer("The ID of the status to update."),
            "name": string("The new name of the status."),
            "color": string("The color of the status."),
            "displayOrder": integer("The display order of the status."),
        },
        required=["id"],
    )
    return ServerTool(tool=tool, handler=handle)
