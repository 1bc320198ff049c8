"""Desk ticket types (e.g. question, incident, feature request)."""

from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import (
    bind,
    optional_list_param,
    optional_numeric_list_param,
    optional_numeric_param,
    optional_param,
    required_numeric_param,
    required_param,
)
from teamwork_mcp.core.results import json_result, response_id, text_result
from teamwork_mcp.core.schema import (
    array,
    boolean,
    integer,
    integer_list,
    new_tool,
    string,
)
from teamwork_mcp.core.toolsets import Method, ServerTool, register_method

from .meta import desk_path, list_query, pagination_params, pagination_properties
from .models import DeskListQuery, NamedFilters, PathID, TicketTypeRequest

METHOD_TYPE_CREATE = register_method(Method("twdesk-create_type"))
METHOD_TYPE_UPDATE = register_method(Method("twdesk-update_type"))
METHOD_TYPE_GET = register_method(Method("twdesk-get_type"))
METHOD_TYPE_LIST = register_method(Method("twdesk-list_types"))


def _type_params(request: TicketTypeRequest) -> tuple:
    return (
        optional_numeric_param(request, "displayOrder", attr="display_order"),
        optional_param(
            request,
            "enabledForFutureInboxes",
            kind=bool,
            attr="enabled_for_future_inboxes",
        ),
    )


def _type_properties() -> dict:
    return {
        "displayOrder": integer("The display order of the type."),
        "enabledForFutureInboxes": boolean(
            "Whether the type is enabled for inboxes created in the future."
        ),
    }


def type_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get type")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        payload = await client.get(
            desk_path(f"tickettypes/{request.id}.json"), tool=METHOD_TYPE_GET
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_TYPE_GET,
        title="Get Type",
        description=(
            "Retrieve detailed information about a specific ticket type in "
            "Teamwork Desk by its ID."
        ),
        properties={"id": integer("The ID of the type to retrieve.")},
        required=["id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def type_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list types")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        query = DeskListQuery()
        filters = NamedFilters()
        bind(
            arguments,
            optional_list_param(filters, "name"),
            optional_numeric_list_param(filters, "inboxIDs", attr="inbox_ids"),
            *pagination_params(query),
        )
        payload = await client.get(
            desk_path("tickettypes.json"),
            params=list_query(query, filters),
            tool=METHOD_TYPE_LIST,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_TYPE_LIST,
        title="List Types",
        description=(
            "List all ticket types in Teamwork Desk, with optional filters for name "
            "and inbox. Useful for auditing how tickets are classified across "
            "inboxes."
        ),
        properties={
            "name": array({"type": "string"}, "The names of the types to filter by."),
            "inboxIDs": integer_list(
                "The IDs of the inboxes to filter by. "
                "They can be found by using the 'twdesk-list_inboxes' tool."
            ),
            **pagination_properties(),
        },
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def type_create(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to create type")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = TicketTypeRequest()
        bind(arguments, required_param(request, "name"), *_type_params(request))
        payload = await client.post(
            desk_path("tickettypes.json"),
            json={"tickettype": request.body()},
            tool=METHOD_TYPE_CREATE,
        )
        type_id = response_id(payload, "tickettype", "id")
        return text_result(f"Type created successfully with ID {type_id}")

    tool = new_tool(
        METHOD_TYPE_CREATE,
        title="Create Type",
        description=(
            "Create a new ticket type in Teamwork Desk by specifying its name, "
            "display order, and whether it is enabled for future inboxes."
        ),
        properties={"name": string("The name of the type."), **_type_properties()},
        required=["name"],
    )
    return ServerTool(tool=tool, handler=handle)


def type_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to update type")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = TicketTypeRequest()
        bind(
            arguments,
            required_numeric_param(request, "id"),
            optional_param(request, "name"),
            *_type_params(request),
        )
        await client.patch(
            desk_path(f"tickettypes/{request.id}.json"),
            json={"tickettype": request.body()},
            tool=METHOD_TYPE_UPDATE,
        )
        return text_result("Type updated successfully")

    tool = new_tool(
        METHOD_TYPE_UPDATE,
        title="Update Type",
        description=(
            "Update an existing ticket type in Teamwork Desk by ID, allowing "
            "changes to its name, display order, and inbox defaults."
        ),
        properties={
            "id": integer("The ID of the type to update."),
            "name": string("The new name of the type."),
            **_type_properties(),
        },
        required=["id"],
    )
    return ServerTool(tool=tool, handler=handle)
