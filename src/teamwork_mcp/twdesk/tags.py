from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import (
    bind,
    optional_numeric_list_param,
    optional_param,
    required_numeric_param,
    required_param,
)
from teamwork_mcp.core.results import json_result, response_id, text_result
from teamwork_mcp.core.schema import integer, integer_list, new_tool, string
from teamwork_mcp.core.toolsets import Method, ServerTool, register_method

from .meta import desk_path, list_query, pagination_params, pagination_properties
from .models import DeskListQuery, PathID, TagFilters, TagRequest

METHOD_TAG_CREATE = register_method(Method("twdesk-create_tag"))
METHOD_TAG_UPDATE = register_method(Method("twdesk-update_tag"))
METHOD_TAG_GET = register_method(Method("twdesk-get_tag"))
METHOD_TAG_LIST = register_method(Method("twdesk-list_tags"))


def tag_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get tag")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        payload = await client.get(
            desk_path(f"tags/{request.id}.json"), tool=METHOD_TAG_GET
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_TAG_GET,
        title="Get Tag",
        description=(
            "Retrieve detailed information about a specific tag in Teamwork Desk by "
            "its ID. Useful for inspecting tag attributes or troubleshooting ticket "
            "categorization."
        ),
        properties={"id": integer("The ID of the tag to retrieve.")},
        required=["id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def tag_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list tags")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        query = DeskListQuery()
        filters = TagFilters()
        bind(
            arguments,
            optional_param(filters, "name"),
            optional_param(filters, "color"),
            optional_numeric_list_param(filters, "inboxIDs", attr="inbox_ids"),
            *pagination_params(query),
        )
        payload = await client.get(
            desk_path("tags.json"),
            params=list_query(query, filters),
            tool=METHOD_TAG_LIST,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_TAG_LIST,
        title="List Tags",
        description=(
            "List all tags in Teamwork Desk, with optional filters for name, color, "
            "and inbox association."
        ),
        properties={
            "name": string("The name of the tag to filter by."),
            "color": string("The color of the tag to filter by."),
            "inboxIDs": integer_list(
                "The IDs of the inboxes to filter by. "
                "They can be found by using the 'twdesk-list_inboxes' tool."
            ),
            **pagination_properties(),
        },
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def tag_create(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to create tag")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = TagRequest()
        bind(
            arguments,
            required_param(request, "name"),
            optional_param(request, "color"),
        )
        payload = await client.post(
            desk_path("tags.json"),
            json={"tag": request.body()},
            tool=METHOD_TAG_CREATE,
        )
        tag_id = response_id(payload, "tag", "id")
        return text_result(f"Tag created successfully with ID {tag_id}")

    tool = new_tool(
        METHOD_TAG_CREATE,
        title="Create Tag",
        description=(
            "Create a new tag in Teamwork Desk by specifying its name and color. "
            "Useful for organizing tickets by topic or routing them for reporting."
        ),
        properties={
            "name": string("The name of the tag."),
            "color": string("The color of the tag."),
        },
        required=["name"],
    )
    return ServerTool(tool=tool, handler=handle)


def tag_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to update tag")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = TagRequest()
        bind(
            arguments,
            required_numeric_param(request, "id"),
            optional_param(request, "name"),
            optional_param(request, "color"),
        )
        await client.patch(
            desk_path(f"tags/{request.id}.json"),
            json={"tag": request.body()},
            tool=METHOD_TAG_UPDATE,
        )
        return text_result("Tag updated successfully")

    tool = new_tool(
        METHOD_TAG_UPDATE,
        title="Update Tag",
        description=(
            "Update an existing tag in Teamwork Desk by ID, allowing changes to its "
            "name and color."
        ),
        properties={
            "id": integer("The ID of the tag to update."),
            "name": string("The new name of the tag."),
            "color": string("The new color of the tag."),
        },
        required=["id"],
    )
    return ServerTool(tool=tool, handler=handle)
