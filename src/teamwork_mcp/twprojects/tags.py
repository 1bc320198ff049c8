"""Tags: user-defined labels applied across projects, tasks, milestones and more."""

from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import (
    bind,
    optional_numeric_list_param,
    optional_numeric_param,
    optional_param,
    required_numeric_param,
    required_param,
    restrict_values,
)
from teamwork_mcp.core.results import json_result, response_id, text_result
from teamwork_mcp.core.schema import (
    integer,
    integer_list,
    new_tool,
    pagination,
    string,
)
from teamwork_mcp.core.toolsets import Method, ServerTool, register_method

from .common import page_params
from .models import PathID, TagCreateRequest, TagListFilters, TagUpdateRequest

METHOD_TAG_CREATE = register_method(Method("twprojects-create_tag"))
METHOD_TAG_UPDATE = register_method(Method("twprojects-update_tag"))
METHOD_TAG_DELETE = register_method(Method("twprojects-delete_tag"))
METHOD_TAG_GET = register_method(Method("twprojects-get_tag"))
METHOD_TAG_LIST = register_method(Method("twprojects-list_tags"))

TAG_DESCRIPTION = (
    "In the context of Teamwork.com, a tag is a customizable label that can be "
    "applied to various items such as tasks, projects, milestones, messages, and "
    "more, to help categorize and organize work efficiently. Tags provide a "
    "flexible way to filter, search, and group related items across the platform."
)

TAG_ITEM_TYPES = (
    "project",
    "task",
    "tasklist",
    "milestone",
    "message",
    "timelog",
    "notebook",
    "file",
    "company",
    "link",
)

_NAME = "The name of the tag. It must have less than 50 characters."
_PROJECT = (
    "The ID of the project to associate the tag with. This is for project-scoped tags."
)


def tag_create(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to create tag")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = TagCreateRequest()
        bind(
            arguments,
            required_param(request, "name"),
            optional_numeric_param(request, "project_id"),
        )
        payload = await client.post(
            "/projects/api/v3/tags.json",
            json={"tag": request.body()},
            tool=METHOD_TAG_CREATE,
        )
        tag_id = response_id(payload, "tag", "id")
        return text_result(f"Tag created successfully with ID {tag_id}")

    tool = new_tool(
        METHOD_TAG_CREATE,
        title="Create Tag",
        description="Create a new tag in Teamwork.com. " + TAG_DESCRIPTION,
        properties={"name": string(_NAME), "project_id": integer(_PROJECT)},
        required=["name"],
    )
    return ServerTool(tool=tool, handler=handle)


def tag_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to update tag")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = TagUpdateRequest()
        bind(
            arguments,
            required_numeric_param(request, "id"),
            optional_param(request, "name"),
            optional_numeric_param(request, "project_id"),
        )
        await client.patch(
            f"/projects/api/v3/tags/{request.id}.json",
            json={"tag": request.body()},
            tool=METHOD_TAG_UPDATE,
        )
        return text_result("Tag updated successfully")

    tool = new_tool(
        METHOD_TAG_UPDATE,
        title="Update Tag",
        description="Update an existing tag in Teamwork.com. " + TAG_DESCRIPTION,
        properties={
            "id": integer("The ID of the tag to update."),
            "name": string(_NAME),
            "project_id": integer(_PROJECT),
        },
        required=["id"],
    )
    return ServerTool(tool=tool, handler=handle)


def tag_delete(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to delete tag")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        await client.delete(
            f"/projects/api/v3/tags/{request.id}.json", tool=METHOD_TAG_DELETE
        )
        return text_result("Tag deleted successfully")

    tool = new_tool(
        METHOD_TAG_DELETE,
        title="Delete Tag",
        description="Delete an existing tag in Teamwork.com. " + TAG_DESCRIPTION,
        properties={"id": integer("The ID of the tag to delete.")},
        required=["id"],
        destructive=True,
    )
    return ServerTool(tool=tool, handler=handle)


def tag_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get tag")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        payload = await client.get(
            f"/projects/api/v3/tags/{request.id}.json", tool=METHOD_TAG_GET
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_TAG_GET,
        title="Get Tag",
        description="Get an existing tag in Teamwork.com. " + TAG_DESCRIPTION,
        properties={"id": integer("The ID of the tag to get.")},
        required=["id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def tag_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list tags")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        filters = TagListFilters()
        bind(
            arguments,
            optional_param(filters, "search_term"),
            optional_param(filters, "item_type", restrict_values(*TAG_ITEM_TYPES)),
            optional_numeric_list_param(filters, "project_ids"),
            *page_params(filters),
        )
        payload = await client.get(
            "/projects/api/v3/tags.json", params=filters.query(), tool=METHOD_TAG_LIST
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_TAG_LIST,
        title="List Tags",
        description="List tags in Teamwork.com. " + TAG_DESCRIPTION,
        properties={
            "search_term": string(
                "A search term to filter tags by name. Each word from the search "
                "term is used to match against the tag name."
            ),
            "item_type": string(
                "The type of item to filter tags by.", enum=TAG_ITEM_TYPES
            ),
            "project_ids": integer_list("A list of project IDs to filter tags by."),
            **pagination(),
        },
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)
