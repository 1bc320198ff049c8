"""Tasklists: ordered groups of tasks inside a project."""

from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import (
    bind,
    optional_numeric_param,
    optional_param,
    required_numeric_param,
    required_param,
)
from teamwork_mcp.core.results import json_result, response_id, text_result
from teamwork_mcp.core.schema import integer, new_tool, pagination, string
from teamwork_mcp.core.toolsets import Method, ServerTool, register_method

from .common import page_params
from .models import (
    ListFilters,
    PathID,
    TasklistCreateRequest,
    TasklistUpdateRequest,
)

METHOD_TASKLIST_CREATE = register_method(Method("twprojects-create_tasklist"))
METHOD_TASKLIST_UPDATE = register_method(Method("twprojects-update_tasklist"))
METHOD_TASKLIST_DELETE = register_method(Method("twprojects-delete_tasklist"))
METHOD_TASKLIST_GET = register_method(Method("twprojects-get_tasklist"))
METHOD_TASKLIST_LIST = register_method(Method("twprojects-list_tasklists"))
METHOD_TASKLIST_LIST_BY_PROJECT = register_method(
    Method("twprojects-list_tasklists_by_project")
)

TASKLIST_DESCRIPTION = (
    "In the context of Teamwork.com, a task list is a way to group related tasks "
    "within a project, helping teams organize their work into meaningful sections "
    "such as phases, categories, or deliverables."
)

_NAME = "The name of the tasklist."
_DESCRIPTION = "The description of the tasklist."
_MILESTONE = "The ID of the milestone to associate with the tasklist."


def tasklist_create(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to create tasklist")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = TasklistCreateRequest()
        bind(
            arguments,
            required_param(request, "name"),
            required_numeric_param(request, "project_id"),
            optional_param(request, "description"),
            optional_numeric_param(request, "milestone_id"),
        )
        payload = await client.post(
            f"/projects/{request.project_id}/tasklists.json",
            json={"todo-list": request.body()},
            tool=METHOD_TASKLIST_CREATE,
        )
        tasklist_id = response_id(payload, "tasklistId")
        return text_result(f"Tasklist created successfully with ID {tasklist_id}")

    tool = new_tool(
        METHOD_TASKLIST_CREATE,
        title="Create Tasklist",
        description="Create a new tasklist in Teamwork.com. " + TASKLIST_DESCRIPTION,
        properties={
            "name": string(_NAME),
            "project_id": integer("The ID of the project to create the tasklist in."),
            "description": string(_DESCRIPTION),
            "milestone_id": integer(_MILESTONE),
        },
        required=["name", "project_id"],
    )
    return ServerTool(tool=tool, handler=handle)


def tasklist_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to update tasklist")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = TasklistUpdateRequest()
        bind(
            arguments,
            required_numeric_param(request, "id"),
            optional_param(request, "name"),
            optional_param(request, "description"),
            optional_numeric_param(request, "milestone_id"),
        )
        await client.put(
            f"/tasklists/{request.id}.json",
            json={"todo-list": request.body()},
            tool=METHOD_TASKLIST_UPDATE,
        )
        return text_result("Tasklist updated successfully")

    tool = new_tool(
        METHOD_TASKLIST_UPDATE,
        title="Update Tasklist",
        description="Update an existing tasklist in Teamwork.com. "
        + TASKLIST_DESCRIPTION,
        properties={
            "id": integer("The ID of the tasklist to update."),
            "name": string(_NAME),
            "description": string(_DESCRIPTION),
            "milestone_id": integer(_MILESTONE),
        },
        required=["id"],
    )
    return ServerTool(tool=tool, handler=handle)


def tasklist_delete(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to delete tasklist")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        await client.delete(f"/tasklists/{request.id}.json", tool=METHOD_TASKLIST_DELETE)
        return text_result("Tasklist deleted successfully")

    tool = new_tool(
        METHOD_TASKLIST_DELETE,
        title="Delete Tasklist",
        description="Delete an existing tasklist in Teamwork.com. "
        + TASKLIST_DESCRIPTION,
        properties={"id": integer("The ID of the tasklist to delete.")},
        required=["id"],
        destructive=True,
    )
    return ServerTool(tool=tool, handler=handle)


def tasklist_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get tasklist")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        payload = await client.get(
            f"/projects/api/v3/tasklists/{request.id}.json", tool=METHOD_TASKLIST_GET
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_TASKLIST_GET,
        title="Get Tasklist",
        description="Get an existing tasklist in Teamwork.com. "
        + TASKLIST_DESCRIPTION,
        properties={"id": integer("The ID of the tasklist to get.")},
        required=["id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def tasklist_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list tasklists")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        filters = ListFilters()
        bind(arguments, optional_param(filters, "search_term"), *page_params(filters))
        payload = await client.get(
            "/projects/api/v3/tasklists.json",
            params=filters.query(),
            tool=METHOD_TASKLIST_LIST,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_TASKLIST_LIST,
        title="List Tasklists",
        description="List tasklists in Teamwork.com. " + TASKLIST_DESCRIPTION,
        properties={
            "search_term": string("A search term to filter tasklists by name."),
            **pagination(),
        },
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def tasklist_list_by_project(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list tasklists")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        path = PathID()
        filters = ListFilters()
        bind(
            arguments,
            required_numeric_param(path, "project_id"),
            optional_param(filters, "search_term"),
            *page_params(filters),
        )
        payload = await client.get(
            f"/projects/api/v3/projects/{path.project_id}/tasklists.json",
            params=filters.query(),
            tool=METHOD_TASKLIST_LIST_BY_PROJECT,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_TASKLIST_LIST_BY_PROJECT,
        title="List Tasklists By Project",
        description="List tasklists in Teamwork.com by project. "
        + TASKLIST_DESCRIPTION,
        properties={
            "project_id": integer("The ID of the project from which to retrieve tasklists."),
            "search_term": string("A search term to filter tasklists by name."),
            **pagination(),
        },
        required=["project_id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)
