"""Projects: the central containers tasks, milestones and timelogs belong to."""

from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import (
    bind,
    optional_legacy_date_param,
    optional_numeric_list_param,
    optional_numeric_param,
    optional_param,
    required_numeric_param,
    required_param,
)
from teamwork_mcp.core.results import json_result, response_id, text_result
from teamwork_mcp.core.schema import (
    boolean,
    integer,
    integer_list,
    new_tool,
    pagination,
    string,
)
from teamwork_mcp.core.toolsets import Method, ServerTool, register_method

from .common import page_params
from .models import (
    PathID,
    ProjectCreateRequest,
    ProjectListFilters,
    ProjectUpdateRequest,
)

METHOD_PROJECT_CREATE = register_method(Method("twprojects-create_project"))
METHOD_PROJECT_UPDATE = register_method(Method("twprojects-update_project"))
METHOD_PROJECT_DELETE = register_method(Method("twprojects-delete_project"))
METHOD_PROJECT_GET = register_method(Method("twprojects-get_project"))
METHOD_PROJECT_LIST = register_method(Method("twprojects-list_projects"))

PROJECT_DESCRIPTION = (
    "The project feature in Teamwork.com serves as the central workspace for "
    "organizing and managing a specific piece of work or initiative. Each project "
    "provides a dedicated area where teams can plan tasks, assign responsibilities, "
    "set deadlines, and track progress toward shared goals."
)


def _project_properties() -> dict:
    return {
        "name": string("The name of the project."),
        "description": string("The description of the project."),
        "start_at": string("The start date of the project in the format YYYYMMDD."),
        "end_at": string("The end date of the project in the format YYYYMMDD."),
        "company_id": integer("The ID of the company associated with the project."),
        "owner_id": integer("The ID of the user who owns the project."),
        "tag_ids": integer_list("A list of tag IDs to associate with the project."),
    }


def project_create(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to create project")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = ProjectCreateRequest()
        bind(
            arguments,
            required_param(request, "name"),
            optional_param(request, "description"),
            optional_legacy_date_param(request, "start_at"),
            optional_legacy_date_param(request, "end_at"),
            optional_numeric_param(request, "company_id"),
            optional_numeric_param(request, "owner_id"),
            optional_numeric_list_param(request, "tag_ids"),
        )
        payload = await client.post(
            "/projects.json",
            json={"project": request.body()},
            tool=METHOD_PROJECT_CREATE,
        )
        project_id = response_id(payload, "id")
        return text_result(f"Project created successfully with ID {project_id}")

    tool = new_tool(
        METHOD_PROJECT_CREATE,
        title="Create Project",
        description="Create a new project in Teamwork.com. " + PROJECT_DESCRIPTION,
        properties=_project_properties(),
        required=["name"],
    )
    return ServerTool(tool=tool, handler=handle)


def project_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to update project")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = ProjectUpdateRequest()
        bind(
            arguments,
            required_numeric_param(request, "id"),
            optional_param(request, "name"),
            optional_param(request, "description"),
            optional_legacy_date_param(request, "start_at"),
            optional_legacy_date_param(request, "end_at"),
            optional_numeric_param(request, "company_id"),
            optional_numeric_param(request, "owner_id"),
            optional_numeric_list_param(request, "tag_ids"),
        )
        await client.put(
            f"/projects/{request.id}.json",
            json={"project": request.body()},
            tool=METHOD_PROJECT_UPDATE,
        )
        return text_result("Project updated successfully")

    tool = new_tool(
        METHOD_PROJECT_UPDATE,
        title="Update Project",
        description="Update an existing project in Teamwork.com. "
        + PROJECT_DESCRIPTION,
        properties={
            "id": integer("The ID of the project to update."),
            **_project_properties(),
        },
        required=["id"],
    )
    return ServerTool(tool=tool, handler=handle)


def project_delete(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to delete project")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        await client.delete(f"/projects/{request.id}.json", tool=METHOD_PROJECT_DELETE)
        return text_result("Project deleted successfully")

    tool = new_tool(
        METHOD_PROJECT_DELETE,
        title="Delete Project",
        description="Delete an existing project in Teamwork.com. "
        + PROJECT_DESCRIPTION,
        properties={"id": integer("The ID of the project to delete.")},
        required=["id"],
        destructive=True,
    )
    return ServerTool(tool=tool, handler=handle)


def project_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get project")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        payload = await client.get(
            f"/projects/api/v3/projects/{request.id}.json", tool=METHOD_PROJECT_GET
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_PROJECT_GET,
        title="Get Project",
        description="Get an existing project in Teamwork.com. " + PROJECT_DESCRIPTION,
        properties={"id": integer("The ID of the project to get.")},
        required=["id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def project_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list projects")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        filters = ProjectListFilters()
        bind(
            arguments,
            optional_param(filters, "search_term"),
            optional_numeric_list_param(filters, "tag_ids"),
            optional_param(filters, "match_all_tags", kind=bool),
            *page_params(filters),
        )
        payload = await client.get(
            "/projects/api/v3/projects.json",
            params=filters.query(),
            tool=METHOD_PROJECT_LIST,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_PROJECT_LIST,
        title="List Projects",
        description="List projects in Teamwork.com. " + PROJECT_DESCRIPTION,
        properties={
            "search_term": string(
                "A search term to filter projects by name or description."
            ),
            "tag_ids": integer_list("A list of tag IDs to filter projects by tags."),
            "match_all_tags": boolean(
                "If true, the search will match projects that have all the specified "
                "tags. If false, the search will match projects that have any of the "
                "specified tags. Defaults to false."
            ),
            **pagination(),
        },
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)
