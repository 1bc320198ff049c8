"""Teams: named groups of users, site wide or scoped to a company or project."""

from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import (
    bind,
    optional_custom_numeric_list_param,
    optional_numeric_param,
    optional_param,
    required_numeric_param,
    required_param,
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

from .common import legacy_id_list, page_params
from .models import ListFilters, PathID, TeamCreateRequest, TeamUpdateRequest

METHOD_TEAM_CREATE = register_method(Method("twprojects-create_team"))
METHOD_TEAM_UPDATE = register_method(Method("twprojects-update_team"))
METHOD_TEAM_DELETE = register_method(Method("twprojects-delete_team"))
METHOD_TEAM_GET = register_method(Method("twprojects-get_team"))
METHOD_TEAM_LIST = register_method(Method("twprojects-list_teams"))
METHOD_TEAM_LIST_BY_COMPANY = register_method(
    Method("twprojects-list_teams_by_company")
)
METHOD_TEAM_LIST_BY_PROJECT = register_method(
    Method("twprojects-list_teams_by_project")
)

TEAM_DESCRIPTION = (
    "In the context of Teamwork.com, a team is a group of users who are organized "
    "together to collaborate more efficiently on projects and tasks. Teams help "
    "structure work by grouping people with similar roles, responsibilities, or "
    "departmental functions."
)

_SEARCH = "A search term to filter teams by name or handle."


def _team_properties() -> dict:
    return {
        "name": string("The name of the team."),
        "handle": string(
            "The handle of the team. It is a unique identifier for the team. It "
            "must not have spaces or special characters."
        ),
        "description": string("The description of the team."),
        "company_id": integer(
            "The ID of the company. This is used to create a team scoped for a "
            "specific company."
        ),
        "project_id": integer(
            "The ID of the project. This is used to create a team scoped for a "
            "specific project."
        ),
        "user_ids": integer_list("A list of user IDs to add to the team."),
    }


def team_create(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to create team")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = TeamCreateRequest()
        bind(
            arguments,
            required_param(request, "name"),
            optional_param(request, "handle"),
            optional_param(request, "description"),
            optional_numeric_param(request, "parent_team_id"),
            optional_numeric_param(request, "company_id"),
            optional_numeric_param(request, "project_id"),
            optional_custom_numeric_list_param(request, "user_ids", legacy_id_list),
        )
        payload = await client.post(
            "/teams.json", json={"team": request.body()}, tool=METHOD_TEAM_CREATE
        )
        team_id = response_id(payload, "id")
        return text_result(f"Team created successfully with ID {team_id}")

    properties = _team_properties()
    properties["parent_team_id"] = integer(
        "The ID of the parent team. This is used to create a hierarchy of teams."
    )
    tool = new_tool(
        METHOD_TEAM_CREATE,
        title="Create Team",
        description="Create a new team in Teamwork.com. " + TEAM_DESCRIPTION,
        properties=properties,
        required=["name"],
    )
    return ServerTool(tool=tool, handler=handle)


def team_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to update team")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = TeamUpdateRequest()
        bind(
            arguments,
            required_numeric_param(request, "id"),
            optional_param(request, "name"),
            optional_param(request, "handle"),
            optional_param(request, "description"),
            optional_numeric_param(request, "company_id"),
            optional_numeric_param(request, "project_id"),
            optional_custom_numeric_list_param(request, "user_ids", legacy_id_list),
        )
        await client.put(
            f"/teams/{request.id}.json",
            json={"team": request.body()},
            tool=METHOD_TEAM_UPDATE,
        )
        return text_result("Team updated successfully")

    tool = new_tool(
        METHOD_TEAM_UPDATE,
        title="Update Team",
        description="Update an existing team in Teamwork.com. " + TEAM_DESCRIPTION,
        properties={"id": integer("The ID of the team to update."), **_team_properties()},
        required=["id"],
    )
    return ServerTool(tool=tool, handler=handle)


def team_delete(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to delete team")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        await client.delete(f"/teams/{request.id}.json", tool=METHOD_TEAM_DELETE)
        return text_result("Team deleted successfully")

    tool = new_tool(
        METHOD_TEAM_DELETE,
        title="Delete Team",
        description="Delete an existing team in Teamwork.com. " + TEAM_DESCRIPTION,
        properties={"id": integer("The ID of the team to delete.")},
        required=["id"],
        destructive=True,
    )
    return ServerTool(tool=tool, handler=handle)


def team_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get team")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        payload = await client.get(f"/teams/{request.id}.json", tool=METHOD_TEAM_GET)
        return json_result(payload)

    tool = new_tool(
        METHOD_TEAM_GET,
        title="Get Team",
        description="Get an existing team in Teamwork.com. " + TEAM_DESCRIPTION,
        properties={"id": integer("The ID of the team to get.")},
        required=["id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def team_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list teams")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        filters = ListFilters()
        bind(arguments, optional_param(filters, "search_term"), *page_params(filters))
        payload = await client.get(
            "/teams.json", params=filters.query(), tool=METHOD_TEAM_LIST
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_TEAM_LIST,
        title="List Teams",
        description="List teams in Teamwork.com. " + TEAM_DESCRIPTION,
        properties={"search_term": string(_SEARCH), **pagination()},
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def team_list_by_company(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list teams")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        path = PathID()
        filters = ListFilters()
        bind(
            arguments,
            required_numeric_param(path, "company_id"),
            optional_param(filters, "search_term"),
            *page_params(filters),
        )
        payload = await client.get(
            f"/companies/{path.company_id}/teams.json",
            params=filters.query(),
            tool=METHOD_TEAM_LIST_BY_COMPANY,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_TEAM_LIST_BY_COMPANY,
        title="List Teams By Company",
        description="List teams in Teamwork.com by client/company. "
        + TEAM_DESCRIPTION,
        properties={
            "company_id": integer("The ID of the company from which to retrieve teams."),
            "search_term": string(_SEARCH),
            **pagination(),
        },
        required=["company_id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def team_list_by_project(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list teams")
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
            f"/projects/{path.project_id}/teams.json",
            params=filters.query(),
            tool=METHOD_TEAM_LIST_BY_PROJECT,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_TEAM_LIST_BY_PROJECT,
        title="List Teams By Project",
        description="List teams in Teamwork.com by project. " + TEAM_DESCRIPTION,
        properties={
            "project_id": integer("The ID of the project from which to retrieve teams."),
            "search_term": string(_SEARCH),
            **pagination(),
        },
        required=["project_id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)
