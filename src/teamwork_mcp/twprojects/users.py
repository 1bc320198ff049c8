"""Users (people): members of a Teamwork.com site."""

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
    restrict_values,
)
from teamwork_mcp.core.results import json_result, response_id, text_result
from teamwork_mcp.core.schema import boolean, integer, new_tool, pagination, string
from teamwork_mcp.core.toolsets import Method, ServerTool, register_method

from .common import page_params
from .models import PathID, UserCreateRequest, UserListFilters, UserUpdateRequest

METHOD_USER_CREATE = register_method(Method("twprojects-create_user"))
METHOD_USER_UPDATE = register_method(Method("twprojects-update_user"))
METHOD_USER_DELETE = register_method(Method("twprojects-delete_user"))
METHOD_USER_GET = register_method(Method("twprojects-get_user"))
METHOD_USER_GET_ME = register_method(Method("twprojects-get_user_me"))
METHOD_USER_LIST = register_method(Method("twprojects-list_users"))
METHOD_USER_LIST_BY_PROJECT = register_method(
    Method("twprojects-list_users_by_project")
)

USER_DESCRIPTION = (
    "A user is an individual who has access to one or more projects within a "
    "Teamwork site, typically as a team member, collaborator, or administrator. "
    "Users can be assigned tasks, participate in discussions, log time, share "
    "files, and interact with other members depending on their permission levels."
)

USER_TYPES = ("account", "collaborator", "contact")


def _user_properties() -> dict:
    return {
        "first_name": string("The first name of the user."),
        "last_name": string("The last name of the user."),
        "title": string("The job title of the user, such as 'Project Manager'."),
        "email": string("The email address of the user."),
        "admin": boolean("Indicates whether the user is an administrator."),
        "type": string(
            "The type of user, such as 'account', 'collaborator', or 'contact'.",
            enum=USER_TYPES,
        ),
        "company_id": integer("The ID of the client/company the user belongs to."),
    }


def user_create(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to create user")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = UserCreateRequest()
        bind(
            arguments,
            required_param(request, "first_name"),
            required_param(request, "last_name"),
            optional_param(request, "title"),
            required_param(request, "email"),
            optional_param(request, "admin", kind=bool),
            optional_param(request, "type", restrict_values(*USER_TYPES)),
            optional_numeric_param(request, "company_id"),
        )
        payload = await client.post(
            "/people.json", json={"person": request.body()}, tool=METHOD_USER_CREATE
        )
        user_id = response_id(payload, "id")
        return text_result(f"User created successfully with ID {user_id}")

    tool = new_tool(
        METHOD_USER_CREATE,
        title="Create User",
        description="Create a new user in Teamwork.com. " + USER_DESCRIPTION,
        properties=_user_properties(),
        required=["first_name", "last_name", "email"],
    )
    return ServerTool(tool=tool, handler=handle)


def user_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to update user")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = UserUpdateRequest()
        bind(
            arguments,
            required_numeric_param(request, "id"),
            optional_param(request, "first_name"),
            optional_param(request, "last_name"),
            optional_param(request, "title"),
            optional_param(request, "email"),
            optional_param(request, "admin", kind=bool),
            optional_param(request, "type", restrict_values(*USER_TYPES)),
            optional_numeric_param(request, "company_id"),
        )
        await client.put(
            f"/people/{request.id}.json",
            json={"person": request.body()},
            tool=METHOD_USER_UPDATE,
        )
        return text_result("User updated successfully")

    tool = new_tool(
        METHOD_USER_UPDATE,
        title="Update User",
        description="Update an existing user in Teamwork.com. " + USER_DESCRIPTION,
        properties={"id": integer("The ID of the user to update."), **_user_properties()},
        required=["id"],
    )
    return ServerTool(tool=tool, handler=handle)


def user_delete(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to delete user")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        await client.delete(f"/people/{request.id}.json", tool=METHOD_USER_DELETE)
        return text_result("User deleted successfully")

    tool = new_tool(
        METHOD_USER_DELETE,
        title="Delete User",
        description="Delete an existing user in Teamwork.com. " + USER_DESCRIPTION,
        properties={"id": integer("The ID of the user to delete.")},
        required=["id"],
        destructive=True,
    )
    return ServerTool(tool=tool, handler=handle)


def user_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get user")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        payload = await client.get(
            f"/projects/api/v3/people/{request.id}.json", tool=METHOD_USER_GET
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_USER_GET,
        title="Get User",
        description="Get an existing user in Teamwork.com. " + USER_DESCRIPTION,
        properties={"id": integer("The ID of the user to get.")},
        required=["id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def user_get_me(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get user")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        payload = await client.get("/projects/api/v3/me.json", tool=METHOD_USER_GET_ME)
        return json_result(payload)

    tool = new_tool(
        METHOD_USER_GET_ME,
        title="Get Logged User",
        description="Get the logged user in Teamwork.com. " + USER_DESCRIPTION,
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def _list_properties() -> dict:
    return {
        "search_term": string(
            "A search term to filter users by first or last names, or e-mail. The "
            "user will be selected if each word of the term matches the first or "
            "last name, or e-mail, not requiring that the word matches are in the "
            "same field."
        ),
        "type": string(
            "Type of user to filter by. The available options are account, "
            "collaborator or contact.",
            enum=USER_TYPES,
        ),
        **pagination(),
    }


def user_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list users")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        filters = UserListFilters()
        bind(
            arguments,
            optional_param(filters, "search_term"),
            optional_param(filters, "type", restrict_values(*USER_TYPES)),
            *page_params(filters),
        )
        payload = await client.get(
            "/projects/api/v3/people.json",
            params=filters.query(),
            tool=METHOD_USER_LIST,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_USER_LIST,
        title="List Users",
        description="List users in Teamwork.com. " + USER_DESCRIPTION,
        properties=_list_properties(),
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def user_list_by_project(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list users")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        path = PathID()
        filters = UserListFilters()
        bind(
            arguments,
            required_numeric_param(path, "project_id"),
            optional_param(filters, "search_term"),
            optional_param(filters, "type", restrict_values(*USER_TYPES)),
            *page_params(filters),
        )
        payload = await client.get(
            f"/projects/api/v3/projects/{path.project_id}/people.json",
            params=filters.query(),
            tool=METHOD_USER_LIST_BY_PROJECT,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_USER_LIST_BY_PROJECT,
        title="List Users By Project",
        description="List users in Teamwork.com by project. " + USER_DESCRIPTION,
        properties={
            "project_id": integer("The ID of the project from which to retrieve users."),
            **_list_properties(),
        },
        required=["project_id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)
