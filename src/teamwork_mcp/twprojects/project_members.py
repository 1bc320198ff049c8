"""Project members: users assigned to a project."""

from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import (
    bind,
    optional_numeric_list_param,
    required_numeric_param,
)
from teamwork_mcp.core.results import text_result
from teamwork_mcp.core.schema import integer, integer_list, new_tool
from teamwork_mcp.core.toolsets import Method, ServerTool, register_method

from .models import ProjectMemberAddRequest

METHOD_PROJECT_MEMBER_ADD = register_method(Method("twprojects-add_project_member"))

PROJECT_MEMBER_DESCRIPTION = (
    "In the context of Teamwork.com, a project member is a user who is assigned to "
    "a specific project. Project members can have different roles and permissions "
    "within the project, allowing them to collaborate on tasks, view project "
    "details, and contribute to the project's success."
)


def project_member_add(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to add project member")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = ProjectMemberAddRequest()
        bind(
            arguments,
            required_numeric_param(request, "project_id"),
            optional_numeric_list_param(request, "user_ids"),
        )
        await client.put(
            f"/projects/api/v3/projects/{request.project_id}/people.json",
            json=request.body(),
            tool=METHOD_PROJECT_MEMBER_ADD,
        )
        return text_result("Project member added successfully")

    tool = new_tool(
        METHOD_PROJECT_MEMBER_ADD,
        title="Add Project Member",
        description="Add a user to a project in Teamwork.com. "
        + PROJECT_MEMBER_DESCRIPTION,
        properties={
            "project_id": integer("The ID of the project to add the member to."),
            "user_ids": integer_list("A list of user IDs to add to the project."),
        },
        required=["project_id"],
    )
    return ServerTool(tool=tool, handler=handle)
