"""Milestones: key points in a project's timeline, backed by the legacy endpoints."""

from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import (
    bind,
    optional_legacy_date_param,
    optional_numeric_list_param,
    optional_object_param,
    optional_param,
    required_legacy_date_param,
    required_numeric_param,
    required_object_param,
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

from .common import page_params, user_groups_binder, user_groups_schema
from .models import (
    LegacyUserGroups,
    MilestoneCreateRequest,
    MilestoneUpdateRequest,
    PathID,
    TaggedListFilters,
)

METHOD_MILESTONE_CREATE = register_method(Method("twprojects-create_milestone"))
METHOD_MILESTONE_UPDATE = register_method(Method("twprojects-update_milestone"))
METHOD_MILESTONE_DELETE = register_method(Method("twprojects-delete_milestone"))
METHOD_MILESTONE_GET = register_method(Method("twprojects-get_milestone"))
METHOD_MILESTONE_LIST = register_method(Method("twprojects-list_milestones"))
METHOD_MILESTONE_LIST_BY_PROJECT = register_method(
    Method("twprojects-list_milestones_by_project")
)

MILESTONE_DESCRIPTION = (
    "In the context of Teamwork.com, a milestone represents a significant point or "
    "goal within a project that marks the completion of a major phase or a key "
    "deliverable. It acts as a high-level indicator of progress, helping teams "
    "track whether work is advancing according to plan."
)

_DUE_DATE = (
    "The due date of the milestone in the format YYYYMMDD. This date will be used "
    "in all tasks without a due date related to this milestone."
)

_bind_assignees = user_groups_binder(LegacyUserGroups)


def _not_empty(groups: LegacyUserGroups) -> None:
    if groups.is_empty():
        raise ValueError("at least one assignee must be provided")


def _milestone_properties() -> dict:
    return {
        "name": string("The name of the milestone."),
        "description": string("A description of the milestone."),
        "due_date": string(_DUE_DATE),
        "assignees": user_groups_schema(
            "An object containing assignees for the milestone. MUST contain at "
            "least one of: user_ids, company_ids or team_ids with non-empty arrays.",
            "milestone",
        ),
        "tasklist_ids": integer_list(
            "A list of tasklist IDs to associate with the milestone."
        ),
        "tag_ids": integer_list("A list of tag IDs to associate with the milestone."),
    }


def milestone_create(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to create milestone")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = MilestoneCreateRequest()
        bind(
            arguments,
            required_numeric_param(request, "project_id"),
            required_param(request, "name"),
            optional_param(request, "description"),
            required_legacy_date_param(request, "due_date"),
            required_object_param(request, "assignees", _bind_assignees, _not_empty),
            optional_numeric_list_param(request, "tasklist_ids"),
            optional_numeric_list_param(request, "tag_ids"),
        )
        payload = await client.post(
            f"/projects/{request.project_id}/milestones.json",
            json={"milestone": request.body()},
            tool=METHOD_MILESTONE_CREATE,
        )
        milestone_id = response_id(payload, "milestoneId")
        return text_result(f"Milestone created successfully with ID {milestone_id}")

    properties = _milestone_properties()
    properties["project_id"] = integer(
        "The ID of the project to create the milestone in."
    )
    tool = new_tool(
        METHOD_MILESTONE_CREATE,
        title="Create Milestone",
        description="Create a new milestone in Teamwork.com. " + MILESTONE_DESCRIPTION,
        properties=properties,
        required=["name", "project_id", "due_date", "assignees"],
    )
    return ServerTool(tool=tool, handler=handle)


def milestone_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to update milestone")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = MilestoneUpdateRequest()
        bind(
            arguments,
            required_numeric_param(request, "id"),
            optional_param(request, "name"),
            optional_param(request, "description"),
            optional_legacy_date_param(request, "due_date"),
            optional_object_param(request, "assignees", _bind_assignees),
            optional_numeric_list_param(request, "tasklist_ids"),
            optional_numeric_list_param(request, "tag_ids"),
        )
        await client.put(
            f"/milestones/{request.id}.json",
            json={"milestone": request.body()},
            tool=METHOD_MILESTONE_UPDATE,
        )
        return text_result("Milestone updated successfully")

    tool = new_tool(
        METHOD_MILESTONE_UPDATE,
        title="Update Milestone",
        description="Update an existing milestone in Teamwork.com. "
        + MILESTONE_DESCRIPTION,
        properties={
            "id": integer("The ID of the milestone to update."),
            **_milestone_properties(),
        },
        required=["id"],
    )
    return ServerTool(tool=tool, handler=handle)


def milestone_delete(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to delete milestone")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        await client.delete(
            f"/milestones/{request.id}.json", tool=METHOD_MILESTONE_DELETE
        )
        return text_result("Milestone deleted successfully")

    tool = new_tool(
        METHOD_MILESTONE_DELETE,
        title="Delete Milestone",
        description="Delete an existing milestone in Teamwork.com. "
        + MILESTONE_DESCRIPTION,
        properties={"id": integer("The ID of the milestone to delete.")},
        required=["id"],
        destructive=True,
    )
    return ServerTool(tool=tool, handler=handle)


def milestone_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get milestone")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        payload = await client.get(
            f"/projects/api/v3/milestones/{request.id}.json", tool=METHOD_MILESTONE_GET
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_MILESTONE_GET,
        title="Get Milestone",
        description="Get an existing milestone in Teamwork.com. "
        + MILESTONE_DESCRIPTION,
        properties={"id": integer("The ID of the milestone to get.")},
        required=["id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def _list_properties() -> dict:
    return {
        "search_term": string(
            "A search term to filter milestones by name. Each word from the search "
            "term is used to match against the milestone name and description."
        ),
        "tag_ids": integer_list("A list of tag IDs to filter milestones by tags."),
        "match_all_tags": boolean(
            "If true, the search will match milestones that have all the specified "
            "tags. If false, the search will match milestones that have any of the "
            "specified tags. Defaults to false."
        ),
        **pagination(),
    }


def _list_params(filters: TaggedListFilters) -> tuple:
    return (
        optional_param(filters, "search_term"),
        optional_numeric_list_param(filters, "tag_ids"),
        optional_param(filters, "match_all_tags", kind=bool),
        *page_params(filters),
    )


def milestone_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list milestones")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        filters = TaggedListFilters()
        bind(arguments, *_list_params(filters))
        payload = await client.get(
            "/projects/api/v3/milestones.json",
            params=filters.query(),
            tool=METHOD_MILESTONE_LIST,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_MILESTONE_LIST,
        title="List Milestones",
        description="List milestones in Teamwork.com. " + MILESTONE_DESCRIPTION,
        properties=_list_properties(),
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def milestone_list_by_project(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list milestones")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        path = PathID()
        filters = TaggedListFilters()
        bind(
            arguments,
            required_numeric_param(path, "project_id"),
            *_list_params(filters),
        )
        payload = await client.get(
            f"/projects/api/v3/projects/{path.project_id}/milestones.json",
            params=filters.query(),
            tool=METHOD_MILESTONE_LIST_BY_PROJECT,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_MILESTONE_LIST_BY_PROJECT,
        title="List Milestones by Project",
        description="List milestones in Teamwork.com by project. "
        + MILESTONE_DESCRIPTION,
        properties={
            "project_id": integer(
                "The ID of the project from which to retrieve milestones."
            ),
            **_list_properties(),
        },
        required=["project_id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)
