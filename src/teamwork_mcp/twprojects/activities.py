"""Activities: the chronological feed of changes across projects."""

from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import (
    bind,
    optional_list_param,
    optional_time_param,
    required_numeric_param,
    restrict_values,
)
from teamwork_mcp.core.results import json_result
from teamwork_mcp.core.schema import array, integer, new_tool, pagination, string
from teamwork_mcp.core.toolsets import Method, ServerTool, register_method

from .common import page_params
from .models import ActivityListFilters, PathID

METHOD_ACTIVITY_LIST = register_method(Method("twprojects-list_activities"))
METHOD_ACTIVITY_LIST_BY_PROJECT = register_method(
    Method("twprojects-list_activities_by_project")
)

ACTIVITY_DESCRIPTION = (
    "Activity is a record of actions and updates that occur across your projects, "
    "tasks, and communications, giving you a clear view of what's happening within "
    "your workspace. Activities capture changes such as task completions, files "
    "uploaded, or milestones updated, and present them in a chronological feed."
)

ACTIVITY_TYPES = (
    "message",
    "comment",
    "task",
    "tasklist",
    "taskgroup",
    "milestone",
    "file",
    "form",
    "notebook",
    "timelog",
    "task_comment",
    "notebook_comment",
    "file_comment",
    "link_comment",
    "milestone_comment",
    "project",
    "link",
    "billingInvoice",
    "risk",
    "projectUpdate",
    "reacted",
    "budget",
)


def _list_properties() -> dict:
    return {
        "start_date": string(
            "Start date to filter activities. The date format follows RFC3339 - "
            "YYYY-MM-DDTHH:MM:SSZ.",
            format="date-time",
        ),
        "end_date": string(
            "End date to filter activities. The date format follows RFC3339 - "
            "YYYY-MM-DDTHH:MM:SSZ.",
            format="date-time",
        ),
        "log_item_types": array(
            {"type": "string", "enum": list(ACTIVITY_TYPES)},
            "Filter activities by item types.",
        ),
        **pagination(),
    }


def _list_params(filters: ActivityListFilters) -> tuple:
    return (
        optional_time_param(filters, "start_date"),
        optional_time_param(filters, "end_date"),
        optional_list_param(
            filters, "log_item_types", restrict_values(*ACTIVITY_TYPES)
        ),
        *page_params(filters),
    )


def activity_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list activities")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        filters = ActivityListFilters()
        bind(arguments, *_list_params(filters))
        payload = await client.get(
            "/projects/api/v3/latestactivity.json",
            params=filters.query(),
            tool=METHOD_ACTIVITY_LIST,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_ACTIVITY_LIST,
        title="List Activities",
        description="List activities in Teamwork.com. " + ACTIVITY_DESCRIPTION,
        properties=_list_properties(),
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def activity_list_by_project(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list activities")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        path = PathID()
        filters = ActivityListFilters()
        bind(
            arguments,
            required_numeric_param(path, "project_id"),
            *_list_params(filters),
        )
        payload = await client.get(
            f"/projects/api/v3/projects/{path.project_id}/latestactivity.json",
            params=filters.query(),
            tool=METHOD_ACTIVITY_LIST_BY_PROJECT,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_ACTIVITY_LIST_BY_PROJECT,
        title="List Activities By Project",
        description="List activities in Teamwork.com by project. "
        + ACTIVITY_DESCRIPTION,
        properties={
            "project_id": integer(
                "The ID of the project from which to retrieve activities."
            ),
            **_list_properties(),
        },
        required=["project_id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)
