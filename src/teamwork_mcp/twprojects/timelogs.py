"""
Timelogs: time tracked against a project or one of its tasks.

A timelog is created under either a task or a project; when both IDs are
given the task wins, since the task already implies its project.
"""

from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import (
    InvalidParamsError,
    ParamError,
    bind,
    optional_date_param,
    optional_numeric_list_param,
    optional_numeric_param,
    optional_param,
    optional_time_only_param,
    optional_time_param,
    required_date_param,
    required_numeric_param,
    required_time_only_param,
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
    TimelogCreateRequest,
    TimelogListFilters,
    TimelogUpdateRequest,
)

METHOD_TIMELOG_CREATE = register_method(Method("twprojects-create_timelog"))
METHOD_TIMELOG_UPDATE = register_method(Method("twprojects-update_timelog"))
METHOD_TIMELOG_DELETE = register_method(Method("twprojects-delete_timelog"))
METHOD_TIMELOG_GET = register_method(Method("twprojects-get_timelog"))
METHOD_TIMELOG_LIST = register_method(Method("twprojects-list_timelogs"))
METHOD_TIMELOG_LIST_BY_PROJECT = register_method(
    Method("twprojects-list_timelogs_by_project")
)
METHOD_TIMELOG_LIST_BY_TASK = register_method(
    Method("twprojects-list_timelogs_by_task")
)

TIMELOG_DESCRIPTION = (
    "Timelog refers to a recorded entry that tracks the amount of time a person has "
    "spent working on a specific task, project, or piece of work. These entries "
    "typically include details such as the duration of time worked, the date and "
    "time it was logged, who logged it, and any optional notes describing what was "
    "done during that period."
)


def _timelog_properties() -> dict:
    return {
        "description": string("A description of the timelog."),
        "date": string(
            "The date of the timelog in the format YYYY-MM-DD.", format="date"
        ),
        "time": string("The time of the timelog in the format HH:MM:SS."),
        "is_utc": boolean(
            "If true, the time is in UTC. Defaults to false, which means the time "
            "is in the user's timezone."
        ),
        "hours": integer("The number of hours spent on the timelog."),
        "minutes": integer("The number of minutes spent on the timelog."),
        "billable": boolean(
            "If true, the timelog is billable. Defaults to false."
        ),
        "user_id": integer(
            "The ID of the user to associate with the timelog. Defaults to the "
            "authenticated user."
        ),
        "tag_ids": integer_list("A list of tag IDs to associate with the timelog."),
    }


def timelog_create(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to create timelog")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = TimelogCreateRequest()
        bind(
            arguments,
            optional_numeric_param(request, "project_id"),
            optional_numeric_param(request, "task_id"),
            optional_param(request, "description"),
            required_date_param(request, "date"),
            required_time_only_param(request, "time"),
            optional_param(request, "is_utc", kind=bool),
            required_numeric_param(request, "hours"),
            required_numeric_param(request, "minutes"),
            optional_param(request, "billable", kind=bool),
            optional_numeric_param(request, "user_id"),
            optional_numeric_list_param(request, "tag_ids"),
        )
        if request.task_id:
            path = f"/projects/api/v3/tasks/{request.task_id}/time.json"
        elif request.project_id:
            path = f"/projects/api/v3/projects/{request.project_id}/time.json"
        else:
            raise InvalidParamsError(
                [
                    ParamError(
                        "project_id",
                        "either project_id or task_id must be provided",
                    )
                ]
            )

        payload = await client.post(
            path, json={"timelog": request.body()}, tool=METHOD_TIMELOG_CREATE
        )
        timelog_id = response_id(payload, "timelog", "id")
        return text_result(f"Timelog created successfully with ID {timelog_id}")

    properties = {
        "project_id": integer(
            "The ID of the project to associate the timelog with. Either project_id "
            "or task_id must be provided, but not both."
        ),
        "task_id": integer(
            "The ID of the task to associate the timelog with. Either project_id "
            "or task_id must be provided, but not both."
        ),
        **_timelog_properties(),
    }
    tool = new_tool(
        METHOD_TIMELOG_CREATE,
        title="Create Timelog",
        description="Create a new timelog in Teamwork.com. " + TIMELOG_DESCRIPTION,
        properties=properties,
        required=["date", "time", "hours", "minutes"],
    )
    return ServerTool(tool=tool, handler=handle)


def timelog_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to update timelog")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = TimelogUpdateRequest()
        bind(
            arguments,
            required_numeric_param(request, "id"),
            optional_param(request, "description"),
            optional_date_param(request, "date"),
            optional_time_only_param(request, "time"),
            optional_param(request, "is_utc", kind=bool),
            optional_numeric_param(request, "hours"),
            optional_numeric_param(request, "minutes"),
            optional_param(request, "billable", kind=bool),
            optional_numeric_param(request, "user_id"),
            optional_numeric_list_param(request, "tag_ids"),
        )
        await client.patch(
            f"/projects/api/v3/time/{request.id}.json",
            json={"timelog": request.body()},
            tool=METHOD_TIMELOG_UPDATE,
        )
        return text_result("Timelog updated successfully")

    tool = new_tool(
        METHOD_TIMELOG_UPDATE,
        title="Update Timelog",
        description="Update an existing timelog in Teamwork.com. "
        + TIMELOG_DESCRIPTION,
        properties={
            "id": integer("The ID of the timelog to update."),
            **_timelog_properties(),
        },
        required=["id"],
    )
    return ServerTool(tool=tool, handler=handle)


def timelog_delete(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to delete timelog")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        await client.delete(
            f"/projects/api/v3/time/{request.id}.json", tool=METHOD_TIMELOG_DELETE
        )
        return text_result("Timelog deleted successfully")

    tool = new_tool(
        METHOD_TIMELOG_DELETE,
        title="Delete Timelog",
        description="Delete an existing timelog in Teamwork.com. "
        + TIMELOG_DESCRIPTION,
        properties={"id": integer("The ID of the timelog to delete.")},
        required=["id"],
        destructive=True,
    )
    return ServerTool(tool=tool, handler=handle)


def timelog_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get timelog")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        payload = await client.get(
            f"/projects/api/v3/time/{request.id}.json", tool=METHOD_TIMELOG_GET
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_TIMELOG_GET,
        title="Get Timelog",
        description="Get an existing timelog in Teamwork.com. " + TIMELOG_DESCRIPTION,
        properties={"id": integer("The ID of the timelog to get.")},
        required=["id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def _list_properties() -> dict:
    return {
        "tag_ids": integer_list("A list of tag IDs to filter timelogs by tags."),
        "match_all_tags": boolean(
            "If true, the search will match timelogs that have all the specified "
            "tags. If false, the search will match timelogs that have any of the "
            "specified tags. Defaults to false."
        ),
        "start_date": string(
            "Start date to filter timelogs. The date format follows RFC3339 - "
            "YYYY-MM-DDTHH:MM:SSZ.",
            format="date-time",
        ),
        "end_date": string(
            "End date to filter timelogs. The date format follows RFC3339 - "
            "YYYY-MM-DDTHH:MM:SSZ.",
            format="date-time",
        ),
        "assigned_user_ids": integer_list(
            "A list of user IDs to filter timelogs by assigned users."
        ),
        "assigned_company_ids": integer_list(
            "A list of company IDs to filter timelogs by assigned companies."
        ),
        "assigned_team_ids": integer_list(
            "A list of team IDs to filter timelogs by assigned teams."
        ),
        **pagination(),
    }


def _list_params(filters: TimelogListFilters) -> tuple:
    return (
        optional_numeric_list_param(filters, "tag_ids"),
        optional_param(filters, "match_all_tags", kind=bool),
        optional_time_param(filters, "start_date"),
        optional_time_param(filters, "end_date"),
        optional_numeric_list_param(filters, "assigned_user_ids"),
        optional_numeric_list_param(filters, "assigned_company_ids"),
        optional_numeric_list_param(filters, "assigned_team_ids"),
        *page_params(filters),
    )


def timelog_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list timelogs")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        filters = TimelogListFilters()
        bind(arguments, *_list_params(filters))
        payload = await client.get(
            "/projects/api/v3/time.json",
            params=filters.query(),
            tool=METHOD_TIMELOG_LIST,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_TIMELOG_LIST,
        title="List Timelogs",
        description="List timelogs in Teamwork.com. " + TIMELOG_DESCRIPTION,
        properties=_list_properties(),
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def timelog_list_by_project(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list timelogs")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        path = PathID()
        filters = TimelogListFilters()
        bind(
            arguments,
            required_numeric_param(path, "project_id"),
            *_list_params(filters),
        )
        payload = await client.get(
            f"/projects/api/v3/projects/{path.project_id}/time.json",
            params=filters.query(),
            tool=METHOD_TIMELOG_LIST_BY_PROJECT,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_TIMELOG_LIST_BY_PROJECT,
        title="List Timelogs By Project",
        description="List timelogs in Teamwork.com by project. "
        + TIMELOG_DESCRIPTION,
        properties={
            "project_id": integer(
                "The ID of the project from which to retrieve timelogs."
            ),
            **_list_properties(),
        },
        required=["project_id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def timelog_list_by_task(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list timelogs")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        path = PathID()
        filters = TimelogListFilters()
        bind(
            arguments,
            required_numeric_param(path, "task_id"),
            *_list_params(filters),
        )
        payload = await client.get(
            f"/projects/api/v3/tasks/{path.task_id}/time.json",
            params=filters.query(),
            tool=METHOD_TIMELOG_LIST_BY_TASK,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_TIMELOG_LIST_BY_TASK,
        title="List Timelogs By Task",
        description="List timelogs in Teamwork.com by task. " + TIMELOG_DESCRIPTION,
        properties={
            "task_id": integer("The ID of the task from which to retrieve timelogs."),
            **_list_properties(),
        },
        required=["task_id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)
