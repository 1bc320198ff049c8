"""
Timers: live time tracking against a project or task.

Timers belong to the calling user, so writes go through ``/me/timers``. Pause,
resume and complete are state transitions without a payload.
"""

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
)
from teamwork_mcp.core.results import json_result, response_id, text_result
from teamwork_mcp.core.schema import boolean, integer, new_tool, pagination, string
from teamwork_mcp.core.toolsets import Method, ServerTool, register_method

from .common import page_params
from .models import PathID, TimerCreateRequest, TimerListFilters, TimerUpdateRequest

METHOD_TIMER_CREATE = register_method(Method("twprojects-create_timer"))
METHOD_TIMER_UPDATE = register_method(Method("twprojects-update_timer"))
METHOD_TIMER_PAUSE = register_method(Method("twprojects-pause_timer"))
METHOD_TIMER_RESUME = register_method(Method("twprojects-resume_timer"))
METHOD_TIMER_COMPLETE = register_method(Method("twprojects-complete_timer"))
METHOD_TIMER_DELETE = register_method(Method("twprojects-delete_timer"))
METHOD_TIMER_GET = register_method(Method("twprojects-get_timer"))
METHOD_TIMER_LIST = register_method(Method("twprojects-list_timers"))

TIMER_DESCRIPTION = (
    "Timer is a built-in tool that allows users to accurately track the time they "
    "spend working on specific tasks, projects, or client work. Instead of "
    "manually recording hours, users can start, pause, and stop timers directly "
    "within the platform. Once recorded, these entries are automatically linked "
    "to the relevant task or project."
)

_MY_TIMERS = "/projects/api/v3/me/timers"
_RUNNING = "If true, the timer will start running immediately."


def timer_create(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to create timer")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = TimerCreateRequest()
        bind(
            arguments,
            optional_param(request, "description"),
            optional_param(request, "billable", kind=bool),
            optional_param(request, "running", kind=bool),
            optional_numeric_param(request, "seconds"),
            optional_param(request, "stop_running_timers", kind=bool),
            required_numeric_param(request, "project_id"),
            optional_numeric_param(request, "task_id"),
        )
        payload = await client.post(
            f"{_MY_TIMERS}.json",
            json={"timer": request.body()},
            tool=METHOD_TIMER_CREATE,
        )
        timer_id = response_id(payload, "timer", "id")
        return text_result(f"Timer created successfully with ID {timer_id}")

    tool = new_tool(
        METHOD_TIMER_CREATE,
        title="Create Timer",
        description="Create a new timer in Teamwork.com. " + TIMER_DESCRIPTION,
        properties={
            "description": string("A description of the timer."),
            "billable": boolean("If true, the timer is billable. Defaults to false."),
            "running": boolean(_RUNNING),
            "seconds": integer("The number of seconds to set the timer for."),
            "stop_running_timers": boolean(
                "If true, any other running timers will be stopped when this timer "
                "is created."
            ),
            "project_id": integer(
                "The ID of the project to associate the timer with."
            ),
            "task_id": integer("The ID of the task to associate the timer with."),
        },
        required=["project_id"],
    )
    return ServerTool(tool=tool, handler=handle)


def timer_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to update timer")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = TimerUpdateRequest()
        bind(
            arguments,
            required_numeric_param(request, "id"),
            optional_param(request, "description"),
            optional_param(request, "billable", kind=bool),
            optional_param(request, "running", kind=bool),
            optional_numeric_param(request, "project_id"),
            optional_numeric_param(request, "task_id"),
        )
        await client.put(
            f"{_MY_TIMERS}/{request.id}.json",
            json={"timer": request.body()},
            tool=METHOD_TIMER_UPDATE,
        )
        return text_result("Timer updated successfully")

    tool = new_tool(
        METHOD_TIMER_UPDATE,
        title="Update Timer",
        description="Update an existing timer in Teamwork.com. " + TIMER_DESCRIPTION,
        properties={
            "id": integer("The ID of the timer to update."),
            "description": string("A description of the timer."),
            "billable": boolean("If true, the timer is billable."),
            "running": boolean(_RUNNING),
            "project_id": integer(
                "The ID of the project to associate the timer with."
            ),
            "task_id": integer("The ID of the task to associate the timer with."),
        },
        required=["id"],
    )
    return ServerTool(tool=tool, handler=handle)


def _timer_transition(
    client: TeamworkClient, method: Method, action: str, past: str
) -> ServerTool:
    @tool_handler(f"failed to {action} timer")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        await client.put(
            f"{_MY_TIMERS}/{request.id}/{action}.json", json={}, tool=method
        )
        return text_result(f"Timer {past} successfully")

    tool = new_tool(
        method,
        title=f"{action.capitalize()} Timer",
        description=f"{action.capitalize()} an existing timer in Teamwork.com. "
        + TIMER_DESCRIPTION,
        properties={"id": integer(f"The ID of the timer to {action}.")},
        required=["id"],
    )
    return ServerTool(tool=tool, handler=handle)


def timer_pause(client: TeamworkClient) -> ServerTool:
    return _timer_transition(client, METHOD_TIMER_PAUSE, "pause", "paused")


def timer_resume(client: TeamworkClient) -> ServerTool:
    return _timer_transition(client, METHOD_TIMER_RESUME, "resume", "resumed")


def timer_complete(client: TeamworkClient) -> ServerTool:
    return _timer_transition(client, METHOD_TIMER_COMPLETE, "complete", "completed")


def timer_delete(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to delete timer")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        await client.delete(f"{_MY_TIMERS}/{request.id}.json", tool=METHOD_TIMER_DELETE)
        return text_result("Timer deleted successfully")

    tool = new_tool(
        METHOD_TIMER_DELETE,
        title="Delete Timer",
        description="Delete an existing timer in Teamwork.com. " + TIMER_DESCRIPTION,
        properties={"id": integer("The ID of the timer to delete.")},
        required=["id"],
        destructive=True,
    )
    return ServerTool(tool=tool, handler=handle)


def timer_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get timer")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        payload = await client.get(
            f"/projects/api/v3/timers/{request.id}.json", tool=METHOD_TIMER_GET
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_TIMER_GET,
        title="Get Timer",
        description="Get an existing timer in Teamwork.com. " + TIMER_DESCRIPTION,
        properties={"id": integer("The ID of the timer to get.")},
        required=["id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def timer_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list timers")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        filters = TimerListFilters()
        bind(
            arguments,
            optional_numeric_param(filters, "user_id"),
            optional_numeric_param(filters, "task_id"),
            optional_numeric_param(filters, "project_id"),
            optional_param(filters, "running_timers_only", kind=bool),
            *page_params(filters),
        )
        payload = await client.get(
            "/projects/api/v3/timers.json",
            params=filters.query(),
            tool=METHOD_TIMER_LIST,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_TIMER_LIST,
        title="List Timers",
        description="List timers in Teamwork.com. " + TIMER_DESCRIPTION,
        properties={
            "user_id": integer(
                "The ID of the user to filter timers by. Only timers associated "
                "with this user will be returned."
            ),
            "task_id": integer(
                "The ID of the task to filter timers by. Only timers associated "
                "with this task will be returned."
            ),
            "project_id": integer(
                "The ID of the project to filter timers by. Only timers associated "
                "with this project will be returned."
            ),
            "running_timers_only": boolean(
                "If true, only running timers will be returned. Defaults to false, "
                "which returns all timers."
            ),
            **pagination(),
        },
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)
