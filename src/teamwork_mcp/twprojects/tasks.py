"""
Tasks: the individual units of work in Teamwork.com.

Tasks live in tasklists. Creation goes through the tasklist, everything else
addresses the task directly. Assignees and predecessors are nested objects
bound with their own extractors.
"""

from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import (
    Arguments,
    bind,
    optional_date_param,
    optional_numeric_list_param,
    optional_numeric_param,
    optional_object_list_param,
    optional_object_param,
    optional_param,
    required_numeric_param,
    required_param,
    restrict_values,
)
from teamwork_mcp.core.results import json_result, response_id, text_result
from teamwork_mcp.core.schema import (
    array,
    boolean,
    integer,
    integer_list,
    new_tool,
    obj,
    pagination,
    string,
)
from teamwork_mcp.core.toolsets import Method, ServerTool, register_method

from .common import page_params, user_groups_binder, user_groups_schema
from .models import (
    PathID,
    TaggedListFilters,
    TaskCreateRequest,
    TaskPredecessor,
    TaskUpdateRequest,
)

METHOD_TASK_CREATE = register_method(Method("twprojects-create_task"))
METHOD_TASK_UPDATE = register_method(Method("twprojects-update_task"))
METHOD_TASK_DELETE = register_method(Method("twprojects-delete_task"))
METHOD_TASK_GET = register_method(Method("twprojects-get_task"))
METHOD_TASK_LIST = register_method(Method("twprojects-list_tasks"))
METHOD_TASK_LIST_BY_TASKLIST = register_method(
    Method("twprojects-list_tasks_by_tasklist")
)
METHOD_TASK_LIST_BY_PROJECT = register_method(
    Method("twprojects-list_tasks_by_project")
)

TASK_DESCRIPTION = (
    "In Teamwork.com, a task represents an individual unit of work assigned to one "
    "or more team members within a project. Each task can include details such as "
    "a title, description, priority, estimated time, assignees, and due date, along "
    "with the ability to attach files, leave comments, track time, and set "
    "dependencies on other tasks."
)

TASK_PRIORITIES = ("low", "medium", "high")
PREDECESSOR_TYPES = ("start", "complete")


def _bind_predecessor(arguments: Arguments) -> TaskPredecessor:
    predecessor = TaskPredecessor()
    bind(
        arguments,
        required_numeric_param(predecessor, "task_id"),
        required_param(predecessor, "type", restrict_values(*PREDECESSOR_TYPES)),
    )
    return predecessor


def _task_properties() -> dict:
    return {
        "name": string("The name of the task."),
        "description": string("The description of the task."),
        "priority": string("The priority of the task.", enum=TASK_PRIORITIES),
        "progress": integer("The progress of the task, as a percentage (0-100)."),
        "start_date": string(
            "The start date of the task in ISO 8601 format (YYYY-MM-DD).",
            format="date",
        ),
        "due_date": string(
            "The due date of the task in ISO 8601 format (YYYY-MM-DD). When this "
            "is not provided, the task will not have a due date.",
            format="date",
        ),
        "estimated_minutes": integer("The estimated time to complete the task in minutes."),
        "parent_task_id": integer(
            "The ID of the parent task if creating a subtask."
        ),
        "assignees": user_groups_schema(
            "An object containing assignees for the task.", "task"
        ),
        "tag_ids": integer_list("A list of tag IDs to assign to the task."),
        "predecessors": array(
            obj(
                {
                    "task_id": integer("The ID of the predecessor task."),
                    "type": string(
                        "The type of dependency.", enum=PREDECESSOR_TYPES
                    ),
                },
                "A predecessor of the task.",
                required=["task_id", "type"],
            ),
            "List of task dependencies that must be completed before this task "
            "can start, defining its position in the project workflow and ensuring "
            "proper sequencing of work.",
        ),
    }


def _task_params(request: TaskCreateRequest) -> tuple:
    return (
        optional_param(request, "description"),
        optional_param(request, "priority", restrict_values(*TASK_PRIORITIES)),
        optional_numeric_param(request, "progress"),
        optional_date_param(request, "start_date"),
        optional_date_param(request, "due_date"),
        optional_numeric_param(request, "estimated_minutes"),
        optional_numeric_param(request, "parent_task_id"),
        optional_numeric_list_param(request, "tag_ids"),
        optional_object_param(request, "assignees", user_groups_binder()),
        optional_object_list_param(request, "predecessors", _bind_predecessor),
    )


def task_create(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to create task")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = TaskCreateRequest()
        bind(
            arguments,
            required_param(request, "name"),
            required_numeric_param(request, "tasklist_id"),
            *_task_params(request),
        )
        payload = await client.post(
            f"/projects/api/v3/tasklists/{request.tasklist_id}/tasks.json",
            json={"task": request.body()},
            tool=METHOD_TASK_CREATE,
        )
        task_id = response_id(payload, "task", "id")
        return text_result(f"Task created successfully with ID {task_id}")

    properties = _task_properties()
    properties["tasklist_id"] = integer("The ID of the tasklist.")
    tool = new_tool(
        METHOD_TASK_CREATE,
        title="Create Task",
        description="Create a new task in Teamwork.com. " + TASK_DESCRIPTION,
        properties=properties,
        required=["name", "tasklist_id"],
    )
    return ServerTool(tool=tool, handler=handle)


def task_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to update task")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = TaskUpdateRequest()
        bind(
            arguments,
            required_numeric_param(request, "id"),
            optional_param(request, "name"),
            optional_numeric_param(request, "tasklist_id"),
            *_task_params(request),
        )
        await client.patch(
            f"/projects/api/v3/tasks/{request.id}.json",
            json={"task": request.body()},
            tool=METHOD_TASK_UPDATE,
        )
        return text_result("Task updated successfully")

    properties = {"id": integer("The ID of the task to update.")}
    properties.update(_task_properties())
    properties["tasklist_id"] = integer("The ID of the tasklist to move the task to.")
    tool = new_tool(
        METHOD_TASK_UPDATE,
        title="Update Task",
        description="Update an existing task in Teamwork.com. " + TASK_DESCRIPTION,
        properties=properties,
        required=["id"],
    )
    return ServerTool(tool=tool, handler=handle)


def task_delete(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to delete task")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        await client.delete(
            f"/projects/api/v3/tasks/{request.id}.json", tool=METHOD_TASK_DELETE
        )
        return text_result("Task deleted successfully")

    tool = new_tool(
        METHOD_TASK_DELETE,
        title="Delete Task",
        description="Delete an existing task in Teamwork.com. " + TASK_DESCRIPTION,
        properties={"id": integer("The ID of the task to delete.")},
        required=["id"],
        destructive=True,
    )
    return ServerTool(tool=tool, handler=handle)


def task_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get task")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        payload = await client.get(
            f"/projects/api/v3/tasks/{request.id}.json", tool=METHOD_TASK_GET
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_TASK_GET,
        title="Get Task",
        description="Get an existing task in Teamwork.com. " + TASK_DESCRIPTION,
        properties={"id": integer("The ID of the task to get.")},
        required=["id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def _list_properties() -> dict:
    return {
        "search_term": string("A search term to filter tasks by name."),
        "tag_ids": integer_list("A list of tag IDs to filter tasks by tags."),
        "match_all_tags": boolean(
            "If true, the search will match tasks that have all the specified tags. "
            "If false, the search will match tasks that have any of the specified "
            "tags. Defaults to false."
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


def task_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list tasks")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        filters = TaggedListFilters()
        bind(arguments, *_list_params(filters))
        payload = await client.get(
            "/projects/api/v3/tasks.json", params=filters.query(), tool=METHOD_TASK_LIST
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_TASK_LIST,
        title="List Tasks",
        description="List tasks in Teamwork.com. " + TASK_DESCRIPTION,
        properties=_list_properties(),
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def task_list_by_tasklist(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list tasks")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        path = PathID()
        filters = TaggedListFilters()
        bind(
            arguments,
            required_numeric_param(path, "tasklist_id"),
            *_list_params(filters),
        )
        payload = await client.get(
            f"/projects/api/v3/tasklists/{path.tasklist_id}/tasks.json",
            params=filters.query(),
            tool=METHOD_TASK_LIST_BY_TASKLIST,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_TASK_LIST_BY_TASKLIST,
        title="List Tasks By Tasklist",
        description="List tasks in Teamwork.com by tasklist. " + TASK_DESCRIPTION,
        properties={
            "tasklist_id": integer("The ID of the tasklist from which to retrieve tasks."),
            **_list_properties(),
        },
        required=["tasklist_id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def task_list_by_project(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list tasks")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        path = PathID()
        filters = TaggedListFilters()
        bind(
            arguments,
            required_numeric_param(path, "project_id"),
            *_list_params(filters),
        )
        payload = await client.get(
            f"/projects/api/v3/projects/{path.project_id}/tasks.json",
            params=filters.query(),
            tool=METHOD_TASK_LIST_BY_PROJECT,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_TASK_LIST_BY_PROJECT,
        title="List Tasks By Project",
        description="List tasks in Teamwork.com by project. " + TASK_DESCRIPTION,
        properties={
            "project_id": integer("The ID of the project from which to retrieve tasks."),
            **_list_properties(),
        },
        required=["project_id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)
