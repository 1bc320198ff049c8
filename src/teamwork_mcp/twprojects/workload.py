"""Workload: how assigned work is spread across users over a date range."""

from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import bind, optional_numeric_list_param, required_date_param
from teamwork_mcp.core.results import json_result
from teamwork_mcp.core.schema import integer_list, new_tool, pagination, string
from teamwork_mcp.core.toolsets import Method, ServerTool, register_method

from .common import page_params
from .models import WorkloadFilters

METHOD_USERS_WORKLOAD = register_method(Method("twprojects-users_workload"))

WORKLOAD_DESCRIPTION = (
    "Workload is a visual representation of how tasks are distributed across team "
    "members, helping you understand who is overloaded, who has capacity, and how "
    "work is balanced within a project or across multiple projects. It takes into "
    "account assigned tasks, due dates, estimated time, and working hours."
)

WORKLOAD_SIDELOADS = ["workingHourEntries"]


def users_workload(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get workload")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        filters = WorkloadFilters(include=WORKLOAD_SIDELOADS)
        bind(
            arguments,
            required_date_param(filters, "start_date"),
            required_date_param(filters, "end_date"),
            optional_numeric_list_param(filters, "user_ids"),
            optional_numeric_list_param(filters, "user_company_ids"),
            optional_numeric_list_param(filters, "user_team_ids"),
            optional_numeric_list_param(filters, "project_ids"),
            *page_params(filters),
        )
        payload = await client.get(
            "/projects/api/v3/workload.json",
            params=filters.query(),
            tool=METHOD_USERS_WORKLOAD,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_USERS_WORKLOAD,
        title="Get Users Workload",
        description=WORKLOAD_DESCRIPTION,
        properties={
            "start_date": string(
                "The start date of the workload period. The date must be in the "
                "format YYYY-MM-DD.",
                format="date",
            ),
            "end_date": string(
                "The end date of the workload period. The date must be in the "
                "format YYYY-MM-DD.",
                format="date",
            ),
            "user_ids": integer_list("List of user IDs to filter the workload by."),
            "user_company_ids": integer_list(
                "List of users' client/company IDs to filter the workload by."
            ),
            "user_team_ids": integer_list(
                "List of users' team IDs to filter the workload by."
            ),
            "project_ids": integer_list(
                "List of project IDs to filter the workload by."
            ),
            **pagination(),
        },
        required=["start_date", "end_date"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)
