"""
Billing and cost rates.

Rates resolve from the most specific level down: a user's rate on a project,
then the project's default rate, then the user's installation rate. Reads page
from 1 in steps of 50 unless the caller asks otherwise.
"""

from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import (
    Arguments,
    bind,
    optional_numeric_list_param,
    optional_numeric_param,
    optional_object_list_param,
    optional_param,
    required_numeric_param,
)
from teamwork_mcp.core.results import json_result, text_result
from teamwork_mcp.core.schema import (
    Schema,
    array,
    boolean,
    integer,
    integer_list,
    new_tool,
    obj,
    string,
)
from teamwork_mcp.core.toolsets import Method, ServerTool, register_method

from .common import page_params
from .models import (
    PathID,
    ProjectRateUpdateRequest,
    ProjectUserRate,
    ProjectUserRatesFilters,
    RatePage,
    UserRateBulkUpdateRequest,
    UserRatesFilters,
    UserRateUpdateRequest,
)

METHOD_RATE_USER_GET = register_method(Method("twprojects-get_user_rates"))
METHOD_RATE_INSTALLATION_USER_LIST = register_method(
    Method("twprojects-list_installation_user_rates")
)
METHOD_RATE_INSTALLATION_USER_GET = register_method(
    Method("twprojects-get_installation_user_rate")
)
METHOD_RATE_PROJECT_GET = register_method(Method("twprojects-get_project_rate"))
METHOD_RATE_PROJECT_USER_LIST = register_method(
    Method("twprojects-list_project_user_rates")
)
METHOD_RATE_PROJECT_USER_GET = register_method(
    Method("twprojects-get_project_user_rate")
)
METHOD_RATE_PROJECT_USER_HISTORY_GET = register_method(
    Method("twprojects-get_project_user_rate_history")
)
METHOD_RATE_INSTALLATION_USER_UPDATE = register_method(
    Method("twprojects-update_installation_user_rate")
)
METHOD_RATE_INSTALLATION_USER_BULK_UPDATE = register_method(
    Method("twprojects-bulk_update_installation_user_rates")
)
METHOD_RATE_PROJECT_UPDATE = register_method(Method("twprojects-update_project_rate"))
METHOD_RATE_PROJECT_AND_USERS_UPDATE = register_method(
    Method("twprojects-update_project_and_user_rates")
)
METHOD_RATE_PROJECT_USER_UPDATE = register_method(
    Method("twprojects-update_project_user_rate")
)

RATES_DESCRIPTION = (
    "The rates feature in Teamwork.com enables organizations to manage billing and "
    "cost rates for users across projects. Rates can be configured at multiple "
    "levels: installation-wide default rates, project-specific rates, and "
    "individual user rates. Project-specific rates override installation defaults, "
    "and user-specific rates take precedence over both. Rates support "
    "multi-currency configurations and keep a history for financial reporting."
)

_RATES = "/projects/api/v3/rates"
_CURRENCY = (
    "The ID of the currency for the rate (optional, only used in multi-currency mode)."
)


def _rate_pagination() -> dict[str, Schema]:
    return {
        "page": integer("Page number for pagination of results. Defaults to 1."),
        "page_size": integer(
            "Number of results per page for pagination. Defaults to 50."
        ),
    }


def user_rates_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get user rates")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        filters = UserRatesFilters()
        bind(
            arguments,
            required_numeric_param(filters, "id"),
            *page_params(filters),
            optional_param(filters, "include_installation_rate", kind=bool),
            optional_param(filters, "include_user_cost", kind=bool),
            optional_param(filters, "include_archived_projects", kind=bool),
            optional_param(filters, "include_deleted_projects", kind=bool),
        )
        payload = await client.get(
            f"{_RATES}/users/{filters.id}.json",
            params=filters.query(),
            tool=METHOD_RATE_USER_GET,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_RATE_USER_GET,
        title="Get User Rates",
        description="Get all rates for a specific user in Teamwork.com. "
        + RATES_DESCRIPTION,
        properties={
            "id": integer("The ID of the user to get rates for."),
            **_rate_pagination(),
            "include_installation_rate": boolean(
                "Include the installation rate in the response. Defaults to false."
            ),
            "include_user_cost": boolean(
                "Include the user cost in the response. Defaults to false."
            ),
            "include_archived_projects": boolean(
                "Include archived projects in the response. Defaults to false."
            ),
            "include_deleted_projects": boolean(
                "Include deleted projects in the response. Defaults to false."
            ),
        },
        required=["id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def installation_user_rates_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list installation user rates")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        filters = RatePage()
        bind(arguments, *page_params(filters))
        payload = await client.get(
            f"{_RATES}/installation/users.json",
            params=filters.query(),
            tool=METHOD_RATE_INSTALLATION_USER_LIST,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_RATE_INSTALLATION_USER_LIST,
        title="List Installation User Rates",
        description="List all users' installation rates in Teamwork.com. "
        + RATES_DESCRIPTION,
        properties=_rate_pagination(),
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def installation_user_rate_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get installation user rate")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = UserRateUpdateRequest()
        bind(arguments, required_numeric_param(request, "user_id"))
        payload = await client.get(
            f"{_RATES}/installation/users/{request.user_id}.json",
            tool=METHOD_RATE_INSTALLATION_USER_GET,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_RATE_INSTALLATION_USER_GET,
        title="Get Installation User Rate",
        description="Get a user's default installation rate in Teamwork.com. "
        + RATES_DESCRIPTION,
        properties={
            "user_id": integer("The ID of the user to get the installation rate for.")
        },
        required=["user_id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def project_rate_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get project rate")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "project_id"))
        payload = await client.get(
            f"{_RATES}/projects/{request.project_id}.json",
            tool=METHOD_RATE_PROJECT_GET,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_RATE_PROJECT_GET,
        title="Get Project Rate",
        description="Get a project's default rate in Teamwork.com. "
        + RATES_DESCRIPTION,
        properties={
            "project_id": integer("The ID of the project to get the rate for.")
        },
        required=["project_id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def project_user_rates_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list project user rates")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        filters = ProjectUserRatesFilters()
        bind(
            arguments,
            required_numeric_param(filters, "project_id"),
            optional_param(filters, "search_term"),
            *page_params(filters),
        )
        payload = await client.get(
            f"{_RATES}/projects/{filters.project_id}/users.json",
            params=filters.query(),
            tool=METHOD_RATE_PROJECT_USER_LIST,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_RATE_PROJECT_USER_LIST,
        title="List Project User Rates",
        description="List all users' rates for a project in Teamwork.com. "
        + RATES_DESCRIPTION,
        properties={
            "project_id": integer("The ID of the project to get user rates for."),
            "search_term": string("A search term to filter users by name."),
            **_rate_pagination(),
        },
        required=["project_id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def project_user_rate_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get project user rate")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = UserRateUpdateRequest()
        bind(
            arguments,
            required_numeric_param(request, "project_id"),
            required_numeric_param(request, "user_id"),
        )
        payload = await client.get(
            f"{_RATES}/projects/{request.project_id}/users/{request.user_id}.json",
            tool=METHOD_RATE_PROJECT_USER_GET,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_RATE_PROJECT_USER_GET,
        title="Get Project User Rate",
        description="Get a specific user's rate for a project in Teamwork.com. "
        + RATES_DESCRIPTION,
        properties={
            "project_id": integer("The ID of the project."),
            "user_id": integer("The ID of the user to get the rate for."),
        },
        required=["project_id", "user_id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def project_user_rate_history_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get project user rate history")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        filters = ProjectUserRatesFilters()
        bind(
            arguments,
            required_numeric_param(filters, "project_id"),
            required_numeric_param(filters, "user_id"),
            *page_params(filters),
        )
        payload = await client.get(
            f"{_RATES}/projects/{filters.project_id}/users/{filters.user_id}"
            "/history.json",
            params=filters.query(),
            tool=METHOD_RATE_PROJECT_USER_HISTORY_GET,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_RATE_PROJECT_USER_HISTORY_GET,
        title="Get Project User Rate History",
        description="Get a user's rate history for a project in Teamwork.com. "
        + RATES_DESCRIPTION,
        properties={
            "project_id": integer("The ID of the project."),
            "user_id": integer("The ID of the user to get the rate history for."),
            **_rate_pagination(),
        },
        required=["project_id", "user_id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def installation_user_rate_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to update installation user rate")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = UserRateUpdateRequest()
        bind(
            arguments,
            required_numeric_param(request, "user_id"),
            required_numeric_param(request, "user_rate"),
            optional_numeric_param(request, "currency_id"),
        )
        await client.put(
            f"{_RATES}/installation/users/{request.user_id}.json",
            json=request.body(),
            tool=METHOD_RATE_INSTALLATION_USER_UPDATE,
        )
        return text_result("Installation user rate updated successfully")

    tool = new_tool(
        METHOD_RATE_INSTALLATION_USER_UPDATE,
        title="Update Installation User Rate",
        description="Set a user's default installation rate in Teamwork.com. "
        + RATES_DESCRIPTION,
        properties={
            "user_id": integer("The ID of the user to set the installation rate for."),
            "user_rate": integer("The rate amount for the user."),
            "currency_id": integer(_CURRENCY),
        },
        required=["user_id", "user_rate"],
    )
    return ServerTool(tool=tool, handler=handle)


def installation_user_rates_bulk_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to bulk update installation user rates")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = UserRateBulkUpdateRequest()
        bind(
            arguments,
            required_numeric_param(request, "user_rate"),
            optional_param(request, "all", kind=bool),
            optional_numeric_list_param(request, "ids"),
            optional_numeric_list_param(request, "exclude_ids"),
            optional_numeric_param(request, "currency_id"),
        )
        await client.put(
            f"{_RATES}/installation/users/bulk/update.json",
            json=request.body(),
            tool=METHOD_RATE_INSTALLATION_USER_BULK_UPDATE,
        )
        return text_result("Bulk updated installation user rates successfully")

    tool = new_tool(
        METHOD_RATE_INSTALLATION_USER_BULK_UPDATE,
        title="Bulk Update Installation User Rates",
        description="Bulk update installation rates for users in Teamwork.com. "
        + RATES_DESCRIPTION,
        properties={
            "user_rate": integer("The rate amount to set for users."),
            "all": boolean("Whether to update all users. Defaults to false."),
            "ids": integer_list("Array of user IDs to update (if all is false)."),
            "exclude_ids": integer_list(
                "Array of user IDs to exclude (if all is true)."
            ),
            "currency_id": integer(_CURRENCY),
        },
        required=["user_rate"],
    )
    return ServerTool(tool=tool, handler=handle)


def project_rate_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to update project rate")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = ProjectRateUpdateRequest()
        bind(
            arguments,
            required_numeric_param(request, "project_id"),
            required_numeric_param(request, "project_rate"),
        )
        await client.put(
            f"{_RATES}/projects/{request.project_id}.json",
            json=request.body(),
            tool=METHOD_RATE_PROJECT_UPDATE,
        )
        return text_result("Project rate updated successfully")

    tool = new_tool(
        METHOD_RATE_PROJECT_UPDATE,
        title="Update Project Rate",
        description="Set a project's default rate in Teamwork.com. "
        + RATES_DESCRIPTION,
        properties={
            "project_id": integer("The ID of the project to set the rate for."),
            "project_rate": integer("The rate amount for the project."),
        },
        required=["project_id", "project_rate"],
    )
    return ServerTool(tool=tool, handler=handle)


def _project_user_rate(arguments: Arguments) -> ProjectUserRate:
    rate = ProjectUserRate()
    bind(
        arguments,
        required_numeric_param(rate, "user_id"),
        required_numeric_param(rate, "user_rate"),
    )
    return rate


def project_and_user_rates_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to update project and user rates")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = ProjectRateUpdateRequest()
        bind(
            arguments,
            required_numeric_param(request, "project_id"),
            optional_numeric_param(request, "project_rate"),
            optional_object_list_param(request, "user_rates", _project_user_rate),
        )
        await client.put(
            f"{_RATES}/projects/{request.project_id}/actions/update.json",
            json=request.body(),
            tool=METHOD_RATE_PROJECT_AND_USERS_UPDATE,
        )
        if request.user_rates:
            return text_result(
                f"Project rate and {len(request.user_rates)} user rates "
                "updated successfully"
            )
        return text_result("Project rate updated successfully")

    tool = new_tool(
        METHOD_RATE_PROJECT_AND_USERS_UPDATE,
        title="Update Project and User Rates",
        description="Set project rate and user rates together in Teamwork.com. "
        + RATES_DESCRIPTION,
        properties={
            "project_id": integer("The ID of the project."),
            "project_rate": integer("The project's default rate amount."),
            "user_rates": array(
                obj(
                    {
                        "user_id": integer("The ID of the user."),
                        "user_rate": integer("The rate amount for the user."),
                    },
                    "A user rate to set for the project.",
                    required=["user_id", "user_rate"],
                ),
                "Array of user rate objects to set for the project.",
            ),
        },
        required=["project_id"],
    )
    return ServerTool(tool=tool, handler=handle)


def project_user_rate_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to update project user rate")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = UserRateUpdateRequest()
        bind(
            arguments,
            required_numeric_param(request, "project_id"),
            required_numeric_param(request, "user_id"),
            required_numeric_param(request, "user_rate"),
            optional_numeric_param(request, "currency_id"),
        )
        await client.put(
            f"{_RATES}/projects/{request.project_id}/users/{request.user_id}.json",
            json=request.body(),
            tool=METHOD_RATE_PROJECT_USER_UPDATE,
        )
        return text_result("Project user rate updated successfully")

    tool = new_tool(
        METHOD_RATE_PROJECT_USER_UPDATE,
        title="Update Project User Rate",
        description="Set a user's rate for a specific project in Teamwork.com. "
        + RATES_DESCRIPTION,
        properties={
            "project_id": integer("The ID of the project."),
            "user_id": integer("The ID of the user to set the rate for."),
            "user_rate": integer("The rate amount for the user."),
            "currency_id": integer(_CURRENCY),
        },
        required=["project_id", "user_id", "user_rate"],
    )
    return ServerTool(tool=tool, handler=handle)
