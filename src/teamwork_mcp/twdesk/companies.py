"""Desk companies: organizations that customers belong to."""

from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import (
    bind,
    optional_list_param,
    optional_param,
    required_numeric_param,
    required_param,
    restrict_values,
)
from teamwork_mcp.core.results import json_result, response_id, text_result
from teamwork_mcp.core.schema import array, integer, new_tool, string
from teamwork_mcp.core.toolsets import Method, ServerTool, register_method

from .meta import desk_path, list_query, pagination_params, pagination_properties
from .models import CompanyFilters, CompanyRequest, DeskListQuery, PathID

METHOD_COMPANY_CREATE = register_method(Method("twdesk-create_company"))
METHOD_COMPANY_UPDATE = register_method(Method("twdesk-update_company"))
METHOD_COMPANY_GET = register_method(Method("twdesk-get_company"))
METHOD_COMPANY_LIST = register_method(Method("twdesk-list_companies"))

PERMISSIONS = ("own", "all")
KINDS = ("company", "group")


def _company_properties() -> dict:
    return {
        "name": string("The name of the company."),
        "description": string("A short description of the company."),
        "details": string("Additional details about the company."),
        "industry": string("The industry the company operates in."),
        "website": string("The website of the company."),
        "permission": string(
            "Who can see the company's tickets: 'own' restricts customers to their "
            "own tickets, 'all' lets them see every ticket of the company.",
            enum=PERMISSIONS,
        ),
        "kind": string(
            "Whether the entry is a company or a group of customers.", enum=KINDS
        ),
        "note": string("An internal note about the company."),
        "domains": array(
            {"type": "string"},
            "Email domains owned by the company. Customers writing from these "
            "domains are linked to it automatically.",
        ),
    }


def _company_params(request: CompanyRequest) -> tuple:
    return (
        optional_param(request, "description"),
        optional_param(request, "details"),
        optional_param(request, "industry"),
        optional_param(request, "website"),
        optional_param(request, "permission", restrict_values(*PERMISSIONS)),
        optional_param(request, "kind", restrict_values(*KINDS)),
        optional_param(request, "note"),
        optional_list_param(request, "domains"),
    )


def company_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get company")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        payload = await client.get(
            desk_path(f"companies/{request.id}.json"), tool=METHOD_COMPANY_GET
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_COMPANY_GET,
        title="Get Company",
        description=(
            "Retrieve detailed information about a specific company in Teamwork "
            "Desk by its ID, including its domains and permission settings."
        ),
        properties={"id": integer("The ID of the company to retrieve.")},
        required=["id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def company_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list companies")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        query = DeskListQuery()
        filters = CompanyFilters()
        bind(
            arguments,
            optional_param(filters, "name"),
            optional_param(filters, "kind", restrict_values(*KINDS)),
            optional_list_param(filters, "domains"),
            *pagination_params(query),
        )
        payload = await client.get(
            desk_path("companies.json"),
            params=list_query(query, filters),
            tool=METHOD_COMPANY_LIST,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_COMPANY_LIST,
        title="List Companies",
        description=(
            "List all companies in Teamwork Desk, with optional filters for name, "
            "kind and email domains."
        ),
        properties={
            "name": string("The name of the company to filter by."),
            "kind": string("The kind of entry to filter by.", enum=KINDS),
            "domains": array(
                {"type": "string"}, "The email domains to filter companies by."
            ),
            **pagination_properties(),
        },
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def company_create(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to create company")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = CompanyRequest()
        bind(arguments, required_param(request, "name"), *_company_params(request))
        payload = await client.post(
            desk_path("companies.json"),
            json=request.envelope(),
            tool=METHOD_COMPANY_CREATE,
        )
        company_id = response_id(payload, "company", "id")
        return text_result(f"Company created successfully with ID {company_id}")

    tool = new_tool(
        METHOD_COMPANY_CREATE,
        title="Create Company",
        description=(
            "Create a new company in Teamwork Desk. Companies group customers and "
            "control which tickets those customers can see."
        ),
        properties=_company_properties(),
        required=["name"],
    )
    return ServerTool(tool=tool, handler=handle)


def company_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to update company")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = CompanyRequest()
        bind(
            arguments,
            required_numeric_param(request, "id"),
            optional_param(request, "name"),
            *_company_params(request),
        )
        await client.patch(
            desk_path(f"companies/{request.id}.json"),
            json=request.envelope(),
            tool=METHOD_COMPANY_UPDATE,
        )
        return text_result("Company updated successfully")

    tool = new_tool(
        METHOD_COMPANY_UPDATE,
        title="Update Company",
        description=(
            "Update an existing company in Teamwork Desk by ID. Only the given "
            "fields change."
        ),
        properties={
            "id": integer("The ID of the company to update."),
            **_company_properties(),
        },
        required=["id"],
    )
    return ServerTool(tool=tool, handler=handle)
