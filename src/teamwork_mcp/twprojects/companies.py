"""Companies (clients): the organizations users and projects are grouped under."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import (
    Param,
    bind,
    optional_numeric_list_param,
    optional_numeric_param,
    optional_param,
    required_numeric_param,
    required_param,
)
from teamwork_mcp.core.results import json_result, response_id, text_result
from teamwork_mcp.core.schema import (
    Schema,
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
    CompanyCreateRequest,
    CompanyUpdateRequest,
    PathID,
    TaggedListFilters,
)

METHOD_COMPANY_CREATE = register_method(Method("twprojects-create_company"))
METHOD_COMPANY_UPDATE = register_method(Method("twprojects-update_company"))
METHOD_COMPANY_DELETE = register_method(Method("twprojects-delete_company"))
METHOD_COMPANY_GET = register_method(Method("twprojects-get_company"))
METHOD_COMPANY_LIST = register_method(Method("twprojects-list_companies"))

COMPANY_DESCRIPTION = (
    "In the context of Teamwork.com, a company represents an organization or "
    "business entity that can be associated with users, projects, and tasks within "
    "the platform, and it is often referred to as a \"client\". It serves as a way "
    "to group related users and projects under a single organizational umbrella, "
    "making it easier to manage permissions, assign responsibilities, and organize "
    "work. Companies (or clients) are frequently used to distinguish between "
    "internal teams and external collaborators."
)

_TEXT_FIELDS = {
    "address_one": "The first line of the address of the company.",
    "address_two": "The second line of the address of the company.",
    "city": "The city of the company.",
    "state": "The state of the company.",
    "zip": "The ZIP or postal code of the company.",
    "country_code": "The country code of the company, e.g., 'US' for the United States.",
    "phone": "The phone number of the company.",
    "fax": "The fax number of the company.",
    "email_one": "The primary email address of the company.",
    "email_two": "The secondary email address of the company.",
    "email_three": "The tertiary email address of the company.",
    "website": "The website of the company.",
    "profile": "A profile description for the company.",
}


def _company_properties() -> Dict[str, Schema]:
    properties = {"name": string("The name of the company.")}
    properties.update({key: string(desc) for key, desc in _TEXT_FIELDS.items()})
    properties["manager_id"] = integer("The ID of the user who manages the company.")
    properties["industry_id"] = integer(
        "The ID of the industry the company belongs to."
    )
    properties["tag_ids"] = integer_list(
        "A list of tag IDs to associate with the company."
    )
    return properties


def _company_params(request: CompanyCreateRequest) -> list[Param]:
    return [
        *(optional_param(request, key) for key in _TEXT_FIELDS),
        optional_numeric_param(request, "manager_id"),
        optional_numeric_param(request, "industry_id"),
        optional_numeric_list_param(request, "tag_ids"),
    ]


def company_create(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to create company")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = CompanyCreateRequest()
        bind(
            arguments,
            required_param(request, "name"),
            *_company_params(request),
        )
        payload = await client.post(
            "/projects/api/v3/companies.json",
            json={"company": request.body()},
            tool=METHOD_COMPANY_CREATE,
        )
        company_id = response_id(payload, "company", "id")
        return text_result(f"Company created successfully with ID {company_id}")

    tool = new_tool(
        METHOD_COMPANY_CREATE,
        title="Create Company",
        description="Create a new company in Teamwork.com. " + COMPANY_DESCRIPTION,
        properties=_company_properties(),
        required=["name"],
    )
    return ServerTool(tool=tool, handler=handle)


def company_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to update company")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = CompanyUpdateRequest()
        bind(
            arguments,
            required_numeric_param(request, "id"),
            optional_param(request, "name"),
            *_company_params(request),
        )
        await client.patch(
            f"/projects/api/v3/companies/{request.id}.json",
            json={"company": request.body()},
            tool=METHOD_COMPANY_UPDATE,
        )
        return text_result("Company updated successfully")

    tool = new_tool(
        METHOD_COMPANY_UPDATE,
        title="Update Company",
        description="Update an existing company in Teamwork.com. " + COMPANY_DESCRIPTION,
        properties={
            "id": integer("The ID of the company to update."),
            **_company_properties(),
        },
        required=["id"],
    )
    return ServerTool(tool=tool, handler=handle)


def company_delete(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to delete company")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        await client.delete(
            f"/projects/api/v3/companies/{request.id}.json", tool=METHOD_COMPANY_DELETE
        )
        return text_result("Company deleted successfully")

    tool = new_tool(
        METHOD_COMPANY_DELETE,
        title="Delete Company",
        description="Delete an existing company in Teamwork.com. " + COMPANY_DESCRIPTION,
        properties={"id": integer("The ID of the company to delete.")},
        required=["id"],
        destructive=True,
    )
    return ServerTool(tool=tool, handler=handle)


def company_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get company")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        payload = await client.get(
            f"/projects/api/v3/companies/{request.id}.json", tool=METHOD_COMPANY_GET
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_COMPANY_GET,
        title="Get Company",
        description="Get an existing company in Teamwork.com. " + COMPANY_DESCRIPTION,
        properties={"id": integer("The ID of the company to get.")},
        required=["id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def company_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list companies")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        filters = TaggedListFilters()
        bind(
            arguments,
            optional_param(filters, "search_term"),
            optional_numeric_list_param(filters, "tag_ids"),
            optional_param(filters, "match_all_tags", kind=bool),
            *page_params(filters),
        )
        payload = await client.get(
            "/projects/api/v3/companies.json",
            params=filters.query(),
            tool=METHOD_COMPANY_LIST,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_COMPANY_LIST,
        title="List Companies",
        description="List companies in Teamwork.com. " + COMPANY_DESCRIPTION,
        properties={
            "search_term": string(
                "A search term to filter companies by name. Each word from the "
                "search term is used to match against the company name."
            ),
            "tag_ids": integer_list("A list of tag IDs to filter companies by tags."),
            "match_all_tags": boolean(
                "If true, the search will match companies that have all the "
                "specified tags. If false, the search will match companies that "
                "have any of the specified tags. Defaults to false."
            ),
            **pagination(),
        },
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)
