"""Desk customers: the people who raise tickets."""

from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import (
    bind,
    optional_list_param,
    optional_numeric_list_param,
    optional_param,
    required_numeric_param,
)
from teamwork_mcp.core.results import json_result, response_id, text_result
from teamwork_mcp.core.schema import (
    array,
    boolean,
    integer,
    integer_list,
    new_tool,
    string,
)
from teamwork_mcp.core.toolsets import Method, ServerTool, register_method

from .meta import desk_path, list_query, pagination_params, pagination_properties
from .models import CustomerFilters, CustomerRequest, DeskListQuery, PathID

METHOD_CUSTOMER_CREATE = register_method(Method("twdesk-create_customer"))
METHOD_CUSTOMER_UPDATE = register_method(Method("twdesk-update_customer"))
METHOD_CUSTOMER_GET = register_method(Method("twdesk-get_customer"))
METHOD_CUSTOMER_LIST = register_method(Method("twdesk-list_customers"))

# argument key -> CustomerRequest attribute
_TEXT_FIELDS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "email": "email",
    "organization": "organization",
    "extraData": "extra_data",
    "notes": "notes",
    "linkedinURL": "linkedin_url",
    "facebookURL": "facebook_url",
    "twitterHandle": "twitter_handle",
    "jobTitle": "job_title",
    "phone": "phone",
    "mobile": "mobile",
    "address": "address",
}


def _customer_properties() -> dict:
    return {
        "firstName": string("The first name of the customer."),
        "lastName": string("The last name of the customer."),
        "email": string("The email address of the customer."),
        "organization": string("The organization the customer works for."),
        "extraData": string("Free-form extra data about the customer."),
        "notes": string("Internal notes about the customer."),
        "linkedinURL": string("The LinkedIn profile URL of the customer."),
        "facebookURL": string("The Facebook profile URL of the customer."),
        "twitterHandle": string("The Twitter handle of the customer."),
        "jobTitle": string("The job title of the customer."),
        "phone": string("The phone number of the customer."),
        "mobile": string("The mobile number of the customer."),
        "address": string("The postal address of the customer."),
        "trusted": boolean(
            "Whether the customer is trusted. Tickets from trusted customers skip "
            "spam checks."
        ),
    }


def _customer_params(request: CustomerRequest) -> tuple:
    return (
        *(
            optional_param(request, key, attr=attr)
            for key, attr in _TEXT_FIELDS.items()
        ),
        optional_param(request, "trusted", kind=bool),
    )


def customer_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get customer")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        payload = await client.get(
            desk_path(f"customers/{request.id}.json"), tool=METHOD_CUSTOMER_GET
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_CUSTOMER_GET,
        title="Get Customer",
        description=(
            "Retrieve detailed information about a specific customer in Teamwork "
            "Desk by their ID, including contact details and company links."
        ),
        properties={"id": integer("The ID of the customer to retrieve.")},
        required=["id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def customer_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list customers")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        query = DeskListQuery()
        filters = CustomerFilters()
        bind(
            arguments,
            optional_numeric_list_param(filters, "companyIDs", attr="company_ids"),
            optional_list_param(filters, "companyNames", attr="company_names"),
            optional_list_param(filters, "emails"),
            *pagination_params(query),
        )
        payload = await client.get(
            desk_path("customers.json"),
            params=list_query(query, filters),
            tool=METHOD_CUSTOMER_LIST,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_CUSTOMER_LIST,
        title="List Customers",
        description=(
            "List customers in Teamwork Desk, optionally filtered by company or "
            "email address."
        ),
        properties={
            "companyIDs": integer_list(
                "The IDs of the companies to filter by. "
                "They can be found by using the 'twdesk-list_companies' tool."
            ),
            "companyNames": array(
                {"type": "string"}, "The names of the companies to filter by."
            ),
            "emails": array(
                {"type": "string"}, "The email addresses to filter customers by."
            ),
            **pagination_properties(),
        },
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def customer_create(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to create customer")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = CustomerRequest()
        bind(arguments, *_customer_params(request))
        payload = await client.post(
            desk_path("customers.json"),
            json={"customer": request.body()},
            tool=METHOD_CUSTOMER_CREATE,
        )
        customer_id = response_id(payload, "customer", "id")
        return text_result(f"Customer created successfully with ID {customer_id}")

    tool = new_tool(
        METHOD_CUSTOMER_CREATE,
        title="Create Customer",
        description=(
            "Create a new customer in Teamwork Desk with contact details and "
            "social profiles."
        ),
        properties=_customer_properties(),
    )
    return ServerTool(tool=tool, handler=handle)


def customer_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to update customer")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = CustomerRequest()
        bind(
            arguments,
            required_numeric_param(request, "id"),
            *_customer_params(request),
        )
        await client.patch(
            desk_path(f"customers/{request.id}.json"),
            json={"customer": request.body()},
            tool=METHOD_CUSTOMER_UPDATE,
        )
        return text_result("Customer updated successfully")

    tool = new_tool(
        METHOD_CUSTOMER_UPDATE,
        title="Update Customer",
        description="Update an existing customer in Teamwork Desk by ID.",
        properties={
            "id": integer("The ID of the customer to update."),
            **_customer_properties(),
        },
        required=["id"],
    )
    return ServerTool(tool=tool, handler=handle)
