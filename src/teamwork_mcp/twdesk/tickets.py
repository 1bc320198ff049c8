"""Desk tickets: customer support requests."""

from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import (
    bind,
    optional_numeric_list_param,
    optional_numeric_param,
    optional_param,
    required_numeric_param,
    required_param,
)
from teamwork_mcp.core.results import json_result, response_id, text_result
from teamwork_mcp.core.schema import boolean, integer, integer_list, new_tool, string
from teamwork_mcp.core.toolsets import Method, ServerTool, register_method

from .meta import desk_path, list_query, pagination_params, pagination_properties
from .models import DeskListQuery, PathID, TicketFilters, TicketRequest

METHOD_TICKET_CREATE = register_method(Method("twdesk-create_ticket"))
METHOD_TICKET_UPDATE = register_method(Method("twdesk-update_ticket"))
METHOD_TICKET_GET = register_method(Method("twdesk-get_ticket"))
METHOD_TICKET_LIST = register_method(Method("twdesk-list_tickets"))

# argument key -> (TicketFilters attribute, entity, tool listing the IDs)
_ID_FILTERS = {
    "inboxIDs": ("inbox_ids", "inboxes", "twdesk-list_inboxes"),
    "customerIDs": ("customer_ids", "customers", "twdesk-list_customers"),
    "companyIDs": ("company_ids", "companies", "twdesk-list_companies"),
    "tagIDs": ("tag_ids", "tags", "twdesk-list_tags"),
    "taskIDs": ("task_ids", "tasks", "twprojects-list_tasks"),
    "projectsIDs": ("project_ids", "projects", "twprojects-list_projects"),
    "statusIDs": ("status_ids", "statuses", "twdesk-list_statuses"),
    "priorityIDs": ("priority_ids", "priorities", "twdesk-list_priorities"),
    "slaIDs": ("sla_ids", "SLAs", "twdesk-list_slas"),
    "userIDs": ("user_ids", "users", "twdesk-list_users"),
}


def _ticket_properties() -> dict:
    return {
        "subject": string("The subject of the ticket."),
        "description": string("The description of the ticket."),
        "priorityId": integer("The ID of the priority of the ticket."),
        "statusId": integer("The ID of the status of the ticket."),
        "typeId": integer("The ID of the type of the ticket."),
        "inboxId": integer("The ID of the inbox the ticket belongs to."),
        "customerId": integer("The ID of the customer who raised the ticket."),
    }


def _ticket_params(request: TicketRequest) -> tuple:
    return (
        optional_param(request, "description"),
        optional_numeric_param(request, "priorityId", attr="priority_id"),
        optional_numeric_param(request, "statusId", attr="status_id"),
        optional_numeric_param(request, "typeId", attr="type_id"),
        optional_numeric_param(request, "inboxId", attr="inbox_id"),
        optional_numeric_param(request, "customerId", attr="customer_id"),
    )


def ticket_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get ticket")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        payload = await client.get(
            desk_path(f"tickets/{request.id}.json"), tool=METHOD_TICKET_GET
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_TICKET_GET,
        title="Get Ticket",
        description=(
            "Retrieve detailed information about a specific ticket in Teamwork Desk "
            "by its ID. Useful for auditing ticket records, troubleshooting support "
            "workflows, or integrating Desk ticket data into automation and "
            "reporting systems."
        ),
        properties={"id": integer("The ID of the ticket to retrieve.")},
        required=["id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def ticket_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list tickets")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        query = DeskListQuery()
        filters = TicketFilters()
        bind(
            arguments,
            *(
                optional_numeric_list_param(filters, key, attr=attr)
                for key, (attr, _, _) in _ID_FILTERS.items()
            ),
            optional_param(filters, "shared", kind=bool),
            optional_param(filters, "slaBreached", kind=bool, attr="sla_breached"),
            *pagination_params(query),
        )
        payload = await client.get(
            desk_path("tickets.json"),
            params=list_query(query, filters),
            tool=METHOD_TICKET_LIST,
        )
        return json_result(payload)

    properties = {
        key: integer_list(
            f"The IDs of the {entity} to filter by. "
            f"They can be found by using the '{lister}' tool."
        )
        for key, (_, entity, lister) in _ID_FILTERS.items()
    }
    properties["shared"] = boolean(
        "Find tickets shared with me outside of inboxes I have access to."
    )
    properties["slaBreached"] = boolean("Find tickets where the SLA has been breached.")
    properties.update(pagination_properties())

    tool = new_tool(
        METHOD_TICKET_LIST,
        title="List Tickets",
        description=(
            "List all tickets in Teamwork Desk, with extensive filters for inbox, "
            "customer, company, tag, status, priority, SLA, user, and more. Enables "
            "users to audit, analyze, or synchronize ticket data for support "
            "management, reporting, or integration scenarios."
        ),
        properties=properties,
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def ticket_create(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to create ticket")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = TicketRequest()
        bind(arguments, required_param(request, "subject"), *_ticket_params(request))
        payload = await client.post(
            desk_path("tickets.json"),
            json={"ticket": request.body()},
            tool=METHOD_TICKET_CREATE,
        )
        ticket_id = response_id(payload, "ticket", "id")
        return text_result(f"Ticket created successfully with ID {ticket_id}")

    tool = new_tool(
        METHOD_TICKET_CREATE,
        title="Create Ticket",
        description=(
            "Create a new ticket in Teamwork Desk by specifying subject, "
            "description, priority, and status. Useful for automating ticket "
            "creation, integrating external systems, or customizing support "
            "workflows."
        ),
        properties=_ticket_properties(),
        required=["subject"],
    )
    return ServerTool(tool=tool, handler=handle)


def ticket_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to update ticket")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = TicketRequest()
        bind(
            arguments,
            required_numeric_param(request, "id"),
            optional_param(request, "subject"),
            *_ticket_params(request),
        )
        await client.patch(
            desk_path(f"tickets/{request.id}.json"),
            json={"ticket": request.body()},
            tool=METHOD_TICKET_UPDATE,
        )
        return text_result("Ticket updated successfully")

    tool = new_tool(
        METHOD_TICKET_UPDATE,
        title="Update Ticket",
        description=(
            "Update an existing ticket in Teamwork Desk by ID, allowing changes to "
            "its attributes. Supports evolving support processes, correcting ticket "
            "records, or integrating with automation systems for improved ticket "
            "handling."
        ),
        properties={
            "id": integer("The ID of the ticket to update."),
            **_ticket_properties(),
        },
        required=["id"],
    )
    return ServerTool(tool=tool, handler=handle)
