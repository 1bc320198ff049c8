"""
Teamwork Desk tools.

Importing this package registers every ``twdesk-*`` method name. Desk has no
delete tools, so the group is built without a read-only or delete policy of
its own; read-only mode is applied by the caller.
"""

from __future__ import annotations

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.toolsets import Toolset, ToolsetGroup

from . import (
    companies,
    customers,
    files,
    inboxes,
    messages,
    priorities,
    statuses,
    tags,
    ticket_types,
    tickets,
    users,
)

TOOLSET_NAME = "desk"
TOOLSET_DESCRIPTION = (
    "Teamwork Desk is the helpdesk of Teamwork.com. Tickets are customer support "
    "requests routed to inboxes and categorized by status, priority, type and tags. "
    "Customers raise tickets and belong to companies; users are the agents who "
    "answer them with messages and file attachments."
)


def default_toolset_group(client: TeamworkClient, read_only: bool = False) -> ToolsetGroup:
    toolset = (
        Toolset.new(TOOLSET_NAME, TOOLSET_DESCRIPTION)
        .add_write_tools(
            tickets.ticket_create(client),
            tickets.ticket_update(client),
            statuses.status_create(client),
            statuses.status_update(client),
            priorities.priority_create(client),
            priorities.priority_update(client),
            tags.tag_create(client),
            tags.tag_update(client),
            ticket_types.type_create(client),
            ticket_types.type_update(client),
            companies.company_create(client),
            companies.company_update(client),
            customers.customer_create(client),
            customers.customer_update(client),
            messages.message_create(client),
            files.file_create(client),
        )
        .add_read_tools(
            tickets.ticket_get(client),
            tickets.ticket_list(client),
            statuses.status_get(client),
            statuses.status_list(client),
            priorities.priority_get(client),
            priorities.priority_list(client),
            tags.tag_get(client),
            tags.tag_list(client),
            ticket_types.type_get(client),
            ticket_types.type_list(client),
            companies.company_get(client),
            companies.company_list(client),
            customers.customer_get(client),
            customers.customer_list(client),
            users.user_get(client),
            users.user_list(client),
            inboxes.inbox_get(client),
            inboxes.inbox_list(client),
        )
    )

    group = ToolsetGroup(read_only)
    group.add_toolset(toolset)
    return group


__all__ = ["TOOLSET_NAME", "default_toolset_group"]
