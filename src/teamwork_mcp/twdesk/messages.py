"""Desk messages: replies posted on a ticket thread."""

from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import bind, required_numeric_param, required_param
from teamwork_mcp.core.results import response_id, text_result
from teamwork_mcp.core.schema import integer, new_tool, string
from teamwork_mcp.core.toolsets import Method, ServerTool, register_method

from .meta import desk_path
from .models import MessageRequest

METHOD_MESSAGE_CREATE = register_method(Method("twdesk-create_message"))


def message_create(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to create message")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = MessageRequest()
        bind(
            arguments,
            required_numeric_param(request, "ticketID", attr="ticket_id"),
            required_param(request, "body", attr="content"),
        )
        payload = await client.post(
            desk_path(f"tickets/{request.ticket_id}/messages.json"),
            json={"message": request.body()},
            tool=METHOD_MESSAGE_CREATE,
        )
        message_id = response_id(payload, "message", "id")
        return text_result(f"Message created successfully with ID {message_id}")

    tool = new_tool(
        METHOD_MESSAGE_CREATE,
        title="Create Message",
        description=(
            "Send a reply message to a ticket in Teamwork Desk by specifying the "
            "ticket ID and message body. Useful for automating ticket responses or "
            "relaying messages from other communication systems."
        ),
        properties={
            "ticketID": integer(
                "The ID of the ticket that the message will be sent to."
            ),
            "body": string("The body of the message."),
        },
        required=["ticketID", "body"],
    )
    return ServerTool(tool=tool, handler=handle)
