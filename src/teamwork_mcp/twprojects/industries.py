"""Industries: the business sectors companies can be filed under."""

from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.results import json_result
from teamwork_mcp.core.schema import new_tool
from teamwork_mcp.core.toolsets import Method, ServerTool, register_method

METHOD_INDUSTRY_LIST = register_method(Method("twprojects-list_industries"))

INDUSTRY_DESCRIPTION = (
    "Industry refers to the business sector or market category that a company "
    "belongs to, such as technology, healthcare, finance, or education. It helps "
    "provide context about the nature of a company's work and can be used to "
    "better organize and filter data across the platform."
)


def industry_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list industries")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        payload = await client.get(
            "/projects/api/v3/industries.json", tool=METHOD_INDUSTRY_LIST
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_INDUSTRY_LIST,
        title="List Industries",
        description="List industries in Teamwork.com. " + INDUSTRY_DESCRIPTION,
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)
