"""Notebooks: long-form written content kept inside a project."""

from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import (
    bind,
    optional_numeric_list_param,
    optional_param,
    required_numeric_param,
    required_param,
    restrict_values,
)
from teamwork_mcp.core.results import json_result, response_id, text_result
from teamwork_mcp.core.schema import (
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
    NotebookCreateRequest,
    NotebookListFilters,
    NotebookUpdateRequest,
    PathID,
)

METHOD_NOTEBOOK_CREATE = register_method(Method("twprojects-create_notebook"))
METHOD_NOTEBOOK_UPDATE = register_method(Method("twprojects-update_notebook"))
METHOD_NOTEBOOK_DELETE = register_method(Method("twprojects-delete_notebook"))
METHOD_NOTEBOOK_GET = register_method(Method("twprojects-get_notebook"))
METHOD_NOTEBOOK_LIST = register_method(Method("twprojects-list_notebooks"))

NOTEBOOK_DESCRIPTION = (
    "Notebook is a space where teams can create, share, and organize written "
    "content in a structured way. It's commonly used for documenting processes, "
    "storing meeting notes, capturing research, or drafting ideas that need to be "
    "revisited and refined over time. Unlike quick messages or task comments, "
    "notebooks provide a more permanent and organized format that can be easily "
    "searched and referenced."
)

NOTEBOOK_TYPES = ("MARKDOWN", "HTML")

_TYPE = "The type of the notebook. Valid values are 'MARKDOWN' and 'HTML'."


def notebook_create(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to create notebook")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = NotebookCreateRequest()
        bind(
            arguments,
            required_numeric_param(request, "project_id"),
            required_param(request, "name"),
            optional_param(request, "description"),
            required_param(request, "contents"),
            required_param(request, "type", restrict_values(*NOTEBOOK_TYPES)),
            optional_numeric_list_param(request, "tag_ids"),
        )
        payload = await client.post(
            f"/projects/api/v3/projects/{request.project_id}/notebooks.json",
            json={"notebook": request.body()},
            tool=METHOD_NOTEBOOK_CREATE,
        )
        notebook_id = response_id(payload, "notebook", "id")
        return text_result(f"Notebook created successfully with ID {notebook_id}")

    tool = new_tool(
        METHOD_NOTEBOOK_CREATE,
        title="Create Notebook",
        description="Create a new notebook in Teamwork.com. " + NOTEBOOK_DESCRIPTION,
        properties={
            "name": string("The name of the notebook."),
            "project_id": integer("The ID of the project to create the notebook in."),
            "description": string("A description of the notebook."),
            "contents": string("The contents of the notebook."),
            "type": string(_TYPE, enum=NOTEBOOK_TYPES),
            "tag_ids": integer_list("A list of tag IDs to associate with the notebook."),
        },
        required=["name", "project_id", "contents", "type"],
    )
    return ServerTool(tool=tool, handler=handle)


def notebook_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to update notebook")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = NotebookUpdateRequest()
        bind(
            arguments,
            required_numeric_param(request, "id"),
            optional_param(request, "name"),
            optional_param(request, "description"),
            optional_param(request, "contents"),
            optional_param(request, "type", restrict_values(*NOTEBOOK_TYPES)),
            optional_numeric_list_param(request, "tag_ids"),
        )
        await client.patch(
            f"/projects/api/v3/notebooks/{request.id}.json",
            json={"notebook": request.body()},
            tool=METHOD_NOTEBOOK_UPDATE,
        )
        return text_result("Notebook updated successfully")

    tool = new_tool(
        METHOD_NOTEBOOK_UPDATE,
        title="Update Notebook",
        description="Update an existing notebook in Teamwork.com. "
        + NOTEBOOK_DESCRIPTION,
        properties={
            "id": integer("The ID of the notebook to update."),
            "name": string("The name of the notebook."),
            "description": string("A description of the notebook."),
            "contents": string("The contents of the notebook."),
            "type": string(_TYPE, enum=NOTEBOOK_TYPES),
            "tag_ids": integer_list("A list of tag IDs to associate with the notebook."),
        },
        required=["id"],
    )
    return ServerTool(tool=tool, handler=handle)


def notebook_delete(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to delete notebook")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        await client.delete(
            f"/projects/api/v3/notebooks/{request.id}.json", tool=METHOD_NOTEBOOK_DELETE
        )
        return text_result("Notebook deleted successfully")

    tool = new_tool(
        METHOD_NOTEBOOK_DELETE,
        title="Delete Notebook",
        description="Delete an existing notebook in Teamwork.com. "
        + NOTEBOOK_DESCRIPTION,
        properties={"id": integer("The ID of the notebook to delete.")},
        required=["id"],
        destructive=True,
    )
    return ServerTool(tool=tool, handler=handle)


def notebook_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get notebook")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        payload = await client.get(
            f"/projects/api/v3/notebooks/{request.id}.json", tool=METHOD_NOTEBOOK_GET
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_NOTEBOOK_GET,
        title="Get Notebook",
        description="Get an existing notebook in Teamwork.com. " + NOTEBOOK_DESCRIPTION,
        properties={"id": integer("The ID of the notebook to get.")},
        required=["id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def notebook_list(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to list notebooks")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        filters = NotebookListFilters()
        bind(
            arguments,
            optional_numeric_list_param(filters, "project_ids"),
            optional_param(filters, "search_term"),
            optional_numeric_list_param(filters, "tag_ids"),
            optional_param(filters, "match_all_tags", kind=bool),
            optional_param(filters, "include_contents", kind=bool),
            *page_params(filters),
        )
        payload = await client.get(
            "/projects/api/v3/notebooks.json",
            params=filters.query(),
            tool=METHOD_NOTEBOOK_LIST,
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_NOTEBOOK_LIST,
        title="List Notebooks",
        description="List notebooks in Teamwork.com. " + NOTEBOOK_DESCRIPTION,
        properties={
            "project_ids": integer_list(
                "A list of project IDs to filter notebooks by projects."
            ),
            "search_term": string(
                "A search term to filter notebooks by name or description."
            ),
            "tag_ids": integer_list("A list of tag IDs to filter notebooks by tags."),
            "match_all_tags": boolean(
                "If true, the search will match notebooks that have all the "
                "specified tags. If false, the search will match notebooks that "
                "have any of the specified tags. Defaults to false."
            ),
            "include_contents": boolean(
                "If true, the contents of the notebook will be included in the "
                "response. Defaults to true."
            ),
            **pagination(),
        },
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)
