"""
Comments on tasks, milestones, files and notebooks.

Comments are written through the legacy endpoints, which address the commented
object in the path (``/tasks/{id}/comments.json``) and wrap the payload in a
``comment`` envelope. Reads go through the v3 API.
"""

from __future__ import annotations

from typing import Any, Mapping

from mcp import types

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.errors import tool_handler
from teamwork_mcp.core.params import (
    Arguments,
    bind,
    optional_param,
    required_numeric_param,
    required_object_param,
    required_param,
    restrict_values,
)
from teamwork_mcp.core.results import json_result, response_id, text_result
from teamwork_mcp.core.schema import integer, new_tool, obj, pagination, string
from teamwork_mcp.core.toolsets import Method, ServerTool, register_method

from .common import page_params
from .models import (
    CommentCreateRequest,
    CommentListFilters,
    CommentTarget,
    CommentUpdateRequest,
    PathID,
)

METHOD_COMMENT_CREATE = register_method(Method("twprojects-create_comment"))
METHOD_COMMENT_UPDATE = register_method(Method("twprojects-update_comment"))
METHOD_COMMENT_DELETE = register_method(Method("twprojects-delete_comment"))
METHOD_COMMENT_GET = register_method(Method("twprojects-get_comment"))
METHOD_COMMENT_LIST = register_method(Method("twprojects-list_comments"))
METHOD_COMMENT_LIST_BY_FILE_VERSION = register_method(
    Method("twprojects-list_comments_by_file_version")
)
METHOD_COMMENT_LIST_BY_MILESTONE = register_method(
    Method("twprojects-list_comments_by_milestone")
)
METHOD_COMMENT_LIST_BY_NOTEBOOK = register_method(
    Method("twprojects-list_comments_by_notebook")
)
METHOD_COMMENT_LIST_BY_TASK = register_method(Method("twprojects-list_comments_by_task"))

COMMENT_DESCRIPTION = (
    "In the Teamwork.com context, a comment is a way for users to communicate and "
    "collaborate directly within tasks, milestones, files, or other project items. "
    "Comments allow team members to provide updates, ask questions, give feedback, "
    "or share relevant information in a centralized and contextual manner. They "
    "support rich text formatting, file attachments, and @mentions to notify "
    "specific users or teams, helping keep discussions organized and easily "
    "accessible within the project."
)

# object type accepted by the tools -> path segment of the legacy endpoint
COMMENT_OBJECTS = {
    "tasks": "tasks",
    "milestones": "milestones",
    "files": "fileversions",
    "notebooks": "notebooks",
}
CONTENT_TYPES = ("TEXT", "HTML")

_BODY = "The content of the comment. The content can be added as text or HTML."
_CONTENT_TYPE = "The content type of the comment. It can be either 'TEXT' or 'HTML'."
_SEARCH = "A search term to filter comments by name."


def _comment_target(arguments: Arguments) -> CommentTarget:
    target = CommentTarget()
    bind(
        arguments,
        required_param(target, "type", restrict_values(*COMMENT_OBJECTS)),
        required_numeric_param(target, "id"),
    )
    return target


def comment_create(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to create comment")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = CommentCreateRequest()
        bind(
            arguments,
            required_object_param(request, "object", _comment_target, attr="target"),
            required_param(request, "body", attr="content"),
            optional_param(
                request, "content_type", restrict_values(*CONTENT_TYPES)
            ),
        )
        target = request.target
        payload = await client.post(
            f"/{COMMENT_OBJECTS[target.type]}/{target.id}/comments.json",
            json={"comment": request.body()},
            tool=METHOD_COMMENT_CREATE,
        )
        comment_id = response_id(payload, "commentId")
        return text_result(f"Comment created successfully with ID {comment_id}")

    tool = new_tool(
        METHOD_COMMENT_CREATE,
        title="Create Comment",
        description="Create a new comment in Teamwork.com. " + COMMENT_DESCRIPTION,
        properties={
            "object": obj(
                {
                    "type": string(
                        "The type of object to create the comment for.",
                        enum=tuple(COMMENT_OBJECTS),
                    ),
                    "id": integer("The ID of the object to create the comment for."),
                },
                "The object to create the comment for. It can be a tasks, "
                "milestones, files or notebooks.",
                required=["type", "id"],
            ),
            "body": string(_BODY),
            "content_type": string(_CONTENT_TYPE, enum=CONTENT_TYPES),
        },
        required=["object", "body"],
    )
    return ServerTool(tool=tool, handler=handle)


def comment_update(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to update comment")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = CommentUpdateRequest()
        bind(
            arguments,
            required_numeric_param(request, "id"),
            required_param(request, "body", attr="content"),
            optional_param(
                request, "content_type", restrict_values(*CONTENT_TYPES)
            ),
        )
        await client.put(
            f"/comments/{request.id}.json",
            json={"comment": request.body()},
            tool=METHOD_COMMENT_UPDATE,
        )
        return text_result("Comment updated successfully")

    tool = new_tool(
        METHOD_COMMENT_UPDATE,
        title="Update Comment",
        description="Update an existing comment in Teamwork.com. " + COMMENT_DESCRIPTION,
        properties={
            "id": integer("The ID of the comment to update."),
            "body": string(_BODY),
            "content_type": string(_CONTENT_TYPE, enum=CONTENT_TYPES),
        },
        required=["id", "body"],
    )
    return ServerTool(tool=tool, handler=handle)


def comment_delete(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to delete comment")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        await client.delete(f"/comments/{request.id}.json", tool=METHOD_COMMENT_DELETE)
        return text_result("Comment deleted successfully")

    tool = new_tool(
        METHOD_COMMENT_DELETE,
        title="Delete Comment",
        description="Delete an existing comment in Teamwork.com. " + COMMENT_DESCRIPTION,
        properties={"id": integer("The ID of the comment to delete.")},
        required=["id"],
        destructive=True,
    )
    return ServerTool(tool=tool, handler=handle)


def comment_get(client: TeamworkClient) -> ServerTool:
    @tool_handler("failed to get comment")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        request = PathID()
        bind(arguments, required_numeric_param(request, "id"))
        payload = await client.get(
            f"/projects/api/v3/comments/{request.id}.json", tool=METHOD_COMMENT_GET
        )
        return json_result(payload)

    tool = new_tool(
        METHOD_COMMENT_GET,
        title="Get Comment",
        description="Get an existing comment in Teamwork.com. " + COMMENT_DESCRIPTION,
        properties={"id": integer("The ID of the comment to get.")},
        required=["id"],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def _comment_lister(
    client: TeamworkClient,
    method: Method,
    *,
    title: str,
    scope: str = "",
    parent: str = "",
    key: str = "",
    key_description: str = "",
) -> ServerTool:
    """List tool for all comments, or for the comments of one parent object."""

    @tool_handler("failed to list comments")
    async def handle(arguments: Mapping[str, Any]) -> types.CallToolResult:
        filters = CommentListFilters()
        params = [optional_param(filters, "search_term"), *page_params(filters)]
        if key:
            params.insert(0, required_numeric_param(filters, key))
        bind(arguments, *params)

        path = "/projects/api/v3/comments.json"
        if key:
            path = f"/projects/api/v3/{parent}/{getattr(filters, key)}/comments.json"
        payload = await client.get(path, params=filters.query(), tool=method)
        return json_result(payload)

    properties = {"search_term": string(_SEARCH), **pagination()}
    if key:
        properties = {key: integer(key_description), **properties}
    tool = new_tool(
        method,
        title=title,
        description=f"List comments in Teamwork.com{scope}. " + COMMENT_DESCRIPTION,
        properties=properties,
        required=[key] if key else [],
        read_only=True,
    )
    return ServerTool(tool=tool, handler=handle)


def comment_list(client: TeamworkClient) -> ServerTool:
    return _comment_lister(client, METHOD_COMMENT_LIST, title="List Comments")


def comment_list_by_file_version(client: TeamworkClient) -> ServerTool:
    return _comment_lister(
        client,
        METHOD_COMMENT_LIST_BY_FILE_VERSION,
        title="List Comments by File Version",
        scope=" by file version",
        parent="fileversions",
        key="file_version_id",
        key_description=(
            "The ID of the file version to retrieve comments for. Each file can have "
            "multiple versions, and comments can be associated with specific versions."
        ),
    )


def comment_list_by_milestone(client: TeamworkClient) -> ServerTool:
    return _comment_lister(
        client,
        METHOD_COMMENT_LIST_BY_MILESTONE,
        title="List Comments by Milestone",
        scope=" by milestone",
        parent="milestones",
        key="milestone_id",
        key_description="The ID of the milestone to retrieve comments for.",
    )


def comment_list_by_notebook(client: TeamworkClient) -> ServerTool:
    return _comment_lister(
        client,
        METHOD_COMMENT_LIST_BY_NOTEBOOK,
        title="List Comments by Notebook",
        scope=" by notebook",
        parent="notebooks",
        key="notebook_id",
        key_description="The ID of the notebook to retrieve comments for.",
    )


def comment_list_by_task(client: TeamworkClient) -> ServerTool:
    return _comment_lister(
        client,
        METHOD_COMMENT_LIST_BY_TASK,
        title="List Comments by Task",
        scope=" by task",
        parent="tasks",
        key="task_id",
        key_description="The ID of the task to retrieve comments for.",
    )
