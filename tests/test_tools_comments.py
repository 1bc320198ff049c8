import json

import pytest
import respx
from httpx import Response
from teamwork_mcp.core.client import RetryConfig, TeamworkClient
from teamwork_mcp.core.results import result_text
from teamwork_mcp.twprojects import comments

BASE = "https://acme.teamwork.com"


@pytest.fixture
def client():
    return TeamworkClient(
        base_url=BASE, bearer_token="tok", retry=RetryConfig(max_retries=0)
    )


@pytest.mark.asyncio
@respx.mock
async def test_create_comment_on_task_uses_legacy_endpoint(client):
    route = respx.post(f"{BASE}/tasks/12/comments.json").mock(
        return_value=Response(201, json={"commentId": "321", "STATUS": "OK"})
    )

    async with client:
        result = await comments.comment_create(client).handler(
            {
                "object": {"type": "tasks", "id": 12},
                "body": "<p>done</p>",
                "content_type": "HTML",
            }
        )

    assert result_text(result) == "Comment created successfully with ID 321"
    assert json.loads(route.calls[0].request.content) == {
        "comment": {"body": "<p>done</p>", "content-type": "HTML"}
    }


@pytest.mark.asyncio
@respx.mock
async def test_create_comment_on_file_targets_file_version(client):
    route = respx.post(f"{BASE}/fileversions/8/comments.json").mock(
        return_value=Response(201, json={"commentId": 9})
    )

    async with client:
        result = await comments.comment_create(client).handler(
            {"object": {"type": "files", "id": 8}, "body": "looks good"}
        )

    assert not result.isError
    assert json.loads(route.calls[0].request.content) == {
        "comment": {"body": "looks good"}
    }


@pytest.mark.asyncio
async def test_create_comment_rejects_unknown_object(client):
    async with client:
        result = await comments.comment_create(client).handler(
            {"object": {"type": "projects", "id": 1}, "body": "x"}
        )
        missing = await comments.comment_create(client).handler({"body": "x"})
        not_an_object = await comments.comment_create(client).handler(
            {"object": "tasks", "body": "x"}
        )

    assert result.isError
    assert "projects" in result_text(result)
    assert missing.isError
    assert "object" in result_text(missing)
    assert not_an_object.isError
    assert "object" in result_text(not_an_object)


@pytest.mark.asyncio
@respx.mock
async def test_update_and_delete_comment(client):
    update = respx.put(f"{BASE}/comments/5.json").mock(
        return_value=Response(200, json={"STATUS": "OK"})
    )
    delete = respx.delete(f"{BASE}/comments/5.json").mock(return_value=Response(204))

    async with client:
        updated = await comments.comment_update(client).handler(
            {"id": 5, "body": "edited"}
        )
        deleted = await comments.comment_delete(client).handler({"id": 5})

    assert result_text(updated) == "Comment updated successfully"
    assert json.loads(update.calls[0].request.content) == {
        "comment": {"body": "edited"}
    }
    assert result_text(deleted) == "Comment deleted successfully"
    assert delete.called


@pytest.mark.asyncio
async def test_update_comment_requires_body(client):
    async with client:
        result = await comments.comment_update(client).handler({"id": 5})

    assert result.isError
    assert "body" in result_text(result)


@pytest.mark.asyncio
@respx.mock
async def test_get_comment(client):
    payload = {"comment": {"id": 5, "body": "hi"}}
    respx.get(f"{BASE}/projects/api/v3/comments/5.json").mock(
        return_value=Response(200, json=payload)
    )

    async with client:
        result = await comments.comment_get(client).handler({"id": 5})

    assert json.loads(result_text(result)) == payload


@pytest.mark.asyncio
@respx.mock
async def test_list_comments_query(client):
    route = respx.get(f"{BASE}/projects/api/v3/comments.json").mock(
        return_value=Response(200, json={"comments": []})
    )

    async with client:
        await comments.comment_list(client).handler(
            {"search_term": "deploy", "page": 2, "page_size": 5}
        )

    params = route.calls[0].request.url.params
    assert params["searchTerm"] == "deploy"
    assert params["page"] == "2"
    assert params["pageSize"] == "5"


@pytest.mark.parametrize(
    "factory, key, segment",
    [
        (comments.comment_list_by_file_version, "file_version_id", "fileversions"),
        (comments.comment_list_by_milestone, "milestone_id", "milestones"),
        (comments.comment_list_by_notebook, "notebook_id", "notebooks"),
        (comments.comment_list_by_task, "task_id", "tasks"),
    ],
)
@pytest.mark.asyncio
@respx.mock
async def test_list_comments_by_parent(client, factory, key, segment):
    route = respx.get(f"{BASE}/projects/api/v3/{segment}/44/comments.json").mock(
        return_value=Response(200, json={"comments": []})
    )

    async with client:
        result = await factory(client).handler({key: 44, "page_size": 3})

    assert not result.isError
    params = route.calls[0].request.url.params
    assert dict(params) == {"pageSize": "3"}


def test_comment_list_schemas():
    client = TeamworkClient(base_url=BASE)
    by_task = comments.comment_list_by_task(client).tool
    assert by_task.inputSchema["required"] == ["task_id"]
    assert by_task.annotations.readOnlyHint is True
    assert "required" not in comments.comment_list(client).tool.inputSchema
    assert comments.comment_delete(client).tool.annotations.destructiveHint is True
