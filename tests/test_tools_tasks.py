import json

import pytest
import respx
from httpx import Response
from teamwork_mcp.core.client import RetryConfig, TeamworkClient
from teamwork_mcp.core.results import result_text
from teamwork_mcp.twprojects import tasks

BASE = "https://acme.teamwork.com"


@pytest.fixture
def client():
    return TeamworkClient(
        base_url=BASE, bearer_token="tok", retry=RetryConfig(max_retries=0)
    )


@pytest.mark.asyncio
@respx.mock
async def test_create_task_full_body(client):
    route = respx.post(f"{BASE}/projects/api/v3/tasklists/12/tasks.json").mock(
        return_value=Response(201, json={"task": {"id": 900}})
    )

    async with client:
        result = await tasks.task_create(client).handler(
            {
                "name": "Write docs",
                "tasklist_id": 12,
                "priority": "high",
                "start_date": "2024-05-01",
                "due_date": "2024-05-10",
                "estimated_minutes": 90,
                "tag_ids": [3],
                "assignees": {"user_ids": [1, 2], "team_ids": [8]},
                "predecessors": [{"task_id": 77, "type": "complete"}],
            }
        )

    assert result_text(result) == "Task created successfully with ID 900"
    body = json.loads(route.calls[0].request.content)
    assert body == {
        "task": {
            "name": "Write docs",
            "priority": "high",
            "startAt": "2024-05-01",
            "dueAt": "2024-05-10",
            "estimatedMinutes": 90,
            "tagIds": [3],
            "assignees": {"userIds": [1, 2], "teamIds": [8]},
            "predecessors": [{"id": 77, "type": "complete"}],
        }
    }


@pytest.mark.asyncio
async def test_create_task_reports_every_problem(client):
    async with client:
        result = await tasks.task_create(client).handler(
            {
                "priority": "critical",
                "due_date": "2024-13-40",
                "predecessors": [{"task_id": 1, "type": "sideways"}],
            }
        )

    text = result_text(result)
    assert result.isError
    for fragment in ("name", "tasklist_id", "critical", "YYYY-MM-DD", "sideways"):
        assert fragment in text


@pytest.mark.asyncio
@respx.mock
async def test_update_task_moves_tasklist(client):
    route = respx.patch(f"{BASE}/projects/api/v3/tasks/900.json").mock(
        return_value=Response(200, json={"task": {"id": 900}})
    )

    async with client:
        result = await tasks.task_update(client).handler(
            {"id": 900, "tasklist_id": 13, "progress": 50}
        )

    assert result_text(result) == "Task updated successfully"
    assert json.loads(route.calls[0].request.content) == {
        "task": {"tasklistId": 13, "progress": 50}
    }


@pytest.mark.asyncio
@respx.mock
async def test_list_tasks_by_project(client):
    route = respx.get(f"{BASE}/projects/api/v3/projects/4/tasks.json").mock(
        return_value=Response(200, json={"tasks": [{"id": 1}]})
    )

    async with client:
        result = await tasks.task_list_by_project(client).handler(
            {"project_id": 4, "tag_ids": [1, 2], "match_all_tags": True}
        )

    assert json.loads(result_text(result)) == {"tasks": [{"id": 1}]}
    params = route.calls[0].request.url.params
    assert params["tagIds"] == "1,2"
    assert params["matchAllTags"] == "true"


@pytest.mark.asyncio
@respx.mock
async def test_get_task_server_error_raises(client):
    from teamwork_mcp.core.errors import ToolServerError

    respx.get(f"{BASE}/projects/api/v3/tasks/1.json").mock(
        return_value=Response(500, json={"errors": [{"title": "oops"}]})
    )

    async with client:
        with pytest.raises(ToolServerError):
            await tasks.task_get(client).handler({"id": 1})
