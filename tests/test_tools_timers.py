import json

import pytest
import respx
from httpx import Response
from teamwork_mcp.core.client import RetryConfig, TeamworkClient
from teamwork_mcp.core.results import result_text
from teamwork_mcp.twprojects import timers

BASE = "https://acme.teamwork.com"


@pytest.fixture
def client():
    return TeamworkClient(
        base_url=BASE, bearer_token="tok", retry=RetryConfig(max_retries=0)
    )


@pytest.mark.asyncio
@respx.mock
async def test_create_timer(client):
    route = respx.post(f"{BASE}/projects/api/v3/me/timers.json").mock(
        return_value=Response(201, json={"timer": {"id": 31}})
    )

    async with client:
        result = await timers.timer_create(client).handler(
            {
                "project_id": 2,
                "task_id": 8,
                "description": "pairing",
                "billable": True,
                "running": True,
                "stop_running_timers": True,
            }
        )

    assert result_text(result) == "Timer created successfully with ID 31"
    assert json.loads(route.calls[0].request.content) == {
        "timer": {
            "description": "pairing",
            "isBillable": True,
            "isRunning": True,
            "stopRunningTimers": True,
            "projectId": 2,
            "taskId": 8,
        }
    }


@pytest.mark.asyncio
async def test_create_timer_requires_project(client):
    async with client:
        result = await timers.timer_create(client).handler({"seconds": 60})

    assert result.isError
    assert "project_id" in result_text(result)


@pytest.mark.asyncio
@respx.mock
async def test_update_timer(client):
    route = respx.put(f"{BASE}/projects/api/v3/me/timers/31.json").mock(
        return_value=Response(200, json={"timer": {"id": 31}})
    )

    async with client:
        result = await timers.timer_update(client).handler(
            {"id": 31, "billable": False}
        )

    assert result_text(result) == "Timer updated successfully"
    assert json.loads(route.calls[0].request.content) == {
        "timer": {"isBillable": False}
    }


@pytest.mark.parametrize(
    "factory, action, message",
    [
        (timers.timer_pause, "pause", "Timer paused successfully"),
        (timers.timer_resume, "resume", "Timer resumed successfully"),
        (timers.timer_complete, "complete", "Timer completed successfully"),
    ],
)
@pytest.mark.asyncio
@respx.mock
async def test_timer_transitions(client, factory, action, message):
    route = respx.put(f"{BASE}/projects/api/v3/me/timers/31/{action}.json").mock(
        return_value=Response(200, json={"timer": {"id": 31}})
    )

    async with client:
        result = await factory(client).handler({"id": 31})

    assert result_text(result) == message
    assert json.loads(route.calls[0].request.content) == {}


@pytest.mark.asyncio
@respx.mock
async def test_delete_and_get_timer(client):
    delete = respx.delete(f"{BASE}/projects/api/v3/me/timers/31.json").mock(
        return_value=Response(204)
    )
    payload = {"timer": {"id": 31, "running": False}}
    respx.get(f"{BASE}/projects/api/v3/timers/31.json").mock(
        return_value=Response(200, json=payload)
    )

    async with client:
        deleted = await timers.timer_delete(client).handler({"id": 31})
        fetched = await timers.timer_get(client).handler({"id": 31})

    assert result_text(deleted) == "Timer deleted successfully"
    assert delete.called
    assert json.loads(result_text(fetched)) == payload


@pytest.mark.asyncio
@respx.mock
async def test_list_timers_query(client):
    route = respx.get(f"{BASE}/projects/api/v3/timers.json").mock(
        return_value=Response(200, json={"timers": []})
    )

    async with client:
        await timers.timer_list(client).handler(
            {"user_id": 4, "project_id": 2, "running_timers_only": True}
        )

    params = route.calls[0].request.url.params
    assert params["userId"] == "4"
    assert params["projectId"] == "2"
    assert params["runningTimersOnly"] == "true"
    assert "taskId" not in params


def test_transition_tools_are_writes():
    client = TeamworkClient(base_url=BASE)
    pause = timers.timer_pause(client).tool
    assert pause.annotations.title == "Pause Timer"
    assert pause.annotations.readOnlyHint is None
    assert timers.timer_delete(client).tool.annotations.destructiveHint is True
