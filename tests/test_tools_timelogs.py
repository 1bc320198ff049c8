import json

import pytest
import respx
from httpx import Response
from teamwork_mcp.core.client import RetryConfig, TeamworkClient
from teamwork_mcp.core.results import result_text
from teamwork_mcp.twprojects import timelogs, workload

BASE = "https://acme.teamwork.com"

TIMELOG = {"date": "2024-04-02", "time": "09:15:00", "hours": 1, "minutes": 30}


@pytest.fixture
def client():
    return TeamworkClient(
        base_url=BASE, bearer_token="tok", retry=RetryConfig(max_retries=0)
    )


@pytest.mark.asyncio
@respx.mock
async def test_create_timelog_on_task(client):
    route = respx.post(f"{BASE}/projects/api/v3/tasks/8/time.json").mock(
        return_value=Response(201, json={"timelog": {"id": 31}})
    )

    async with client:
        result = await timelogs.timelog_create(client).handler(
            {**TIMELOG, "task_id": 8, "project_id": 2, "billable": True}
        )

    assert result_text(result) == "Timelog created successfully with ID 31"
    assert json.loads(route.calls[0].request.content) == {
        "timelog": {
            "date": "2024-04-02",
            "time": "09:15:00",
            "isUTC": False,
            "hours": 1,
            "minutes": 30,
            "isBillable": True,
        }
    }


@pytest.mark.asyncio
@respx.mock
async def test_create_timelog_on_project(client):
    route = respx.post(f"{BASE}/projects/api/v3/projects/2/time.json").mock(
        return_value=Response(201, json={"timelog": {"id": 32}})
    )

    async with client:
        result = await timelogs.timelog_create(client).handler(
            {**TIMELOG, "project_id": 2}
        )

    assert not result.isError
    assert route.called


@pytest.mark.asyncio
async def test_create_timelog_needs_project_or_task(client):
    async with client:
        result = await timelogs.timelog_create(client).handler(dict(TIMELOG))

    assert result.isError
    assert "either project_id or task_id must be provided" in result_text(result)


@pytest.mark.asyncio
async def test_create_timelog_bad_time(client):
    async with client:
        result = await timelogs.timelog_create(client).handler(
            {**TIMELOG, "project_id": 2, "time": "9am"}
        )

    assert result.isError
    assert "HH:MM:SS" in result_text(result)


@pytest.mark.asyncio
@respx.mock
async def test_list_timelogs_rfc3339_range(client):
    route = respx.get(f"{BASE}/projects/api/v3/time.json").mock(
        return_value=Response(200, json={"timelogs": []})
    )

    async with client:
        await timelogs.timelog_list(client).handler(
            {
                "start_date": "2024-04-01T00:00:00Z",
                "end_date": "2024-04-30T23:59:59Z",
                "assigned_user_ids": [5, 6],
            }
        )

    params = route.calls[0].request.url.params
    assert params["startDate"].startswith("2024-04-01T00:00:00")
    assert params["endDate"].startswith("2024-04-30T23:59:59")
    assert params["assignedToUserIds"] == "5,6"


@pytest.mark.asyncio
@respx.mock
async def test_users_workload(client):
    route = respx.get(f"{BASE}/projects/api/v3/workload.json").mock(
        return_value=Response(200, json={"workload": {"users": []}})
    )

    async with client:
        result = await workload.users_workload(client).handler(
            {"start_date": "2024-04-01", "end_date": "2024-04-07", "user_ids": [1]}
        )

    assert not result.isError
    params = route.calls[0].request.url.params
    assert params["startDate"] == "2024-04-01"
    assert params["endDate"] == "2024-04-07"
    assert params["userIds"] == "1"
    assert params["include"] == "workingHourEntries"


@pytest.mark.asyncio
async def test_users_workload_requires_dates(client):
    async with client:
        result = await workload.users_workload(client).handler({})

    assert result.isError
    assert "start_date" in result_text(result)
    assert "end_date" in result_text(result)
