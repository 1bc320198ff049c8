import json

import pytest
import respx
from httpx import Response
from teamwork_mcp.core.client import RetryConfig, TeamworkClient
from teamwork_mcp.core.results import result_text
from teamwork_mcp.twprojects import milestones

BASE = "https://acme.teamwork.com"


@pytest.fixture
def client():
    return TeamworkClient(
        base_url=BASE, bearer_token="tok", retry=RetryConfig(max_retries=0)
    )


@pytest.mark.asyncio
@respx.mock
async def test_create_milestone_uses_legacy_formats(client):
    route = respx.post(f"{BASE}/projects/3/milestones.json").mock(
        return_value=Response(201, json={"milestoneId": "55", "STATUS": "OK"})
    )

    async with client:
        result = await milestones.milestone_create(client).handler(
            {
                "project_id": 3,
                "name": "Beta",
                "due_date": "20240630",
                "assignees": {"user_ids": [1], "company_ids": [2], "team_ids": [3]},
            }
        )

    assert result_text(result) == "Milestone created successfully with ID 55"
    body = json.loads(route.calls[0].request.content)
    assert body == {
        "milestone": {
            "title": "Beta",
            "deadline": "20240630",
            "responsible-party-ids": "1,c2,t3",
        }
    }


@pytest.mark.asyncio
async def test_create_milestone_requires_an_assignee(client):
    async with client:
        result = await milestones.milestone_create(client).handler(
            {"project_id": 3, "name": "Beta", "due_date": "20240630", "assignees": {}}
        )

    assert result.isError
    assert "at least one assignee must be provided" in result_text(result)


@pytest.mark.asyncio
async def test_create_milestone_rejects_iso_due_date(client):
    async with client:
        result = await milestones.milestone_create(client).handler(
            {
                "project_id": 3,
                "name": "Beta",
                "due_date": "2024-06-30",
                "assignees": {"user_ids": [1]},
            }
        )

    assert result.isError
    assert "YYYYMMDD" in result_text(result)


@pytest.mark.asyncio
@respx.mock
async def test_update_milestone_without_assignees(client):
    route = respx.put(f"{BASE}/milestones/55.json").mock(
        return_value=Response(200, json={"STATUS": "OK"})
    )

    async with client:
        result = await milestones.milestone_update(client).handler(
            {"id": 55, "description": "moved"}
        )

    assert result_text(result) == "Milestone updated successfully"
    assert json.loads(route.calls[0].request.content) == {
        "milestone": {"description": "moved"}
    }
