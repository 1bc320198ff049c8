import json

import pytest
import respx
from httpx import Response
from teamwork_mcp.core.client import RetryConfig, TeamworkClient
from teamwork_mcp.core.results import result_text
from teamwork_mcp.twprojects import project_members

BASE = "https://acme.teamwork.com"


@pytest.fixture
def client():
    return TeamworkClient(
        base_url=BASE, bearer_token="tok", retry=RetryConfig(max_retries=0)
    )


@pytest.mark.asyncio
@respx.mock
async def test_add_project_members(client):
    route = respx.put(f"{BASE}/projects/api/v3/projects/4/people.json").mock(
        return_value=Response(200, json={})
    )

    async with client:
        result = await project_members.project_member_add(client).handler(
            {"project_id": 4, "user_ids": [10, 11]}
        )

    assert result_text(result) == "Project member added successfully"
    assert json.loads(route.calls[0].request.content) == {"userIds": [10, 11]}


@pytest.mark.asyncio
async def test_add_project_member_requires_project(client):
    async with client:
        result = await project_members.project_member_add(client).handler(
            {"user_ids": [10]}
        )

    assert result.isError
    assert "project_id" in result_text(result)
