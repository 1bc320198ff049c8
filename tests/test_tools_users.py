import json

import pytest
import respx
from httpx import Response
from teamwork_mcp.core.client import RetryConfig, TeamworkClient
from teamwork_mcp.core.results import result_text
from teamwork_mcp.twprojects import teams, users

BASE = "https://acme.teamwork.com"


@pytest.fixture
def client():
    return TeamworkClient(
        base_url=BASE, bearer_token="tok", retry=RetryConfig(max_retries=0)
    )


@pytest.mark.asyncio
@respx.mock
async def test_create_user(client):
    route = respx.post(f"{BASE}/people.json").mock(
        return_value=Response(201, json={"id": "77", "STATUS": "OK"})
    )

    async with client:
        result = await users.user_create(client).handler(
            {
                "first_name": "Ada",
                "last_name": "Lovelace",
                "email": "ada@example.com",
                "admin": True,
                "type": "collaborator",
            }
        )

    assert result_text(result) == "User created successfully with ID 77"
    assert json.loads(route.calls[0].request.content) == {
        "person": {
            "first-name": "Ada",
            "last-name": "Lovelace",
            "email-address": "ada@example.com",
            "administrator": True,
            "user-type": "collaborator",
        }
    }


@pytest.mark.asyncio
async def test_create_user_rejects_unknown_type(client):
    async with client:
        result = await users.user_create(client).handler(
            {
                "first_name": "Ada",
                "last_name": "Lovelace",
                "email": "ada@example.com",
                "type": "overlord",
            }
        )

    assert result.isError
    assert "overlord" in result_text(result)


@pytest.mark.asyncio
@respx.mock
async def test_get_me(client):
    respx.get(f"{BASE}/projects/api/v3/me.json").mock(
        return_value=Response(200, json={"person": {"id": 1}})
    )

    async with client:
        result = await users.user_get_me(client).handler({})

    assert json.loads(result_text(result)) == {"person": {"id": 1}}


@pytest.mark.asyncio
@respx.mock
async def test_list_users_by_project(client):
    route = respx.get(f"{BASE}/projects/api/v3/projects/5/people.json").mock(
        return_value=Response(200, json={"people": []})
    )

    async with client:
        await users.user_list_by_project(client).handler(
            {"project_id": 5, "type": "account", "search_term": "ada"}
        )

    params = route.calls[0].request.url.params
    assert params["userType"] == "account"
    assert params["searchTerm"] == "ada"


@pytest.mark.asyncio
@respx.mock
async def test_create_team_joins_user_ids(client):
    route = respx.post(f"{BASE}/teams.json").mock(
        return_value=Response(201, json={"id": "12", "STATUS": "OK"})
    )

    async with client:
        result = await teams.team_create(client).handler(
            {"name": "Core", "handle": "core", "user_ids": [1, 2, 3]}
        )

    assert result_text(result) == "Team created successfully with ID 12"
    assert json.loads(route.calls[0].request.content) == {
        "team": {"name": "Core", "handle": "core", "userIds": "1,2,3"}
    }


@pytest.mark.asyncio
@respx.mock
async def test_list_teams_by_company(client):
    route = respx.get(f"{BASE}/companies/8/teams.json").mock(
        return_value=Response(200, json={"teams": []})
    )

    async with client:
        result = await teams.team_list_by_company(client).handler({"company_id": 8})

    assert not result.isError
    assert route.called
