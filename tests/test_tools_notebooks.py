import json

import pytest
import respx
from httpx import Response
from teamwork_mcp.core.client import RetryConfig, TeamworkClient
from teamwork_mcp.core.results import result_text
from teamwork_mcp.twprojects import notebooks

BASE = "https://acme.teamwork.com"


@pytest.fixture
def client():
    return TeamworkClient(
        base_url=BASE, bearer_token="tok", retry=RetryConfig(max_retries=0)
    )


@pytest.mark.asyncio
@respx.mock
async def test_create_notebook(client):
    route = respx.post(f"{BASE}/projects/api/v3/projects/3/notebooks.json").mock(
        return_value=Response(201, json={"notebook": {"id": 15}})
    )

    async with client:
        result = await notebooks.notebook_create(client).handler(
            {
                "project_id": 3,
                "name": "Runbook",
                "contents": "# Deploys",
                "type": "MARKDOWN",
                "tag_ids": [9],
            }
        )

    assert result_text(result) == "Notebook created successfully with ID 15"
    assert json.loads(route.calls[0].request.content) == {
        "notebook": {
            "name": "Runbook",
            "contents": "# Deploys",
            "type": "MARKDOWN",
            "tagIds": [9],
        }
    }


@pytest.mark.asyncio
async def test_create_notebook_validates_type_and_required_fields(client):
    async with client:
        result = await notebooks.notebook_create(client).handler(
            {"project_id": 3, "name": "Runbook", "type": "PDF"}
        )

    assert result.isError
    text = result_text(result)
    assert "PDF" in text
    assert "contents" in text


@pytest.mark.asyncio
@respx.mock
async def test_update_notebook_uses_patch(client):
    route = respx.patch(f"{BASE}/projects/api/v3/notebooks/15.json").mock(
        return_value=Response(200, json={"notebook": {"id": 15}})
    )

    async with client:
        result = await notebooks.notebook_update(client).handler(
            {"id": 15, "contents": "<h1>Deploys</h1>", "type": "HTML"}
        )

    assert result_text(result) == "Notebook updated successfully"
    assert json.loads(route.calls[0].request.content) == {
        "notebook": {"contents": "<h1>Deploys</h1>", "type": "HTML"}
    }


@pytest.mark.asyncio
@respx.mock
async def test_delete_and_get_notebook(client):
    delete = respx.delete(f"{BASE}/projects/api/v3/notebooks/15.json").mock(
        return_value=Response(204)
    )
    payload = {"notebook": {"id": 15}}
    respx.get(f"{BASE}/projects/api/v3/notebooks/15.json").mock(
        return_value=Response(200, json=payload)
    )

    async with client:
        deleted = await notebooks.notebook_delete(client).handler({"id": 15})
        fetched = await notebooks.notebook_get(client).handler({"id": 15})

    assert result_text(deleted) == "Notebook deleted successfully"
    assert delete.called
    assert json.loads(result_text(fetched)) == payload


@pytest.mark.asyncio
@respx.mock
async def test_list_notebooks_query(client):
    route = respx.get(f"{BASE}/projects/api/v3/notebooks.json").mock(
        return_value=Response(200, json={"notebooks": []})
    )

    async with client:
        await notebooks.notebook_list(client).handler(
            {
                "project_ids": [1, 2],
                "search_term": "deploy",
                "include_contents": False,
                "page": 1,
            }
        )

    params = route.calls[0].request.url.params
    assert params["projectIds"] == "1,2"
    assert params["searchTerm"] == "deploy"
    assert params["includeContents"] == "false"
    assert params["page"] == "1"
    assert "tagIds" not in params
