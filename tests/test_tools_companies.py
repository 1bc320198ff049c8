import json

import pytest
import respx
from httpx import Response
from teamwork_mcp.core.client import RetryConfig, TeamworkClient
from teamwork_mcp.core.results import result_text
from teamwork_mcp.twprojects import companies

BASE = "https://acme.teamwork.com"


@pytest.fixture
def client():
    return TeamworkClient(
        base_url=BASE, bearer_token="tok", retry=RetryConfig(max_retries=0)
    )


@pytest.mark.asyncio
@respx.mock
async def test_create_company_maps_fields(client):
    route = respx.post(f"{BASE}/projects/api/v3/companies.json").mock(
        return_value=Response(201, json={"company": {"id": 77}})
    )

    async with client:
        result = await companies.company_create(client).handler(
            {
                "name": "Globex",
                "address_one": "1 Main St",
                "country_code": "US",
                "email_one": "hi@globex.test",
                "profile": "Widgets",
                "manager_id": 3,
                "industry_id": 12,
                "tag_ids": [1, 2],
            }
        )

    assert result_text(result) == "Company created successfully with ID 77"
    assert json.loads(route.calls[0].request.content) == {
        "company": {
            "name": "Globex",
            "addressOne": "1 Main St",
            "countryCode": "US",
            "emailOne": "hi@globex.test",
            "profileText": "Widgets",
            "clientManagedBy": 3,
            "industryCatId": 12,
            "tagIds": [1, 2],
        }
    }


@pytest.mark.asyncio
async def test_create_company_requires_name(client):
    async with client:
        result = await companies.company_create(client).handler({"city": "Cork"})

    assert result.isError
    assert "name" in result_text(result)


@pytest.mark.asyncio
@respx.mock
async def test_update_company_uses_patch(client):
    route = respx.patch(f"{BASE}/projects/api/v3/companies/77.json").mock(
        return_value=Response(200, json={"company": {"id": 77}})
    )

    async with client:
        result = await companies.company_update(client).handler(
            {"id": 77, "website": "https://globex.test"}
        )

    assert result_text(result) == "Company updated successfully"
    assert json.loads(route.calls[0].request.content) == {
        "company": {"website": "https://globex.test"}
    }


@pytest.mark.asyncio
@respx.mock
async def test_delete_and_get_company(client):
    delete = respx.delete(f"{BASE}/projects/api/v3/companies/77.json").mock(
        return_value=Response(204)
    )
    payload = {"company": {"id": 77, "name": "Globex"}}
    respx.get(f"{BASE}/projects/api/v3/companies/77.json").mock(
        return_value=Response(200, json=payload)
    )

    async with client:
        deleted = await companies.company_delete(client).handler({"id": 77})
        fetched = await companies.company_get(client).handler({"id": 77})

    assert result_text(deleted) == "Company deleted successfully"
    assert delete.called
    assert json.loads(result_text(fetched)) == payload


@pytest.mark.asyncio
@respx.mock
async def test_list_companies_query(client):
    route = respx.get(f"{BASE}/projects/api/v3/companies.json").mock(
        return_value=Response(200, json={"companies": []})
    )

    async with client:
        await companies.company_list(client).handler(
            {"search_term": "glo", "tag_ids": [4, 5], "match_all_tags": True}
        )

    params = route.calls[0].request.url.params
    assert params["searchTerm"] == "glo"
    assert params["tagIds"] == "4,5"
    assert params["matchAllTags"] == "true"


@pytest.mark.asyncio
async def test_list_companies_rejects_string_tag_ids(client):
    async with client:
        result = await companies.company_list(client).handler({"tag_ids": "4,5"})

    assert result.isError
    assert "tag_ids" in result_text(result)
