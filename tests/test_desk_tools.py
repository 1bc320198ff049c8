import json

import pytest
import respx
from httpx import Response
from teamwork_mcp.core.client import RetryConfig, TeamworkClient
from teamwork_mcp.core.results import result_text
from teamwork_mcp.twdesk import priorities, statuses, tags, ticket_types, tickets

BASE = "https://acme.teamwork.com"
DESK = f"{BASE}/desk/api/v2"


@pytest.fixture
def client():
    return TeamworkClient(
        base_url=BASE, bearer_token="tok", retry=RetryConfig(max_retries=0)
    )


@pytest.mark.asyncio
@respx.mock
async def test_create_ticket(client):
    route = respx.post(f"{DESK}/tickets.json").mock(
        return_value=Response(201, json={"ticket": {"id": 70}})
    )

    async with client:
        result = await tickets.ticket_create(client).handler(
            {"subject": "Printer on fire", "description": "help", "priorityId": 3}
        )

    assert result_text(result) == "Ticket created successfully with ID 70"
    assert json.loads(route.calls[0].request.content) == {
        "ticket": {"subject": "Printer on fire", "body": "help", "priority": {"id": 3}}
    }


@pytest.mark.asyncio
@respx.mock
async def test_update_ticket_uses_patch(client):
    route = respx.patch(f"{DESK}/tickets/70.json").mock(
        return_value=Response(200, json={"ticket": {"id": 70}})
    )

    async with client:
        result = await tickets.ticket_update(client).handler(
            {"id": 70, "statusId": 2}
        )

    assert result_text(result) == "Ticket updated successfully"
    assert json.loads(route.calls[0].request.content) == {
        "ticket": {"status": {"id": 2}}
    }


@pytest.mark.asyncio
@respx.mock
async def test_list_tickets_defaults(client):
    route = respx.get(f"{DESK}/tickets.json").mock(
        return_value=Response(200, json={"tickets": []})
    )

    async with client:
        await tickets.ticket_list(client).handler({})

    params = route.calls[0].request.url.params
    assert params["page"] == "1"
    assert params["pageSize"] == "10"
    assert params["orderBy"] == "createdAt"
    assert params["orderMode"] == "desc"
    assert "filter" not in params


@pytest.mark.asyncio
@respx.mock
async def test_list_tickets_filter(client):
    route = respx.get(f"{DESK}/tickets.json").mock(
        return_value=Response(200, json={"tickets": []})
    )

    async with client:
        await tickets.ticket_list(client).handler(
            {
                "inboxIDs": [1, 2],
                "slaBreached": True,
                "page": 2,
                "orderDirection": "asc",
            }
        )

    params = route.calls[0].request.url.params
    assert json.loads(params["filter"]) == {
        "inboxes.id": {"$in": [1, 2]},
        "sla_breached": {"$eq": True},
    }
    assert params["page"] == "2"
    assert params["orderMode"] == "asc"


@pytest.mark.asyncio
async def test_list_tickets_rejects_order_direction(client):
    async with client:
        result = await tickets.ticket_list(client).handler(
            {"orderDirection": "sideways"}
        )

    assert result.isError
    assert "orderDirection" in result_text(result)


@pytest.mark.asyncio
@respx.mock
async def test_create_status(client):
    route = respx.post(f"{DESK}/ticketstatuses.json").mock(
        return_value=Response(201, json={"ticketstatus": {"id": 4}})
    )

    async with client:
        result = await statuses.status_create(client).handler(
            {"name": "Waiting", "color": "#ccc", "displayOrder": 2}
        )

    assert result_text(result) == "Status created successfully with ID 4"
    assert json.loads(route.calls[0].request.content) == {
        "ticketstatus": {"name": "Waiting", "color": "#ccc", "displayOrder": 2}
    }


@pytest.mark.asyncio
@respx.mock
async def test_get_priority(client):
    respx.get(f"{DESK}/ticketpriorities/6.json").mock(
        return_value=Response(200, json={"ticketpriority": {"id": 6}})
    )

    async with client:
        result = await priorities.priority_get(client).handler({"id": 6})

    assert json.loads(result_text(result)) == {"ticketpriority": {"id": 6}}


@pytest.mark.asyncio
@respx.mock
async def test_list_tags_filter(client):
    route = respx.get(f"{DESK}/tags.json").mock(
        return_value=Response(200, json={"tags": []})
    )

    async with client:
        await tags.tag_list(client).handler({"name": "vip", "inboxIDs": [5]})

    assert json.loads(route.calls[0].request.url.params["filter"]) == {
        "name": {"$eq": "vip"},
        "inboxes.id": {"$in": [5]},
    }


@pytest.mark.asyncio
@respx.mock
async def test_update_type(client):
    route = respx.patch(f"{DESK}/tickettypes/3.json").mock(
        return_value=Response(200, json={"tickettype": {"id": 3}})
    )

    async with client:
        result = await ticket_types.type_update(client).handler(
            {"id": 3, "enabledForFutureInboxes": False}
        )

    assert result_text(result) == "Type updated successfully"
    assert json.loads(route.calls[0].request.content) == {
        "tickettype": {"enabledForFutureInboxes": False}
    }
