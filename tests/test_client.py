import httpx
import pytest
import respx
from httpx import Response
from teamwork_mcp.core.client import (
    RetryConfig,
    TeamworkClient,
    TeamworkClientError,
    TeamworkHTTPError,
    TeamworkParseError,
)
from teamwork_mcp.core.context import apply_request_context, reset_context

BASE = "https://acme.teamwork.com"

# no real sleeping between attempts
FAST_RETRY = RetryConfig(max_retries=2, backoff_base_seconds=0)


def _client(**kwargs):
    kwargs.setdefault("retry", FAST_RETRY)
    return TeamworkClient(base_url=BASE, bearer_token="static-token", **kwargs)


@pytest.mark.asyncio
async def test_get_request_success():
    async with respx.mock:
        route = respx.get(f"{BASE}/projects/api/v3/projects.json").mock(
            return_value=Response(200, json={"projects": [{"id": 1}]})
        )

        async with _client() as client:
            data = await client.get("/projects/api/v3/projects.json")

        assert data == {"projects": [{"id": 1}]}
        assert route.called


@pytest.mark.asyncio
async def test_static_bearer_token_and_user_agent():
    async with respx.mock:
        route = respx.get(f"{BASE}/projects/api/v3/me.json").mock(
            return_value=Response(200, json={"person": {"id": 7}})
        )

        async with _client(user_agent="Teamwork MCP/1.2.3") as client:
            await client.get("/projects/api/v3/me.json")

        sent = route.calls[0].request.headers
        assert sent["Authorization"] == "Bearer static-token"
        assert sent["User-Agent"] == "Teamwork MCP/1.2.3"


@pytest.mark.asyncio
async def test_context_token_wins_over_static_token():
    async with respx.mock:
        route = respx.get(f"{BASE}/projects/api/v3/me.json").mock(
            return_value=Response(200, json={})
        )

        tokens = apply_request_context("request-token")
        try:
            async with _client() as client:
                await client.get("/projects/api/v3/me.json")
        finally:
            reset_context(tokens)

        assert route.calls[0].request.headers["Authorization"] == "Bearer request-token"


@pytest.mark.asyncio
async def test_none_query_params_are_dropped():
    async with respx.mock:
        route = respx.get(f"{BASE}/projects/api/v3/tags.json").mock(
            return_value=Response(200, json={"tags": []})
        )

        async with _client() as client:
            await client.get(
                "/projects/api/v3/tags.json",
                params={"searchTerm": "bug", "itemType": None},
            )

        params = route.calls[0].request.url.params
        assert params["searchTerm"] == "bug"
        assert "itemType" not in params


@pytest.mark.asyncio
async def test_404_raises_typed_error_with_v3_detail():
    async with respx.mock:
        respx.get(f"{BASE}/projects/api/v3/tasks/999.json").mock(
            return_value=Response(
                404, json={"errors": [{"title": "Not found", "detail": "no task"}]}
            )
        )

        async with _client() as client:
            with pytest.raises(TeamworkHTTPError) as exc:
                await client.get("/projects/api/v3/tasks/999.json")

        assert exc.value.status_code == 404
        assert "no task" in str(exc.value)


@pytest.mark.asyncio
async def test_422_legacy_message():
    async with respx.mock:
        respx.post(f"{BASE}/projects.json").mock(
            return_value=Response(422, json={"MESSAGE": "Name is required"})
        )

        async with _client() as client:
            with pytest.raises(TeamworkHTTPError) as exc:
                await client.post("/projects.json", json={"project": {}})

        assert exc.value.status_code == 422
        assert exc.value.message == "Name is required"


@pytest.mark.asyncio
async def test_connect_timeout_after_retries():
    async with respx.mock:
        route = respx.get(f"{BASE}/projects/api/v3/projects.json").mock(
            side_effect=httpx.ConnectTimeout("boom")
        )

        async with _client() as client:
            with pytest.raises(TeamworkClientError) as exc:
                await client.get("/projects/api/v3/projects.json")

        assert not isinstance(exc.value, TeamworkHTTPError)
        assert route.call_count == 3


@pytest.mark.asyncio
async def test_empty_response_returns_empty_dict():
    async with respx.mock:
        respx.delete(f"{BASE}/projects/api/v3/tags/5.json").mock(
            return_value=Response(204)
        )

        async with _client() as client:
            assert await client.delete("/projects/api/v3/tags/5.json") == {}


@pytest.mark.asyncio
async def test_non_json_response_raises_parse_error():
    async with respx.mock:
        respx.get(f"{BASE}/projects/api/v3/projects.json").mock(
            return_value=Response(200, text="<html>Not JSON</html>")
        )

        async with _client() as client:
            with pytest.raises(TeamworkParseError) as exc:
                await client.get("/projects/api/v3/projects.json")

        assert "Expected JSON" in str(exc.value)


@pytest.mark.asyncio
async def test_retries_on_503():
    async with respx.mock:
        route = respx.get(f"{BASE}/projects/api/v3/projects.json").mock(
            side_effect=[
                Response(503, json={"message": "Service Unavailable"}),
                Response(503, json={"message": "Service Unavailable"}),
                Response(200, json={"projects": []}),
            ]
        )

        async with _client() as client:
            data = await client.get("/projects/api/v3/projects.json")

        assert data == {"projects": []}
        assert route.call_count == 3


@pytest.mark.asyncio
async def test_500_is_not_retried():
    async with respx.mock:
        route = respx.get(f"{BASE}/projects/api/v3/projects.json").mock(
            return_value=Response(500, json={"message": "boom"})
        )

        async with _client() as client:
            with pytest.raises(TeamworkHTTPError) as exc:
                await client.get("/projects/api/v3/projects.json")

        assert exc.value.status_code == 500
        assert route.call_count == 1


@pytest.mark.asyncio
async def test_upload_sends_raw_bytes_without_bearer_token():
    url = "https://storage.example.com/bucket/obj?sig=1"
    async with respx.mock:
        route = respx.put(url).mock(return_value=Response(200))

        async with _client() as client:
            await client.upload(url, b"\x00\x01", content_type="image/png")

        sent = route.calls[0].request
        assert sent.content == b"\x00\x01"
        assert sent.headers["Content-Type"] == "image/png"
        assert "Authorization" not in sent.headers


@pytest.mark.asyncio
async def test_upload_failure_is_not_retried():
    url = "https://storage.example.com/bucket/obj"
    async with respx.mock:
        route = respx.put(url).mock(return_value=Response(503))

        async with _client() as client:
            with pytest.raises(TeamworkHTTPError) as exc:
                await client.upload(url, b"data", content_type="text/plain")

        assert exc.value.status_code == 503
        assert route.call_count == 1


def test_base_url_required():
    with pytest.raises(ValueError):
        TeamworkClient(base_url="")
