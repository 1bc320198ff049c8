import httpx
import pytest
import respx
from httpx import Response
from teamwork_mcp.core.config import ServerConfig
from teamwork_mcp.server import build_server
from teamwork_mcp.transports.http import HttpConfig, build_http_app

BASE = "https://acme.teamwork.com"
ACCEPT = "application/json, text/event-stream"

INIT_PAYLOAD = {
    "jsonrpc": "2.0",
    "id": "1",
    "method": "initialize",
    "params": {
        "protocolVersion": "2025-06-18",
        "capabilities": {},
        "clientInfo": {"name": "test-client", "version": "0.0.0"},
    },
}


def _client(app, headers=None):
    transport = httpx.ASGITransport(app=app)
    return httpx.AsyncClient(
        transport=transport, base_url="http://testserver", headers=headers or {}
    )


def _app(bearer_token=None, toolsets=("all",)):
    config = ServerConfig(api_url=BASE, bearer_token=bearer_token, toolsets=toolsets)
    cfg = HttpConfig(json_response=True, stateless_http=True)
    return build_http_app(cfg, config, build_server(config)), cfg


@pytest.mark.asyncio
async def test_missing_bearer_token_is_rejected():
    app, cfg = _app()

    async with app.router.lifespan_context(app):
        async with _client(app, {"accept": ACCEPT}) as client:
            resp = await client.post(
                cfg.path, json=INIT_PAYLOAD, headers={"X-Request-Id": "rid-401"}
            )

    assert resp.status_code == 401
    assert resp.headers["WWW-Authenticate"] == "Bearer"
    body = resp.json()
    assert body["error"] == "missing_bearer_token"
    assert body["request_id"] == "rid-401"


@pytest.mark.asyncio
async def test_initialize_and_tools_list():
    app, cfg = _app()
    headers = {"accept": ACCEPT, "Authorization": "Bearer tok"}

    async with app.router.lifespan_context(app):
        async with _client(app, headers) as client:
            resp = await client.post(cfg.path, json=INIT_PAYLOAD)
            assert resp.status_code == 200
            assert resp.headers["content-type"].startswith("application/json")
            result = resp.json()["result"]
            assert result["serverInfo"]["name"] == "Teamwork.com"
            assert "tools" in result["capabilities"]

            resp = await client.post(
                cfg.path,
                json={"jsonrpc": "2.0", "id": "2", "method": "tools/list", "params": {}},
            )
            assert resp.status_code == 200
            tools = resp.json()["result"]["tools"]
            names = {t["name"] for t in tools}
            assert "twprojects-list_tasks" in names
            assert "twdesk-list_tickets" in names


@pytest.mark.asyncio
@respx.mock
async def test_tool_call_forwards_request_token():
    route = respx.get(f"{BASE}/projects/api/v3/tasks/7.json").mock(
        return_value=Response(200, json={"task": {"id": 7}})
    )
    app, cfg = _app(toolsets=("twprojects-get_task",))
    headers = {"accept": ACCEPT, "Authorization": "Bearer per-request"}

    async with app.router.lifespan_context(app):
        async with _client(app, headers) as client:
            resp = await client.post(
                cfg.path,
                json={
                    "jsonrpc": "2.0",
                    "id": "3",
                    "method": "tools/call",
                    "params": {"name": "twprojects-get_task", "arguments": {"id": 7}},
                },
            )

    assert resp.status_code == 200
    result = resp.json()["result"]
    assert result["isError"] is False
    assert route.calls[0].request.headers["Authorization"] == "Bearer per-request"


@pytest.mark.asyncio
async def test_invalid_arguments_become_error_result():
    app, cfg = _app(toolsets=("twprojects-get_task",))
    headers = {"accept": ACCEPT, "Authorization": "Bearer tok"}

    async with app.router.lifespan_context(app):
        async with _client(app, headers) as client:
            resp = await client.post(
                cfg.path,
                json={
                    "jsonrpc": "2.0",
                    "id": "4",
                    "method": "tools/call",
                    "params": {"name": "twprojects-get_task", "arguments": {}},
                },
            )

    result = resp.json()["result"]
    assert result["isError"] is True
    assert "missing required parameter: id" in result["content"][0]["text"]


def test_http_config_from_env(monkeypatch):
    monkeypatch.setenv("TW_MCP_HTTP_PORT", "9000")
    monkeypatch.setenv("TW_MCP_HTTP_PATH", "rpc/")
    monkeypatch.setenv("TW_MCP_HTTP_JSON_RESPONSE", "false")

    cfg = HttpConfig.from_env()
    assert cfg.port == 9000
    assert cfg.path == "/rpc"
    assert cfg.json_response is False
    assert cfg.stateless_http is True


def test_http_config_bad_port(monkeypatch):
    from teamwork_mcp.core.config import ConfigError

    monkeypatch.setenv("TW_MCP_HTTP_PORT", "eighty")
    with pytest.raises(ConfigError):
        HttpConfig.from_env()
