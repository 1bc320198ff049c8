from starlette.testclient import TestClient
from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.config import ServerConfig
from teamwork_mcp.server import build_server, default_groups, new_mcp_server
from teamwork_mcp.transports.http.app import build_http_app
from teamwork_mcp.transports.http.config import HttpConfig
from teamwork_mcp.transports.http.ops import (
    api_url_usable,
    is_ops_path,
    readiness,
    tool_counts,
)

BASE = "https://acme.teamwork.com"


def _build_app(tool_server=None, config=None):
    config = config or ServerConfig(api_url=BASE, version="v1.2.3")
    return build_http_app(HttpConfig(), config, tool_server or build_server(config))


def test_healthz_reports_server_and_version_without_token():
    client = TestClient(_build_app())

    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "server": "Teamwork.com", "version": "1.2.3"}
    assert resp.headers["Cache-Control"] == "no-store"


def test_readyz_ok_reports_tools_per_surface():
    client = TestClient(_build_app())

    resp = client.get("/readyz")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["failed"] == []
    assert body["checks"] == {"api_url_valid": True, "tools_registered": True}
    assert body["tools"]["projects"] > 0
    assert body["tools"]["desk"] > 0
    assert body["mode"] == {"read_only": False, "allow_delete": False}


def test_readyz_fails_without_tools():
    config = ServerConfig(api_url=BASE)
    groups = default_groups(config, TeamworkClient(base_url=BASE))
    client = TestClient(_build_app(new_mcp_server(config, *groups), config))

    resp = client.get("/readyz")
    assert resp.status_code == 503
    body = resp.json()
    assert body["failed"] == ["tools_registered"]
    assert body["tools"] == {"projects": 0, "desk": 0}


def test_readyz_fails_on_unusable_api_url():
    good = ServerConfig(api_url=BASE)
    bad = ServerConfig(api_url="acme.teamwork.com", read_only=True)
    client = TestClient(_build_app(build_server(good), bad))

    resp = client.get("/readyz")
    assert resp.status_code == 503
    assert resp.json()["failed"] == ["api_url_valid"]
    assert resp.json()["mode"]["read_only"] is True


def test_mcp_path_still_requires_auth():
    client = TestClient(_build_app())

    resp = client.post("/mcp", json={})
    assert resp.status_code == 401


def test_ops_helpers():
    assert is_ops_path("/healthz")
    assert is_ops_path("/readyz")
    assert not is_ops_path("/healthz/")
    assert not is_ops_path(None)

    assert api_url_usable("https://acme.teamwork.com")
    assert api_url_usable("http://localhost:8080")
    assert not api_url_usable("ftp://acme.teamwork.com")
    assert not api_url_usable("")


def test_read_only_server_counts_only_read_tools():
    config = ServerConfig(api_url=BASE, read_only=True)
    tool_server = build_server(config)

    report = readiness(config, tool_server)
    counts = tool_counts(tool_server)
    assert report.status_code == 200
    assert sum(counts.values()) == len(tool_server.tools)
    assert all(t.annotations.readOnlyHint for t in tool_server.tools)
