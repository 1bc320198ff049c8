import pytest
from teamwork_mcp.core.config import (
    DEFAULT_API_URL,
    ConfigError,
    ServerConfig,
    parse_methods,
)
from teamwork_mcp.core.toolsets import METHOD_ALL

ENV_VARS = (
    "TW_MCP_API_URL",
    "TW_MCP_BEARER_TOKEN",
    "TW_MCP_TOOLSETS",
    "TW_MCP_READ_ONLY",
    "TW_MCP_ALLOW_DELETE",
    "TW_MCP_LOG_LEVEL",
    "TW_MCP_VERSION",
    "TW_MCP_TIMEOUT_S",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = ServerConfig.from_env(use_dotenv=False)
    assert config.api_url == DEFAULT_API_URL
    assert config.bearer_token is None
    assert config.toolsets == (METHOD_ALL,)
    assert config.read_only is False
    assert config.allow_delete is False
    assert config.log_level == "INFO"
    assert config.user_agent == "Teamwork MCP/dev"


def test_from_env(monkeypatch):
    monkeypatch.setenv("TW_MCP_API_URL", "https://acme.teamwork.com/")
    monkeypatch.setenv("TW_MCP_BEARER_TOKEN", " secret ")
    monkeypatch.setenv("TW_MCP_TOOLSETS", "twprojects-get_task, twdesk-list_tickets")
    monkeypatch.setenv("TW_MCP_READ_ONLY", "yes")
    monkeypatch.setenv("TW_MCP_ALLOW_DELETE", "1")
    monkeypatch.setenv("TW_MCP_LOG_LEVEL", "debug")
    monkeypatch.setenv("TW_MCP_VERSION", "v1.4.0")
    monkeypatch.setenv("TW_MCP_TIMEOUT_S", "2.5")

    config = ServerConfig.from_env(use_dotenv=False)
    assert config.api_url == "https://acme.teamwork.com"
    assert config.bearer_token == "secret"
    assert config.toolsets == ("twprojects-get_task", "twdesk-list_tickets")
    assert config.read_only is True
    assert config.allow_delete is True
    assert config.log_level == "DEBUG"
    assert config.version == "1.4.0"
    assert config.timeout_seconds == 2.5


def test_overrides_win_when_set(monkeypatch):
    monkeypatch.setenv("TW_MCP_READ_ONLY", "true")
    config = ServerConfig.from_env(
        use_dotenv=False, read_only=False, allow_delete=None, toolsets="twprojects-get_task"
    )
    assert config.read_only is False
    assert config.allow_delete is False
    assert config.toolsets == ("twprojects-get_task",)


def test_unknown_methods_reported_together():
    with pytest.raises(ConfigError) as exc:
        parse_methods("twprojects-get_task,nope,also_nope")
    assert len(exc.value.problems) == 2
    assert "'nope'" in str(exc.value)


def test_empty_method_list_means_all():
    assert parse_methods(" , ") == (METHOD_ALL,)
    assert parse_methods([]) == (METHOD_ALL,)


def test_invalid_log_level(monkeypatch):
    monkeypatch.setenv("TW_MCP_LOG_LEVEL", "chatty")
    with pytest.raises(ConfigError):
        ServerConfig.from_env(use_dotenv=False)


def test_invalid_timeout(monkeypatch):
    monkeypatch.setenv("TW_MCP_TIMEOUT_S", "soon")
    with pytest.raises(ConfigError) as exc:
        ServerConfig.from_env(use_dotenv=False)
    assert "TW_MCP_TIMEOUT_S" in str(exc.value)
