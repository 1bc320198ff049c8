import pytest
from teamwork_mcp.core.client import TeamworkClientError, TeamworkHTTPError
from teamwork_mcp.core.errors import (
    ToolExecutionError,
    ToolServerError,
    handle_api_error,
    tool_handler,
)
from teamwork_mcp.core.params import bind, required_numeric_param
from teamwork_mcp.core.results import result_text, text_result


def _http_error(status: int) -> TeamworkHTTPError:
    return TeamworkHTTPError(
        status_code=status,
        method="GET",
        url="https://acme.teamwork.com/projects/api/v3/tasks/1.json",
        message="nope",
    )


def test_5xx_raises_server_error():
    with pytest.raises(ToolServerError) as exc:
        handle_api_error(_http_error(502), "failed to get task")
    assert "server error" in str(exc.value)


def test_4xx_is_bad_request_result():
    result = handle_api_error(_http_error(404), "failed to get task")
    assert result.isError
    assert result_text(result).startswith("bad request")


def test_other_status_is_unexpected():
    result = handle_api_error(_http_error(302), "failed to get task")
    assert result.isError
    assert result_text(result).startswith("unexpected HTTP status")


def test_transport_failure_raises_with_label():
    with pytest.raises(ToolExecutionError) as exc:
        handle_api_error(TeamworkClientError("connection reset"), "failed to get task")
    assert str(exc.value) == "failed to get task: connection reset"


@pytest.mark.asyncio
async def test_tool_handler_turns_binding_errors_into_results():
    @tool_handler("failed to get thing")
    async def handle(arguments):
        holder = type("Holder", (), {"id": None})()
        bind(arguments, required_numeric_param(holder, "id"))
        return text_result(f"got {holder.id}")

    ok = await handle({"id": 3})
    assert not ok.isError
    assert result_text(ok) == "got 3"

    bad = await handle({"id": "three"})
    assert bad.isError
    assert result_text(bad).startswith("invalid parameters: ")
    assert "id" in result_text(bad)


@pytest.mark.asyncio
async def test_tool_handler_classifies_client_errors():
    @tool_handler("failed to get thing")
    async def handle(arguments):
        raise _http_error(arguments["status"])

    result = await handle({"status": 400})
    assert result.isError
    with pytest.raises(ToolServerError):
        await handle({"status": 503})
