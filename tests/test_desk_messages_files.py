import base64
import json

import pytest
import respx
from httpx import Response
from teamwork_mcp.core.client import RetryConfig, TeamworkClient
from teamwork_mcp.core.errors import ToolExecutionError
from teamwork_mcp.core.results import result_text
from teamwork_mcp.twdesk import files, messages

BASE = "https://acme.teamwork.com"
DESK = f"{BASE}/desk/api/v2"
UPLOAD = "https://uploads.example.com/desk/abc123?signature=xyz"


@pytest.fixture
def client():
    return TeamworkClient(
        base_url=BASE, bearer_token="tok", retry=RetryConfig(max_retries=0)
    )


@pytest.mark.asyncio
@respx.mock
async def test_create_message(client):
    route = respx.post(f"{DESK}/tickets/70/messages.json").mock(
        return_value=Response(201, json={"message": {"id": 501}})
    )

    async with client:
        result = await messages.message_create(client).handler(
            {"ticketID": 70, "body": "We are on it."}
        )

    assert result_text(result) == "Message created successfully with ID 501"
    assert json.loads(route.calls[0].request.content) == {
        "message": {"body": "We are on it."}
    }


@pytest.mark.asyncio
async def test_create_message_requires_ticket_and_body(client):
    async with client:
        result = await messages.message_create(client).handler({})

    text = result_text(result)
    assert result.isError
    assert "ticketID" in text
    assert "body" in text


@pytest.mark.asyncio
@respx.mock
async def test_create_file_uploads_to_presigned_url(client):
    create = respx.post(f"{DESK}/files.json").mock(
        return_value=Response(
            201, json={"file": {"id": 33, "uploadURL": UPLOAD}}
        )
    )
    upload = respx.put(UPLOAD).mock(return_value=Response(200))
    data = base64.b64encode(b"hello desk").decode()

    async with client:
        result = await files.file_create(client).handler(
            {"name": "hello.txt", "mimeType": "text/plain", "data": data}
        )

    assert result_text(result) == "File created successfully with ID 33"
    assert json.loads(create.calls[0].request.content) == {
        "file": {
            "filename": "hello.txt",
            "mimeType": "text/plain",
            "disposition": "attachment",
            "type": "attachment",
        }
    }
    sent = upload.calls[0].request
    assert sent.content == b"hello desk"
    assert sent.headers["Content-Type"] == "text/plain"
    assert "Authorization" not in sent.headers


@pytest.mark.asyncio
async def test_create_file_rejects_invalid_base64(client):
    async with client:
        result = await files.file_create(client).handler(
            {"name": "x.bin", "mimeType": "application/octet-stream", "data": "@@@"}
        )

    assert result.isError
    assert "invalid value for data" in result_text(result)


@pytest.mark.asyncio
async def test_create_file_rejects_unknown_disposition(client):
    async with client:
        result = await files.file_create(client).handler(
            {
                "name": "x.bin",
                "mimeType": "application/octet-stream",
                "data": "aGk=",
                "disposition": "embedded",
            }
        )

    assert result.isError
    assert "disposition" in result_text(result)


@pytest.mark.asyncio
@respx.mock
async def test_create_file_without_upload_url(client):
    respx.post(f"{DESK}/files.json").mock(
        return_value=Response(201, json={"file": {"id": 33}})
    )

    async with client:
        with pytest.raises(ToolExecutionError, match="uploadURL"):
            await files.file_create(client).handler(
                {"name": "a.txt", "mimeType": "text/plain", "data": "aGk="}
            )


@pytest.mark.asyncio
@respx.mock
async def test_create_file_upload_rejected(client):
    respx.post(f"{DESK}/files.json").mock(
        return_value=Response(201, json={"file": {"id": 33, "uploadURL": UPLOAD}})
    )
    respx.put(UPLOAD).mock(return_value=Response(403, text="expired"))

    async with client:
        result = await files.file_create(client).handler(
            {"name": "a.txt", "mimeType": "text/plain", "data": "aGk="}
        )

    assert result.isError
    assert "403" in result_text(result)
