"""Tests for the http_call tool."""

import json

import httpx
import pytest

from superpowers.tools import create_http_call_tool


def handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/fail":
        raise httpx.ConnectError("connection refused", request=request)
    return httpx.Response(
        201 if request.method == "POST" else 200,
        headers={"X-Echo-Method": request.method},
        json={
            "path": request.url.path,
            "body": request.content.decode(),
            "auth": request.headers.get("authorization"),
            "content_type": request.headers.get("content-type"),
        },
    )


class TestHttpCallTool:
    @pytest.fixture
    def tool(self):
        return create_http_call_tool(transport=httpx.MockTransport(handler))

    @pytest.mark.asyncio
    async def test_get(self, tool):
        result = json.loads(await tool.run(url="https://api.example.com/items"))

        assert result["status"] == 200
        assert result["statusText"] == "OK"
        assert result["headers"]["x-echo-method"] == "GET"
        assert json.loads(result["body"])["path"] == "/items"

    @pytest.mark.asyncio
    async def test_post_with_headers_and_body(self, tool):
        result = json.loads(await tool.run(
            url="https://api.example.com/items",
            method="POST",
            headers_json='{"Authorization": "Bearer t"}',
            body='{"name": "x"}',
        ))

        body = json.loads(result["body"])
        assert result["status"] == 201
        assert body["body"] == '{"name": "x"}'
        assert body["auth"] == "Bearer t"
        assert body["content_type"] == "application/json"

    @pytest.mark.asyncio
    async def test_transport_error_is_a_string(self, tool):
        result = await tool.run(url="https://api.example.com/fail")

        assert result == "HTTP request failed: connection refused"

    @pytest.mark.asyncio
    async def test_bad_headers_json(self, tool):
        result = await tool.run(url="https://api.example.com/", headers_json="[1]")

        assert result == "HTTP request failed: headers_json must be a JSON object"

    @pytest.mark.asyncio
    async def test_rejects_non_http_urls(self, tool):
        with pytest.raises(Exception):  # Pydantic ValidationError
            await tool.run(url="file:///etc/passwd")


class TestQueryDbTool:
    @pytest.mark.asyncio
    async def test_disabled(self):
        from superpowers.tools import query_db_tool
        from superpowers.tools.query_db import DISABLED_MESSAGE

        assert await query_db_tool.run(query="SELECT 1") == DISABLED_MESSAGE
