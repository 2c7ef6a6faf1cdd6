"""Outbound HTTP request tool."""

import json
import logging
from typing import Literal

import httpx
from pydantic import BaseModel, Field

from superpowers.core.tool import Tool

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class HttpCallInput(BaseModel):
    """Input for an HTTP request.

    Parameters:
        url: Absolute http(s) URL.
        method: HTTP verb, GET when omitted.
        headers_json: JSON object of extra headers.
        body: Raw request body for POST, PUT and PATCH.
    """

    url: str = Field(pattern=r"^https?://", description="The URL to request")
    method: Literal["GET", "POST", "PUT", "PATCH", "DELETE"] = Field(
        default="GET", description="HTTP method (default: GET)"
    )
    headers_json: str | None = Field(
        default=None, description="Optional JSON object of HTTP headers"
    )
    body: str | None = Field(
        default=None, description="Optional request body (for POST, PUT, PATCH)"
    )


def _parse_headers(headers_json: str | None) -> dict[str, str]:
    if not headers_json:
        return {}
    headers = json.loads(headers_json)
    if not isinstance(headers, dict):
        raise ValueError("headers_json must be a JSON object")
    return {str(k): str(v) for k, v in headers.items()}


def create_http_call_tool(
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Tool:
    """Create the http_call tool.

    Args:
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport (tests use httpx.MockTransport).

    Returns:
        Tool returning a JSON object with status, statusText, headers and body,
        or an ``HTTP request failed: ...`` message.
    """

    async def http_call(
        url: str,
        method: str = "GET",
        headers_json: str | None = None,
        body: str | None = None,
    ) -> str:
        logger.info("Calling tool http_call | method=%s url=%s", method, url)
        try:
            headers = {"Content-Type": "application/json", **_parse_headers(headers_json)}
            async with httpx.AsyncClient(timeout=httpx.Timeout(timeout), transport=transport) as client:
                response = await client.request(method, url, headers=headers, content=body or None)
        except (httpx.HTTPError, ValueError) as e:
            logger.info("http_call to %s failed: %s", url, e)
            return f"HTTP request failed: {str(e) or type(e).__name__}"

        return json.dumps({
            "status": response.status_code,
            "statusText": response.reason_phrase,
            "headers": dict(response.headers),
            "body": response.text,
        })

    return Tool(
        name="http_call",
        description=(
            "Make an HTTP request (GET, POST, PUT, PATCH, DELETE) to a URL. "
            "Returns status, headers, and body. Supports curl-like requests "
            "for external APIs."
        ),
        function=http_call,
        input_schema=HttpCallInput,
    )
