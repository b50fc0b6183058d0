"""Shared fixtures: a fake Yuque API behind httpx.MockTransport."""

import json

import httpx
import pytest
from fastmcp import Client

from yuque_mcp.client import YuqueClient
from yuque_mcp.config import YuqueSettings, resolve_config
from yuque_mcp.server import create_mcp_server


class FakeYuque:
    """Answers Yuque repo endpoints from canned responses and records every request.

    Responses registered for the same (method, endpoint) are served in order;
    the last one keeps being served once the others are used up.
    """

    def __init__(self):
        self.routes = {}
        self.requests = []
        self.transport = httpx.MockTransport(self.handle)

    def add(self, method, endpoint, data=None, status=200, body=None, error=None):
        if error is not None:
            entry = error
        elif body is not None:
            entry = (status, body)
        else:
            entry = (status, {"data": data})
        self.routes.setdefault((method, endpoint), []).append(entry)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        # /api/v2/repos/<group>/<book>/<endpoint>
        endpoint = "/".join(request.url.path.split("/")[6:])
        queue = self.routes.get((request.method, endpoint))
        if not queue:
            return httpx.Response(404, json={"message": f"no route for {request.method} {endpoint}"})
        entry = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(entry, Exception):
            raise entry
        status, body = entry
        if isinstance(body, (bytes, str)):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)

    def calls(self, method=None):
        return [r for r in self.requests if method is None or r.method == method]

    @staticmethod
    def body(request: httpx.Request):
        return json.loads(request.content) if request.content else None


@pytest.fixture
def fake():
    return FakeYuque()


@pytest.fixture
def settings():
    return YuqueSettings(
        space_subdomain="acme",
        api_token="secret-token",
        default_group_login="eng",
        default_book_slug="platform",
    )


@pytest.fixture
def client(fake, settings):
    return YuqueClient(resolve_config(settings), fake.transport)


@pytest.fixture
def mcp(fake, settings):
    return create_mcp_server(settings, fake.transport)


@pytest.fixture
def call_tool(mcp):
    """Call a tool through the MCP client and return its text result."""
    async def _call(name, arguments=None):
        async with Client(mcp) as mcp_client:
            result = await mcp_client.call_tool(name, arguments or {})
        return result.content[0].text
    return _call
