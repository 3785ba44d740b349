"""Tests for the LBaaS server API."""

import json

import httpx
import pytest

from anxcloud.errors import ConditionNeverMetError
from anxcloud.lbaas import ServerAPI, ServerDefinition, ServerInfo, State
from anxcloud.pagination import loop_until, stream_async


@pytest.mark.asyncio
async def test_get_page_decodes_servers(make_client, page_payload):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        data = [{"identifier": "s1", "name": "web-1"}, {"identifier": "s2", "name": "web-2"}]
        return httpx.Response(200, json=page_payload(1, 2, data))

    page = await ServerAPI(make_client(handler)).get_page(1, 10)

    assert seen[0].url.path == "/api/LBaaS/v1/server.json"
    assert page.content[1] == ServerInfo(identifier="s2", name="web-2")
    assert page.has_next is True


@pytest.mark.asyncio
async def test_loop_until_does_not_look_past_first_page(make_client, page_payload):
    """web-3 is on page 2; the default scan stops after page 1."""
    pages = {
        "1": [{"identifier": "s1", "name": "web-1"}, {"identifier": "s2", "name": "web-2"}],
        "2": [{"identifier": "s3", "name": "web-3"}],
    }
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        num = request.url.params["page"]
        return httpx.Response(200, json=page_payload(int(num), 2, pages[num]))

    api = ServerAPI(make_client(handler))

    with pytest.raises(ConditionNeverMetError):
        await loop_until(api, lambda s: s.name == "web-3")
    assert len(seen) == 1

    found = await loop_until(api, lambda s: s.name == "web-3", all_pages=True)
    assert found.identifier == "s3"


@pytest.mark.asyncio
async def test_stream_stops_on_server_error(make_client, page_payload):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.params["page"] == "1":
            return httpx.Response(
                200, json=page_payload(1, 2, [{"identifier": "s1", "name": "web-1"}])
            )
        return httpx.Response(500)

    stream = stream_async(ServerAPI(make_client(handler)))
    names = [server.name async for server in stream]

    assert names == ["web-1"]
    assert stream.error is not None
    assert stream.error.status_code == 500


@pytest.mark.asyncio
async def test_create_server(make_client):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "identifier": "s9",
                "name": "web-9",
                "ip": "10.0.0.9",
                "port": 8080,
                "backend": {"identifier": "b1", "name": "pool"},
                "state": "4",
            },
        )

    definition = ServerDefinition(
        name="web-9", state=State.NEWLY_CREATED, ip="10.0.0.9", port=8080, backend="b1"
    )
    server = await ServerAPI(make_client(handler)).create(definition)

    assert json.loads(seen[0].content) == {
        "name": "web-9",
        "state": "4",
        "ip": "10.0.0.9",
        "port": 8080,
        "backend": "b1",
    }
    assert server.port == 8080
    assert server.backend.identifier == "b1"
    assert server.state is State.NEWLY_CREATED
