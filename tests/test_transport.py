"""Tests for the REST transport app."""

import httpx
import respx
from starlette.testclient import TestClient

from ai302_image_mcp.core.transport import create_http_app

from conftest import BASE_URL

MCP_HEADERS = {
    "Accept": "application/json, text/event-stream",
    "Content-Type": "application/json",
}

LIST_TOOLS_MESSAGE = {"jsonrpc": "2.0", "id": 1, "method": "tools/list", "params": {}}


def make_app(server):
    return create_http_app(
        server.server,
        server.name,
        server.version,
        endpoint="/rest",
        server_card_builder=server.build_server_card,
    )


def test_health(make_server):
    server = make_server()
    with TestClient(make_app(server)) as client:
        resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "version": server.version}


def test_server_card_lists_api_key_parameter(make_server):
    with TestClient(make_app(make_server())) as client:
        card = client.get("/.well-known/mcp/server-card.json").json()

    assert card["name"] == "302ai-image-mcp"
    assert card["configSchema"]["required"] == ["302AI_API_KEY"]


def test_missing_key_returned_as_jsonrpc_error(make_server):
    with TestClient(make_app(make_server())) as client:
        resp = client.post("/rest", json=LIST_TOOLS_MESSAGE, headers=MCP_HEADERS)

    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == 1
    assert body["error"]["code"] == -32602
    assert body["error"]["message"] == "API key is required to call the tool"


def test_bearer_header_authenticates_upstream_call(make_server):
    tools = [{"name": "upscale", "description": "Upscale", "inputSchema": {"type": "object"}}]

    with respx.mock(assert_all_called=True) as upstream:
        route = upstream.get(f"{BASE_URL}/v1/tool/list").mock(
            return_value=httpx.Response(200, json={"tools": tools})
        )
        with TestClient(make_app(make_server())) as client:
            resp = client.post(
                "/rest",
                json=LIST_TOOLS_MESSAGE,
                headers={**MCP_HEADERS, "Authorization": "Bearer sk-header"},
            )

    assert resp.status_code == 200
    assert resp.json()["result"]["tools"][0]["name"] == "upscale"
    assert route.calls.last.request.headers["authorization"] == "Bearer sk-header"
