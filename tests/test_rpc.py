"""
Unit tests for the stateless JSON-RPC dispatcher.
"""

from typing import Any
from unittest.mock import patch

import pytest

from baseline_mcp.api import JsonRpcDispatcher, JsonRpcRequest, JsonRpcResponse
from baseline_mcp.errors import FetchError
from baseline_mcp.mcp import STATUS_TOOL, SUMMARY_TOOL
from tests.fakes import GRID_FEATURE, make_tools


def request(method: Any, params: Any = None, id: Any = 1) -> dict[str, Any]:  # pylint: disable=redefined-builtin
    payload: dict[str, Any] = {"jsonrpc": "2.0", "id": id, "method": method}
    if params is not None:
        payload["params"] = params
    return payload


def dispatcher(records: Any = None, error: Exception | None = None) -> JsonRpcDispatcher:
    tools, _ = make_tools(records=records, error=error)
    return JsonRpcDispatcher(tools)


class TestJsonRpcModels:

    @pytest.mark.parametrize("value, expected", [(7, 7), ("abc", "abc"), (None, None), (True, None), ([1], None), (1.5, None)])
    def test_response_id(self, value, expected):
        assert JsonRpcRequest(id=value).response_id == expected

    def test_response_carries_result_or_error(self):
        assert JsonRpcResponse(id=1, result={}).to_dict() == {"jsonrpc": "2.0", "id": 1, "result": {}}
        assert JsonRpcResponse(id=None, result=None).to_dict() == {"jsonrpc": "2.0", "id": None, "result": None}


class TestDispatch:

    @pytest.mark.asyncio
    async def test_initialize(self):
        status, body = await dispatcher().dispatch(request("initialize", {"protocolVersion": "2025-06-18"}))

        assert status == 200
        assert body == {
            "jsonrpc": "2.0",
            "id": 1,
            "result": {
                "protocolVersion": "2025-06-18",
                "capabilities": {"tools": {}},
                "serverInfo": {
                    "name": "Baseline MCP Server",
                    "version": "1.0.0",
                    "description": "Web Platform Baseline status via webstatus.dev",
                },
            },
        }

    @pytest.mark.asyncio
    async def test_initialized_notification(self):
        status, body = await dispatcher().dispatch({"jsonrpc": "2.0", "method": "notifications/initialized"})

        assert status == 200
        assert body == {"jsonrpc": "2.0", "id": None, "result": {}}

    @pytest.mark.asyncio
    async def test_ping(self):
        with patch("baseline_mcp.api.rpc.time.time", return_value=1700000000.5):
            status, body = await dispatcher().dispatch(request("ping", id="p-1"))

        assert status == 200
        assert body == {"jsonrpc": "2.0", "id": "p-1", "result": {"status": "pong", "ts": 1700000000500}}

    @pytest.mark.asyncio
    async def test_tools_list(self):
        status, body = await dispatcher().dispatch(request("tools/list"))

        assert status == 200
        assert [tool["name"] for tool in body["result"]["tools"]] == [STATUS_TOOL, SUMMARY_TOOL]
        assert "inputSchema" in body["result"]["tools"][0]

    @pytest.mark.asyncio
    async def test_tools_call_status(self):
        status, body = await dispatcher(records=[GRID_FEATURE]).dispatch(
            request("tools/call", {"name": STATUS_TOOL, "arguments": {"query": ["grid"], "limit": 99}}, id=42)
        )

        assert status == 200
        assert body["id"] == 42
        content = body["result"]["content"]
        assert len(content) == 1
        assert content[0]["type"] == "text"
        assert content[0]["text"].startswith("# 🌐 Baseline Status: **grid**\n\nFound **1** feature:")

    @pytest.mark.asyncio
    async def test_tools_call_summary_without_arguments(self):
        status, body = await dispatcher().dispatch(request("tools/call", {"name": SUMMARY_TOOL}))

        assert status == 200
        assert body["result"]["content"][0]["text"].startswith("# 🌐 Web Platform Baseline")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{"jsonrpc": "1.0", "id": 3, "method": "ping"}, {"id": 3, "method": "ping"}])
    async def test_wrong_version(self, payload):
        status, body = await dispatcher().dispatch(payload)

        assert status == 400
        assert body == {"jsonrpc": "2.0", "id": 3, "error": {"code": -32600, "message": "Invalid JSON-RPC version"}}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [[request("ping")], "ping", 42, None])
    async def test_non_object_payload(self, payload):
        status, body = await dispatcher().dispatch(payload)

        assert status == 400
        assert body["id"] is None
        assert body["error"]["code"] == -32600

    @pytest.mark.asyncio
    async def test_unknown_method(self):
        status, body = await dispatcher().dispatch(request("resources/list"))

        assert status == 400
        assert body["error"] == {"code": -32601, "message": "Method not found: resources/list"}

    @pytest.mark.asyncio
    async def test_unknown_tool(self):
        status, body = await dispatcher().dispatch(request("tools/call", {"name": "get_weather", "arguments": {}}))

        assert status == 400
        assert body["error"] == {"code": -32601, "message": "Unknown tool: get_weather"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [{}, {"name": ""}, {"name": 5}, None])
    async def test_missing_tool_name(self, params):
        status, body = await dispatcher().dispatch(request("tools/call", params))

        assert status == 400
        assert body["error"] == {"code": -32602, "message": "Tool name is required"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("arguments", [{}, {"query": "grid"}, {"query": []}])
    async def test_query_must_be_non_empty_array(self, arguments):
        status, body = await dispatcher().dispatch(request("tools/call", {"name": STATUS_TOOL, "arguments": arguments}))

        assert status == 400
        assert body["error"] == {"code": -32602, "message": "Query parameter is required and must be an array"}

    @pytest.mark.asyncio
    async def test_upstream_failure_is_internal_error(self):
        status, body = await dispatcher(error=FetchError("HTTP 503 from https://api.test.webstatus.dev/v1/features")).dispatch(
            request("tools/call", {"name": STATUS_TOOL, "arguments": {"query": ["grid"]}}, id=9)
        )

        assert status == 500
        assert body == {
            "jsonrpc": "2.0",
            "id": 9,
            "error": {
                "code": -32603,
                "message": "Internal error",
                "data": "HTTP 503 from https://api.test.webstatus.dev/v1/features",
            },
        }

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_internal_error(self):
        rpc = dispatcher()
        with patch.object(rpc.tools, "call", side_effect=RuntimeError("boom")):
            status, body = await rpc.dispatch(request("tools/call", {"name": SUMMARY_TOOL}))

        assert status == 500
        assert body["error"] == {"code": -32603, "message": "Internal error", "data": "boom"}


class TestDispatchBody:

    @pytest.mark.asyncio
    async def test_valid_json(self):
        status, body = await dispatcher().dispatch_body(b'{"jsonrpc": "2.0", "id": 1, "method": "tools/list"}')

        assert status == 200
        assert "tools" in body["result"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", [b"{not json", b"", b"\xff\xfe\x00"])
    async def test_parse_error(self, raw):
        status, body = await dispatcher().dispatch_body(raw)

        assert status == 400
        assert body["id"] is None
        assert body["error"]["code"] == -32700
        assert body["error"]["message"] == "Parse error"
