"""
Stateless JSON-RPC dispatcher for the MCP methods served over HTTP.

Each call is a single parse-dispatch-respond cycle. `dispatch` never raises:
every failure is returned as a JSON-RPC error body with an HTTP status.
"""

import json
import time
from typing import Any

from loguru import logger

from baseline_mcp.errors import BaselineError, InternalError, InvalidRequestError, MethodNotFoundError, ParseError, ValidationError
from baseline_mcp.mcp import SERVER_INFO, BaselineTools, ServerInfo

from .model import JsonRpcError, JsonRpcId, JsonRpcRequest, JsonRpcResponse

JSONRPC_VERSION: str = "2.0"


def now_ms() -> int:
    return int(time.time() * 1000)


class JsonRpcDispatcher:
    """Maps JSON-RPC methods onto the Baseline tools"""

    def __init__(self, tools: BaselineTools, server_info: ServerInfo = SERVER_INFO) -> None:
        self.tools: BaselineTools = tools
        self.server_info: ServerInfo = server_info
        self.methods = {
            "initialize": self.initialize,
            "notifications/initialized": self.initialized,
            "ping": self.ping,
            "tools/list": self.list_tools,
            "tools/call": self.call_tool,
        }

    async def dispatch_body(self, body: bytes) -> tuple[int, dict[str, Any]]:
        """Decode a raw request body and dispatch it"""
        try:
            payload: Any = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return self._error_response(None, ParseError("Parse error", data=str(e)))
        return await self.dispatch(payload)

    async def dispatch(self, payload: Any) -> tuple[int, dict[str, Any]]:
        request_id: JsonRpcId = None
        try:
            if not isinstance(payload, dict):
                raise InvalidRequestError("Invalid Request")

            request: JsonRpcRequest = JsonRpcRequest.model_validate(payload)
            request_id = request.response_id

            if request.jsonrpc != JSONRPC_VERSION:
                raise InvalidRequestError("Invalid JSON-RPC version")

            handler = self.methods.get(request.method) if isinstance(request.method, str) else None
            if handler is None:
                raise MethodNotFoundError(f"Method not found: {request.method}")

            result: Any = await handler(request.params if isinstance(request.params, dict) else {})
            return 200, JsonRpcResponse(id=request_id, result=result).to_dict()

        except ValidationError as e:
            logger.warning(f"Rejected request: {e.message}")
            return self._error_response(request_id, e)
        except BaselineError as e:
            logger.error(f"Request failed: {e.message}")
            return self._error_response(request_id, InternalError(e))
        except Exception as e:  # pylint: disable=broad-except
            logger.exception(f"Request processing error: {e}")
            return self._error_response(request_id, InternalError(e))

    async def initialize(self, params: dict[str, Any]) -> dict[str, Any]:  # pylint: disable=unused-argument
        return {
            "protocolVersion": self.server_info.protocol_version,
            "capabilities": {"tools": {}},
            "serverInfo": {
                "name": self.server_info.name,
                "version": self.server_info.version,
                "description": self.server_info.description,
            },
        }

    async def initialized(self, params: dict[str, Any]) -> dict[str, Any]:  # pylint: disable=unused-argument
        return {}

    async def ping(self, params: dict[str, Any]) -> dict[str, Any]:  # pylint: disable=unused-argument
        return {"status": "pong", "ts": now_ms()}

    async def list_tools(self, params: dict[str, Any]) -> dict[str, Any]:  # pylint: disable=unused-argument
        return {"tools": self.tools.list_tools()}

    async def call_tool(self, params: dict[str, Any]) -> dict[str, Any]:
        name: Any = params.get("name")
        if not name or not isinstance(name, str):
            raise ValidationError("Tool name is required")

        arguments: Any = params.get("arguments")
        if arguments is not None and not isinstance(arguments, dict):
            raise ValidationError("Tool arguments must be an object")

        response = await self.tools.call(name, arguments, strict=False)
        return response.model_dump()

    @staticmethod
    def _error_response(request_id: JsonRpcId, error: BaselineError) -> tuple[int, dict[str, Any]]:
        body = JsonRpcResponse(id=request_id, error=JsonRpcError(**error.to_error()))
        return error.status_code, body.to_dict()
