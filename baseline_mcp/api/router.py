"""
FastAPI router emulating the MCP protocol over stateless HTTP requests.

    OPTIONS *  -> 204, CORS headers only
    GET *      -> 200, health document
    POST *     -> JSON-RPC dispatch (initialize, ping, tools/list, tools/call, ...)
    other      -> 405
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from loguru import logger

from baseline_mcp.configuration import Config, get_config_provider, setup_config_store
from baseline_mcp.mcp import SERVER_INFO, TOOL_NAMES, BaselineTools

from .model import HealthStatus
from .rpc import JsonRpcDispatcher, now_ms

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Max-Age": "86400",
}

ALL_METHODS: list[str] = ["GET", "POST", "OPTIONS", "PUT", "PATCH", "DELETE", "HEAD"]


def get_config_dependency() -> Config:
    if not get_config_provider().is_configured():
        logger.info("Config Store is not configured, setting up...")
        setup_config_store()
    return get_config_provider().get_config()


def get_baseline_tools(_: Config = Depends(get_config_dependency)) -> BaselineTools:
    return BaselineTools.from_config()


def health_status() -> HealthStatus:
    return HealthStatus(
        name=SERVER_INFO.name,
        version=SERVER_INFO.version,
        ts=now_ms(),
        available_tools=TOOL_NAMES,
        data_source=SERVER_INFO.data_source,
    )


router = APIRouter()


@router.api_route("/{path:path}", methods=ALL_METHODS)
async def mcp_endpoint(request: Request, tools: BaselineTools = Depends(get_baseline_tools)) -> Response:
    if request.method == "OPTIONS":
        return Response(status_code=204, headers=CORS_HEADERS)

    if request.method == "GET":
        return JSONResponse(health_status().model_dump(), headers=CORS_HEADERS)

    if request.method == "POST":
        status_code, body = await JsonRpcDispatcher(tools).dispatch_body(await request.body())
        return JSONResponse(body, status_code=status_code, headers=CORS_HEADERS)

    return PlainTextResponse("Method Not Allowed", status_code=405, headers=CORS_HEADERS)
