"""
Stateless HTTP adapter: JSON-RPC envelope models, dispatcher and FastAPI router.

Usage:
    from baseline_mcp.api.router import router
    app.include_router(router)
"""

from .model import HealthStatus, JsonRpcError, JsonRpcRequest, JsonRpcResponse
from .rpc import JsonRpcDispatcher

__all__ = [
    "HealthStatus",
    "JsonRpcDispatcher",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
]
