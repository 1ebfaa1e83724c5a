"""
JSON-RPC 2.0 envelope models used by the HTTP endpoint.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

JsonRpcId = Optional[Union[str, int]]


class JsonRpcRequest(BaseModel):
    """Incoming JSON-RPC request or notification"""

    model_config = ConfigDict(extra="ignore")

    jsonrpc: Any = Field(None, description="Protocol version marker, must be '2.0'")
    method: Any = Field(None, description="Method name")
    id: Any = Field(None, description="Request id, echoed in the response")
    params: Any = Field(None, description="Method parameters")

    @property
    def response_id(self) -> JsonRpcId:
        return self.id if isinstance(self.id, (str, int)) and not isinstance(self.id, bool) else None


class JsonRpcError(BaseModel):
    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    jsonrpc: str = "2.0"
    id: JsonRpcId = None
    result: Any = None
    error: Optional[JsonRpcError] = None

    def to_dict(self) -> dict[str, Any]:
        """Serializes with exactly one of `result` / `error`"""
        body: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            body["error"] = self.error.model_dump(exclude_none=True)
        else:
            body["result"] = self.result
        return body


class HealthStatus(BaseModel):
    """Response of a GET probe"""

    name: str
    version: str
    status: str = "ok"
    deployment: str = "fastapi"
    ts: int
    available_tools: list[str]
    data_source: str
