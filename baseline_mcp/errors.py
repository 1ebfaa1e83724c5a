"""
Error types shared by the operation handler and both protocol adapters.

Every error carries a JSON-RPC error code and the HTTP status used by the
stateless adapter.
"""

from typing import Any


class BaselineError(Exception):
    """Base class for all errors reported to protocol clients"""

    code: int = -32603
    status_code: int = 500

    def __init__(self, message: str, data: Any = None) -> None:
        super().__init__(message)
        self.message: str = message
        self.data: Any = data

    def to_error(self) -> dict[str, Any]:
        error: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error


class ValidationError(BaselineError):
    """Malformed or out-of-contract input (invalid params)"""

    code = -32602
    status_code = 400


class InvalidRequestError(ValidationError):
    """The JSON-RPC envelope itself is unusable"""

    code = -32600


class MethodNotFoundError(ValidationError):
    """Unknown JSON-RPC method or tool name"""

    code = -32601


class ParseError(ValidationError):
    """Request body is not valid JSON"""

    code = -32700


class UpstreamError(BaselineError):
    """The compatibility-data API call failed or returned unusable content"""


class FetchError(UpstreamError):
    """Transport failure, non-2xx status or non-JSON body from an HTTP GET"""

    def __init__(self, message: str, *, url: str | None = None, status: int | None = None) -> None:
        super().__init__(message, data={"url": url, "status": status} if url else None)
        self.url: str | None = url
        self.status: int | None = status


class InternalError(BaselineError):
    """Any other failure during dispatch or formatting"""

    def __init__(self, cause: BaseException | str) -> None:
        super().__init__("Internal error", data=str(cause))
