"""
MCP Tools - the two Baseline operations

One handler implementation shared by the stdio server and the JSON-RPC
endpoint; each transport only wraps the returned ToolResponse.
"""

from typing import Any, Callable

import pydantic
from loguru import logger

from baseline_mcp.configuration import DEFAULT_API_BASE_URL, ConfigValue
from baseline_mcp.errors import MethodNotFoundError, UpstreamError, ValidationError
from baseline_mcp.webstatus import DEFAULT_LIMIT, MAX_LIMIT, MIN_LIMIT, WebStatusProxy

from .models import SERVER_INFO, BaselineStatusParams, Feature, ToolResponse
from .render import format_baseline_status, get_baseline_summary_text

STATUS_TOOL: str = "get_web_feature_baseline_status"
SUMMARY_TOOL: str = "get_baseline_summary"

INCLUDE_FLAGS: tuple[str, ...] = (
    "include_browser_details",
    "include_usage_stats",
    "include_test_results",
    "include_specs",
)

TOOL_DEFINITIONS: list[dict[str, Any]] = [
    {
        "name": STATUS_TOOL,
        "description": "Get comprehensive baseline information for web platform features",
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "array",
                    "items": {"type": "string"},
                    "minItems": 1,
                    "description": "Search terms for web features",
                },
                "include_browser_details": {"type": "boolean", "default": True, "description": "Include browser implementation details"},
                "include_usage_stats": {"type": "boolean", "default": True, "description": "Include usage statistics"},
                "include_test_results": {"type": "boolean", "default": True, "description": "Include test results"},
                "include_specs": {"type": "boolean", "default": True, "description": "Include specification links"},
                "limit": {
                    "type": "number",
                    "minimum": MIN_LIMIT,
                    "maximum": MAX_LIMIT,
                    "default": DEFAULT_LIMIT,
                    "description": "Maximum number of results",
                },
            },
            "required": ["query"],
        },
    },
    {
        "name": SUMMARY_TOOL,
        "description": "Get overview of the Baseline system and status categories",
        "inputSchema": {"type": "object", "properties": {}},
    },
]

TOOL_NAMES: list[str] = [tool["name"] for tool in TOOL_DEFINITIONS]


def _describe(e: pydantic.ValidationError) -> list[str]:
    return [f"{'.'.join(str(p) for p in err['loc']) or 'arguments'}: {err['msg']}" for err in e.errors()]


def parse_status_arguments(arguments: dict[str, Any] | None, strict: bool = True) -> BaselineStatusParams:
    """
    Turns raw tool arguments into BaselineStatusParams.

    strict: full schema validation, an out-of-range limit is rejected.
    lenient: only an array-valued, non-empty `query` is required; defaults are
             applied and the limit is left to be clamped by the URL builder.
    """
    arguments = arguments or {}

    if strict:
        try:
            return BaselineStatusParams.model_validate(arguments)
        except pydantic.ValidationError as e:
            raise ValidationError(f"Invalid arguments for {STATUS_TOOL}", data=_describe(e)) from e

    query: Any = arguments.get("query")
    if not isinstance(query, list) or not query:
        raise ValidationError("Query parameter is required and must be an array")

    limit: Any = arguments.get("limit", DEFAULT_LIMIT)
    if isinstance(limit, bool) or not isinstance(limit, (int, float)):
        limit = DEFAULT_LIMIT

    return BaselineStatusParams.model_construct(
        query=[str(term) for term in query],
        limit=limit,
        **{flag: bool(arguments.get(flag, True)) for flag in INCLUDE_FLAGS},
    )


class BaselineTools:
    """Implements the Baseline tool operations over the webstatus.dev API"""

    def __init__(
        self,
        api_base_url: str = DEFAULT_API_BASE_URL,
        *,
        user_agent: str = f"baseline-mcp/{SERVER_INFO.version}",
        proxy_factory: Callable[..., WebStatusProxy] = WebStatusProxy,
    ) -> None:
        self.api_base_url: str = api_base_url.rstrip("/")
        self.user_agent: str = user_agent
        self.proxy_factory: Callable[..., WebStatusProxy] = proxy_factory

    @classmethod
    def from_config(cls, proxy_factory: Callable[..., WebStatusProxy] = WebStatusProxy) -> "BaselineTools":
        """Builds the handler from the active configuration provider"""
        return cls(
            api_base_url=ConfigValue("options:api_base_url", default=DEFAULT_API_BASE_URL).resolve(),
            user_agent=ConfigValue("options:user_agent", default=f"baseline-mcp/{SERVER_INFO.version}").resolve(),
            proxy_factory=proxy_factory,
        )

    @staticmethod
    def list_tools() -> list[dict[str, Any]]:
        return TOOL_DEFINITIONS

    async def call(self, name: str, arguments: dict[str, Any] | None = None, *, strict: bool = True) -> ToolResponse:
        """Dispatches a tool call by name"""
        logger.info(f"{name} called with: {arguments or {}}")

        if name == STATUS_TOOL:
            return await self.get_baseline_status(parse_status_arguments(arguments, strict=strict))

        if name == SUMMARY_TOOL:
            return self.get_baseline_summary()

        raise MethodNotFoundError(f"Unknown tool: {name}")

    async def get_baseline_status(self, params: BaselineStatusParams) -> ToolResponse:
        """
        Search features matching `params.query` and render their Baseline status

        Upstream failures propagate as UpstreamError (FetchError).
        """
        async with self.proxy_factory(base_url=self.api_base_url, user_agent=self.user_agent) as proxy:
            records: Any = await proxy.search_features(params.query, params.limit)

        features: list[Feature] = self._to_features(records)
        logger.debug(f"{STATUS_TOOL}: {len(features)} feature(s) for '{' '.join(params.query)}'")

        text: str = format_baseline_status(
            params.query,
            features,
            include_browser_details=params.include_browser_details,
            include_usage_stats=params.include_usage_stats,
            include_test_results=params.include_test_results,
            include_specs=params.include_specs,
        )
        return ToolResponse.from_text(text)

    def get_baseline_summary(self) -> ToolResponse:
        """Fixed overview of the Baseline status categories"""
        return ToolResponse.from_text(get_baseline_summary_text())

    @staticmethod
    def _to_features(records: Any) -> list[Feature]:
        if not isinstance(records, list):
            raise UpstreamError(f"Expected a list of features, found '{type(records).__name__}'")
        try:
            return [Feature.model_validate(record) for record in records]
        except pydantic.ValidationError as e:
            raise UpstreamError("Malformed feature record in upstream response", data=_describe(e)) from e
