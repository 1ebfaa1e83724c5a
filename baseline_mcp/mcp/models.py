"""
Data models for Baseline feature records and tool envelopes

Feature records mirror the webstatus.dev `/v1/features` payload. Every field
is optional and unknown keys are ignored so that partial records still render.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from baseline_mcp.webstatus import DEFAULT_LIMIT, MAX_LIMIT, MIN_LIMIT


class Record(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class BaselineStatus(Record):
    """Baseline classification of a feature"""

    status: Optional[str] = Field(None, description="One of 'widely', 'newly' or 'limited'")
    low_date: Optional[str] = Field(None, description="Date the feature became newly available")
    high_date: Optional[str] = Field(None, description="Date the feature became widely available")


class BrowserImplementation(Record):
    """Implementation state of a feature in one browser"""

    date: Optional[str] = None
    status: Optional[str] = Field(None, description="'available' or 'unavailable'")
    version: Optional[str] = None


class UsageStats(Record):
    daily: Optional[float] = Field(None, description="Share of daily page views [0,1]")


class WptScore(Record):
    score: Optional[float] = Field(None, description="WPT pass rate [0,1]")


class WptResults(Record):
    stable: Optional[dict[str, Optional[WptScore]]] = None
    experimental: Optional[dict[str, Optional[WptScore]]] = None


class SpecLink(Record):
    link: Optional[str] = None


class SpecInfo(Record):
    links: Optional[list[Optional[SpecLink]]] = None


class Feature(Record):
    """A single compatibility-data entry"""

    name: Optional[str] = None
    feature_id: Optional[str] = None
    baseline: Optional[BaselineStatus] = None
    browser_implementations: Optional[dict[str, Optional[BrowserImplementation]]] = None
    usage: Optional[dict[str, Optional[UsageStats]]] = None
    wpt: Optional[WptResults] = None
    spec: Optional[SpecInfo] = None

    @property
    def display_name(self) -> str:
        return self.name or self.feature_id or "Unnamed feature"


class BaselineStatusParams(BaseModel):
    """Input of the get_web_feature_baseline_status tool"""

    model_config = ConfigDict(extra="ignore")

    query: list[str] = Field(min_length=1, description="Search terms for web features")
    include_browser_details: bool = Field(True, description="Include browser implementation details")
    include_usage_stats: bool = Field(True, description="Include usage statistics")
    include_test_results: bool = Field(True, description="Include test results")
    include_specs: bool = Field(True, description="Include specification links")
    limit: float = Field(DEFAULT_LIMIT, ge=MIN_LIMIT, le=MAX_LIMIT, description="Maximum number of results")


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    """Tool-response envelope: { content: [{ type: "text", text }] }"""

    content: list[TextContent]

    @classmethod
    def from_text(cls, text: str) -> "ToolResponse":
        return cls(content=[TextContent(text=text)])


class ServerInfo(BaseModel):
    """Server identity advertised by both adapters"""

    name: str = Field("Baseline MCP Server", description="Server identifier")
    version: str = Field("1.0.0", description="Semver version")
    description: str = Field("Web Platform Baseline status via webstatus.dev")
    protocol_version: str = Field("2025-06-18", description="MCP protocol revision")
    data_source: str = Field("webstatus.dev API")


SERVER_INFO = ServerInfo()
