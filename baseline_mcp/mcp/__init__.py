"""
Baseline MCP - Model Context Protocol facade over the web platform Baseline data

Provides two tools:
- get_web_feature_baseline_status: search features and render their Baseline status
- get_baseline_summary: fixed overview of the Baseline status categories

The tools are served over stdio (server.py) and over stateless HTTP JSON-RPC
(baseline_mcp.api).
"""

from .models import (
    SERVER_INFO,
    BaselineStatus,
    BaselineStatusParams,
    BrowserImplementation,
    Feature,
    ServerInfo,
    SpecInfo,
    SpecLink,
    TextContent,
    ToolResponse,
    UsageStats,
    WptResults,
    WptScore,
)
from .render import format_baseline_status, get_baseline_summary_text
from .tools import STATUS_TOOL, SUMMARY_TOOL, TOOL_DEFINITIONS, TOOL_NAMES, BaselineTools, parse_status_arguments

__all__ = [
    "SERVER_INFO",
    "BaselineStatus",
    "BaselineStatusParams",
    "BaselineTools",
    "BrowserImplementation",
    "Feature",
    "ServerInfo",
    "SpecInfo",
    "SpecLink",
    "TextContent",
    "ToolResponse",
    "UsageStats",
    "WptResults",
    "WptScore",
    "STATUS_TOOL",
    "SUMMARY_TOOL",
    "TOOL_DEFINITIONS",
    "TOOL_NAMES",
    "format_baseline_status",
    "get_baseline_summary_text",
    "parse_status_arguments",
]
