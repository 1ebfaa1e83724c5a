"""
Markdown rendering of Baseline feature records.

Pure functions: identical input renders to identical text.
"""

from datetime import date, datetime
from typing import Optional

from .models import BrowserImplementation, Feature, SpecLink, UsageStats, WptScore

STATUS_GLYPHS: dict[str, str] = {
    "widely": "✅",
    "newly": "🆕",
    "limited": "⚠️",
}
UNKNOWN_GLYPH: str = "❓"

RECOMMENDATIONS: dict[str, str] = {
    "widely": "🟢 Safe for production use",
    "newly": "🟡 Use with progressive enhancement",
    "limited": "🔴 Consider polyfills or alternatives",
}
UNKNOWN_RECOMMENDATION: str = "❓ Research browser support carefully"

# (lower bound, glyph), checked in order
SCORE_GLYPHS: list[tuple[float, str]] = [
    (0.9, "🟢"),
    (0.7, "🟡"),
    (0.5, "🟠"),
]
LOW_SCORE_GLYPH: str = "🔴"

BROWSER_NAMES: dict[str, str] = {
    "chrome": "Chrome",
    "chrome_android": "Chrome Android",
    "edge": "Edge",
    "firefox": "Firefox",
    "firefox_android": "Firefox Android",
    "safari": "Safari",
    "safari_ios": "Safari iOS",
}

NO_RESULTS: str = "_No matching features found._"

BASELINE_SUMMARY: str = (
    "# 🌐 Web Platform Baseline\n\n"
    "Baseline gives you clear information about which web platform features are ready to use in your projects today.\n\n"
    "## Status Categories\n\n"
    "✅ **Widely Available**: The feature works across browsers and has been stable for 30+ months. Safe for production.\n\n"
    "🆕 **Newly Available**: The feature works across modern browsers but may not work in older versions. Use with progressive enhancement.\n\n"
    "⚠️ **Limited Support**: The feature is not supported in all major browsers. Consider polyfills or alternatives.\n\n"
    "❓ **No Data**: Insufficient data to determine baseline status.\n\n"
    "Learn more: https://web.dev/baseline/"
)


def status_glyph(status: Optional[str]) -> str:
    return STATUS_GLYPHS.get(status or "", UNKNOWN_GLYPH)


def score_glyph(score: float) -> str:
    for threshold, glyph in SCORE_GLYPHS:
        if score >= threshold:
            return glyph
    return LOW_SCORE_GLYPH


def recommendation(status: Optional[str]) -> str:
    return RECOMMENDATIONS.get(status or "", UNKNOWN_RECOMMENDATION)


def browser_name(key: str) -> str:
    return BROWSER_NAMES.get(key, key)


def parse_date(value: Optional[str]) -> Optional[date]:
    """Parses an ISO date or timestamp, returns None if unparseable"""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def format_date(value: Optional[str]) -> str:
    """Renders an ISO date as a US calendar date (M/D/YYYY), verbatim if unparseable"""
    parsed: Optional[date] = parse_date(value)
    if parsed is None:
        return value or ""
    return f"{parsed.month}/{parsed.day}/{parsed.year}"


def sort_by_date(implementations: dict[str, Optional[BrowserImplementation]]) -> list[tuple[str, BrowserImplementation]]:
    """Orders browser entries by implementation date; undated entries go last in input order, null entries are dropped"""

    def key(item: tuple[str, BrowserImplementation]) -> tuple[bool, date]:
        parsed: Optional[date] = parse_date(item[1].date)
        return (parsed is None, parsed or date.min)

    return sorted(((browser, impl) for browser, impl in implementations.items() if impl is not None), key=key)


def _render_baseline(feature: Feature) -> str:
    baseline = feature.baseline
    if baseline is None or not baseline.status:
        return ""

    md: str = f"**Status:** {status_glyph(baseline.status)} **{baseline.status.upper()}**\n"
    if baseline.low_date:
        md += f"**Available Since:** {format_date(baseline.low_date)}\n"
    if baseline.high_date:
        md += f"**Widely Available:** {format_date(baseline.high_date)}\n"
    return md + "\n"


def _render_browsers(implementations: dict[str, Optional[BrowserImplementation]]) -> str:
    md: str = "**Browser Support:**\n"
    for browser, impl in sort_by_date(implementations):
        icon: str = "✅" if impl.status == "available" else "❌"
        version: str = f" (v{impl.version})" if impl.version else ""
        md += f"- **{browser_name(browser)}:** {icon} {format_date(impl.date)}{version}\n"
    return md + "\n"


def _render_usage(usage: dict[str, Optional[UsageStats]]) -> str:
    used: list[tuple[str, float]] = [(browser, stats.daily) for browser, stats in usage.items() if stats is not None and stats.daily]
    if not used:
        return ""

    md: str = "**Usage Statistics:**\n"
    for browser, daily in used:
        md += f"- **{browser_name(browser)}:** {daily * 100:.4f}% of daily page views\n"
    return md + "\n"


def _render_tests(results: dict[str, Optional[WptScore]]) -> str:
    md: str = "**Web Platform Tests:**\n"
    for browser, result in results.items():
        if result is None or result.score is None:
            continue
        md += f"- **{browser_name(browser)}:** {score_glyph(result.score)} {result.score * 100:.1f}% pass rate\n"
    return md + "\n"


def _render_specs(spec_links: list[Optional[SpecLink]]) -> str:
    md: str = "**Specifications:**\n"
    for j, spec in enumerate((s for s in spec_links if s is not None), start=1):
        md += f"{j}. [View Specification]({spec.link or ''})\n"
    return md + "\n"


def render_feature(
    index: int,
    feature: Feature,
    *,
    include_browser_details: bool = True,
    include_usage_stats: bool = True,
    include_test_results: bool = True,
    include_specs: bool = True,
) -> str:
    md: str = f"## {index}. {feature.display_name}\n\n"
    md += _render_baseline(feature)

    if include_browser_details and feature.browser_implementations is not None:
        md += _render_browsers(feature.browser_implementations)

    if include_usage_stats and feature.usage:
        md += _render_usage(feature.usage)

    if include_test_results and feature.wpt is not None and feature.wpt.stable is not None:
        md += _render_tests(feature.wpt.stable)

    if include_specs and feature.spec is not None and feature.spec.links is not None:
        md += _render_specs(feature.spec.links)

    status: Optional[str] = feature.baseline.status if feature.baseline else None
    md += f"**Recommendation:** {recommendation(status)}\n\n"
    md += "---\n\n"
    return md


def format_baseline_status(
    query: list[str],
    features: list[Feature],
    *,
    include_browser_details: bool = True,
    include_usage_stats: bool = True,
    include_test_results: bool = True,
    include_specs: bool = True,
) -> str:
    """Renders the search result for `query` as a markdown document"""
    md: str = f"# 🌐 Baseline Status: **{' '.join(query)}**\n\n"

    if not features:
        return md + NO_RESULTS

    md += f"Found **{len(features)}** feature{'' if len(features) == 1 else 's'}:\n\n"

    for i, feature in enumerate(features, start=1):
        md += render_feature(
            i,
            feature,
            include_browser_details=include_browser_details,
            include_usage_stats=include_usage_stats,
            include_test_results=include_test_results,
            include_specs=include_specs,
        )

    return md


def get_baseline_summary_text() -> str:
    return BASELINE_SUMMARY
