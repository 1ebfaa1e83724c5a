from typing import Any, Iterable, Self

import httpx
from loguru import logger

from baseline_mcp.errors import FetchError

MIN_LIMIT: int = 1
MAX_LIMIT: int = 20
DEFAULT_LIMIT: int = 10

FEATURES_PATH: str = "/v1/features"


def clamp_limit(limit: int | float) -> int:
    """Clamps a requested result count into [MIN_LIMIT, MAX_LIMIT]"""
    if limit != limit:  # NaN
        return MIN_LIMIT
    return int(min(max(limit, MIN_LIMIT), MAX_LIMIT))


def build_features_url(api_base: str, terms: Iterable[str], limit: int | float = DEFAULT_LIMIT) -> str:
    """
    Builds the feature search URL, e.g.

        https://api.webstatus.dev/v1/features?q=css+grid&limit=10

    Terms are joined with single spaces into `q`, `limit` is clamped.
    """
    url = httpx.URL(
        f"{api_base.rstrip('/')}{FEATURES_PATH}",
        params={"q": " ".join(terms), "limit": str(clamp_limit(limit))},
    )
    return str(url)


class WebStatusProxy:
    """
    Minimal async proxy around the webstatus.dev features API using httpx.

    Usage:
        async with WebStatusProxy(base_url="https://api.webstatus.dev") as ws:
            features = await ws.search_features(["container", "queries"], limit=5)
    """

    def __init__(
        self,
        *,
        base_url: str = "https://api.webstatus.dev",
        user_agent: str = "baseline-mcp/1.0.0",
    ) -> None:
        self.base_url: str = base_url.rstrip("/")
        self.user_agent: str = user_agent
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> Self:
        self._client = httpx.AsyncClient(headers={"User-Agent": self.user_agent})
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def search_features(self, terms: list[str], limit: int | float = DEFAULT_LIMIT) -> list[dict[str, Any]]:
        """Searches features matching the space-joined terms. Returns raw feature records."""
        data: Any = await self.fetch_json(build_features_url(self.base_url, terms, limit))

        if not isinstance(data, dict):
            raise FetchError(f"Unexpected response type '{type(data).__name__}' from features API", url=self.base_url)

        return data.get("data") or data.get("features") or []

    async def fetch_json(self, url: str) -> Any:
        """GET `url` and return the parsed JSON body"""
        logger.debug(f"GET {url}")

        if self._client is None:
            async with httpx.AsyncClient(headers={"User-Agent": self.user_agent}) as client:
                return await self._get_json(client, url)

        return await self._get_json(self._client, url)

    @staticmethod
    async def _get_json(client: httpx.AsyncClient, url: str) -> Any:
        try:
            resp: httpx.Response = await client.get(url)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(f"HTTP {e.response.status_code} from {url}", url=url, status=e.response.status_code) from e
        except httpx.HTTPError as e:
            raise FetchError(f"Request to {url} failed: {e}", url=url) from e

        try:
            return resp.json()
        except ValueError as e:
            raise FetchError(f"Invalid JSON in response from {url}", url=url, status=resp.status_code) from e
