"""Document search: topic -> ranked documentation URLs via the Serper API."""

from __future__ import annotations

import logging

import httpx

from skillgraph.errors import ConfigurationError, UpstreamError
from skillgraph.models.pipeline_models import PipelineStage

logger = logging.getLogger(__name__)

SERPER_SEARCH_URL = "https://google.serper.dev/search"

# Appended to every topic to bias results toward conceptual/reference material
DISCOVERY_KEYWORDS = "knowledge framework principles theory guide"

# Video, social, forum and PDF sources rarely scrape into usable notes
BLOCKED_SUBSTRINGS = (
    "youtube.com",
    "twitter.com",
    "x.com",
    "reddit.com",
    ".pdf",
)

RESULT_COUNT = 20
MAX_RESULTS = 8


def build_query(topic: str) -> str:
    return f"{topic} {DISCOVERY_KEYWORDS}"


def is_blocked(url: str) -> bool:
    lowered = url.lower()
    return any(b in lowered for b in BLOCKED_SUBSTRINGS)


def filter_urls(links: list[str], limit: int = MAX_RESULTS) -> list[str]:
    """Drop blocked and duplicate links, keep provider order, cap at ``limit``."""
    urls: list[str] = []
    seen: set[str] = set()
    for link in links:
        if link in seen or is_blocked(link):
            continue
        seen.add(link)
        urls.append(link)
        if len(urls) >= limit:
            break
    return urls


class DocumentSearch:
    """Client for the search provider. Constructed once per process."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str = SERPER_SEARCH_URL,
        result_count: int = RESULT_COUNT,
        max_results: int = MAX_RESULTS,
        timeout: float = 15.0,
    ):
        if not api_key:
            raise ConfigurationError("SERPER_API_KEY is not set", stage=PipelineStage.SEARCHING.value)
        self.api_key = api_key
        self.base_url = base_url
        self.result_count = result_count
        self.max_results = max_results
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        return {
            "X-API-KEY": self.api_key,
            "Content-Type": "application/json",
        }

    async def search(self, topic: str) -> list[str]:
        """Return up to ``max_results`` candidate documentation URLs for ``topic``.

        An empty list means nothing survived filtering; provider failures
        raise UpstreamError.
        """
        payload = {"q": build_query(topic), "num": self.result_count}

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(self.base_url, json=payload, headers=self._headers())
        except httpx.HTTPError as exc:
            logger.warning("Search: request failed: %s", exc)
            raise UpstreamError(
                "Search request failed", stage=PipelineStage.SEARCHING.value
            ) from exc

        if resp.status_code < 200 or resp.status_code >= 300:
            logger.warning("Search: provider returned status %d", resp.status_code)
            raise UpstreamError(
                f"Search failed: {resp.status_code}",
                upstream_status=resp.status_code,
                stage=PipelineStage.SEARCHING.value,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise UpstreamError(
                "Search returned an invalid response", stage=PipelineStage.SEARCHING.value
            ) from exc

        organic = data.get("organic") if isinstance(data, dict) else None
        links = [
            r["link"]
            for r in (organic or [])
            if isinstance(r, dict) and isinstance(r.get("link"), str)
        ]
        urls = filter_urls(links, self.max_results)
        logger.info("Search: %d of %d results kept for %r", len(urls), len(links), topic)
        return urls
