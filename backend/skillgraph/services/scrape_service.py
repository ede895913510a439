"""Document scraper: URLs -> main-content markdown via the Hyperbrowser API.

Each URL is a separate scrape job. Jobs run concurrently and settle
independently; a failed or near-empty page is dropped without affecting the
others.
"""

from __future__ import annotations

import asyncio
import logging

import httpx

from skillgraph.errors import ConfigurationError, UpstreamError
from skillgraph.models.pipeline_models import PipelineStage, ScrapedDocument

logger = logging.getLogger(__name__)

HYPERBROWSER_BASE_URL = "https://api.hyperbrowser.ai"

# Pages shorter than this were not usefully scraped
MIN_MARKDOWN_LENGTH = 100

SCRAPE_OPTIONS = {
    "formats": ["markdown"],
    "onlyMainContent": True,
}


class ScrapeJobError(UpstreamError):
    """A single scrape job failed. Never escapes ``DocumentScraper.scrape``."""


class DocumentScraper:
    """Client for the scrape provider. Constructed once per process."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str = HYPERBROWSER_BASE_URL,
        poll_interval: float = 1.0,
        max_polls: int = 45,
        timeout: float = 30.0,
    ):
        if not api_key:
            raise ConfigurationError("HYPERBROWSER_API_KEY is not set", stage=PipelineStage.SCRAPING.value)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.poll_interval = poll_interval
        self.max_polls = max_polls
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "Content-Type": "application/json",
        }

    async def _start_job(self, client: httpx.AsyncClient, url: str) -> str:
        resp = await client.post(
            f"{self.base_url}/api/scrape",
            json={"url": url, "scrapeOptions": SCRAPE_OPTIONS},
            headers=self._headers(),
        )
        if resp.status_code >= 400:
            raise ScrapeJobError(f"Scrape start failed: {resp.status_code}", upstream_status=resp.status_code)
        job_id = resp.json().get("jobId")
        if not job_id:
            raise ScrapeJobError("Scrape start returned no job id")
        return job_id

    async def _wait_for_job(self, client: httpx.AsyncClient, job_id: str) -> dict:
        for _ in range(self.max_polls):
            resp = await client.get(f"{self.base_url}/api/scrape/{job_id}", headers=self._headers())
            if resp.status_code >= 400:
                raise ScrapeJobError(f"Scrape status failed: {resp.status_code}", upstream_status=resp.status_code)
            data = resp.json()
            status = data.get("status")
            if status == "completed":
                return data
            if status == "failed":
                raise ScrapeJobError(f"Scrape job failed: {data.get('error') or 'unknown error'}")
            await asyncio.sleep(self.poll_interval)
        raise ScrapeJobError(f"Scrape job {job_id} timed out")

    async def scrape_one(self, client: httpx.AsyncClient, url: str) -> ScrapedDocument:
        """Start a scrape job for ``url`` and wait for it to finish."""
        job_id = await self._start_job(client, url)
        result = await self._wait_for_job(client, job_id)
        markdown = (result.get("data") or {}).get("markdown") or ""
        return ScrapedDocument(url=url, markdown=markdown)

    async def scrape(self, urls: list[str]) -> list[ScrapedDocument]:
        """Scrape every URL concurrently; return only usable documents.

        Order of the returned documents follows ``urls``.
        """
        if not urls:
            return []

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            results = await asyncio.gather(
                *(self.scrape_one(client, url) for url in urls),
                return_exceptions=True,
            )

        docs: list[ScrapedDocument] = []
        for url, result in zip(urls, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.warning("Scrape: dropping %s: %s", url, result)
                continue
            if len(result.markdown) < MIN_MARKDOWN_LENGTH:
                logger.warning(
                    "Scrape: dropping %s: only %d characters of markdown",
                    url, len(result.markdown),
                )
                continue
            docs.append(result)

        logger.info("Scrape: kept %d of %d documents", len(docs), len(urls))
        return docs
