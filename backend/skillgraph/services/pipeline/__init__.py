"""Topic -> skill graph pipeline and its process-wide wiring."""

from __future__ import annotations

from functools import lru_cache

from skillgraph.config import Settings, get_settings
from skillgraph.services.generator import GraphGenerator
from skillgraph.services.llm.registry import get_provider
from skillgraph.services.pipeline.orchestrator import GraphPipeline
from skillgraph.services.scrape_service import DocumentScraper
from skillgraph.services.search_service import DocumentSearch


def build_pipeline(settings: Settings) -> GraphPipeline:
    """Construct every provider client, failing fast on missing credentials."""
    return GraphPipeline(
        search=DocumentSearch(api_key=settings.serper_api_key),
        scraper=DocumentScraper(api_key=settings.hyperbrowser_api_key),
        generator=GraphGenerator(provider=get_provider(settings.llm)),
    )


@lru_cache
def get_pipeline() -> GraphPipeline:
    """FastAPI dependency: one pipeline per process."""
    return build_pipeline(get_settings())


__all__ = ["GraphPipeline", "build_pipeline", "get_pipeline"]
