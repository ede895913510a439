"""Pipeline orchestrator: Validating -> Searching -> Scraping -> Generating -> Done.

Each stage's failure leaves the pipeline as a PipelineError whose ``stage``
names where it happened. Nothing is retried and nothing is kept between runs.
"""

from __future__ import annotations

import logging

from skillgraph.errors import NotFoundError, PipelineError, UpstreamError, ValidationError
from skillgraph.models.graph_models import GenerateResponse
from skillgraph.models.pipeline_models import PipelineStage
from skillgraph.services.generator import GraphGenerator
from skillgraph.services.scrape_service import DocumentScraper
from skillgraph.services.search_service import DocumentSearch

logger = logging.getLogger(__name__)

TOPIC_REQUIRED = "Topic is required"
NO_DOCUMENTATION = "No documentation found for this topic"
SCRAPE_FAILED = "Failed to scrape any documentation"


def validate_topic(topic: object) -> str:
    """Return the trimmed topic or raise ValidationError."""
    if not isinstance(topic, str) or not topic.strip():
        raise ValidationError(TOPIC_REQUIRED, stage=PipelineStage.VALIDATING.value)
    return topic.strip()


class GraphPipeline:
    """Runs search, scrape and generate strictly in sequence."""

    def __init__(
        self,
        search: DocumentSearch,
        scraper: DocumentScraper,
        generator: GraphGenerator,
    ):
        self.search = search
        self.scraper = scraper
        self.generator = generator

    async def run(self, topic: object) -> GenerateResponse:
        stage = PipelineStage.VALIDATING
        try:
            clean_topic = validate_topic(topic)

            stage = PipelineStage.SEARCHING
            urls = await self.search.search(clean_topic)
            logger.info("Pipeline: Searching produced %d URLs for %r", len(urls), clean_topic)
            if not urls:
                raise NotFoundError(NO_DOCUMENTATION)

            stage = PipelineStage.SCRAPING
            docs = await self.scraper.scrape(urls)
            logger.info("Pipeline: Scraping produced %d documents for %r", len(docs), clean_topic)
            if not docs:
                raise UpstreamError(SCRAPE_FAILED, status_code=502)

            stage = PipelineStage.GENERATING
            result = await self.generator.generate(clean_topic, docs)
            logger.info(
                "Pipeline: Generating produced %d nodes, %d files for %r",
                len(result.graph.nodes), len(result.files), clean_topic,
            )
            return result
        except PipelineError as exc:
            if exc.stage is None:
                exc.stage = stage.value
            logger.warning("Pipeline: failed at %s: %s", exc.stage, exc.message)
            raise
