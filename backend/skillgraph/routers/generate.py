"""Generate router: topic -> skill graph."""

import asyncio
import logging

from fastapi import APIRouter, Depends, Request

from skillgraph.errors import PipelineError, ValidationError
from skillgraph.models.graph_models import GenerateResponse
from skillgraph.models.pipeline_models import ErrorResponse, GenerateRequest, PipelineStage
from skillgraph.rate_limit import limiter
from skillgraph.services.pipeline import GraphPipeline, get_pipeline
from skillgraph.services.pipeline.orchestrator import TOPIC_REQUIRED, validate_topic

logger = logging.getLogger(__name__)

router = APIRouter(tags=["generate"])

# Wall-clock ceiling for one request; the hosting environment enforces the same limit
MAX_DURATION_SECONDS = 60


async def read_topic(request: Request) -> str:
    """Parse and validate the topic before any provider client is resolved."""
    try:
        payload = await request.json()
        body = GenerateRequest.model_validate(payload)
    except ValueError:
        # Covers malformed JSON, bad encodings and non-object bodies
        raise ValidationError(TOPIC_REQUIRED, stage=PipelineStage.VALIDATING.value) from None
    return validate_topic(body.topic)


@router.post(
    "/generate",
    response_model=GenerateResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
@limiter.limit("10/minute")
async def generate(
    request: Request,
    topic: str = Depends(read_topic),
    pipeline: GraphPipeline = Depends(get_pipeline),
) -> GenerateResponse:
    """Search, scrape and synthesize a skill graph for ``topic``."""
    try:
        return await asyncio.wait_for(pipeline.run(topic), timeout=MAX_DURATION_SECONDS)
    except asyncio.TimeoutError:
        logger.warning("Generate: %r exceeded %ds", topic, MAX_DURATION_SECONDS)
        raise PipelineError("Request timed out") from None
