"""Pydantic models for the search -> scrape -> generate pipeline."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel


class PipelineStage(str, Enum):
    VALIDATING = "validating"
    SEARCHING = "searching"
    SCRAPING = "scraping"
    GENERATING = "generating"
    DONE = "done"


class ScrapedDocument(BaseModel):
    url: str
    markdown: str


# --- Request / Response ---

class GenerateRequest(BaseModel):
    # Left untyped so a non-string topic reaches the pipeline's own
    # validation (400 "Topic is required") instead of FastAPI's 422.
    topic: Any = None


class ErrorResponse(BaseModel):
    error: str
