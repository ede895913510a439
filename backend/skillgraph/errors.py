"""Error taxonomy for the topic-to-graph pipeline.

Every stage maps its failures to exactly one of these kinds. The API layer
only translates kind -> status code and message; it never reinterprets them.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for failures that reach the HTTP caller as {"error": message}."""

    status_code: int = 500

    def __init__(self, message: str, stage: str | None = None):
        super().__init__(message)
        self.message = message
        self.stage = stage


class ValidationError(PipelineError):
    """Bad input; user-correctable, never retried."""

    status_code = 400


class ConfigurationError(PipelineError):
    """A provider credential or setting is missing."""

    status_code = 500


class UpstreamError(PipelineError):
    """A search/scrape/generation provider failed.

    ``upstream_status`` keeps the provider's own status code (if any) for
    diagnostics; ``status_code`` is what the API returns.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        upstream_status: int | None = None,
        stage: str | None = None,
    ):
        super().__init__(message, stage=stage)
        self.status_code = status_code
        self.upstream_status = upstream_status


class NotFoundError(PipelineError):
    """Well-formed request, legitimately empty result."""

    status_code = 404


class GenerationError(PipelineError):
    """Synthesis produced no usable graph."""

    status_code = 500
