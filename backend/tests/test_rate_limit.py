"""Tests for per-client rate limiting."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from skillgraph.main import app
from skillgraph.models.graph_models import GenerateResponse
from skillgraph.rate_limit import limiter
from skillgraph.services.generator.graph_generator import build_files
from skillgraph.services.pipeline import GraphPipeline, get_pipeline


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def rate_limited_client(sample_graph, sample_docs):
    """Client against the app with the shared limiter switched on."""
    search = AsyncMock()
    search.search.return_value = ["https://docs.example.com/a"]
    scraper = AsyncMock()
    scraper.scrape.return_value = sample_docs
    generator = AsyncMock()
    generator.generate.return_value = GenerateResponse(
        graph=sample_graph, files=build_files(sample_graph),
    )
    pipeline = GraphPipeline(search=search, scraper=scraper, generator=generator)
    app.dependency_overrides[get_pipeline] = lambda: pipeline

    limiter.reset()
    limiter.enabled = True
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    limiter.enabled = False
    limiter.reset()
    app.dependency_overrides.clear()


@pytest.mark.anyio
async def test_generate_rate_limit_returns_429(rate_limited_client: AsyncClient):
    """/generate allows 10 requests a minute per client."""
    statuses = []
    for _ in range(11):
        resp = await rate_limited_client.post("/generate", json={"topic": "idempotency keys"})
        statuses.append(resp.status_code)

    assert statuses[:10] == [200] * 10
    assert statuses[10] == 429
    assert "error" in resp.json()


@pytest.mark.anyio
async def test_health_is_not_rate_limited(rate_limited_client: AsyncClient):
    for _ in range(15):
        resp = await rate_limited_client.get("/health")
        assert resp.status_code == 200
