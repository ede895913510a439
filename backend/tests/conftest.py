import os

import pytest

# Disable rate limiting for tests
os.environ["SKILLGRAPH_NO_RATE_LIMIT"] = "true"

from skillgraph.models.graph_models import GraphNode, NodeType, SkillGraph  # noqa: E402
from skillgraph.models.pipeline_models import ScrapedDocument  # noqa: E402


@pytest.fixture
def sample_graph() -> SkillGraph:
    return SkillGraph(
        topic="Idempotency Keys",
        nodes=[
            GraphNode(
                id="retries",
                label="Retries",
                type=NodeType.CONCEPT,
                description="Why clients retry.",
                content="# Retries\nSee [[idempotency-keys-overview]].",
                links=["idempotency-keys-overview"],
            ),
            GraphNode(
                id="idempotency-keys-overview",
                label="Idempotency Keys Overview",
                type=NodeType.MOC,
                description="Entry point.",
                content="# Overview\nStart with [[retries]] and [[key-expiry]].",
                links=["retries", "key-expiry"],
            ),
            GraphNode(
                id="key-expiry",
                label="Key Expiry",
                type=NodeType.GOTCHA,
                description="Keys expire.",
                content="# Key Expiry\nKeys are not kept forever.",
                links=[],
            ),
        ],
    )


@pytest.fixture
def sample_docs() -> list[ScrapedDocument]:
    return [
        ScrapedDocument(url="https://docs.example.com/a", markdown="A" * 150),
        ScrapedDocument(url="https://docs.example.com/b", markdown="B" * 200),
    ]
