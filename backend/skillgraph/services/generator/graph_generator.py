"""Graph generation: topic + scraped documents -> validated skill graph and files.

The generative provider returns loosely structured JSON. Nothing it returns is
trusted until ``validate_graph`` has checked the node schema, id uniqueness,
the single map-of-content node and link targets.
"""

from __future__ import annotations

import json
import logging
import re

from skillgraph.errors import GenerationError
from skillgraph.models.graph_models import (
    GeneratedFile,
    GenerateResponse,
    GraphNode,
    NodeType,
    SkillGraph,
)
from skillgraph.models.pipeline_models import PipelineStage, ScrapedDocument
from skillgraph.services.generator.prompts import build_generation_prompt
from skillgraph.services.graph_paths import node_file_path, slugify
from skillgraph.services.llm.base import BaseLLMProvider
from skillgraph.services.wikilinks import normalize_wikilinks

logger = logging.getLogger(__name__)

_STAGE = PipelineStage.GENERATING.value
_VALID_TYPES = {t.value for t in NodeType}


def _strip_markdown_fences(text: str) -> str:
    """Remove markdown code fences from LLM output."""
    text = text.strip()
    text = re.sub(r"^```(?:json)?\s*\n?", "", text)
    text = re.sub(r"\n?```\s*$", "", text)
    return text.strip()


def _require_str(entry: dict, key: str, index: int) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value.strip():
        raise GenerationError(f"Generated node {index} is missing '{key}'", stage=_STAGE)
    return value


def _parse_node(entry: object, index: int) -> GraphNode:
    if not isinstance(entry, dict):
        raise GenerationError(f"Generated node {index} is not an object", stage=_STAGE)

    raw_id = _require_str(entry, "id", index)
    node_id = slugify(raw_id)
    if not node_id:
        raise GenerationError(f"Generated node id {raw_id!r} is not usable", stage=_STAGE)

    node_type = entry.get("type")
    if node_type not in _VALID_TYPES:
        raise GenerationError(f"Generated node '{node_id}' has invalid type {node_type!r}", stage=_STAGE)

    description = entry.get("description", "")
    if not isinstance(description, str):
        description = ""

    links = entry.get("links", [])
    if links is None:
        links = []
    if not isinstance(links, list) or not all(isinstance(link, str) for link in links):
        raise GenerationError(f"Generated node '{node_id}' has malformed links", stage=_STAGE)

    return GraphNode(
        id=node_id,
        label=_require_str(entry, "label", index).strip(),
        type=NodeType(node_type),
        description=description.strip(),
        content=normalize_wikilinks(_require_str(entry, "content", index)),
        links=[slugify(link) for link in links],
    )


def validate_graph(topic: str, raw_nodes: object) -> SkillGraph:
    """Turn raw node dicts into a SkillGraph, rejecting anything malformed.

    Raises GenerationError on: empty node set, missing fields, unknown node
    types, duplicate ids, or a number of moc nodes other than one. Links to
    unknown ids, self-links and repeated links are dropped.
    """
    if not isinstance(raw_nodes, list) or not raw_nodes:
        raise GenerationError("Generation produced no nodes", stage=_STAGE)

    nodes: list[GraphNode] = []
    seen: set[str] = set()
    for index, entry in enumerate(raw_nodes):
        node = _parse_node(entry, index)
        if node.id in seen:
            raise GenerationError(f"Generation produced duplicate node id '{node.id}'", stage=_STAGE)
        seen.add(node.id)
        nodes.append(node)

    moc_count = sum(1 for n in nodes if n.type == NodeType.MOC)
    if moc_count != 1:
        raise GenerationError(
            f"Generation must produce exactly one moc node, got {moc_count}", stage=_STAGE,
        )

    cleaned: list[GraphNode] = []
    for node in nodes:
        links: list[str] = []
        for link in node.links:
            if link == node.id or link in links:
                continue
            if link not in seen:
                logger.warning("Generate: dropping link %s -> %s (unknown node)", node.id, link)
                continue
            links.append(link)
        cleaned.append(node.model_copy(update={"links": links}))

    return SkillGraph(topic=topic, nodes=cleaned)


def parse_graph_json(raw: str, topic: str) -> SkillGraph:
    """Parse and validate the provider's JSON output."""
    cleaned = _strip_markdown_fences(raw)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.warning("Generate: Failed to parse JSON. Raw: %s", raw[:200])
        raise GenerationError("Generation returned malformed JSON", stage=_STAGE) from exc

    if not isinstance(data, dict) or not isinstance(data.get("nodes"), list):
        raise GenerationError("Generation output has no 'nodes' list", stage=_STAGE)

    return validate_graph(topic, data["nodes"])


def build_files(graph: SkillGraph) -> list[GeneratedFile]:
    """One file per node, moc first, then by id. Content is the raw markdown."""
    ordered = sorted(graph.nodes, key=lambda n: (n.type != NodeType.MOC, n.id))
    return [
        GeneratedFile(path=node_file_path(graph.topic, n.id), content=n.content)
        for n in ordered
    ]


class GraphGenerator:
    """Synthesizes a skill graph with a generative provider."""

    def __init__(
        self,
        provider: BaseLLMProvider,
        temperature: float = 0.3,
        max_tokens: int = 8192,
    ):
        self.provider = provider
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def generate(self, topic: str, docs: list[ScrapedDocument]) -> GenerateResponse:
        if not docs:
            raise GenerationError("No documents to generate from", stage=_STAGE)

        messages = build_generation_prompt(topic, docs)
        try:
            raw = await self.provider.complete(
                messages=messages,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            logger.error("Generate: LLM call failed: %s", e)
            raise GenerationError(f"Generation failed: {e}", stage=_STAGE) from e

        graph = parse_graph_json(raw, topic)
        files = build_files(graph)
        logger.info(
            "Generate: %d nodes, %d links for %r",
            len(graph.nodes), sum(len(n.links) for n in graph.nodes), topic,
        )
        return GenerateResponse(graph=graph, files=files)
