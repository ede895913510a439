"""Pydantic models for the skill graph and its renderable files."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class NodeType(str, Enum):
    MOC = "moc"  # map of content: the entry point of a topic
    CONCEPT = "concept"
    PATTERN = "pattern"
    GOTCHA = "gotcha"


class GraphNode(BaseModel):
    """A single note in the skill graph."""

    id: str
    label: str
    type: NodeType
    description: str = ""
    content: str  # markdown body, may embed [[node-id]] markers
    links: list[str] = []


class SkillGraph(BaseModel):
    topic: str
    nodes: list[GraphNode]

    def node_map(self) -> dict[str, GraphNode]:
        return {n.id: n for n in self.nodes}


class GeneratedFile(BaseModel):
    path: str  # "<topic-slug>/<node-id>.md"
    content: str


class GenerateResponse(BaseModel):
    graph: SkillGraph
    files: list[GeneratedFile]


# --- Force-directed visualization data ---

class ForceGraphNode(BaseModel):
    id: str
    label: str
    type: NodeType
    val: float


class ForceGraphLink(BaseModel):
    source: str
    target: str


class ForceGraphData(BaseModel):
    nodes: list[ForceGraphNode]
    links: list[ForceGraphLink]


NODE_COLORS: dict[NodeType, str] = {
    NodeType.MOC: "#000000",
    NodeType.CONCEPT: "#404040",
    NodeType.PATTERN: "#737373",
    NodeType.GOTCHA: "#a3a3a3",
}

NODE_SIZES: dict[NodeType, float] = {
    NodeType.MOC: 3,
    NodeType.CONCEPT: 2,
    NodeType.PATTERN: 1.5,
    NodeType.GOTCHA: 1,
}
