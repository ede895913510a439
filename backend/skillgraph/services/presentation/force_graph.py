"""Force-directed visualization data for a skill graph."""

from __future__ import annotations

from skillgraph.models.graph_models import (
    NODE_SIZES,
    ForceGraphData,
    ForceGraphLink,
    ForceGraphNode,
    SkillGraph,
)


def to_force_graph(graph: SkillGraph) -> ForceGraphData:
    """One force node per graph node; one link per resolvable, distinct edge."""
    ids = {n.id for n in graph.nodes}
    nodes = [
        ForceGraphNode(id=n.id, label=n.label, type=n.type, val=NODE_SIZES[n.type])
        for n in graph.nodes
    ]

    links: list[ForceGraphLink] = []
    seen: set[tuple[str, str]] = set()
    for n in graph.nodes:
        for target in n.links:
            edge = (n.id, target)
            if target not in ids or target == n.id or edge in seen:
                continue
            seen.add(edge)
            links.append(ForceGraphLink(source=n.id, target=target))

    return ForceGraphData(nodes=nodes, links=links)
