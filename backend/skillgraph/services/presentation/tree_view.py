"""Explorer tree for generated files: one topic folder, moc first, then A-Z."""

from __future__ import annotations

from pydantic import BaseModel

from skillgraph.models.graph_models import GeneratedFile, NodeType, SkillGraph
from skillgraph.services.graph_paths import file_stem, slugify


class FileRow(BaseModel):
    path: str
    name: str
    node_id: str
    type: NodeType | None = None  # None when no node matches the file
    description: str = ""


class FolderEntry(BaseModel):
    name: str
    file_count: int
    files: list[FileRow]


def sort_files(files: list[GeneratedFile], graph: SkillGraph) -> list[GeneratedFile]:
    """Sort files with the moc node first, then alphabetically by node id."""
    nodes = graph.node_map()

    def _key(f: GeneratedFile) -> tuple[bool, str]:
        stem = file_stem(f.path)
        node = nodes.get(stem)
        return (node is None or node.type != NodeType.MOC, stem)

    return sorted(files, key=_key)


def build_file_tree(files: list[GeneratedFile], graph: SkillGraph) -> FolderEntry:
    nodes = graph.node_map()
    rows: list[FileRow] = []
    for f in sort_files(files, graph):
        node_id = file_stem(f.path)
        node = nodes.get(node_id)
        rows.append(FileRow(
            path=f.path,
            name=f.path.rsplit("/", 1)[-1],
            node_id=node_id,
            type=node.type if node else None,
            description=node.description if node else "",
        ))
    return FolderEntry(name=slugify(graph.topic), file_count=len(files), files=rows)
