"""Self-contained HTML page: explorer tree, node previews and force-graph data."""

from __future__ import annotations

import html
import json

from skillgraph.models.graph_models import NODE_COLORS, GenerateResponse
from skillgraph.services.graph_paths import file_stem
from skillgraph.services.presentation.force_graph import to_force_graph
from skillgraph.services.presentation.node_preview import render_node_html
from skillgraph.services.presentation.tree_view import build_file_tree

_STYLE = """
  body { font-family: -apple-system, sans-serif; margin: 0; display: flex; height: 100vh; color: #3f3f46; }
  nav { width: 220px; flex-shrink: 0; border-right: 1px solid #e4e4e7; overflow-y: auto; padding: 8px 0; }
  nav .folder { font-family: monospace; font-size: 12px; padding: 4px 12px; color: #52525b; }
  nav .count { float: right; background: #f4f4f5; border-radius: 9px; padding: 0 6px; font-size: 10px; }
  nav a { display: block; font-family: monospace; font-size: 11px; padding: 4px 12px 4px 28px; color: #71717a; text-decoration: none; }
  nav a:hover { background: #fafafa; color: #27272a; }
  .dot { display: inline-block; width: 6px; height: 6px; border-radius: 3px; margin-right: 6px; background: #d4d4d8; }
  main { flex: 1; overflow-y: auto; padding: 0 24px; }
  section { border-bottom: 1px solid #f4f4f5; padding: 20px 0; }
  .badge { font-family: monospace; font-size: 9px; font-weight: 600; border: 1px solid; border-radius: 3px; padding: 1px 5px; }
  .description { font-size: 12px; color: #a1a1aa; }
  .wikilink { font-size: 12px; font-weight: 600; border: 1px solid #d4d4d8; border-radius: 3px; padding: 0 5px; color: #3f3f46; text-decoration: none; }
  .wikilink.broken { border-style: dashed; color: #a1a1aa; }
  pre { background: #fafafa; border: 1px solid #e4e4e7; border-radius: 6px; padding: 12px; overflow-x: auto; }
  table { border-collapse: collapse; } th, td { border: 1px solid #e4e4e7; padding: 4px 10px; }
"""


def _render_tree(response: GenerateResponse) -> list[str]:
    tree = build_file_tree(response.files, response.graph)
    parts = [
        "<nav>",
        f'<div class="folder">{html.escape(tree.name)}<span class="count">{tree.file_count}</span></div>',
    ]
    for row in tree.files:
        color = NODE_COLORS[row.type] if row.type else "#d4d4d8"
        title = html.escape(row.description or row.name, quote=True)
        parts.append(
            f'<a href="#node-{html.escape(row.node_id, quote=True)}" title="{title}">'
            f'<span class="dot" style="background:{color}"></span>{html.escape(row.name)}</a>'
        )
    parts.append("</nav>")
    return parts


def _render_previews(response: GenerateResponse) -> list[str]:
    graph = response.graph
    nodes = graph.node_map()
    known_ids = set(nodes)
    parts = ["<main>", f"<h1>{html.escape(graph.topic)}</h1>"]
    # Preview order follows the tree, so every section has a file behind it
    tree = build_file_tree(response.files, graph)
    for row in tree.files:
        node = nodes.get(file_stem(row.path))
        if node is None:
            continue
        color = NODE_COLORS[node.type]
        parts += [
            f'<section id="node-{html.escape(node.id, quote=True)}">',
            f'<div><code>{html.escape(row.path)}</code> '
            f'<span class="badge" style="color:{color};border-color:{color}">{node.type.value.upper()}</span></div>',
            f'<p class="description">{html.escape(node.description)}</p>',
            render_node_html(node, known_ids),
            "</section>",
        ]
    parts.append("</main>")
    return parts


def generate_html(response: GenerateResponse) -> bytes:
    graph_data = to_force_graph(response.graph).model_dump(mode="json")
    # "</" would close the script element early
    graph_json = json.dumps(graph_data).replace("</", "<\\/")

    parts = [
        "<!DOCTYPE html>",
        "<html><head><meta charset='utf-8'>",
        f"<title>{html.escape(response.graph.topic)} · Skill Graph</title>",
        f"<style>{_STYLE}</style></head>",
        "<body>",
    ]
    parts += _render_tree(response)
    parts += _render_previews(response)
    parts.append(f'<script type="application/json" id="graph-data">{graph_json}</script>')
    parts.append("</body></html>")
    return "\n".join(parts).encode("utf-8")
