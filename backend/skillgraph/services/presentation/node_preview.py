"""Markdown preview of a node with interactive [[wikilink]] cross-references."""

from __future__ import annotations

import html
import re
import xml.etree.ElementTree as etree

import markdown
from markdown.extensions import Extension
from markdown.inlinepatterns import InlineProcessor
from markdown.treeprocessors import Treeprocessor
from markdown.util import ETX, STX, AtomicString

from skillgraph.models.graph_models import GraphNode
from skillgraph.services.wikilinks import WIKILINK_RE

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "sane_lists"]

_SAFE_SCHEMES = {"http", "https", "mailto"}
_URL_JUNK_RE = re.compile(r"[\x00-\x20]")
# Backslash-escaped characters stay as STX<ord>ETX placeholders until serialization
_ESCAPED_RE = re.compile(f"{STX}(\\d+){ETX}")


def _is_safe_url(url: str) -> bool:
    url = html.unescape(_ESCAPED_RE.sub(lambda m: chr(int(m.group(1))), url))
    scheme, sep, _ = _URL_JUNK_RE.sub("", url).partition(":")
    if not sep or any(c in scheme for c in "/?#"):
        return True  # relative
    return scheme.lower() in _SAFE_SCHEMES


class WikilinkInlineProcessor(InlineProcessor):
    """``[[id]]`` -> anchor to the node's preview, or a broken-link span."""

    def __init__(self, pattern: str, md: markdown.Markdown, known_ids: set[str]):
        super().__init__(pattern, md)
        self.known_ids = known_ids

    def handleMatch(self, m, data):
        target = m.group(1).strip()
        if target in self.known_ids:
            el = etree.Element("a")
            el.set("class", "wikilink")
            el.set("href", f"#node-{target}")
            el.set("data-node", target)
        else:
            el = etree.Element("span")
            el.set("class", "wikilink broken")
            el.set("title", "Unknown note")
        el.text = AtomicString(target)
        return el, m.start(0), m.end(0)


class LinkTreeprocessor(Treeprocessor):
    """Drops script-capable URLs; external links open in a new tab."""

    def run(self, root):
        for el in root.iter():
            attr = {"a": "href", "img": "src"}.get(el.tag)
            if attr is None or el.get(attr) is None:
                continue
            url = el.get(attr)
            if not _is_safe_url(url):
                del el.attrib[attr]
            elif el.tag == "a" and url.startswith(("http://", "https://")):
                el.set("target", "_blank")
                el.set("rel", "noopener noreferrer")


class NodePreviewExtension(Extension):
    def __init__(self, known_ids: set[str], **kwargs):
        self.known_ids = known_ids
        super().__init__(**kwargs)

    def extendMarkdown(self, md):
        # Raw HTML in node bodies renders as text
        md.preprocessors.deregister("html_block")
        md.inlinePatterns.deregister("html")
        # Between "backtick" (190) and "link" (160)
        md.inlinePatterns.register(
            WikilinkInlineProcessor(WIKILINK_RE.pattern, md, self.known_ids), "wikilink", 175,
        )
        md.treeprocessors.register(LinkTreeprocessor(md), "node_links", 5)


def render_markdown(text: str, known_ids: set[str]) -> str:
    return markdown.markdown(
        text, extensions=[*MARKDOWN_EXTENSIONS, NodePreviewExtension(known_ids)],
    )


def render_node_html(node: GraphNode, known_ids: set[str]) -> str:
    """Render a node's body; unknown link targets render as broken, never raise."""
    return render_markdown(node.content, known_ids)
