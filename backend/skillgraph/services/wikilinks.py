"""[[wikilink]] cross-reference markers in node content."""

from __future__ import annotations

import re

from pydantic import BaseModel

from skillgraph.services.graph_paths import slugify

# Single-line, bracket-free target; anything else (e.g. a lone "[[") is literal text
WIKILINK_RE = re.compile(r"\[\[([^\[\]\n]+)\]\]")
_FENCE_RE = re.compile(r"^\s*(```|~~~)")
_CODE_SPAN_RE = re.compile(r"(`+)(.+?)\1")


class TextSegment(BaseModel):
    text: str


class WikilinkSegment(BaseModel):
    target: str


def split_wikilinks(text: str) -> list[TextSegment | WikilinkSegment]:
    """Split ``text`` into literal runs and wikilink targets, in order."""
    segments: list[TextSegment | WikilinkSegment] = []
    pos = 0
    for m in WIKILINK_RE.finditer(text):
        if m.start() > pos:
            segments.append(TextSegment(text=text[pos:m.start()]))
        segments.append(WikilinkSegment(target=m.group(1).strip()))
        pos = m.end()
    if pos < len(text):
        segments.append(TextSegment(text=text[pos:]))
    return segments


def _slug_targets(text: str) -> str:
    parts = []
    for seg in split_wikilinks(text):
        if isinstance(seg, TextSegment):
            parts.append(seg.text)
        else:
            parts.append(f"[[{slugify(seg.target) or seg.target}]]")
    return "".join(parts)


def normalize_wikilinks(text: str) -> str:
    """Rewrite wikilink targets to node-id form, outside code.

    "See [[Retry Policy]]" -> "See [[retry-policy]]"; fenced blocks and
    backtick spans are left as written.
    """
    out: list[str] = []
    in_fence = False
    for line in text.split("\n"):
        if _FENCE_RE.match(line):
            in_fence = not in_fence
            out.append(line)
            continue
        if in_fence:
            out.append(line)
            continue
        parts = []
        pos = 0
        for m in _CODE_SPAN_RE.finditer(line):
            parts.append(_slug_targets(line[pos:m.start()]))
            parts.append(m.group(0))
            pos = m.end()
        parts.append(_slug_targets(line[pos:]))
        out.append("".join(parts))
    return "\n".join(out)
