"""Mapping between graph nodes and generated file paths.

``node_file_path`` and ``file_stem`` are inverses for every id the generator
emits (ids are slugs, so they contain no "/" and never end in ".md" twice).
Presentation code must use ``file_stem`` rather than re-deriving ids from paths.
"""

from __future__ import annotations

import re

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")

FILE_SUFFIX = ".md"


def slugify(text: str) -> str:
    """Lowercase, hyphen-separated, alphanumeric-only form of ``text``.

    "CBT Therapy!" -> "cbt-therapy"
    """
    return _NON_ALNUM_RE.sub("-", text.lower()).strip("-")


def node_file_path(topic: str, node_id: str) -> str:
    """Path of the file holding ``node_id``: ``<slug(topic)>/<node_id>.md``."""
    return f"{slugify(topic)}/{node_id}{FILE_SUFFIX}"


def file_stem(path: str) -> str:
    """Node id for a generated file path.

    "cbt-therapy/cognitive-distortions.md" -> "cognitive-distortions"
    """
    name = path.rsplit("/", 1)[-1]
    if name.endswith(FILE_SUFFIX):
        name = name[: -len(FILE_SUFFIX)]
    return name
