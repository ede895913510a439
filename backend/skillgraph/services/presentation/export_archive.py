"""Zip archive of the generated files, laid out as a markdown vault."""

from __future__ import annotations

import io
import zipfile

from skillgraph.models.graph_models import GenerateResponse


def generate_zip(response: GenerateResponse) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for f in response.files:
            # Paths come from the request body; keep them inside the archive root
            parts = [p for p in f.path.split("/") if p not in ("", ".", "..")]
            if not parts:
                continue
            zf.writestr("/".join(parts), f.content)
    return buf.getvalue()
