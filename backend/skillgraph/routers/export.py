"""Export router: render a generated skill graph as HTML, JSON or a zip vault."""

import json

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from skillgraph.models.graph_models import GenerateResponse
from skillgraph.rate_limit import limiter
from skillgraph.services.graph_paths import slugify
from skillgraph.services.presentation.export_archive import generate_zip
from skillgraph.services.presentation.export_html import generate_html
from skillgraph.services.presentation.force_graph import to_force_graph

router = APIRouter(prefix="/export", tags=["export"])


def generate_graph_json(response: GenerateResponse) -> bytes:
    return json.dumps(to_force_graph(response.graph).model_dump(mode="json"), indent=2).encode("utf-8")


FORMAT_GENERATORS = {
    "html": (generate_html, "text/html", ".html"),
    "json": (generate_graph_json, "application/json", ".json"),
    "zip": (generate_zip, "application/zip", ".zip"),
}


@router.post("/{fmt}")
@limiter.limit("60/minute")
async def export_graph(request: Request, fmt: str, body: GenerateResponse) -> Response:
    if fmt not in FORMAT_GENERATORS:
        return JSONResponse(status_code=400, content={"error": f"Unsupported format: {fmt}"})

    generator, mime_type, extension = FORMAT_GENERATORS[fmt]
    data = generator(body)

    filename = f"{slugify(body.graph.topic) or 'skill-graph'}{extension}"
    return Response(
        content=data,
        media_type=mime_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
