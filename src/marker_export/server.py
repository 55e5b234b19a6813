"""FastAPI server exposing the marker export pipeline as file downloads."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Body, FastAPI, HTTPException, Query, Response

from .delivery import ResponseDelivery
from .exceptions import InvalidInput
from .formats import ExportFormat
from .orchestrator import ExportOrchestrator

logger = logging.getLogger(__name__)

app = FastAPI(title="Marker Export", version="0.1.0")

FORMAT_PATTERN = "^(" + "|".join(f.value for f in ExportFormat) + ")$"


@app.get("/formats")
async def list_formats() -> list[dict[str, str]]:
    """List the supported export formats with their filenames and content types."""
    return [
        {"format": f.value, "filename": f.filename, "content_type": f.content_type}
        for f in ExportFormat
    ]


@app.post("/export")
async def export_markers(
    markers: list[dict[str, Any]] = Body(...),
    format: str = Query("csv", pattern=FORMAT_PATTERN),
):
    """Export the posted markers and return the file as an attachment.

    An empty list exports nothing and returns 204.
    """
    delivery = ResponseDelivery()
    orchestrator = ExportOrchestrator(delivery, reset_delay=None)

    result = await orchestrator.export_data(markers, format)

    if orchestrator.failure is not None:
        status = 400 if isinstance(orchestrator.failure, InvalidInput) else 500
        raise HTTPException(status_code=status, detail=orchestrator.error)
    if result is None:
        return Response(status_code=204)

    return delivery.response
