"""
Routes for registered polylines.

A client registers the projected points of a polyline once together
with its offset options, then changes the offset as often as it likes.
Every change recomputes the offset curve from the stored points and
returns it so the client can redraw.  The offset curve can also be
fetched again or exported as CSV.
"""

from __future__ import annotations

import csv
import io
import logging
import uuid
from typing import List

from fastapi import APIRouter, HTTPException, Response

from .models import (
    OffsetOptionsModel,
    OffsetResponse,
    PlanarPoint,
    PolylineCreateRequest,
    PolylineInfo,
    SetOffsetRequest,
)
from .routes_offset import compute_offset_response, to_offset_options
from ..services.polylines_store import (
    PolylineRecord,
    delete_polyline,
    encode_points,
    get_polyline,
    insert_polyline,
    list_polylines,
    update_polyline_offset,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _record_options(record: PolylineRecord) -> OffsetOptionsModel:
    return OffsetOptionsModel(
        offset=record.offset,
        smoothFactor=record.smooth_factor,
        joinStyle=record.join_style,
    )


def _to_info(record: PolylineRecord) -> PolylineInfo:
    return PolylineInfo(
        polylineId=record.polyline_id,
        name=record.name,
        points=[PlanarPoint(x=x, y=y) for x, y in record.points()],
        options=_record_options(record),
    )


def _get_or_404(polyline_id: str) -> PolylineRecord:
    record = get_polyline(polyline_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Polyline not found")
    return record


@router.post("/polylines", response_model=PolylineInfo, status_code=201)
async def create_polyline(body: PolylineCreateRequest) -> PolylineInfo:
    """Register a polyline with its offset options."""
    # reject unknown join styles before anything is stored
    to_offset_options(body.options)
    record = PolylineRecord(
        polyline_id=str(uuid.uuid4()),
        name=body.name,
        points_json=encode_points([(p.x, p.y) for p in body.points]),
        offset=body.options.offset,
        smooth_factor=body.options.smoothFactor,
        join_style=body.options.joinStyle,
    )
    record = insert_polyline(record)
    logger.info(
        "registered polyline %s with %d points (offset=%s)",
        record.polyline_id,
        len(body.points),
        record.offset,
    )
    return _to_info(record)


@router.get("/polylines", response_model=List[PolylineInfo])
async def get_polylines() -> List[PolylineInfo]:
    return [_to_info(record) for record in list_polylines()]


@router.get("/polylines/{polyline_id}", response_model=PolylineInfo)
async def get_polyline_info(polyline_id: str) -> PolylineInfo:
    return _to_info(_get_or_404(polyline_id))


@router.delete("/polylines/{polyline_id}", status_code=204)
async def remove_polyline(polyline_id: str) -> Response:
    if not delete_polyline(polyline_id):
        raise HTTPException(status_code=404, detail="Polyline not found")
    return Response(status_code=204)


@router.put("/polylines/{polyline_id}/offset", response_model=OffsetResponse)
async def set_offset(polyline_id: str, body: SetOffsetRequest) -> OffsetResponse:
    """Change the offset of a polyline and return the recomputed curve.

    Args:
        polyline_id: Identifier of the registered polyline.
        body: The new offset and, optionally, a new smoothing factor.

    Returns:
        OffsetResponse: The offset curve computed with the updated
            options.
    """
    record = update_polyline_offset(polyline_id, body.offset, body.smoothFactor)
    if record is None:
        raise HTTPException(status_code=404, detail="Polyline not found")
    return compute_offset_response(record.points(), _record_options(record))


@router.get("/polylines/{polyline_id}/offset", response_model=OffsetResponse)
async def get_offset(polyline_id: str) -> OffsetResponse:
    """Recompute the offset curve of a polyline with its stored options."""
    record = _get_or_404(polyline_id)
    return compute_offset_response(record.points(), _record_options(record))


@router.get("/polylines/{polyline_id}/export")
async def export_offset(polyline_id: str) -> Response:
    """Export the offset curve of a polyline as CSV.

    Returns:
        A Response containing CSV data with an ``x,y`` header.
    """
    record = _get_or_404(polyline_id)
    offset = compute_offset_response(record.points(), _record_options(record))
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(["x", "y"])
    for p in offset.points:
        writer.writerow([p.x, p.y])
    return Response(content=output.getvalue(), media_type="text/csv")
