"""
Stateless offset endpoints.

Clients post projected planar points together with the offset options
and receive the offset polyline.  Nothing is stored: every request
recomputes the curve from scratch.  Multi‑part geometries are accepted
on a separate endpoint and offset one part at a time.
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, HTTPException

from .models import (
    OffsetOptionsModel,
    OffsetPartsRequest,
    OffsetPartsResponse,
    OffsetRequest,
    OffsetResponse,
    PlanarPoint,
)
from ..services.offset_geometry import Point
from ..services.polyline_offset import OffsetOptions, get_join_style, run_offset

logger = logging.getLogger(__name__)

router = APIRouter()


def to_offset_options(options: OffsetOptionsModel) -> OffsetOptions:
    """Convert the API options into service options.

    Raises:
        HTTPException: 400 if the join style is not registered.
    """
    try:
        get_join_style(options.joinStyle)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return OffsetOptions(
        offset=options.offset,
        smooth_factor=options.smoothFactor,
        join_style=options.joinStyle,
    )


def _to_points(points: List[PlanarPoint]) -> List[Point]:
    return [(p.x, p.y) for p in points]


def _to_planar(points: List[Point]) -> List[PlanarPoint]:
    return [PlanarPoint(x=x, y=y) for x, y in points]


def compute_offset_response(points: List[Point], options: OffsetOptionsModel) -> OffsetResponse:
    """Run the offset pipeline and wrap the result for the API."""
    service_options = to_offset_options(options)
    try:
        result = run_offset(points, service_options)
    except Exception as exc:
        logger.exception("offset computation failed for %d points: %s", len(points), exc)
        raise HTTPException(status_code=500, detail=f"Failed to compute offset: {exc}")
    metadata = {
        "inputPoints": result.input_count,
        "simplifiedPoints": result.simplified_count,
        "outputPoints": len(result.points),
        "offset": service_options.offset,
        "smoothFactor": service_options.smooth_factor,
        "joinStyle": service_options.join_style,
    }
    return OffsetResponse(points=_to_planar(result.points), metadata=metadata)


@router.post("/offset", response_model=OffsetResponse)
async def offset_polyline_endpoint(body: OffsetRequest) -> OffsetResponse:
    """Offset a single polyline.

    Returns:
        OffsetResponse: The offset points and a metadata object with the
            input, simplified and output point counts.
    """
    return compute_offset_response(_to_points(body.points), body.options)


@router.post("/offset/parts", response_model=OffsetPartsResponse)
async def offset_parts_endpoint(body: OffsetPartsRequest) -> OffsetPartsResponse:
    """Offset each part of a multi‑part geometry independently."""
    parts: List[List[PlanarPoint]] = []
    total_points = 0
    for part in body.parts:
        response = compute_offset_response(_to_points(part), body.options)
        parts.append(response.points)
        total_points += len(response.points)
    return OffsetPartsResponse(
        parts=parts,
        metadata={
            "totalParts": len(parts),
            "totalPoints": total_points,
            "offset": body.options.offset,
            "smoothFactor": body.options.smoothFactor,
            "joinStyle": body.options.joinStyle,
        },
    )
