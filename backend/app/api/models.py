"""
Pydantic data models for the polyline offset API.

These models define the shapes of requests and responses used by the
backend.  Coordinates are planar points already projected by the
caller; the API never deals with geographic coordinates.  Non‑finite
numbers are rejected here so the geometry services only ever see
finite input.
"""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class PlanarPoint(BaseModel):
    """Single 2D point in the caller's projected coordinate space."""

    x: float = Field(..., allow_inf_nan=False)
    y: float = Field(..., allow_inf_nan=False)


class OffsetOptionsModel(BaseModel):
    """Offset options attached to a polyline."""

    offset: float = Field(
        default=0.0,
        allow_inf_nan=False,
        description="Signed offset distance in coordinate units; 0 disables offsetting",
    )
    smoothFactor: float = Field(
        default=1.0,
        ge=0.0,
        allow_inf_nan=False,
        description="Simplification tolerance applied before offsetting (0 disables it)",
    )
    joinStyle: str = Field(
        default="round",
        description="Join style used at outer turns ('round')",
    )


class OffsetRequest(BaseModel):
    """Request body for offsetting a single polyline."""

    points: List[PlanarPoint] = Field(..., description="Ordered points of the polyline")
    options: OffsetOptionsModel = Field(default_factory=OffsetOptionsModel)


class OffsetResponse(BaseModel):
    """Offset polyline returned by the API."""

    points: List[PlanarPoint] = Field(..., description="Ordered points of the offset polyline")
    metadata: Dict[str, Any] = Field(
        ..., description="Point counts and the options used for the computation"
    )


class OffsetPartsRequest(BaseModel):
    """Request body for a multi‑part geometry, offset part by part."""

    parts: List[List[PlanarPoint]] = Field(..., description="Independent polylines")
    options: OffsetOptionsModel = Field(default_factory=OffsetOptionsModel)


class OffsetPartsResponse(BaseModel):
    """Offset parts in the same order as the request."""

    parts: List[List[PlanarPoint]]
    metadata: Dict[str, Any]


class PolylineCreateRequest(BaseModel):
    """Request body for registering a polyline."""

    points: List[PlanarPoint] = Field(..., description="Ordered points of the polyline")
    name: str | None = Field(default=None, description="Optional display name")
    options: OffsetOptionsModel = Field(default_factory=OffsetOptionsModel)


class PolylineInfo(BaseModel):
    """Stored polyline and its offset options."""

    polylineId: str = Field(..., description="Unique identifier of the polyline")
    name: str | None = None
    points: List[PlanarPoint]
    options: OffsetOptionsModel


class SetOffsetRequest(BaseModel):
    """Request body for changing the offset of a registered polyline."""

    offset: float = Field(..., allow_inf_nan=False, description="New signed offset distance")
    smoothFactor: float | None = Field(
        default=None,
        ge=0.0,
        allow_inf_nan=False,
        description="Optional new simplification tolerance",
    )
