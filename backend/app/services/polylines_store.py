"""
Persistence of registered polylines.

A ``PolylineRecord`` stores the projected points of a polyline the
host wants to draw with an offset, together with the offset options
(signed distance, smoothing factor and join style).  Only the input is
persisted: offset curves are recomputed from scratch whenever they are
requested, so changing the offset of a record never leaves stale
geometry behind.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import List, Optional

from sqlmodel import SQLModel, Field, select

from .db import create_db_and_tables, get_session
from .offset_geometry import Point


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PolylineRecord(SQLModel, table=True):
    """Database model representing a registered polyline."""

    polyline_id: str = Field(primary_key=True)
    name: Optional[str] = None
    # JSON encoded list of [x, y] pairs
    points_json: str
    offset: float = 0.0
    smooth_factor: float = 1.0
    join_style: str = Field(default="round")
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    def points(self) -> List[Point]:
        """Decode the stored points."""
        return [(float(x), float(y)) for x, y in json.loads(self.points_json)]


def encode_points(points: List[Point]) -> str:
    return json.dumps([[float(p[0]), float(p[1])] for p in points])


def init_db() -> None:
    """Initialise the database and create tables if they do not exist."""
    create_db_and_tables()


def insert_polyline(record: PolylineRecord) -> PolylineRecord:
    """Persist a new ``PolylineRecord`` and return it refreshed."""
    with get_session() as session:
        session.add(record)
        session.commit()
        session.refresh(record)
        return record


def get_polyline(polyline_id: str) -> Optional[PolylineRecord]:
    """Retrieve a ``PolylineRecord`` by identifier, or ``None``."""
    with get_session() as session:
        return session.get(PolylineRecord, polyline_id)


def list_polylines() -> List[PolylineRecord]:
    """Return all registered polylines, oldest first."""
    with get_session() as session:
        statement = select(PolylineRecord).order_by(PolylineRecord.created_at)
        return list(session.exec(statement))


def update_polyline_offset(
    polyline_id: str,
    offset: float,
    smooth_factor: Optional[float] = None,
) -> Optional[PolylineRecord]:
    """Change the stored offset (and optionally the smoothing factor).

    Returns:
        The updated record, or ``None`` if no record has this identifier.
    """
    with get_session() as session:
        record = session.get(PolylineRecord, polyline_id)
        if record is None:
            return None
        record.offset = offset
        if smooth_factor is not None:
            record.smooth_factor = smooth_factor
        record.updated_at = _utcnow()
        session.add(record)
        session.commit()
        session.refresh(record)
        return record


def delete_polyline(polyline_id: str) -> bool:
    """Delete a polyline.  Returns False if it did not exist."""
    with get_session() as session:
        record = session.get(PolylineRecord, polyline_id)
        if record is None:
            return False
        session.delete(record)
        session.commit()
        return True
