"""
Polyline simplification applied before offsetting.

The offset engine expects an already reduced point sequence.  This
module provides that upstream step for open polylines: a cheap
radial‑distance pass drops points that sit closer than the tolerance to
their predecessor, then the Ramer–Douglas–Peucker algorithm removes
points that deviate from the simplified chord by no more than the
tolerance.  The tolerance is the ``smooth_factor`` carried in the
offset options; a value of zero (or fewer than three points) returns a
copy of the input unchanged.
"""

from __future__ import annotations

import logging
import os
from typing import List, Sequence

from .offset_geometry import Point

logger = logging.getLogger(__name__)


def _sq_dist(p1: Point, p2: Point) -> float:
    dx = p2[0] - p1[0]
    dy = p2[1] - p1[1]
    return dx * dx + dy * dy


def _sq_segment_dist(p: Point, a: Point, b: Point) -> float:
    """Squared distance from ``p`` to the closest point of segment ``a–b``."""
    x, y = a
    dx = b[0] - x
    dy = b[1] - y
    if dx != 0.0 or dy != 0.0:
        t = ((p[0] - x) * dx + (p[1] - y) * dy) / (dx * dx + dy * dy)
        if t > 1.0:
            x, y = b
        elif t > 0.0:
            x += dx * t
            y += dy * t
    return _sq_dist(p, (x, y))


def reduce_radial(points: Sequence[Point], tolerance: float) -> List[Point]:
    """Drop points closer than ``tolerance`` to the last kept point.

    The first and last points are always kept.
    """
    if not points:
        return []
    sq_tol = tolerance * tolerance
    reduced = [points[0]]
    prev = 0
    for i in range(1, len(points)):
        if _sq_dist(points[i], points[prev]) > sq_tol:
            reduced.append(points[i])
            prev = i
    if prev < len(points) - 1:
        reduced.append(points[-1])
    return reduced


def _rdp_mark(points: Sequence[Point], sq_tol: float, keep: List[bool]) -> None:
    """Mark the points kept by Ramer–Douglas–Peucker.

    Sub‑ranges are processed from an explicit stack so long, noisy
    polylines do not hit the interpreter's recursion limit.

    Args:
        points: Polyline points.
        sq_tol: Squared tolerance.
        keep: Mutable list of booleans indicating which points to keep.
            The first and last entries must already be set.
    """
    stack = [(0, len(points) - 1)]
    while stack:
        first, last = stack.pop()
        max_dist = 0.0
        index = -1
        for i in range(first + 1, last):
            dist = _sq_segment_dist(points[i], points[first], points[last])
            if dist > max_dist:
                max_dist = dist
                index = i
        if max_dist > sq_tol and index != -1:
            keep[index] = True
            stack.append((first, index))
            stack.append((index, last))


def simplify_polyline(points: Sequence[Point], tolerance: float) -> List[Point]:
    """Simplify an open polyline within ``tolerance``.

    Args:
        points: Ordered ``(x, y)`` points of the polyline.
        tolerance: Maximum allowed deviation in the units of the
            coordinates.  Zero or negative values disable simplification.

    Returns:
        A new list of points.  The first and last input points are always
        preserved.
    """
    if not tolerance or tolerance < 0.0 or len(points) < 3:
        return list(points)

    reduced = reduce_radial(points, tolerance)
    if len(reduced) < 3:
        return reduced
    keep = [False] * len(reduced)
    keep[0] = True
    keep[-1] = True
    _rdp_mark(reduced, tolerance * tolerance, keep)
    simplified = [p for p, k in zip(reduced, keep) if k]
    if os.getenv("OFFSET_DEBUG"):
        logger.debug(
            "simplify_polyline: tolerance=%s input=%d radial=%d output=%d",
            tolerance,
            len(points),
            len(reduced),
            len(simplified),
        )
    return simplified


__all__ = ["reduce_radial", "simplify_polyline"]
