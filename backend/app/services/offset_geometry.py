"""
Planar geometry primitives used by the polyline offset engine.

All functions in this module operate on plain ``(x, y)`` tuples in a
single planar coordinate space.  They never raise for degenerate
input: a segment whose endpoints coincide has no line equation, and
parallel or coincident lines have no unique intersection.  Both cases
are signalled by returning ``None`` so that callers can decide how to
recover (skip, keep searching, or emit nothing).

Vertical lines cannot be expressed in slope/intercept form, so
:class:`LineEquation` carries an explicit ``x`` for them instead of
dividing by a zero run.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

Point = Tuple[float, float]
Segment = Tuple[Point, Point]

# Absolute tolerance used when deciding that two computed points are the
# same join point.
POINT_TOLERANCE: float = 1e-9


@dataclass(frozen=True)
class LineEquation:
    """Supporting line of a segment.

    Attributes:
        a: Slope of ``y = a * x + b``.  Unused for vertical lines.
        b: Intercept of ``y = a * x + b``.  Unused for vertical lines.
        x: Constant abscissa of a vertical line, ``None`` otherwise.
    """

    a: float = 0.0
    b: float = 0.0
    x: Optional[float] = None

    @property
    def is_vertical(self) -> bool:
        return self.x is not None


def line_equation(p1: Point, p2: Point) -> Optional[LineEquation]:
    """Return the equation of the line through ``p1`` and ``p2``.

    Returns:
        A slope/intercept :class:`LineEquation`, a vertical one when both
        points share the same ``x``, or ``None`` when the points are
        identical and no line is defined.
    """
    if p1[0] == p2[0]:
        if p1[1] == p2[1]:
            return None
        return LineEquation(x=p1[0])
    a = (p2[1] - p1[1]) / (p2[0] - p1[0])
    return LineEquation(a=a, b=p1[1] - a * p1[0])


def intersection(l1a: Point, l1b: Point, l2a: Point, l2b: Point) -> Optional[Point]:
    """Intersection point of the infinite lines ``l1a–l1b`` and ``l2a–l2b``.

    Returns ``None`` when there is no unique intersection: either segment
    is degenerate, both lines are vertical, or the slopes are equal
    (parallel or coincident lines).
    """
    line1 = line_equation(l1a, l1b)
    line2 = line_equation(l2a, l2b)
    if line1 is None or line2 is None:
        return None

    if line1.is_vertical:
        if line2.is_vertical:
            return None
        return (line1.x, line2.a * line1.x + line2.b)
    if line2.is_vertical:
        return (line2.x, line1.a * line2.x + line1.b)

    if line1.a == line2.a:
        return None
    x = (line2.b - line1.b) / (line1.a - line2.a)
    return (x, line1.a * x + line1.b)


def signed_area(p1: Point, p2: Point, p3: Point) -> float:
    """Twice the signed area of the triangle ``p1, p2, p3``.

    Positive when ``p3`` lies to the left of the directed segment
    ``p1 → p2``, negative when it lies to the right and zero when the
    three points are collinear.
    """
    return (p2[0] - p1[0]) * (p3[1] - p1[1]) - (p3[0] - p1[0]) * (p2[1] - p1[1])


def intersects(l1a: Point, l1b: Point, l2a: Point, l2b: Point) -> bool:
    """Return True if the finite segments ``l1a–l1b`` and ``l2a–l2b`` cross.

    Each segment's endpoints must lie strictly on opposite sides of the
    other segment's supporting line.  Touching at an endpoint and
    collinear overlaps do not count as crossings.
    """
    return (
        signed_area(l1a, l1b, l2a) * signed_area(l1a, l1b, l2b) < 0
        and signed_area(l2a, l2b, l1a) * signed_area(l2a, l2b, l1b) < 0
    )


def translate_point(pt: Point, dist: float, heading: float) -> Point:
    """Move ``pt`` by ``dist`` along the direction ``heading`` (radians)."""
    return (pt[0] + dist * math.cos(heading), pt[1] + dist * math.sin(heading))


def points_equal(p1: Point, p2: Point, tol: float = POINT_TOLERANCE) -> bool:
    """Return True if two points coincide within an absolute tolerance."""
    return abs(p1[0] - p2[0]) <= tol and abs(p1[1] - p2[1]) <= tol


def segment_as_vector(seg: Segment) -> Point:
    start, end = seg
    return (end[0] - start[0], end[1] - start[1])


def signed_angle(s1: Segment, s2: Segment) -> float:
    """Signed turn angle in ``(-pi, pi]`` from the direction of ``s1`` to ``s2``.

    Positive values are counter‑clockwise turns.
    """
    ax, ay = segment_as_vector(s1)
    bx, by = segment_as_vector(s2)
    return math.atan2(ax * by - ay * bx, ax * bx + ay * by)


__all__ = [
    "Point",
    "Segment",
    "POINT_TOLERANCE",
    "LineEquation",
    "line_equation",
    "intersection",
    "signed_area",
    "intersects",
    "translate_point",
    "points_equal",
    "segment_as_vector",
    "signed_angle",
]
