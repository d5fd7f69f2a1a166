"""
Parallel offset curves for open polylines.

Given an ordered sequence of planar points and a signed distance this
module produces the polyline displaced perpendicular to the original
path by that distance.  The computation runs in three forward stages:

1. :func:`offset_point_line` turns every pair of consecutive distinct
   points into an :class:`OffsetSegment`, a copy of the segment
   translated along its offset heading.
2. :func:`join_line_segments` walks adjacent offset segments and asks
   the selected join style for connecting geometry.  Outer turns get a
   circular arc around the original vertex; inner turns get nothing and
   are left overlapping.
3. :func:`cut_inner_angles` scans the joined list and trims each
   overlap back to the crossing point, discarding the loops created at
   inner turns, and returns the final point sequence.

The sign of the distance selects the side.  Headings are measured from
the end point back to the start point and rotated by -90°, so with a
y‑up coordinate system a positive distance offsets to the left of the
direction of travel (to the right on a y‑down screen).

Everything here is a pure function of its arguments; no state survives
between calls.  :func:`offset_points` and :func:`offset_parts` add the
host‑side conveniences: the zero‑offset passthrough, upstream
simplification with the smoothing factor, and per‑part processing of
multi‑part geometries.  Verbose per‑stage logging is enabled with the
``OFFSET_DEBUG`` environment variable.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Sequence

from .offset_geometry import (
    Point,
    Segment,
    intersection,
    intersects,
    points_equal,
    signed_angle,
    translate_point,
)
from .simplify import simplify_polyline

logger = logging.getLogger(__name__)

# Angular sampling step of the circular arcs inserted at outer turns.
ARC_STEP: float = math.pi / 8
_ANGLE_EPSILON: float = 1e-9

DEFAULT_JOIN_STYLE = "round"
DEFAULT_SMOOTH_FACTOR = 1.0


@dataclass(frozen=True)
class OffsetSegment:
    """A path segment together with its translated copy.

    Attributes:
        offset_angle: Heading (radians) along which both endpoints were
            translated.
        original: The ``(start, end)`` points of the input segment.  The
            end point is the centre of the arc joining this segment to
            the next one.
        offset: The translated ``(start, end)`` points.
    """

    offset_angle: float
    original: Segment
    offset: Segment


@dataclass
class OffsetOptions:
    """Options bag supplied by the host for a single offset request.

    Attributes:
        offset: Signed offset distance in coordinate units.  Zero
            disables offsetting entirely.
        smooth_factor: Tolerance of the simplification applied to the
            points before offsetting.  Zero disables simplification.
        join_style: Name of the join style used at outer turns.
    """

    offset: float = 0.0
    smooth_factor: float = DEFAULT_SMOOTH_FACTOR
    join_style: str = DEFAULT_JOIN_STYLE


@dataclass
class OffsetResult:
    """Offset curve plus counts describing how it was produced."""

    points: List[Point] = field(default_factory=list)
    input_count: int = 0
    simplified_count: int = 0


JoinFunction = Callable[[OffsetSegment, OffsetSegment, float], List[Segment]]


def offset_point_line(points: Sequence[Point], distance: float) -> List[OffsetSegment]:
    """Translate every segment of ``points`` by ``distance``.

    Consecutive identical points are skipped, so the result holds one
    :class:`OffsetSegment` per pair of distinct consecutive points and is
    empty for fewer than two points.
    """
    segments: List[OffsetSegment] = []
    for a, b in zip(points, points[1:]):
        if a[0] == b[0] and a[1] == b[1]:
            continue
        # angles in (-pi, pi]
        segment_angle = math.atan2(a[1] - b[1], a[0] - b[0])
        offset_angle = segment_angle - math.pi / 2
        segments.append(
            OffsetSegment(
                offset_angle=offset_angle,
                original=(a, b),
                offset=(
                    translate_point(a, distance, offset_angle),
                    translate_point(b, distance, offset_angle),
                ),
            )
        )
    return segments


def circular_arc(s1: OffsetSegment, s2: OffsetSegment, distance: float) -> List[Segment]:
    """Connect two offset segments with a circular arc at outer turns.

    The arc is centred on the original vertex shared by ``s1`` and
    ``s2`` with a radius of ``|distance|`` and sampled every
    :data:`ARC_STEP` radians.  Angles are always walked counter‑clockwise;
    for positive distances the samples are reversed afterwards so the
    returned chain always runs from the end of ``s1.offset`` to the start
    of ``s2.offset``.

    Returns:
        The arc as a list of chained segments, or an empty list when the
        segments already meet (same heading, zero distance) or when the
        turn is an inner one.
    """
    if s1.offset_angle == s2.offset_angle or distance == 0:
        return []

    turn = signed_angle(s1.offset, s2.offset)
    # inner angles are resolved later by intersecting the offset segments
    if abs(turn) <= _ANGLE_EPSILON or turn * distance > 0:
        return []

    center = s1.original[1]
    right_offset = distance > 0
    start_angle = s2.offset_angle if right_offset else s1.offset_angle
    end_angle = s1.offset_angle if right_offset else s2.offset_angle
    if end_angle < start_angle:
        end_angle += 2 * math.pi
    # rounding can order the headings against the turn sign; the sweep
    # never exceeds the turn itself
    end_angle = min(end_angle, start_angle + abs(turn) + _ANGLE_EPSILON)

    points: List[Point] = [s2.offset[0] if right_offset else s1.offset[1]]
    step = 1
    alpha = start_angle + ARC_STEP
    while alpha < end_angle - _ANGLE_EPSILON:
        points.append(translate_point(center, distance, alpha))
        step += 1
        alpha = start_angle + step * ARC_STEP
    points.append(s1.offset[1] if right_offset else s2.offset[0])

    if right_offset:
        points.reverse()
    return list(zip(points, points[1:]))


# Join styles applied at outer turns, keyed by name.
JOIN_STYLES: Dict[str, JoinFunction] = {
    "round": circular_arc,
}


def get_join_style(name: str) -> JoinFunction:
    """Look up a join style by name.

    Raises:
        ValueError: If no join style is registered under ``name``.
    """
    try:
        return JOIN_STYLES[name]
    except KeyError:
        raise ValueError(
            f"Unknown join style '{name}'. Expected one of {sorted(JOIN_STYLES)}"
        ) from None


def join_outer_angles(
    s1: OffsetSegment,
    s2: OffsetSegment,
    distance: float,
    join_style: str = DEFAULT_JOIN_STYLE,
) -> List[Segment]:
    """Connecting segments to insert between ``s1.offset`` and ``s2.offset``."""
    return get_join_style(join_style)(s1, s2, distance)


def join_line_segments(
    segments: Sequence[OffsetSegment],
    distance: float,
    join_style: str = DEFAULT_JOIN_STYLE,
) -> List[Point]:
    """Splice join geometry between offset segments and cut inner angles.

    Args:
        segments: Offset segments in path order.
        distance: The signed distance the segments were offset by.
        join_style: Name of a registered join style.

    Returns:
        The final offset polyline as an ordered list of points; empty
        when ``segments`` is empty.
    """
    get_join_style(join_style)
    if not segments:
        return []

    joined: List[Segment] = [segments[0].offset]
    for s1, s2 in zip(segments, segments[1:]):
        joined.extend(join_outer_angles(s1, s2, distance, join_style))
        joined.append(s2.offset)
    if os.getenv("OFFSET_DEBUG"):
        logger.debug(
            "join_line_segments: %d offset segments expanded to %d joined segments",
            len(segments),
            len(joined),
        )
    return cut_inner_angles(joined)


def cut_inner_angles(segments: Sequence[Segment]) -> List[Point]:
    """Resolve the overlaps left at inner turns into a single chain.

    Segments are copied into an arena and the surviving ones are tracked
    as a stack of arena indices.  Each incoming segment that does not
    continue from the top of the stack is tested against the kept
    segments from the top downward.  At the first proper crossing both
    segments are clipped to the crossing point and every kept segment
    above the crossing one is discarded.  An incoming segment that
    crosses nothing is dropped and the next one is tried against the same
    top.  The input is not modified.

    Returns:
        The start of the first kept segment followed by the end of every
        kept segment, or an empty list for empty input.
    """
    if not segments:
        return []

    arena: List[List[Point]] = [[seg[0], seg[1]] for seg in segments]
    kept: List[int] = [0]
    dropped = 0

    for k in range(1, len(arena)):
        incoming = arena[k]
        if points_equal(arena[kept[-1]][1], incoming[0]):
            kept.append(k)
            continue

        for pos in range(len(kept) - 1, -1, -1):
            candidate = arena[kept[pos]]
            if not intersects(candidate[0], candidate[1], incoming[0], incoming[1]):
                continue
            p = intersection(candidate[0], candidate[1], incoming[0], incoming[1])
            if p is None:
                continue
            candidate[1] = p
            incoming[0] = p
            del kept[pos + 1:]
            kept.append(k)
            break
        else:
            dropped += 1
            if os.getenv("OFFSET_DEBUG"):
                logger.debug("cut_inner_angles: no crossing for segment %d, dropped", k)

    if dropped:
        logger.info(
            "cut_inner_angles dropped %d of %d segments with no crossing; "
            "input geometry is unusual",
            dropped,
            len(arena),
        )

    points: List[Point] = [arena[kept[0]][0]]
    points.extend(arena[idx][1] for idx in kept)
    return points


def offset_polyline(
    points: Sequence[Point],
    distance: float,
    join_style: str = DEFAULT_JOIN_STYLE,
) -> List[Point]:
    """Compute the offset curve of an already simplified polyline.

    The full pipeline always runs, including for ``distance == 0`` where
    it yields the input with consecutive duplicates removed.

    Args:
        points: Ordered planar points.  Any two‑item sequences are
            accepted; they are converted to ``(x, y)`` float tuples.
        distance: Signed offset distance.
        join_style: Name of the join style used at outer turns.

    Returns:
        The offset polyline.  Empty when the input has fewer than two
        distinct points.
    """
    pts: List[Point] = [(float(p[0]), float(p[1])) for p in points]
    segments = offset_point_line(pts, distance)
    result = join_line_segments(segments, distance, join_style)
    if os.getenv("OFFSET_DEBUG"):
        logger.debug(
            "offset_polyline: distance=%s points=%d segments=%d output=%d",
            distance,
            len(pts),
            len(segments),
            len(result),
        )
    return result


def run_offset(points: Sequence[Point], options: OffsetOptions) -> OffsetResult:
    """Simplify and offset ``points`` according to ``options``.

    A falsy offset returns a copy of the input without simplifying it,
    matching a host that only offsets when an offset is configured.
    """
    pts: List[Point] = [(float(p[0]), float(p[1])) for p in points]
    if not options.offset:
        return OffsetResult(points=pts, input_count=len(pts), simplified_count=len(pts))
    simplified = simplify_polyline(pts, options.smooth_factor)
    offset = offset_polyline(simplified, options.offset, options.join_style)
    return OffsetResult(
        points=offset,
        input_count=len(pts),
        simplified_count=len(simplified),
    )


def offset_points(points: Sequence[Point], options: OffsetOptions) -> List[Point]:
    """Offset curve of ``points`` as the host draws it."""
    return run_offset(points, options).points


def offset_parts(parts: Sequence[Sequence[Point]], options: OffsetOptions) -> List[List[Point]]:
    """Offset every part of a multi‑part geometry independently."""
    return [offset_points(part, options) for part in parts]


__all__ = [
    "ARC_STEP",
    "OffsetSegment",
    "OffsetOptions",
    "OffsetResult",
    "JOIN_STYLES",
    "get_join_style",
    "offset_point_line",
    "circular_arc",
    "join_outer_angles",
    "join_line_segments",
    "cut_inner_angles",
    "offset_polyline",
    "run_offset",
    "offset_points",
    "offset_parts",
]
