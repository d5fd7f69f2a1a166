"""
Tests for the open polyline simplifier applied before offsetting.

The simplifier uses a radial distance pass followed by
Ramer–Douglas–Peucker with the smoothing factor as tolerance.  These
helpers operate on pure Python data structures and do not depend on
any external libraries.
"""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from app.services.simplify import reduce_radial, simplify_polyline


def test_near_linear_polyline_collapses_to_endpoints() -> None:
    """Small deviations from a straight line are removed."""
    points = [
        (0.0, 0.0),
        (1.0, 0.05),
        (2.0, -0.04),
        (3.0, 0.02),
        (4.0, 0.0),
    ]
    assert simplify_polyline(points, 0.1) == [(0.0, 0.0), (4.0, 0.0)]


def test_corners_beyond_tolerance_are_kept() -> None:
    points = [(0.0, 0.0), (5.0, 0.0), (5.0, 5.0), (10.0, 5.0)]
    assert simplify_polyline(points, 0.5) == points


def test_zero_tolerance_returns_a_copy() -> None:
    points = [(0.0, 0.0), (1.0, 0.01), (2.0, 0.0)]
    simplified = simplify_polyline(points, 0.0)
    assert simplified == points
    assert simplified is not points


def test_short_polylines_are_untouched() -> None:
    assert simplify_polyline([], 1.0) == []
    assert simplify_polyline([(1.0, 1.0), (2.0, 2.0)], 10.0) == [(1.0, 1.0), (2.0, 2.0)]


def test_reduce_radial_keeps_endpoints() -> None:
    """Clustered points are dropped but the last point always survives."""
    points = [(0.0, 0.0), (0.1, 0.0), (0.2, 0.0), (3.0, 0.0), (3.05, 0.0)]
    assert reduce_radial(points, 1.0) == [(0.0, 0.0), (3.0, 0.0), (3.05, 0.0)]


def test_long_zigzag_does_not_recurse() -> None:
    """More significant vertices than the recursion limit are handled."""
    points = [(float(i), float(i % 2) * 10.0) for i in range(1500)]
    assert simplify_polyline(points, 1.0) == points
