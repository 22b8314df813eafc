"""Circular arc helpers: circle fitting, tessellation and bounding boxes."""
from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from math import ceil, pi, hypot
import numpy as np

from curvedgeometry.config import COLLINEARITY_EPS, DEFAULT_QUADRANT_SEGMENTS

if TYPE_CHECKING:
    from numpy import typing as npt

TWO_PI = 2.0 * pi


def circle_from_points(
    p0: npt.ArrayLike,
    p1: npt.ArrayLike,
    p2: npt.ArrayLike,
    *,
    eps: float = COLLINEARITY_EPS
) -> Optional[tuple[float, float, float]]:
    """
    Compute the circle passing through three points.

    Args:
        p0: First point (x, y).
        p1: Second point (x, y).
        p2: Third point (x, y).
        eps: Relative tolerance below which the points are treated as collinear.

    Returns:
        A tuple (cx, cy, radius), or None when the points are collinear or coincident.

    Notes:
        Solves the perpendicular bisector system; the determinant
        d = 2 * (ax(by - cy) + bx(cy - ay) + cx(ay - by)) vanishes for collinear input.
        The check is relative to the squared extent of the points so it does not
        depend on the coordinate magnitude.
    """
    ax, ay = float(p0[0]), float(p0[1])
    bx, by = float(p1[0]), float(p1[1])
    cx, cy = float(p2[0]), float(p2[1])

    scale = max(hypot(bx - ax, by - ay), hypot(cx - bx, cy - by), hypot(cx - ax, cy - ay)) ** 2
    if scale == 0.0:
        return None

    d = 2.0 * (ax * (by - cy) + bx * (cy - ay) + cx * (ay - by))
    if abs(d) <= eps * scale:
        return None

    a2 = ax * ax + ay * ay
    b2 = bx * bx + by * by
    c2 = cx * cx + cy * cy
    ux = (a2 * (by - cy) + b2 * (cy - ay) + c2 * (ay - by)) / d
    uy = (a2 * (cx - bx) + b2 * (ax - cx) + c2 * (bx - ax)) / d
    return ux, uy, hypot(ax - ux, ay - uy)


def arc_geometry(
    p0: npt.ArrayLike,
    p1: npt.ArrayLike,
    p2: npt.ArrayLike,
    *,
    eps: float = COLLINEARITY_EPS
) -> Optional[tuple[float, float, float, float, float]]:
    """
    Describe the arc through three control points by center, radius and angles.

    Coincident start and end points describe a full circle whose diameter runs
    from the start point to the middle control point (counter-clockwise).

    Returns:
        A tuple (cx, cy, radius, start_angle, sweep) where a positive sweep is
        counter-clockwise, or None when the arc degenerates to a straight polyline.
    """
    x0, y0 = float(p0[0]), float(p0[1])
    x1, y1 = float(p1[0]), float(p1[1])
    x2, y2 = float(p2[0]), float(p2[1])

    if x0 == x2 and y0 == y2:
        if x0 == x1 and y0 == y1:
            return None
        cx, cy = (x0 + x1) / 2.0, (y0 + y1) / 2.0
        radius = hypot(x1 - x0, y1 - y0) / 2.0
        return cx, cy, radius, float(np.arctan2(y0 - cy, x0 - cx)), TWO_PI

    circle = circle_from_points(p0, p1, p2, eps=eps)
    if circle is None:
        return None
    cx, cy, radius = circle

    ang_s = float(np.arctan2(y0 - cy, x0 - cx))
    ang_e = float(np.arctan2(y2 - cy, x2 - cx))

    # Orientation of the control points decides the direction of travel
    orientation = (x1 - x0) * (y2 - y1) - (y1 - y0) * (x2 - x1)
    if orientation > 0:
        sweep = (ang_e - ang_s) % TWO_PI
    else:
        sweep = -((ang_s - ang_e) % TWO_PI)
    return cx, cy, radius, ang_s, sweep


def number_of_segments(
    radius: float,
    sweep: float,
    arc_segment_length: float = 0.0,
    quadrant_segments: int = DEFAULT_QUADRANT_SEGMENTS
) -> int:
    """
    Number of chords used to approximate an arc.

    Args:
        radius: Arc radius.
        sweep: Swept angle in radians (sign ignored).
        arc_segment_length: Maximum chord length; 0.0 derives the count from `quadrant_segments`.
        quadrant_segments: Chords per quarter circle when `arc_segment_length` is 0.0.

    Returns:
        The chord count, at least 2.
    """
    if arc_segment_length > 0.0:
        n = ceil(radius * abs(sweep) / arc_segment_length)
    else:
        n = ceil(abs(sweep) / (pi / 2.0) * quadrant_segments)
    return max(2, n)


def arc_to_polyline(
    p0: npt.ArrayLike,
    p1: npt.ArrayLike,
    p2: npt.ArrayLike,
    arc_segment_length: float = 0.0,
    *,
    quadrant_segments: int = DEFAULT_QUADRANT_SEGMENTS,
    eps: float = COLLINEARITY_EPS
) -> npt.NDArray[np.float64]:
    """
    Generate points along the circular arc defined by three control points.

    Args:
        p0: Start point (x, y).
        p1: Any point on the arc between start and end.
        p2: End point (x, y).
        arc_segment_length: Maximum chord length; 0.0 uses `quadrant_segments`.
        quadrant_segments: Chords per quarter circle.
        eps: Collinearity tolerance.

    Returns:
        Array of shape (n, 2). The first and last rows are exactly `p0` and `p2`.
        Collinear control points are returned unchanged as a straight polyline.
    """
    controls = np.array([p0, p1, p2], dtype=np.float64)[:, :2]

    arc = arc_geometry(controls[0], controls[1], controls[2], eps=eps)
    if arc is None:
        return controls

    cx, cy, radius, ang_s, sweep = arc
    n = number_of_segments(radius, sweep, arc_segment_length, quadrant_segments)

    angles = ang_s + sweep * np.linspace(0.0, 1.0, n + 1)
    pts = np.column_stack((cx + radius * np.cos(angles), cy + radius * np.sin(angles)))

    # Pin the ends so that joints and ring closure survive the round trip through cos/sin
    pts[0] = controls[0]
    pts[-1] = controls[2]
    return pts


def arc_bounds(
    p0: npt.ArrayLike,
    p1: npt.ArrayLike,
    p2: npt.ArrayLike,
    *,
    eps: float = COLLINEARITY_EPS
) -> tuple[float, float, float, float]:
    """
    Exact axis-aligned bounds of an arc, including any axis extremes it passes.

    Returns:
        (min_x, min_y, max_x, max_y)
    """
    controls = np.array([p0, p1, p2], dtype=np.float64)[:, :2]
    pts = [controls[0], controls[2]]

    arc = arc_geometry(controls[0], controls[1], controls[2], eps=eps)
    if arc is None:
        pts.append(controls[1])
    else:
        cx, cy, radius, ang_s, sweep = arc
        for k in range(4):
            theta = k * pi / 2.0
            if sweep >= 0:
                offset = (theta - ang_s) % TWO_PI
            else:
                offset = (ang_s - theta) % TWO_PI
            if offset <= abs(sweep):
                pts.append(np.array([cx + radius * np.cos(theta), cy + radius * np.sin(theta)]))

    stacked = np.vstack(pts)
    mins = stacked.min(axis=0)
    maxs = stacked.max(axis=0)
    return float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1])
