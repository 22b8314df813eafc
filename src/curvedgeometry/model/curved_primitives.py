"""
Curved Geometry Primitives.

Circular arc strings, compound curves, curve polygons and the multi-geometries
that hold them. Each curved variant knows how to flatten itself into the
linear primitives of `geometry_primitives`.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from functools import cached_property
from typing import ClassVar, Optional, Union, TYPE_CHECKING
import numpy as np

from curvedgeometry.config import DEFAULT_ARC_SEGMENT_LENGTH
from curvedgeometry.model.geometry_kind import GeometryKind
from curvedgeometry.model.geometry_primitives import (
    Envelope, Geometry, GeometryCollection, LinearRing, LineString, MultiLineString,
    MultiPolygon, Point, Polygon, as_coordinates,
)
from curvedgeometry.model.geometry_utils import arc_bounds, arc_to_polyline

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True, eq=False)
class ArcString(Geometry):
    """
    A sequence of circular arcs. Arc `i` runs through control points
    2i, 2i + 1 and 2i + 2, so consecutive arcs share an end point.
    """
    control_points: npt.NDArray[np.float64] = None

    kind: ClassVar[GeometryKind] = GeometryKind.ARC_STRING

    def __post_init__(self) -> None:
        object.__setattr__(self, "control_points", as_coordinates(self.control_points))

    @property
    def is_empty(self) -> bool:
        return len(self.control_points) == 0

    @property
    def num_points(self) -> int:
        return len(self.control_points)

    @property
    def num_arcs(self) -> int:
        return max(0, (self.num_points - 1) // 2)

    def arc_n(self, n: int) -> npt.NDArray[np.float64]:
        """The three control points of arc `n` as a (3, 2) array."""
        if not 0 <= n < self.num_arcs:
            raise IndexError(f"Arc index {n} out of range ({self.num_arcs} arcs).")
        return self.control_points[2 * n:2 * n + 3]

    @property
    def start_coordinate(self) -> Optional[npt.NDArray[np.float64]]:
        return None if self.is_empty else self.control_points[0]

    @property
    def end_coordinate(self) -> Optional[npt.NDArray[np.float64]]:
        return None if self.is_empty else self.control_points[-1]

    @property
    def start_point(self) -> Point:
        return Point(self.control_points[:1])

    @property
    def end_point(self) -> Point:
        return Point(self.control_points[-1:])

    @property
    def is_closed(self) -> bool:
        if self.is_empty:
            return False
        return bool(np.array_equal(self.control_points[0], self.control_points[-1]))

    @property
    def is_ring(self) -> bool:
        return self.is_empty or self.is_closed

    @cached_property
    def envelope(self) -> Envelope:
        env = Envelope()
        for i in range(self.num_arcs):
            env = env.expand_to_include(Envelope(*arc_bounds(*self.arc_n(i))))
        return env

    def flatten(self, arc_segment_length: float = DEFAULT_ARC_SEGMENT_LENGTH) -> LineString:
        """Approximate the arcs by a line string through the tessellated arc points."""
        if self.is_empty:
            return LineString()

        parts = []
        for i in range(self.num_arcs):
            pts = arc_to_polyline(*self.arc_n(i), arc_segment_length)
            # Shared end point of the previous arc is already present
            parts.append(pts if i == 0 else pts[1:])
        return LineString(np.vstack(parts))


Segment = Union[LineString, ArcString]


@dataclass(frozen=True, eq=False)
class CompoundCurve(Geometry):
    """A continuous chain of line strings and arc strings."""
    segments: tuple[Segment, ...] = ()

    kind: ClassVar[GeometryKind] = GeometryKind.COMPOUND_CURVE

    def __post_init__(self) -> None:
        object.__setattr__(self, "segments", tuple(self.segments))

    @property
    def is_empty(self) -> bool:
        return all(s.is_empty for s in self.segments)

    @property
    def num_segments(self) -> int:
        return len(self.segments)

    @property
    def start_coordinate(self) -> Optional[npt.NDArray[np.float64]]:
        return None if self.is_empty else self.segments[0].start_coordinate

    @property
    def end_coordinate(self) -> Optional[npt.NDArray[np.float64]]:
        return None if self.is_empty else self.segments[-1].end_coordinate

    @property
    def start_point(self) -> Point:
        return Point(None if self.is_empty else [self.start_coordinate])

    @property
    def end_point(self) -> Point:
        return Point(None if self.is_empty else [self.end_coordinate])

    @property
    def is_closed(self) -> bool:
        if self.is_empty:
            return False
        return bool(np.array_equal(self.start_coordinate, self.end_coordinate))

    @property
    def is_ring(self) -> bool:
        return self.is_empty or self.is_closed

    @cached_property
    def envelope(self) -> Envelope:
        env = Envelope()
        for segment in self.segments:
            env = env.expand_to_include(segment.envelope)
        return env

    def flatten(self, arc_segment_length: float = DEFAULT_ARC_SEGMENT_LENGTH) -> LineString:
        """Concatenate the linear approximation of every segment into one line string."""
        if self.is_empty:
            return LineString()

        parts = []
        for i, segment in enumerate(self.segments):
            if segment.kind.is_curved:
                pts = segment.flatten(arc_segment_length).coordinates
            else:
                pts = segment.coordinates
            # Joints coincide within tolerance; keep the earlier segment's end
            parts.append(pts if i == 0 else pts[1:])
        return LineString(np.vstack(parts))


def _flatten_ring(ring: Geometry, arc_segment_length: float) -> LinearRing:
    if ring.kind is GeometryKind.LINEAR_RING:
        return ring
    if ring.kind.is_curved:
        return LinearRing(ring.flatten(arc_segment_length).coordinates)
    return LinearRing(ring.coordinates)


@dataclass(frozen=True, eq=False)
class CurvePolygon(Geometry):
    """A surface bounded by curve rings: one exterior and any number of interiors."""
    exterior: Geometry = field(default_factory=LinearRing)
    interiors: tuple[Geometry, ...] = ()

    kind: ClassVar[GeometryKind] = GeometryKind.CURVE_POLYGON

    def __post_init__(self) -> None:
        object.__setattr__(self, "interiors", tuple(self.interiors))

    @property
    def is_empty(self) -> bool:
        return self.exterior.is_empty

    @property
    def num_interior_rings(self) -> int:
        return len(self.interiors)

    def interior_ring_n(self, n: int) -> Geometry:
        return self.interiors[n]

    @property
    def envelope(self) -> Envelope:
        return self.exterior.envelope

    def flatten(self, arc_segment_length: float = DEFAULT_ARC_SEGMENT_LENGTH) -> Polygon:
        if self.is_empty:
            return Polygon()
        return Polygon(
            shell=_flatten_ring(self.exterior, arc_segment_length),
            holes=tuple(_flatten_ring(r, arc_segment_length) for r in self.interiors if not r.is_empty),
        )


@dataclass(frozen=True, eq=False)
class MultiCurve(GeometryCollection):
    """A collection of curves, straight or curved."""
    kind: ClassVar[GeometryKind] = GeometryKind.MULTI_CURVE

    def flatten(self, arc_segment_length: float = DEFAULT_ARC_SEGMENT_LENGTH) -> MultiLineString:
        return MultiLineString(tuple(
            g.flatten(arc_segment_length) if g is not None and g.kind.is_curved else g
            for g in self.geometries
        ))


@dataclass(frozen=True, eq=False)
class MultiSurface(GeometryCollection):
    """A collection of surfaces, straight or curved."""
    kind: ClassVar[GeometryKind] = GeometryKind.MULTI_SURFACE

    def flatten(self, arc_segment_length: float = DEFAULT_ARC_SEGMENT_LENGTH) -> MultiPolygon:
        return MultiPolygon(tuple(
            g.flatten(arc_segment_length) if g is not None and g.kind.is_curved else g
            for g in self.geometries
        ))
