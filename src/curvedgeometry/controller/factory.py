"""
Curve Geometry Factory
======================
Validated construction of linear and curved geometries.

Why is this file needed?
------------------------
1. Validation: Every structural invariant (control point counts, segment
   continuity, ring closure, ring containment) is checked here, before the
   immutable geometry object is created. A failed check raises and nothing
   is built.
2. Aggregation: `build_geometry` shapes an arbitrary list of geometries into
   the narrowest container that can hold it (single value, homogeneous
   multi-geometry or generic collection).

Note: The factory holds only read-only configuration and can be shared freely.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, TYPE_CHECKING

import numpy as np

from curvedgeometry.config import CONTINUITY_TOLERANCE, DEFAULT_ARC_SEGMENT_LENGTH, DEFAULT_SRID
from curvedgeometry.model.curved_primitives import (
    ArcString, CompoundCurve, CurvePolygon, MultiCurve, MultiSurface,
)
from curvedgeometry.model.errors import RangeError, UnsupportedTypeError, ValidationError
from curvedgeometry.model.geometry_kind import GeometryKind
from curvedgeometry.model.geometry_primitives import (
    Geometry, GeometryCollection, LinearRing, LineString, MultiLineString, MultiPoint,
    MultiPolygon, Point, Polygon, as_coordinates,
)

if TYPE_CHECKING:
    from curvedgeometry.model.geometry_primitives import CoordinatesLike

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurveGeometryFactory:
    """
    Builds geometries from raw coordinates and validates them on the way.

    Attributes:
        srid: Spatial reference identifier of the geometries built by this factory.
        arc_segment_length: Default maximum chord length used when curved geometry is
            flattened. 0.0 derives the chord count from the default quadrant segments.
    """
    srid: int = DEFAULT_SRID
    arc_segment_length: float = DEFAULT_ARC_SEGMENT_LENGTH

    def __post_init__(self) -> None:
        # Written this way round so that NaN is rejected too
        if not self.arc_segment_length >= 0.0:
            raise RangeError(f"arc_segment_length must be non-negative, got {self.arc_segment_length}.")

    # ------------------------------------------------------------------------------
    # Linear geometry
    # ------------------------------------------------------------------------------
    def create_point(self, coordinate: Optional[Sequence[float]] = None) -> Point:
        if coordinate is None:
            return Point()
        coordinates = as_coordinates([coordinate])
        return Point(coordinates)

    def create_line_string(self, points: CoordinatesLike = None) -> LineString:
        coordinates = as_coordinates(points)
        if len(coordinates) == 1:
            raise ValidationError(
                "Invalid number of points in LineString (found 1 - must be 0 or >= 2)", "points")
        return LineString(coordinates)

    def create_linear_ring(self, points: CoordinatesLike = None) -> LinearRing:
        coordinates = as_coordinates(points)
        if 0 < len(coordinates) < 3:
            raise ValidationError(
                f"Invalid number of points in LinearRing (found {len(coordinates)} - must be 0 or >= 3)",
                "points")
        if len(coordinates) and not np.array_equal(coordinates[0], coordinates[-1]):
            raise ValidationError("Points of LinearRing do not form a closed linestring", "points")
        return LinearRing(coordinates)

    def create_polygon(
        self,
        shell: Optional[LinearRing | CoordinatesLike] = None,
        holes: Optional[Sequence[LinearRing | CoordinatesLike]] = None
    ) -> Polygon:
        shell = self._as_linear_ring(shell)
        holes = tuple(self._as_linear_ring(h) for h in (() if holes is None else holes))
        if shell.is_empty and any(not h.is_empty for h in holes):
            raise ValidationError("Shell is empty but holes are not", "holes")
        return Polygon(shell, holes)

    def create_multi_point(self, points: Optional[Sequence[Point | Sequence[float]]] = None) -> MultiPoint:
        return MultiPoint(tuple(
            p if isinstance(p, Point) else self.create_point(p) for p in (() if points is None else points)
        ))

    def create_multi_line_string(self, lines: Optional[Sequence[LineString]] = None) -> MultiLineString:
        return MultiLineString(tuple(() if lines is None else lines))

    def create_multi_polygon(self, polygons: Optional[Sequence[Polygon]] = None) -> MultiPolygon:
        return MultiPolygon(tuple(() if polygons is None else polygons))

    def create_geometry_collection(
        self,
        geometries: Optional[Sequence[Optional[Geometry]]] = None
    ) -> GeometryCollection:
        return GeometryCollection(tuple(() if geometries is None else geometries))

    def _as_linear_ring(self, ring: Optional[LinearRing | CoordinatesLike]) -> LinearRing:
        if isinstance(ring, LinearRing):
            return ring
        return self.create_linear_ring(ring)

    # ------------------------------------------------------------------------------
    # Curved geometry
    # ------------------------------------------------------------------------------
    def create_arc_string(self, points: CoordinatesLike = None) -> ArcString:
        """
        Create an arc string from its control points.

        Args:
            points: The control points. None or an empty sequence yields an empty arc string.

        Raises:
            ValidationError: If the count is not 0 and not an odd number >= 3.

        Returns:
            An ArcString.
        """
        coordinates = as_coordinates(points)
        n = len(coordinates)
        if n > 0 and (n < 3 or (n - 1) % 2 != 0):
            raise ValidationError(f"Invalid number of control points: {n}", "points")
        return ArcString(coordinates)

    def create_compound_curve(self, segments: Optional[Sequence[LineString | ArcString]] = None) -> CompoundCurve:
        """
        Create a compound curve sewn together from line strings and arc strings.

        Args:
            segments: Non-empty segments in travel order. None yields an empty compound curve.

        Raises:
            ValidationError: If a segment is None, empty, of another kind, or does not
                start where the previous one ended (within CONTINUITY_TOLERANCE).

        Returns:
            A CompoundCurve.
        """
        segments = tuple(() if segments is None else segments)

        last = None
        for i, segment in enumerate(segments):
            if segment is None or (isinstance(segment, Geometry) and segment.is_empty):
                raise ValidationError(f"Contains null or empty geometry at index {i}!", "segments")

            if not isinstance(segment, Geometry) or not (segment.kind.is_line or segment.kind is GeometryKind.ARC_STRING):
                raise ValidationError(
                    f"Contains geometry of invalid type: {getattr(segment, 'geometry_type', type(segment).__name__)}!",
                    "segments")

            if last is not None:
                gap = float(np.hypot(*(segment.start_coordinate - last)))
                if gap > CONTINUITY_TOLERANCE:
                    raise ValidationError(
                        f"Geometries are not in a sequence (gap of {gap:g} before segment {i})", "segments")

            last = segment.end_coordinate

        return CompoundCurve(segments)

    def create_curve_polygon(
        self,
        exterior: Optional[Geometry] = None,
        interiors: Optional[Sequence[Geometry]] = None
    ) -> CurvePolygon:
        """
        Create a curve polygon from an exterior ring and optional interior rings.

        Args:
            exterior: Any ring forming curve. None yields an empty exterior ring.
            interiors: Ring forming curves inside the exterior. None means no interiors.

        Raises:
            ValidationError: If a ring is not a curve or not closed, if an interior ring
                is not contained by the exterior's envelope, or if the exterior is empty
                while an interior ring is not.

        Returns:
            A CurvePolygon.
        """
        if exterior is None:
            exterior = self.create_linear_ring()

        if not isinstance(exterior, Geometry) or not exterior.kind.is_curve:
            raise ValidationError("exterior is not a curve", "exterior")
        if not exterior.is_ring:
            raise ValidationError("exterior does not form a valid ring", "exterior")

        interiors = tuple(() if interiors is None else interiors)

        ext_env = exterior.envelope
        for i, ring in enumerate(interiors):
            if not isinstance(ring, Geometry) or not ring.kind.is_curve:
                raise ValidationError(f"interiors[{i}] is not a curve", "interiors")
            if not ring.is_ring:
                raise ValidationError(f"interiors[{i}] does not form a valid ring", "interiors")
            if ring.is_empty:
                continue
            if exterior.is_empty:
                raise ValidationError("exterior is empty but interiors are not", "interiors")
            if not ext_env.contains(ring.envelope):
                raise ValidationError(f"interiors[{i}] not contained by exterior ring", "interiors")

        return CurvePolygon(exterior, interiors)

    def create_multi_curve(self, *geometries: Geometry) -> MultiCurve:
        # Elements are not checked for the curve capability
        if geometries == (None,):
            geometries = ()
        return MultiCurve(geometries)

    def create_multi_surface(self, *geometries: Geometry) -> MultiSurface:
        # Elements are not checked for the surface capability
        if geometries == (None,):
            geometries = ()
        return MultiSurface(geometries)

    # ------------------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------------------
    def build_geometry(self, geometries: Iterable[Optional[Geometry]]) -> Geometry:
        """
        Build the narrowest geometry that holds all of `geometries`.

        - No non-null geometry: an empty GeometryCollection.
        - A single geometry: that geometry itself.
        - Geometries of one kind, or all curves, or all surfaces: the matching
          multi-geometry (MultiPolygon, MultiSurface, MultiLineString, MultiCurve, MultiPoint).
        - Anything else (mixed kinds, nested collections, None entries): a
          GeometryCollection holding the input as given.

        Raises:
            UnsupportedTypeError: If no multi-geometry exists for a homogeneous kind.
        """
        geoms = list(geometries)

        geom0: Optional[Geometry] = None
        is_heterogeneous = False
        has_collection = False
        has_null = False
        num_non_null = num_curve = num_surface = 0
        for geom in geoms:
            if geom is None:
                has_null = True
                continue
            num_non_null += 1
            if geom0 is None:
                geom0 = geom
            elif geom.kind is not geom0.kind:
                is_heterogeneous = True
            if geom.kind.is_collection:
                has_collection = True
            if geom.kind.is_surface:
                num_surface += 1
            if geom.kind.is_curve:
                num_curve += 1

        if geom0 is None:
            return self.create_geometry_collection()

        # A mix of curve (or surface) variants still aggregates into one multi-geometry
        if is_heterogeneous and num_non_null in (num_curve, num_surface):
            is_heterogeneous = False

        if is_heterogeneous or has_collection or has_null:
            logger.debug(f"Building GeometryCollection from {len(geoms)} geometries.")
            return self.create_geometry_collection(geoms)

        if len(geoms) == 1:
            return geom0

        kind0 = geom0.kind
        if all(g.kind.is_polygon for g in geoms):
            return self.create_multi_polygon(geoms)
        if kind0.is_surface:
            return self.create_multi_surface(*geoms)
        if all(g.kind.is_line for g in geoms):
            return self.create_multi_line_string(geoms)
        if kind0.is_curve:
            return self.create_multi_curve(*geoms)
        if kind0.is_point:
            return self.create_multi_point(geoms)

        logger.error(f"No multi-geometry registered for kind '{kind0}'.")
        raise UnsupportedTypeError(f"Unhandled geometry kind: {kind0}")
