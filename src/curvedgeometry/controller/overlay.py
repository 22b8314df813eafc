"""
Overlay Adapter (Shapely Engine)
================================
Runs boolean overlay operations on possibly curved geometry.

Why is this file needed?
------------------------
1. Adaptation: Robust overlay engines only understand straight segments. The
   adapter flattens curved operands first and then delegates.
2. Engine: `ShapelyOverlayEngine` is the default engine. It translates the
   linear primitives of this package to shapely (GEOS) geometries, runs the
   operation there and translates the result back.

Note: Overlay results are always linear. Curvature is not restored.
"""
from __future__ import annotations

import logging
from enum import IntEnum
from typing import Optional, Protocol, TYPE_CHECKING

import numpy as np
import shapely
from shapely import geometry as sg
from shapely.geometry.base import BaseGeometry

from curvedgeometry.controller.factory import CurveGeometryFactory
from curvedgeometry.controller.flattener import CurveFlattener
from curvedgeometry.model.errors import UnsupportedTypeError, ValidationError
from curvedgeometry.model.geometry_kind import GeometryKind

if TYPE_CHECKING:
    from curvedgeometry.model.geometry_primitives import Geometry

logger = logging.getLogger(__name__)


class OverlayOp(IntEnum):
    """Overlay operation codes."""
    INTERSECTION = 1
    UNION = 2
    DIFFERENCE = 3
    SYM_DIFFERENCE = 4


class OverlayEngine(Protocol):
    """A robust overlay capability over linear geometry only."""

    def overlay(self, a: Geometry, b: Geometry, op: OverlayOp) -> Geometry: ...

    def union(self, a: Geometry) -> Geometry: ...


# ------------------------------------------------------------------------------
# Shapely translation
# ------------------------------------------------------------------------------
def to_shapely(geom: Geometry) -> BaseGeometry:
    """
    Translate a linear geometry to its shapely equivalent.

    Raises:
        ValidationError: If `geom` holds a curved element or a None member.
    """
    if geom is None:
        raise ValidationError("Cannot pass a null geometry to the overlay engine", "geom")

    kind = geom.kind
    if kind.is_curved and not kind.is_collection:
        raise ValidationError(f"{geom.geometry_type} must be flattened before overlay", "geom")

    match kind:
        case GeometryKind.POINT:
            return sg.Point() if geom.is_empty else sg.Point(geom.coordinates[0])
        case GeometryKind.LINE_STRING:
            return sg.LineString() if geom.is_empty else sg.LineString(geom.coordinates)
        case GeometryKind.LINEAR_RING:
            return sg.LinearRing() if geom.is_empty else sg.LinearRing(geom.coordinates)
        case GeometryKind.POLYGON:
            if geom.is_empty:
                return sg.Polygon()
            return sg.Polygon(geom.shell.coordinates, [h.coordinates for h in geom.holes if not h.is_empty])

    parts = [to_shapely(g) for g in geom.geometries]
    if not parts:
        match kind:
            case GeometryKind.MULTI_POINT:
                return sg.MultiPoint()
            case GeometryKind.MULTI_LINE_STRING | GeometryKind.MULTI_CURVE:
                return sg.MultiLineString()
            case GeometryKind.MULTI_POLYGON | GeometryKind.MULTI_SURFACE:
                return sg.MultiPolygon()
            case _:
                return sg.GeometryCollection()

    types = {p.geom_type for p in parts}
    if types == {"Point"} and kind is GeometryKind.MULTI_POINT:
        return sg.MultiPoint(parts)
    if types <= {"LineString", "LinearRing"} and kind in (GeometryKind.MULTI_LINE_STRING, GeometryKind.MULTI_CURVE):
        return sg.MultiLineString(parts)
    if types == {"Polygon"} and kind in (GeometryKind.MULTI_POLYGON, GeometryKind.MULTI_SURFACE):
        return sg.MultiPolygon(parts)
    return sg.GeometryCollection(parts)


def from_shapely(shp: BaseGeometry, factory: CurveGeometryFactory) -> Geometry:
    """Translate a shapely geometry back into this package's primitives."""
    match shp.geom_type:
        case "Point":
            return factory.create_point() if shp.is_empty else factory.create_point((shp.x, shp.y))
        case "LineString":
            return factory.create_line_string(_coords(shp))
        case "LinearRing":
            return factory.create_linear_ring(_coords(shp))
        case "Polygon":
            if shp.is_empty:
                return factory.create_polygon()
            return factory.create_polygon(_coords(shp.exterior), [_coords(r) for r in shp.interiors])
        case "MultiPoint":
            return factory.create_multi_point([from_shapely(g, factory) for g in shp.geoms])
        case "MultiLineString":
            return factory.create_multi_line_string([from_shapely(g, factory) for g in shp.geoms])
        case "MultiPolygon":
            return factory.create_multi_polygon([from_shapely(g, factory) for g in shp.geoms])
        case "GeometryCollection":
            return factory.create_geometry_collection([from_shapely(g, factory) for g in shp.geoms])
        case _:
            raise UnsupportedTypeError(f"Unhandled shapely geometry type: {shp.geom_type}")


def _coords(shp: BaseGeometry) -> np.ndarray:
    return np.asarray(shp.coords, dtype=np.float64)


class ShapelyOverlayEngine:
    """Overlay engine backed by shapely/GEOS."""

    def __init__(self, factory: Optional[CurveGeometryFactory] = None):
        self._factory = factory or CurveGeometryFactory()

    def overlay(self, a: Geometry, b: Geometry, op: OverlayOp) -> Geometry:
        sa = to_shapely(a)
        sb = to_shapely(b)
        match OverlayOp(op):
            case OverlayOp.INTERSECTION:
                result = shapely.intersection(sa, sb)
            case OverlayOp.UNION:
                result = shapely.union(sa, sb)
            case OverlayOp.DIFFERENCE:
                result = shapely.difference(sa, sb)
            case OverlayOp.SYM_DIFFERENCE:
                result = shapely.symmetric_difference(sa, sb)
        return from_shapely(result, self._factory)

    def union(self, a: Geometry) -> Geometry:
        return from_shapely(shapely.union_all(to_shapely(a)), self._factory)


# ------------------------------------------------------------------------------
# Adapter
# ------------------------------------------------------------------------------
# Marks a union call made without a second operand
_UNARY = object()


def _require_operand(geom: Optional[Geometry], argument: str) -> None:
    if geom is None:
        raise ValidationError("Overlay operand must not be None", argument)


class CurvedGeometryOverlay:
    """
    Overlay on curved geometry by flattening before delegating to a linear engine.

    Can be used wherever an `OverlayEngine` is expected.

    Args:
        engine: The linear overlay engine. Defaults to `ShapelyOverlayEngine`.
        factory: Factory used to rebuild flattened collections. Defaults to a new factory.
        arc_segment_length: Tessellation resolution. None uses the factory's default.
    """

    def __init__(
        self,
        engine: Optional[OverlayEngine] = None,
        factory: Optional[CurveGeometryFactory] = None,
        arc_segment_length: Optional[float] = None
    ):
        self._factory = factory or CurveGeometryFactory()
        self._engine = engine or ShapelyOverlayEngine(self._factory)
        self._flattener = CurveFlattener(self._factory, arc_segment_length)

    @property
    def flattener(self) -> CurveFlattener:
        return self._flattener

    def overlay(self, a: Geometry, b: Geometry, op: OverlayOp) -> Geometry:
        """Flatten both operands and run the binary operation `op` on them."""
        op = OverlayOp(op)
        _require_operand(a, "a")
        _require_operand(b, "b")
        logger.debug(f"Overlay {op.name} of {a.geometry_type} and {b.geometry_type}.")
        return self._engine.overlay(self._flattener.flatten(a), self._flattener.flatten(b), op)

    def union(self, a: Geometry, b: Geometry | object = _UNARY) -> Geometry:
        """Unary union of `a`, or the binary union of `a` and `b` when `b` is given."""
        if b is not _UNARY:
            return self.overlay(a, b, OverlayOp.UNION)
        _require_operand(a, "a")
        logger.debug(f"Unary union of {a.geometry_type}.")
        return self._engine.union(self._flattener.flatten(a))

    def intersection(self, a: Geometry, b: Geometry) -> Geometry:
        return self.overlay(a, b, OverlayOp.INTERSECTION)

    def difference(self, a: Geometry, b: Geometry) -> Geometry:
        return self.overlay(a, b, OverlayOp.DIFFERENCE)

    def sym_difference(self, a: Geometry, b: Geometry) -> Geometry:
        return self.overlay(a, b, OverlayOp.SYM_DIFFERENCE)

    def __str__(self) -> str:
        return "CurveNG"
