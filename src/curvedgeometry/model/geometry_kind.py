"""Closed enumeration of geometry variants and their capability flags."""
from enum import StrEnum


class GeometryKind(StrEnum):
    """
    Every concrete geometry variant known to the package.

    The value is the WKT style type name. Capabilities are exposed as
    properties so that dispatch never depends on the class hierarchy.
    """
    POINT = "Point"
    LINE_STRING = "LineString"
    LINEAR_RING = "LinearRing"
    POLYGON = "Polygon"
    ARC_STRING = "CircularString"
    COMPOUND_CURVE = "CompoundCurve"
    CURVE_POLYGON = "CurvePolygon"
    MULTI_POINT = "MultiPoint"
    MULTI_LINE_STRING = "MultiLineString"
    MULTI_POLYGON = "MultiPolygon"
    MULTI_CURVE = "MultiCurve"
    MULTI_SURFACE = "MultiSurface"
    GEOMETRY_COLLECTION = "GeometryCollection"

    @property
    def is_point(self) -> bool:
        return self is GeometryKind.POINT

    @property
    def is_line(self) -> bool:
        """Straight-segment curve (line string or linear ring)."""
        return self in _LINES

    @property
    def is_polygon(self) -> bool:
        return self is GeometryKind.POLYGON

    @property
    def is_curve(self) -> bool:
        """Supports ring detection and linear approximation."""
        return self in _CURVES

    @property
    def is_surface(self) -> bool:
        return self in _SURFACES

    @property
    def is_curved(self) -> bool:
        """Carries arc curvature itself, or is a container made for curved members."""
        return self in _CURVED

    @property
    def is_collection(self) -> bool:
        return self in _COLLECTIONS


_LINES = frozenset({GeometryKind.LINE_STRING, GeometryKind.LINEAR_RING})

_CURVES = frozenset({
    GeometryKind.LINE_STRING,
    GeometryKind.LINEAR_RING,
    GeometryKind.ARC_STRING,
    GeometryKind.COMPOUND_CURVE,
})

_SURFACES = frozenset({GeometryKind.POLYGON, GeometryKind.CURVE_POLYGON})

_CURVED = frozenset({
    GeometryKind.ARC_STRING,
    GeometryKind.COMPOUND_CURVE,
    GeometryKind.CURVE_POLYGON,
    GeometryKind.MULTI_CURVE,
    GeometryKind.MULTI_SURFACE,
})

_COLLECTIONS = frozenset({
    GeometryKind.MULTI_POINT,
    GeometryKind.MULTI_LINE_STRING,
    GeometryKind.MULTI_POLYGON,
    GeometryKind.MULTI_CURVE,
    GeometryKind.MULTI_SURFACE,
    GeometryKind.GEOMETRY_COLLECTION,
})
