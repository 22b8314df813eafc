"""Curved geometry construction, validation and flattening."""
import logging

from curvedgeometry.controller.factory import CurveGeometryFactory
from curvedgeometry.controller.flattener import CurveFlattener
from curvedgeometry.controller.overlay import (
    CurvedGeometryOverlay, OverlayEngine, OverlayOp, ShapelyOverlayEngine,
)
from curvedgeometry.logging_config import setup_logging
from curvedgeometry.model.curved_primitives import (
    ArcString, CompoundCurve, CurvePolygon, MultiCurve, MultiSurface,
)
from curvedgeometry.model.errors import (
    CurveGeometryError, RangeError, UnsupportedTypeError, ValidationError,
)
from curvedgeometry.model.geometry_kind import GeometryKind
from curvedgeometry.model.geometry_primitives import (
    Envelope, Geometry, GeometryCollection, LinearRing, LineString, MultiLineString,
    MultiPoint, MultiPolygon, Point, Polygon,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ArcString",
    "CompoundCurve",
    "CurveFlattener",
    "CurveGeometryError",
    "CurveGeometryFactory",
    "CurvePolygon",
    "CurvedGeometryOverlay",
    "Envelope",
    "Geometry",
    "GeometryCollection",
    "GeometryKind",
    "LineString",
    "LinearRing",
    "MultiCurve",
    "MultiLineString",
    "MultiPoint",
    "MultiPolygon",
    "MultiSurface",
    "OverlayEngine",
    "OverlayOp",
    "Point",
    "Polygon",
    "RangeError",
    "ShapelyOverlayEngine",
    "UnsupportedTypeError",
    "ValidationError",
    "setup_logging",
]
