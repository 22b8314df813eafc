"""Aggregation tests: shaping a list of geometries into the narrowest container."""
from types import SimpleNamespace

import pytest

from curvedgeometry.model.errors import UnsupportedTypeError
from curvedgeometry.model.geometry_kind import GeometryKind
from curvedgeometry.model.geometry_primitives import Envelope, Geometry


# --- Helpers ------------------------------------------------------------------

def _point(factory, x=0.0, y=0.0):
    return factory.create_point((x, y))


def _line(factory, offset=0.0):
    return factory.create_line_string([(offset, 0.0), (offset + 1.0, 1.0)])


def _arc(factory, offset=0.0):
    return factory.create_arc_string([(offset, 0.0), (offset + 1.0, 1.0), (offset + 2.0, 0.0)])


def _polygon(factory, offset=0.0):
    return factory.create_polygon([(offset, 0.0), (offset + 1.0, 0.0), (offset + 1.0, 1.0), (offset, 0.0)])


def _curve_polygon(factory):
    return factory.create_curve_polygon(factory.create_arc_string([(1.0, 0.0), (-1.0, 0.0), (1.0, 0.0)]))


class _Opaque(Geometry):
    """A geometry whose kind has none of the known capabilities."""
    kind = SimpleNamespace(
        is_point=False, is_line=False, is_polygon=False,
        is_curve=False, is_surface=False, is_curved=False, is_collection=False,
    )
    is_empty = False
    envelope = Envelope()


# --- Empty and single inputs --------------------------------------------------

def test_empty_list_gives_empty_collection(factory):
    result = factory.build_geometry([])
    assert result.kind is GeometryKind.GEOMETRY_COLLECTION
    assert result.num_geometries == 0


def test_only_nulls_gives_empty_collection(factory):
    result = factory.build_geometry([None, None])
    assert result.kind is GeometryKind.GEOMETRY_COLLECTION
    assert result.num_geometries == 0


def test_single_point_is_returned_by_reference(factory):
    p = _point(factory)
    assert factory.build_geometry([p]) is p


def test_single_arc_is_returned_by_reference(factory):
    arc = _arc(factory)
    assert factory.build_geometry([arc]) is arc


def test_accepts_any_iterable(factory):
    points = (_point(factory, x) for x in range(3))
    result = factory.build_geometry(points)
    assert result.kind is GeometryKind.MULTI_POINT
    assert result.num_geometries == 3


# --- Homogeneous inputs -------------------------------------------------------

def test_two_points_give_multi_point_in_order(factory):
    p1 = _point(factory, 1.0)
    p2 = _point(factory, 2.0)
    result = factory.build_geometry([p1, p2])
    assert result.kind is GeometryKind.MULTI_POINT
    assert result.geometries == (p1, p2)


def test_polygons_give_multi_polygon(factory):
    result = factory.build_geometry([_polygon(factory), _polygon(factory, 5.0)])
    assert result.kind is GeometryKind.MULTI_POLYGON


def test_lines_give_multi_line_string(factory):
    result = factory.build_geometry([_line(factory), _line(factory, 3.0)])
    assert result.kind is GeometryKind.MULTI_LINE_STRING


def test_arcs_give_multi_curve(factory):
    result = factory.build_geometry([_arc(factory), _arc(factory, 5.0)])
    assert result.kind is GeometryKind.MULTI_CURVE


def test_curve_polygons_give_multi_surface(factory):
    result = factory.build_geometry([_curve_polygon(factory), _curve_polygon(factory)])
    assert result.kind is GeometryKind.MULTI_SURFACE


# --- Mixed curve / surface inputs ---------------------------------------------

def test_line_and_arc_give_multi_curve(factory):
    line = _line(factory)
    arc = _arc(factory, 3.0)
    result = factory.build_geometry([line, arc])
    assert result.kind is GeometryKind.MULTI_CURVE
    assert result.geometries == (line, arc)


def test_line_and_ring_give_multi_line_string(factory):
    ring = factory.create_linear_ring([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 0.0)])
    result = factory.build_geometry([_line(factory), ring])
    assert result.kind is GeometryKind.MULTI_LINE_STRING


def test_polygon_and_curve_polygon_give_multi_surface(factory):
    result = factory.build_geometry([_polygon(factory), _curve_polygon(factory)])
    assert result.kind is GeometryKind.MULTI_SURFACE


# --- Heterogeneous inputs -----------------------------------------------------

def test_polygon_and_point_give_collection_in_order(factory):
    poly = _polygon(factory)
    p = _point(factory)
    result = factory.build_geometry([poly, p])
    assert result.kind is GeometryKind.GEOMETRY_COLLECTION
    assert result.geometries == (poly, p)


def test_curve_and_surface_give_collection(factory):
    result = factory.build_geometry([_arc(factory), _curve_polygon(factory)])
    assert result.kind is GeometryKind.GEOMETRY_COLLECTION


def test_nested_collection_is_not_unwrapped(factory):
    mp = factory.create_multi_point([(0.0, 0.0), (1.0, 1.0)])
    mp2 = factory.create_multi_point([(2.0, 2.0)])
    result = factory.build_geometry([mp, mp2])
    assert result.kind is GeometryKind.GEOMETRY_COLLECTION
    assert result.geometries == (mp, mp2)


def test_single_nested_collection_is_wrapped(factory):
    mp = factory.create_multi_point([(0.0, 0.0)])
    result = factory.build_geometry([mp])
    assert result.kind is GeometryKind.GEOMETRY_COLLECTION
    assert result.geometry_n(0) is mp


def test_nulls_are_kept_verbatim(factory):
    p1 = _point(factory)
    p2 = _point(factory, 1.0)
    result = factory.build_geometry([p1, None, p2])
    assert result.kind is GeometryKind.GEOMETRY_COLLECTION
    assert result.geometries == (p1, None, p2)


# --- Capability gaps ----------------------------------------------------------

def test_unknown_kind_is_unsupported(factory):
    with pytest.raises(UnsupportedTypeError):
        factory.build_geometry([_Opaque(), _Opaque()])


def test_single_unknown_kind_passes_through(factory):
    g = _Opaque()
    assert factory.build_geometry([g]) is g
