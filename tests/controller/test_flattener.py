"""Flattening tests: identity for linear trees, linear output for curved ones."""
import numpy as np
import pytest

from curvedgeometry.controller.factory import CurveGeometryFactory
from curvedgeometry.controller.flattener import CurveFlattener
from curvedgeometry.model.errors import RangeError
from curvedgeometry.model.geometry_kind import GeometryKind
from curvedgeometry.model.geometry_primitives import GeometryCollection


# --- Helpers ------------------------------------------------------------------

def _semicircle(factory):
    return factory.create_arc_string([(1.0, 0.0), (0.0, 1.0), (-1.0, 0.0)])


def _disc(factory, radius=1.0, cx=0.0):
    circle = factory.create_arc_string([(cx + radius, 0.0), (cx - radius, 0.0), (cx + radius, 0.0)])
    return factory.create_curve_polygon(circle)


def _is_linear(geom):
    stack = [geom]
    while stack:
        g = stack.pop()
        if g is None:
            continue
        if g.kind.is_curved:
            return False
        if g.kind.is_collection:
            stack.extend(g.geometries)
    return True


@pytest.fixture
def flattener(factory):
    return CurveFlattener(factory)


# --- Configuration ------------------------------------------------------------

def test_resolution_defaults_to_factory():
    factory = CurveGeometryFactory(arc_segment_length=0.25)
    assert CurveFlattener(factory).arc_segment_length == 0.25


def test_explicit_resolution_overrides_factory(factory):
    assert CurveFlattener(factory, 0.1).arc_segment_length == 0.1


def test_negative_resolution_rejected(factory):
    with pytest.raises(RangeError):
        CurveFlattener(factory, -1.0)


# --- has_curved ---------------------------------------------------------------

def test_has_curved_on_linear_geometry(factory, flattener):
    line = factory.create_line_string([(0.0, 0.0), (1.0, 1.0)])
    assert not flattener.has_curved(line)


def test_has_curved_finds_deeply_nested_arc(factory, flattener):
    inner = factory.create_geometry_collection([factory.create_point((0.0, 0.0)), _semicircle(factory)])
    outer = factory.create_geometry_collection([factory.create_point((5.0, 5.0)), inner])
    assert flattener.has_curved(outer)


def test_empty_multi_curve_has_no_curved_element(factory, flattener):
    assert not flattener.has_curved(factory.create_multi_curve())


# --- Identity -----------------------------------------------------------------

def test_none_flattens_to_none(flattener):
    assert flattener.flatten(None) is None


def test_linear_polygon_returned_unchanged(factory, flattener):
    poly = factory.create_polygon([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 0.0)])
    assert flattener.flatten(poly) is poly


def test_linear_collection_returned_unchanged(factory, flattener):
    gc = factory.create_geometry_collection([
        factory.create_point((0.0, 0.0)),
        factory.create_line_string([(0.0, 0.0), (1.0, 1.0)]),
    ])
    assert flattener.flatten(gc) is gc


def test_multi_curve_of_lines_returned_unchanged(factory, flattener):
    mc = factory.create_multi_curve(
        factory.create_line_string([(0.0, 0.0), (1.0, 1.0)]),
        factory.create_line_string([(2.0, 2.0), (3.0, 3.0)]),
    )
    assert flattener.flatten(mc) is mc


# --- Curved input -------------------------------------------------------------

def test_arc_string_flattens_to_line_with_exact_ends(factory, flattener):
    arc = factory.create_arc_string([(0.3, 0.1), (1.7, 2.9), (4.1, 0.2)])
    result = flattener.flatten(arc)
    assert result.kind is GeometryKind.LINE_STRING
    assert np.array_equal(result.start_coordinate, arc.control_points[0])
    assert np.array_equal(result.end_coordinate, arc.control_points[-1])


def test_resolution_controls_vertex_count(factory):
    result = CurveFlattener(factory, 0.1).flatten(_semicircle(factory))
    assert result.num_points == 33


def test_curve_polygon_flattens_to_polygon(factory, flattener):
    result = flattener.flatten(_disc(factory))
    assert result.kind is GeometryKind.POLYGON
    assert result.shell.is_closed
    assert result.shell.num_points == 33


def test_compound_curve_flattens_to_line(factory, flattener):
    line = factory.create_line_string([(-1.0, 0.0), (1.0, 0.0)])
    curve = factory.create_compound_curve([line, factory.create_arc_string([(1.0, 0.0), (0.0, 1.0), (-1.0, 0.0)])])
    result = flattener.flatten(curve)
    assert result.kind is GeometryKind.LINE_STRING
    assert result.is_closed


def test_multi_curve_of_arcs_becomes_multi_line_string(factory, flattener):
    mc = factory.create_multi_curve(_semicircle(factory), _semicircle(factory))
    result = flattener.flatten(mc)
    assert result.kind is GeometryKind.MULTI_LINE_STRING
    assert result.num_geometries == 2


def test_mixed_multi_curve_becomes_multi_line_string(factory, flattener):
    line = factory.create_line_string([(5.0, 5.0), (6.0, 6.0)])
    result = flattener.flatten(factory.create_multi_curve(_semicircle(factory), line))
    assert result.kind is GeometryKind.MULTI_LINE_STRING
    assert result.geometry_n(1) is line


def test_multi_surface_becomes_multi_polygon(factory, flattener):
    ms = factory.create_multi_surface(_disc(factory), _disc(factory, cx=5.0))
    result = flattener.flatten(ms)
    assert result.kind is GeometryKind.MULTI_POLYGON
    assert _is_linear(result)


def test_heterogeneous_collection_keeps_order(factory, flattener):
    point = factory.create_point((9.0, 9.0))
    gc = factory.create_geometry_collection([point, _semicircle(factory)])
    result = flattener.flatten(gc)
    assert result.kind is GeometryKind.GEOMETRY_COLLECTION
    assert result.geometry_n(0) is point
    assert result.geometry_n(1).kind is GeometryKind.LINE_STRING


def test_untouched_branches_are_shared(factory, flattener):
    linear_branch = factory.create_multi_point([(0.0, 0.0), (1.0, 1.0)])
    curved_branch = factory.create_geometry_collection([_semicircle(factory), factory.create_point((3.0, 3.0))])
    gc = factory.create_geometry_collection([linear_branch, curved_branch])
    result = flattener.flatten(gc)
    assert result is not gc
    assert result.geometry_n(0) is linear_branch
    assert result.geometry_n(1) is not curved_branch
    assert _is_linear(result)


def test_nested_single_member_collapses(factory, flattener):
    gc = factory.create_geometry_collection([factory.create_geometry_collection([_semicircle(factory)])])
    result = flattener.flatten(gc)
    assert result.kind is GeometryKind.LINE_STRING


def test_null_members_survive(factory, flattener):
    gc = factory.create_geometry_collection([None, _semicircle(factory)])
    result = flattener.flatten(gc)
    assert result.kind is GeometryKind.GEOMETRY_COLLECTION
    assert result.geometry_n(0) is None
    assert result.geometry_n(1).kind is GeometryKind.LINE_STRING


def test_deep_nesting_does_not_recurse(factory, flattener):
    geom = _semicircle(factory)
    for _ in range(2000):
        geom = GeometryCollection((geom,))
    assert flattener.has_curved(geom)
    result = flattener.flatten(geom)
    assert result.kind is GeometryKind.LINE_STRING


def test_flattening_does_not_mutate_input(factory, flattener):
    arc = _semicircle(factory)
    gc = factory.create_geometry_collection([arc, factory.create_point((0.0, 0.0))])
    flattener.flatten(gc)
    assert gc.geometry_n(0) is arc
    assert arc.num_points == 3
