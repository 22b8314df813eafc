"""
Curve Flattening
================
Replaces every curved element of a geometry tree with its linear
approximation, so the tree can be handed to algorithms that only understand
straight segments.

Trees without curved elements are returned as they are; a new tree is only
allocated along the branches where curvature was found. Both the curvature
scan and the rebuild walk the tree with an explicit stack, so deeply nested
collections do not run into the interpreter recursion limit.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, TYPE_CHECKING

from curvedgeometry.model.errors import RangeError

if TYPE_CHECKING:
    from curvedgeometry.controller.factory import CurveGeometryFactory
    from curvedgeometry.model.geometry_primitives import Geometry

logger = logging.getLogger(__name__)


@dataclass
class _Frame:
    """A collection being rebuilt, and how far through its children we are."""
    node: Geometry
    index: int = 0
    children: List[Optional[Geometry]] = field(default_factory=list)


class CurveFlattener:
    """
    Converts possibly curved geometry into linear geometry.

    Args:
        factory: Factory used to reassemble rebuilt collections.
        arc_segment_length: Maximum chord length for arc tessellation. None uses the
            factory's default; 0.0 uses the default quadrant segments.
    """

    def __init__(self, factory: CurveGeometryFactory, arc_segment_length: Optional[float] = None):
        if arc_segment_length is None:
            arc_segment_length = factory.arc_segment_length
        if not arc_segment_length >= 0.0:
            raise RangeError(f"arc_segment_length must be non-negative, got {arc_segment_length}.")
        self._factory = factory
        self._arc_segment_length = arc_segment_length

    @property
    def arc_segment_length(self) -> float:
        return self._arc_segment_length

    @staticmethod
    def has_curved(geom: Geometry) -> bool:
        """True if any element of `geom`, at any depth, is curved."""
        stack = [geom]
        while stack:
            node = stack.pop()
            for i in range(node.num_geometries):
                child = node.geometry_n(i)
                if child is None:
                    continue
                if child.kind.is_collection:
                    stack.append(child)
                elif child.kind.is_curved:
                    return True
        return False

    def flatten(self, geom: Optional[Geometry]) -> Optional[Geometry]:
        """
        Flatten a possibly curved geometry.

        Args:
            geom: The geometry to flatten.

        Returns:
            `geom` itself if it has no curved elements, otherwise a new linear geometry
            whose containers are rebuilt with `CurveGeometryFactory.build_geometry`.
        """
        if geom is None or not self.has_curved(geom):
            return geom

        logger.debug(f"Flattening {geom.geometry_type} (arc_segment_length={self._arc_segment_length}).")

        stack = [_Frame(geom)]
        while True:
            frame = stack[-1]
            if frame.index < frame.node.num_geometries:
                child = frame.node.geometry_n(frame.index)
                frame.index += 1

                if child is None:
                    frame.children.append(child)
                elif child.kind.is_collection:
                    if self.has_curved(child):
                        stack.append(_Frame(child))
                    else:
                        frame.children.append(child)
                elif child.kind.is_curved:
                    frame.children.append(child.flatten(self._arc_segment_length))
                else:
                    frame.children.append(child)
                continue

            stack.pop()
            rebuilt = self._factory.build_geometry(frame.children)
            if not stack:
                return rebuilt
            stack[-1].children.append(rebuilt)
