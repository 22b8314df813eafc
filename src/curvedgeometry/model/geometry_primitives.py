"""
Linear Geometry Primitives.

Immutable points, line strings, rings, polygons and their collections. The
curved variants in `curved_primitives` are built on top of these.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from functools import cached_property
from typing import ClassVar, Iterator, Optional, Sequence, Union, TYPE_CHECKING
import math
import numpy as np

from curvedgeometry.model.errors import ValidationError
from curvedgeometry.model.geometry_kind import GeometryKind

if TYPE_CHECKING:
    import numpy.typing as npt


CoordinatesLike = Union["npt.ArrayLike", Sequence["Point"], None]


def as_coordinates(points: CoordinatesLike) -> npt.NDArray[np.float64]:
    """
    Convert input points to a read-only (N, 2) float array.

    Accepts None, an array of shape (N, >=2), a sequence of (x, y) pairs or a
    sequence of non-empty Point geometries. Extra ordinates (z, m) are dropped.
    """
    if isinstance(points, np.ndarray) and points.dtype == np.float64 \
            and points.ndim == 2 and points.shape[1] == 2 and not points.flags.writeable:
        return points

    if points is None:
        arr = np.empty((0, 2), dtype=np.float64)
    else:
        if not isinstance(points, np.ndarray):
            points = [(p.x, p.y) if isinstance(p, Point) else p for p in points]
        arr = np.asarray(points, dtype=np.float64)
        if arr.size == 0:
            arr = np.empty((0, 2), dtype=np.float64)

    if arr.ndim != 2 or arr.shape[1] < 2:
        raise ValidationError(f"Expected coordinates of shape (N, 2), got {arr.shape}.", "points")

    arr = np.array(arr[:, :2], dtype=np.float64)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True)
class Envelope:
    """
    Axis-aligned bounding box. The default instance is the null envelope of an
    empty geometry.
    """
    min_x: float = math.inf
    min_y: float = math.inf
    max_x: float = -math.inf
    max_y: float = -math.inf

    @classmethod
    def from_coordinates(cls, coordinates: npt.NDArray[np.float64]) -> Envelope:
        if len(coordinates) == 0:
            return cls()
        mins = coordinates.min(axis=0)
        maxs = coordinates.max(axis=0)
        return cls(float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1]))

    @property
    def is_null(self) -> bool:
        return self.min_x > self.max_x

    @property
    def width(self) -> float:
        return 0.0 if self.is_null else self.max_x - self.min_x

    @property
    def height(self) -> float:
        return 0.0 if self.is_null else self.max_y - self.min_y

    def contains(self, other: Envelope) -> bool:
        """True if `other` lies inside this envelope (boundary inclusive). Null envelopes never qualify."""
        if self.is_null or other.is_null:
            return False
        return (other.min_x >= self.min_x and other.max_x <= self.max_x
                and other.min_y >= self.min_y and other.max_y <= self.max_y)

    def expand_to_include(self, other: Envelope) -> Envelope:
        if other.is_null:
            return self
        if self.is_null:
            return other
        return Envelope(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )


class Geometry(ABC):
    """Common interface of every geometry variant."""
    kind: ClassVar[GeometryKind]

    @property
    def geometry_type(self) -> str:
        return self.kind.value

    @property
    @abstractmethod
    def is_empty(self) -> bool:
        ...

    @property
    @abstractmethod
    def envelope(self) -> Envelope:
        ...

    @property
    def num_geometries(self) -> int:
        return 1

    def geometry_n(self, n: int) -> Optional[Geometry]:
        if n != 0:
            raise IndexError(f"Geometry index {n} out of range for {self.geometry_type}.")
        return self


@dataclass(frozen=True, eq=False)
class Point(Geometry):
    """A single position, or the empty point."""
    coordinates: npt.NDArray[np.float64] = None

    kind: ClassVar[GeometryKind] = GeometryKind.POINT

    def __post_init__(self) -> None:
        object.__setattr__(self, "coordinates", as_coordinates(self.coordinates))

    @property
    def is_empty(self) -> bool:
        return len(self.coordinates) == 0

    @property
    def x(self) -> float:
        return float(self.coordinates[0, 0]) if not self.is_empty else math.nan

    @property
    def y(self) -> float:
        return float(self.coordinates[0, 1]) if not self.is_empty else math.nan

    @cached_property
    def envelope(self) -> Envelope:
        return Envelope.from_coordinates(self.coordinates)


@dataclass(frozen=True, eq=False)
class LineString(Geometry):
    """A polyline of straight segments."""
    coordinates: npt.NDArray[np.float64] = None

    kind: ClassVar[GeometryKind] = GeometryKind.LINE_STRING

    def __post_init__(self) -> None:
        object.__setattr__(self, "coordinates", as_coordinates(self.coordinates))

    @property
    def is_empty(self) -> bool:
        return len(self.coordinates) == 0

    @property
    def num_points(self) -> int:
        return len(self.coordinates)

    @property
    def start_coordinate(self) -> Optional[npt.NDArray[np.float64]]:
        return None if self.is_empty else self.coordinates[0]

    @property
    def end_coordinate(self) -> Optional[npt.NDArray[np.float64]]:
        return None if self.is_empty else self.coordinates[-1]

    @property
    def start_point(self) -> Point:
        return Point(self.coordinates[:1])

    @property
    def end_point(self) -> Point:
        return Point(self.coordinates[-1:])

    @property
    def is_closed(self) -> bool:
        if self.is_empty:
            return False
        return bool(np.array_equal(self.coordinates[0], self.coordinates[-1]))

    @property
    def is_ring(self) -> bool:
        return self.is_empty or self.is_closed

    @property
    def length(self) -> float:
        if self.num_points < 2:
            return 0.0
        return float(np.sum(np.linalg.norm(np.diff(self.coordinates, axis=0), axis=1)))

    @cached_property
    def envelope(self) -> Envelope:
        return Envelope.from_coordinates(self.coordinates)


@dataclass(frozen=True, eq=False)
class LinearRing(LineString):
    """A closed line string. The empty ring counts as closed."""
    kind: ClassVar[GeometryKind] = GeometryKind.LINEAR_RING

    @property
    def is_closed(self) -> bool:
        if self.is_empty:
            return True
        return super().is_closed


@dataclass(frozen=True, eq=False)
class Polygon(Geometry):
    """A shell ring with optional holes."""
    shell: LinearRing = field(default_factory=LinearRing)
    holes: tuple[LinearRing, ...] = ()

    kind: ClassVar[GeometryKind] = GeometryKind.POLYGON

    def __post_init__(self) -> None:
        object.__setattr__(self, "holes", tuple(self.holes))

    @property
    def is_empty(self) -> bool:
        return self.shell.is_empty

    @property
    def num_interior_rings(self) -> int:
        return len(self.holes)

    def interior_ring_n(self, n: int) -> LinearRing:
        return self.holes[n]

    @property
    def envelope(self) -> Envelope:
        return self.shell.envelope


@dataclass(frozen=True, eq=False)
class GeometryCollection(Geometry):
    """An ordered sequence of geometries. Members may be None."""
    geometries: tuple[Optional[Geometry], ...] = ()

    kind: ClassVar[GeometryKind] = GeometryKind.GEOMETRY_COLLECTION

    def __post_init__(self) -> None:
        object.__setattr__(self, "geometries", tuple(self.geometries))

    def __iter__(self) -> Iterator[Optional[Geometry]]:
        return iter(self.geometries)

    @property
    def is_empty(self) -> bool:
        return all(g is None or g.is_empty for g in self.geometries)

    @property
    def num_geometries(self) -> int:
        return len(self.geometries)

    def geometry_n(self, n: int) -> Optional[Geometry]:
        return self.geometries[n]

    @cached_property
    def envelope(self) -> Envelope:
        env = Envelope()
        for g in self.geometries:
            if g is not None:
                env = env.expand_to_include(g.envelope)
        return env


@dataclass(frozen=True, eq=False)
class MultiPoint(GeometryCollection):
    geometries: tuple[Point, ...] = ()
    kind: ClassVar[GeometryKind] = GeometryKind.MULTI_POINT


@dataclass(frozen=True, eq=False)
class MultiLineString(GeometryCollection):
    geometries: tuple[LineString, ...] = ()
    kind: ClassVar[GeometryKind] = GeometryKind.MULTI_LINE_STRING


@dataclass(frozen=True, eq=False)
class MultiPolygon(GeometryCollection):
    geometries: tuple[Polygon, ...] = ()
    kind: ClassVar[GeometryKind] = GeometryKind.MULTI_POLYGON

