"""Exceptions raised while building curved geometry."""
from __future__ import annotations

from typing import Optional


class CurveGeometryError(Exception):
    """Base class for all errors raised by curvedgeometry."""


class ValidationError(CurveGeometryError, ValueError):
    """
    An input violates a structural invariant (control point count, continuity,
    ring closure, ring containment, segment type).

    Attributes:
        argument: Name of the offending parameter, if known.
    """

    def __init__(self, message: str, argument: Optional[str] = None):
        super().__init__(message)
        self.argument = argument

    def __str__(self) -> str:
        message = super().__str__()
        if self.argument:
            return f"{message} (Parameter '{self.argument}')"
        return message


class UnsupportedTypeError(CurveGeometryError, TypeError):
    """No multi-geometry matches a homogeneous element kind."""


class RangeError(CurveGeometryError, ValueError):
    """A numeric configuration value is out of its allowed range."""
