"""
Configuration & Global Constants
================================
This module serves as the central registry for the numeric constants used
when building and flattening curved geometry.

Why is this file needed?
------------------------
1. Abstraction: It prevents tolerances (e.g. 5e-7) from being hardcoded and
   scattered throughout the factory and the tessellation code.
2. Defaults: The factory and the flattener take their default configuration
   from here, so every caller agrees on the same values.

Exports:
    CONTINUITY_TOLERANCE (float): Max gap allowed between compound curve segments.
    DEFAULT_QUADRANT_SEGMENTS (int): Segments per quarter circle when no arc segment length is set.
    DEFAULT_ARC_SEGMENT_LENGTH (float): Default maximum chord length (0.0 = use quadrant segments).
    DEFAULT_SRID (int): Spatial reference id assigned by a default factory.
    COLLINEARITY_EPS (float): Relative tolerance for detecting degenerate (straight) arcs.
"""

# Maximum distance between the end of one compound curve segment and the start of the next
CONTINUITY_TOLERANCE: float = 5e-7

# Same value as the buffer operation uses for its default quadrant segments
DEFAULT_QUADRANT_SEGMENTS: int = 8

DEFAULT_ARC_SEGMENT_LENGTH: float = 0.0
DEFAULT_SRID: int = 0

COLLINEARITY_EPS: float = 1e-12
