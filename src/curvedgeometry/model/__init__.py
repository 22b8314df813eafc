"""
The MODEL layer contains the immutable geometry data structures.
It has NO knowledge of validation policy or of any overlay engine.
It deals with coordinates, envelopes, curves and arc math.
"""
