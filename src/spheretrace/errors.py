"""Exceptions raised by the renderer.

Only geometric degeneracy is an error. A ray that misses every sphere is a
normal outcome and is reported as a miss record, never as an exception.
"""


class DegenerateGeometryError(ValueError):
    """Raised when geometry cannot produce a well-defined result.

    Examples are normalizing a zero-length vector, a sphere with a
    non-positive radius, or a light placed exactly on a shaded point.
    """
