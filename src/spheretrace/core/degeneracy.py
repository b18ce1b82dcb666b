"""Degenerate-geometry reporting from inside kernels.

Kernels cannot raise, so device code that meets a zero-length vector bumps
a counter field instead of letting NaN flow into later comparisons. The
host checks the counter after every kernel launch and raises
DegenerateGeometryError.
"""

import taichi as ti

from spheretrace.errors import DegenerateGeometryError

_degenerate_count = ti.field(dtype=ti.i32, shape=())


def reset_degenerate_count() -> None:
    """Zero the counter before a kernel launch."""
    _degenerate_count[None] = 0


def get_degenerate_count() -> int:
    """Number of degenerate events recorded since the last reset."""
    return int(_degenerate_count[None])


def raise_if_degenerate(context: str = "render") -> None:
    """Raise if any degenerate event was recorded.

    Args:
        context: Short label for the operation, used in the message.

    Raises:
        DegenerateGeometryError: If the counter is nonzero.
    """
    count = get_degenerate_count()
    if count > 0:
        raise DegenerateGeometryError(
            f"{context}: {count} zero-length vector(s) met while shading "
            "(is a light placed on a surface?)"
        )


@ti.func
def flag_degenerate():
    """Record one degenerate event (atomic)."""
    ti.atomic_add(_degenerate_count[None], 1)
