"""Camera module for primary ray generation.

Components:
    pinhole: Pinhole camera fixed at the origin looking down -z

Pixel coordinates are (x, y) with x growing to the right and y growing
downward from the top-left corner, matching the row-major image buffer.
"""

from .pinhole import (
    PinholeCamera,
    get_camera_info,
    get_primary_ray,
    setup_camera,
)

__all__ = [
    "PinholeCamera",
    "setup_camera",
    "get_primary_ray",
    "get_camera_info",
]
