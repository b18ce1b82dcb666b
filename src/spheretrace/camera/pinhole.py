"""Pinhole camera model for perspective projection ray generation.

The camera sits at the world origin and looks down the -z axis with +y up.
For pixel (x, y), counted from the top-left corner:

    angle  = tan(pi / 2 * fov / 180)
    xx     = (2 * ((x + 0.5) / width) - 1) * angle * aspect_ratio
    yy     = (1 - 2 * ((y + 0.5) / height)) * angle
    ray    = Ray(origin=(0, 0, 0), direction=normalize(xx, yy, -1))

Each pixel gets exactly one ray through its center; there is no lens model
and no jitter.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.camera.pinhole import PinholeCamera, setup_camera, get_primary_ray
    >>>
    >>> camera = PinholeCamera(vfov=30.0, width=200, height=200)
    >>> setup_camera(camera)
    >>>
    >>> @ti.kernel
    ... def render():
    ...     ray = get_primary_ray(100, 100, 200, 200)
"""

import math
from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from spheretrace.core.ray import Ray, make_ray, vec3

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class PinholeCamera:
    """Configuration for the pinhole camera.

    Attributes:
        vfov: Vertical field of view in degrees, in (0, 180).
        width: Image width in pixels.
        height: Image height in pixels.
    """

    vfov: float = 30.0
    width: int = 200
    height: int = 200

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {self.width}x{self.height}")
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"Field of view must be in (0, 180) degrees, got {self.vfov}")

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    @property
    def angle(self) -> float:
        """Half-height of the image plane at unit distance."""
        return math.tan(math.pi * 0.5 * self.vfov / 180.0)


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_angle = ti.field(dtype=ti.f32, shape=())
_camera_aspect_ratio = ti.field(dtype=ti.f32, shape=())


def setup_camera(camera: PinholeCamera) -> None:
    """Store the camera's derived constants for use in kernels.

    Must be called from Python (not from within a Taichi kernel) before
    rendering.
    """
    _camera_angle[None] = camera.angle
    _camera_aspect_ratio[None] = camera.aspect_ratio


# =============================================================================
# Ray Generation
# =============================================================================


@ti.func
def get_primary_ray(x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate the primary ray through the center of pixel (x, y).

    Args:
        x: Column, 0 at the left edge.
        y: Row, 0 at the top edge.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A Ray from the origin with a unit direction.
    """
    angle = _camera_angle[None]
    u = (ti.cast(x, ti.f32) + 0.5) / ti.cast(width, ti.f32)
    v = (ti.cast(y, ti.f32) + 0.5) / ti.cast(height, ti.f32)
    xx = (2.0 * u - 1.0) * angle * _camera_aspect_ratio[None]
    yy = (1.0 - 2.0 * v) * angle
    # z = -1 keeps the direction nonzero for every pixel
    direction = tm.normalize(vec3(xx, yy, -1.0))
    return make_ray(vec3(0.0, 0.0, 0.0), direction)


def get_camera_info() -> dict[str, float]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with angle and aspect_ratio.
    """
    return {
        "angle": float(_camera_angle[None]),
        "aspect_ratio": float(_camera_aspect_ratio[None]),
    }
