"""Render target and the per-pixel rendering kernel.

Every pixel is independent: the kernel generates the primary ray, traces it,
and writes the color into its own cell of a row-major buffer indexed
``[y, x]``. Taichi parallelizes the outer loop; since no pixel reads or writes
another pixel's cell, the output is identical to a serial render.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.core.renderer import render
    >>> from spheretrace.scene.reference import create_reference_scene
    >>>
    >>> scene, camera = create_reference_scene()
    >>> image = render(scene, camera)  # (200, 200, 3) float32, HDR
"""

import logging
import time
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from spheretrace.camera.pinhole import PinholeCamera, get_primary_ray, setup_camera
from spheretrace.core.degeneracy import raise_if_degenerate, reset_degenerate_count
from spheretrace.core.integrator import DEFAULT_BACKGROUND, set_background, trace_ray
from spheretrace.materials.lambertian import DEFAULT_SHADOW_BIAS, set_shadow_bias

if TYPE_CHECKING:
    from spheretrace.scene.manager import SceneManager

logger = logging.getLogger(__name__)

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# Image dimensions (actual active size)
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Color buffer, indexed [row, column]
_color_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH))

# Flag to track if render target is initialized
_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Set the active image dimensions and clear the buffer.

    Args:
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels (max MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions are not positive or exceed the maximum.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target() -> None:
    """Clear the color buffer to zero."""
    _color_buffer.fill(0.0)


def reset_render_target() -> None:
    """Clear the buffer and mark the render target as not set up."""
    clear_render_target()
    _render_target_initialized[None] = 0


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions.

    Returns:
        Tuple of (width, height).
    """
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_kernel(width: ti.i32, height: ti.i32):
    """Trace one primary ray per pixel into the color buffer."""
    for y, x in ti.ndrange(height, width):
        ray = get_primary_ray(x, y, width, height)
        _color_buffer[y, x] = trace_ray(ray.origin, ray.direction)


@ti.kernel
def _render_single_pixel(x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    ray = get_primary_ray(x, y, width, height)
    return trace_ray(ray.origin, ray.direction)


# =============================================================================
# Public Rendering API
# =============================================================================


def render_image() -> None:
    """Render every pixel of the current render target.

    Raises:
        RuntimeError: If render target has not been set up.
        DegenerateGeometryError: If shading met a zero-length vector.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    reset_degenerate_count()
    _render_kernel(width, height)
    raise_if_degenerate("render_image")


def render_pixel(x: int, y: int) -> tuple[float, float, float]:
    """Render a single pixel without touching the color buffer.

    Args:
        x: Column, 0 at the left edge.
        y: Row, 0 at the top edge.

    Returns:
        Tuple of (R, G, B) color values.

    Raises:
        RuntimeError: If render target has not been set up.
        ValueError: If (x, y) lies outside the image.
        DegenerateGeometryError: If shading met a zero-length vector.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    if not (0 <= x < width and 0 <= y < height):
        raise ValueError(f"Pixel ({x}, {y}) outside {width}x{height} image")

    reset_degenerate_count()
    color = _render_single_pixel(x, y, width, height)
    raise_if_degenerate("render_pixel")
    return (float(color[0]), float(color[1]), float(color[2]))


def get_image_numpy() -> npt.NDArray[np.float32]:
    """Get the rendered image as a NumPy array.

    Values are linear and unclamped (HDR).

    Returns:
        A copy of the active region, shape (height, width, 3), float32,
        row 0 at the top.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    full_image = _color_buffer.to_numpy()
    return np.ascontiguousarray(full_image[:height, :width, :], dtype=np.float32)


def render(
    scene: "SceneManager",
    camera: PinholeCamera,
    *,
    background: tuple[float, float, float] = DEFAULT_BACKGROUND,
    shadow_bias: float = DEFAULT_SHADOW_BIAS,
) -> npt.NDArray[np.float32]:
    """Render a scene through a camera.

    Args:
        scene: The scene, which must be the one currently uploaded.
        camera: Field of view and image size.
        background: Color for rays that hit nothing.
        shadow_bias: Offset of shadow ray origins along the normal.

    Returns:
        The image as a (height, width, 3) float32 array.

    Raises:
        RuntimeError: If another scene was uploaded after this one.
        DegenerateGeometryError: If shading met a zero-length vector.
    """
    if not scene.is_current():
        raise RuntimeError("Scene is not the one currently uploaded; rebuild it before rendering")

    setup_camera(camera)
    set_background(background)
    set_shadow_bias(shadow_bias)
    setup_render_target(camera.width, camera.height)

    logger.info(
        "Rendering %dx%d, %d sphere(s), %d light(s)",
        camera.width,
        camera.height,
        len(scene.spheres),
        len(scene.lights),
    )
    start_time = time.time()
    render_image()
    logger.info("Render finished in %.3fs", time.time() - start_time)

    return get_image_numpy()
