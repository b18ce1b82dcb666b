"""Ray data structure and device-side vector utilities.

This module provides the Ray dataclass and the small vector helpers used
inside Taichi kernels. Unlike ``taichi.math.normalize``, ``safe_normalize``
reports zero-length input instead of silently producing NaN, so kernels can
flag degenerate geometry back to the host.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> origin = ti.math.vec3(0.0, 0.0, 0.0)
    >>> direction = ti.math.vec3(0.0, 0.0, -1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Below this length a vector is treated as zero
ZERO_LENGTH_EPSILON = 1e-12


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Expected to be
            unit length wherever the ray is intersected; callers normalize
            before constructing rays, the type does not enforce it.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction inside a kernel."""
    return Ray(origin=origin, direction=direction)


@ti.func
def length(v: vec3) -> ti.f32:
    """Euclidean length of a vector."""
    return tm.length(v)


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Squared length of a vector, avoiding the square root."""
    return tm.dot(v, v)


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Dot product a . b."""
    return tm.dot(a, b)


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Cross product a x b."""
    return tm.cross(a, b)


@ti.func
def safe_normalize(v: vec3):
    """Normalize a vector, reporting whether it was degenerate.

    Args:
        v: The input vector.

    Returns:
        A tuple (unit, ok) where ok is 1 if v had nonzero length and unit is
        v scaled to length 1. For a zero vector ok is 0 and unit is zero.
    """
    mag = tm.length(v)
    unit = vec3(0.0, 0.0, 0.0)
    ok = 0
    if mag > ZERO_LENGTH_EPSILON:
        unit = v / mag
        ok = 1
    return unit, ok
