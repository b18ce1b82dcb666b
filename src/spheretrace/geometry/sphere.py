"""Sphere primitive with closed-form geometric ray-sphere intersection.

The intersector projects the sphere center onto the ray instead of solving
the general quadratic, which needs a single comparison to reject misses and
no discriminant sign test:

    L   = center - origin
    tca = dot(L, direction)          # reject if tca < 0
    d2  = dot(L, L) - tca * tca      # reject if d2 > radius^2
    thc = sqrt(radius^2 - d2)
    t0, t1 = tca - thc, tca + thc

Any sphere whose center projects behind the ray origin (``tca < 0``) is a
miss, even when the origin lies inside the sphere. Shadow visibility relies
on this rule.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.geometry.sphere import Sphere, intersect_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -5), radius=1.0)
    >>> # Use intersect_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f32


@ti.dataclass
class SphereHit:
    """Roots of a ray-sphere intersection.

    Attributes:
        hit: 1 if the ray intersects the sphere, 0 otherwise.
        t_near: Entry distance along the ray. Only valid if hit == 1.
        t_far: Exit distance along the ray, t_near <= t_far.
            Only valid if hit == 1.
    """

    hit: ti.i32
    t_near: ti.f32
    t_far: ti.f32


@ti.func
def intersect_sphere(ray_origin: vec3, ray_direction: vec3, sphere: Sphere) -> SphereHit:
    """Intersect a ray with a sphere.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The ray direction, expected to be unit length.
        sphere: The sphere to test.

    Returns:
        A SphereHit with both roots, or hit == 0 when there is no real
        intersection or the sphere center lies behind the origin.
    """
    did_hit = 0
    t0 = 0.0
    t1 = 0.0

    L = sphere.center - ray_origin
    tca = tm.dot(L, ray_direction)
    if tca >= 0.0:
        d2 = tm.dot(L, L) - tca * tca
        r2 = sphere.radius * sphere.radius
        if d2 <= r2:
            thc = ti.sqrt(r2 - d2)
            t0 = tca - thc
            t1 = tca + thc
            did_hit = 1

    return SphereHit(hit=did_hit, t_near=t0, t_far=t1)


@ti.func
def sphere_normal(sphere: Sphere, point: vec3) -> vec3:
    """Unnormalized outward direction from the center to a surface point."""
    return point - sphere.center


@ti.func
def make_sphere(center: vec3, radius: ti.f32) -> Sphere:
    """Create a sphere from center and radius inside a kernel."""
    return Sphere(center=center, radius=radius)
