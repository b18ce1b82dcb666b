"""Single-bounce direct lighting integrator.

This module turns a ray into a color: it resolves the nearest sphere, builds
the hit point and a normal facing the ray, and dispatches on the sphere's
material tag. Only the diffuse material has shading behavior; every other
tag (specular, Fresnel, reflective, reflective-refractive) renders black.
Rays never recurse.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.core.integrator import trace_single_ray
    >>> from spheretrace.scene.intersection import add_light, add_sphere
    >>> add_sphere((0.0, 0.0, -5.0), 1.0, albedo=(1.0, 0.5, 0.5))
    >>> add_light((0.0, 0.0, 0.0))
    >>> trace_single_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
    (1.0, 0.5, 0.5)
"""

import taichi as ti
import taichi.math as tm

from spheretrace.core.degeneracy import (
    flag_degenerate,
    raise_if_degenerate,
    reset_degenerate_count,
)
from spheretrace.core.ray import safe_normalize
from spheretrace.core.vector import Vector3
from spheretrace.geometry.sphere import sphere_normal
from spheretrace.materials.lambertian import shade_lambertian
from spheretrace.scene.intersection import (
    SceneHitRecord,
    get_sphere,
    intersect_scene,
    sphere_albedos,
    sphere_materials,
)
from spheretrace.scene.manager import MaterialType

# Type alias for 3D vectors
vec3 = tm.vec3

# Color returned for rays that miss every sphere
DEFAULT_BACKGROUND = (0.0, 0.0, 0.0)

_background = ti.Vector.field(3, dtype=ti.f32, shape=())


def set_background(color: tuple[float, float, float]) -> None:
    """Set the color returned for rays that escape the scene."""
    _background[None] = [color[0], color[1], color[2]]


def get_background() -> tuple[float, float, float]:
    """Get the current background color."""
    bg = _background[None]
    return (float(bg[0]), float(bg[1]), float(bg[2]))


@ti.func
def _facing_normal(hit_point: vec3, ray_direction: vec3, sphere_index: ti.i32) -> vec3:
    """Unit normal at a hit point, flipped to face the incoming ray."""
    normal, ok = safe_normalize(sphere_normal(get_sphere(sphere_index), hit_point))
    if ok == 0:
        flag_degenerate()
    # Ray started inside the sphere
    if tm.dot(ray_direction, normal) > 0.0:
        normal = -normal
    return normal


@ti.func
def shade_hit(ray_origin: vec3, ray_direction: vec3, hit: SceneHitRecord) -> vec3:
    """Shade a resolved hit according to the sphere's material.

    Args:
        ray_origin: Origin of the ray that produced the hit.
        ray_direction: Unit direction of that ray.
        hit: The nearest-hit record; hit.hit must be 1.

    Returns:
        The shaded color, black for any non-diffuse material.
    """
    color = vec3(0.0, 0.0, 0.0)
    hit_point = ray_origin + ray_direction * hit.t
    normal = _facing_normal(hit_point, ray_direction, hit.sphere_index)

    material = sphere_materials[hit.sphere_index]
    if material == int(MaterialType.DIFFUSE):
        color = shade_lambertian(hit_point, normal, sphere_albedos[hit.sphere_index])
    # Specular, Fresnel, Reflect and ReflectAndRefract contribute nothing

    return color


@ti.func
def trace_ray(ray_origin: vec3, ray_direction: vec3) -> vec3:
    """Trace one ray through the scene.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The ray direction, expected to be unit length.

    Returns:
        The background color on a miss, otherwise the shaded hit color.
    """
    color = _background[None]
    hit = intersect_scene(ray_origin, ray_direction)
    if hit.hit == 1:
        color = shade_hit(ray_origin, ray_direction, hit)
    return color


@ti.kernel
def _trace_single_ray(ray_origin: vec3, ray_direction: vec3) -> vec3:
    return trace_ray(ray_origin, ray_direction)


def trace_single_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
) -> tuple[float, float, float]:
    """Trace a single ray from Python.

    Useful for testing and debugging shading without a camera. The
    direction is normalized on the host first.

    Args:
        origin: Ray origin.
        direction: Ray direction, any nonzero length.

    Returns:
        Tuple of (R, G, B) color values.

    Raises:
        DegenerateGeometryError: If direction is zero or shading met a
            zero-length vector.
    """
    unit = Vector3.of(direction).normalize()
    reset_degenerate_count()
    color = _trace_single_ray(vec3(*origin), vec3(*unit.to_tuple()))
    raise_if_degenerate("trace_single_ray")
    return (float(color[0]), float(color[1]), float(color[2]))
