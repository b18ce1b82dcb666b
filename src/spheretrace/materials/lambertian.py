"""Lambertian (ideal diffuse) direct lighting with hard shadows.

Each point light contributes

    albedo * max(0, dot(N, L)) * light.color * light.intensity

unless a shadow ray from the hit point toward the light hits any sphere, in
which case the light contributes nothing. Contributions from all lights are
summed; there is no ambient term and no indirect bounce.

The shadow ray starts at ``point + normal * shadow_bias`` so that it does not
immediately re-hit the surface it leaves.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.materials.lambertian import shade_lambertian
    >>> # color = shade_lambertian(point, normal, albedo) inside a kernel
"""

import taichi as ti
import taichi.math as tm

from spheretrace.core.degeneracy import flag_degenerate
from spheretrace.core.ray import safe_normalize
from spheretrace.scene.intersection import (
    is_occluded,
    light_colors,
    light_intensities,
    light_positions,
    num_lights,
)

# Type alias for 3D vectors
vec3 = tm.vec3

# Offset along the normal for shadow ray origins
DEFAULT_SHADOW_BIAS = 1e-4

_shadow_bias = ti.field(dtype=ti.f32, shape=())
_shadow_bias[None] = DEFAULT_SHADOW_BIAS


def set_shadow_bias(bias: float) -> None:
    """Set the shadow ray offset.

    Raises:
        ValueError: If bias is negative.
    """
    if bias < 0.0:
        raise ValueError(f"Shadow bias must be non-negative, got {bias}")
    _shadow_bias[None] = bias


def get_shadow_bias() -> float:
    """Get the current shadow ray offset."""
    return float(_shadow_bias[None])


@ti.func
def eval_lambertian(albedo: vec3, normal: vec3, light_dir: vec3, radiance: vec3) -> vec3:
    """Diffuse response to one unoccluded light.

    Args:
        albedo: Surface reflectance (RGB).
        normal: Unit surface normal facing the viewer.
        light_dir: Unit direction from the surface toward the light.
        radiance: Light color already scaled by its intensity.

    Returns:
        albedo * max(0, N.L) * radiance.
    """
    return albedo * tm.max(0.0, tm.dot(normal, light_dir)) * radiance


@ti.func
def shade_lambertian(point: vec3, normal: vec3, albedo: vec3) -> vec3:
    """Sum direct diffuse lighting from every light in the scene.

    Args:
        point: The shaded surface point.
        normal: Unit surface normal facing the incoming ray.
        albedo: Surface reflectance (RGB).

    Returns:
        The accumulated color. A light sitting exactly on the point is
        flagged as degenerate and skipped.
    """
    color = vec3(0.0, 0.0, 0.0)
    shadow_origin = point + normal * _shadow_bias[None]

    n_lights = num_lights[None]
    for i in range(n_lights):
        light_dir, ok = safe_normalize(light_positions[i] - point)
        if ok == 0:
            flag_degenerate()
        elif is_occluded(shadow_origin, light_dir) == 0:
            radiance = light_colors[i] * light_intensities[i]
            color += eval_lambertian(albedo, normal, light_dir, radiance)

    return color
