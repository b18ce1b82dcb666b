"""Scene storage and nearest-hit resolution.

Spheres and point lights live in preallocated Taichi fields using a
Structure-of-Arrays layout. The resolver scans every sphere in insertion
order; there is no acceleration structure.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.scene.intersection import (
    ...     add_sphere, add_light, clear_scene, intersect_scene
    ... )
    >>> clear_scene()
    >>> add_sphere((0.0, 0.0, -5.0), 1.0, albedo=(0.8, 0.3, 0.3), material=0)
    >>> add_light((0.0, 10.0, 0.0), color=(1.0, 1.0, 1.0), intensity=1.0)
    >>> # Use intersect_scene within a Taichi kernel
"""

import math

import taichi as ti
import taichi.math as tm

from spheretrace.errors import DegenerateGeometryError
from spheretrace.geometry.sphere import Sphere, intersect_sphere

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class SceneHitRecord:
    """Nearest intersection of a ray with the scene.

    Attributes:
        hit: 1 if any sphere was hit, 0 if the ray escapes to the background.
        t: Distance along the ray to the hit. Only valid if hit == 1.
        sphere_index: Index of the winning sphere. -1 on a miss.
    """

    hit: ti.i32
    t: ti.f32
    sphere_index: ti.i32


# Maximum number of primitives supported in the scene
MAX_SPHERES = 1024
MAX_LIGHTS = 64

# Hits farther than this are ignored and the ray counts as a miss
FAR_DISTANCE = 1e6

# Sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_albedos = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_materials = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())

# Point light storage
light_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_intensities = ti.field(dtype=ti.f32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())

# Bumped on every clear, identifies the scene currently uploaded
scene_generation = ti.field(dtype=ti.i32, shape=())


def _check_finite(name: str, values) -> None:
    if not all(math.isfinite(v) for v in values):
        raise DegenerateGeometryError(f"{name} must be finite, got {tuple(values)}")


def clear_scene() -> None:
    """Remove all spheres and lights.

    Resets the counts to zero and starts a new scene generation. Field data
    is overwritten by later additions.
    """
    num_spheres[None] = 0
    num_lights[None] = 0
    scene_generation[None] = scene_generation[None] + 1


def get_scene_generation() -> int:
    """Get the generation of the scene currently uploaded."""
    return int(scene_generation[None])


def add_sphere(
    center: tuple[float, float, float],
    radius: float,
    albedo: tuple[float, float, float] = (0.5, 0.5, 0.5),
    material: int = 0,
) -> int:
    """Add a sphere to the scene.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere, must be positive.
        albedo: Diffuse reflectance (R, G, B).
        material: Integer material tag (see MaterialType).

    Returns:
        The index of the added sphere.

    Raises:
        DegenerateGeometryError: If the radius is not a positive finite number,
            or the center or albedo has a non-finite component.
        RuntimeError: If the maximum number of spheres is exceeded.
    """
    if not (math.isfinite(radius) and radius > 0.0):
        raise DegenerateGeometryError(f"Sphere radius must be positive, got {radius}")
    _check_finite("Sphere center", center)
    _check_finite("Sphere albedo", albedo)
    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    sphere_centers[idx] = [center[0], center[1], center[2]]
    sphere_radii[idx] = radius
    sphere_albedos[idx] = [albedo[0], albedo[1], albedo[2]]
    sphere_materials[idx] = int(material)
    num_spheres[None] = idx + 1
    return idx


def add_light(
    position: tuple[float, float, float],
    color: tuple[float, float, float] = (1.0, 1.0, 1.0),
    intensity: float = 1.0,
) -> int:
    """Add a point light to the scene.

    Args:
        position: World-space position of the light.
        color: Channel-wise radiance, unbounded.
        intensity: Scalar multiplier applied on top of color.

    Returns:
        The index of the added light.

    Raises:
        DegenerateGeometryError: If any component or the intensity is not finite.
        RuntimeError: If the maximum number of lights is exceeded.
    """
    _check_finite("Light position", position)
    _check_finite("Light color", color)
    _check_finite("Light intensity", (intensity,))
    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    light_positions[idx] = [position[0], position[1], position[2]]
    light_colors[idx] = [color[0], color[1], color[2]]
    light_intensities[idx] = intensity
    num_lights[None] = idx + 1
    return idx


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


def get_light_count() -> int:
    """Get the number of lights in the scene."""
    return int(num_lights[None])


@ti.func
def get_sphere(index: ti.i32) -> Sphere:
    """Load the geometric part of a stored sphere."""
    return Sphere(center=sphere_centers[index], radius=sphere_radii[index])


@ti.func
def _make_miss_record() -> SceneHitRecord:
    """Create a SceneHitRecord indicating no intersection."""
    return SceneHitRecord(hit=0, t=0.0, sphere_index=-1)


@ti.func
def intersect_scene(ray_origin: vec3, ray_direction: vec3) -> SceneHitRecord:
    """Find the nearest sphere hit along a ray.

    Each sphere that reports a hit contributes its entry distance, or its
    exit distance when the entry lies behind the origin (origin inside the
    sphere). A sphere replaces the current best only when strictly closer,
    so the first sphere in insertion order wins ties.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The ray direction, expected to be unit length.

    Returns:
        A SceneHitRecord for the nearest hit, or a miss record.
    """
    result = _make_miss_record()
    closest_t = ti.cast(FAR_DISTANCE, ti.f32)

    n_spheres = num_spheres[None]
    for i in range(n_spheres):
        rec = intersect_sphere(ray_origin, ray_direction, get_sphere(i))
        if rec.hit == 1:
            t = rec.t_near
            if t < 0.0:
                t = rec.t_far
            if t < closest_t:
                closest_t = t
                result = SceneHitRecord(hit=1, t=t, sphere_index=i)

    return result


@ti.func
def is_occluded(ray_origin: vec3, ray_direction: vec3) -> ti.i32:
    """Test whether any sphere blocks a shadow ray.

    Uses the raw intersector, not nearest-hit resolution: any sphere that
    reports a hit is an occluder, whatever its distance.

    Returns:
        1 if any sphere was hit, 0 otherwise.
    """
    hit_any = 0

    n_spheres = num_spheres[None]
    for i in range(n_spheres):
        if hit_any == 0:
            rec = intersect_sphere(ray_origin, ray_direction, get_sphere(i))
            if rec.hit == 1:
                hit_any = 1

    return hit_any
