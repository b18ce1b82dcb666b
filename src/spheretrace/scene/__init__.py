"""Scene module for scene storage, description and reference content.

Components:
    intersection: Device-side sphere and light storage, nearest-hit and
        shadow queries
    manager: Host-side scene description (SphereInfo, PointLight) and upload
    reference: The fixed four-sphere, one-light reference scene

Scene data is stored in Taichi fields using a Structure-of-Arrays layout and
is read-only while a render is running.
"""

from .intersection import (
    FAR_DISTANCE,
    MAX_LIGHTS,
    MAX_SPHERES,
    SceneHitRecord,
    add_light,
    add_sphere,
    clear_scene,
    get_light_count,
    get_scene_generation,
    get_sphere_count,
    intersect_scene,
    is_occluded,
)
from .manager import (
    MaterialType,
    PointLight,
    SceneConfig,
    SceneManager,
    SphereInfo,
)
from .reference import (
    REFERENCE_LIGHTS,
    REFERENCE_SPHERES,
    create_reference_camera,
    create_reference_scene,
)

__all__ = [
    # Intersection module
    "SceneHitRecord",
    "add_sphere",
    "add_light",
    "clear_scene",
    "get_sphere_count",
    "get_light_count",
    "get_scene_generation",
    "intersect_scene",
    "is_occluded",
    "MAX_SPHERES",
    "MAX_LIGHTS",
    "FAR_DISTANCE",
    # Manager module
    "SceneManager",
    "SceneConfig",
    "MaterialType",
    "SphereInfo",
    "PointLight",
    # Reference scene
    "create_reference_scene",
    "create_reference_camera",
    "REFERENCE_SPHERES",
    "REFERENCE_LIGHTS",
]
