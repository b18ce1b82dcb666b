"""Scene description and upload to device storage.

Scenes are described on the host with frozen dataclasses and uploaded into
the Taichi fields of ``spheretrace.scene.intersection``. The SceneManager
keeps the host-side description so a scene can be inspected, cleared, or
round-tripped through a plain-dict configuration.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.scene.manager import MaterialType, SceneManager
    >>> scene = SceneManager()
    >>> scene.add_sphere((0, 0, -20), 4.0, albedo=(0.8, 0.3, 0.3))
    0
    >>> scene.add_light((-10, 20, -10), color=(1, 1, 1), intensity=1.0)
    0
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from spheretrace.core.vector import Vector3
from spheretrace.errors import DegenerateGeometryError
from spheretrace.scene.intersection import (
    add_light,
    add_sphere,
    clear_scene,
    get_light_count,
    get_scene_generation,
    get_sphere_count,
)

logger = logging.getLogger(__name__)


def _finite_tuple(name: str, value) -> tuple[float, float, float]:
    """Coerce to a 3-tuple, rejecting NaN and infinite components."""
    result = Vector3.of(value).to_tuple()
    if not all(math.isfinite(c) for c in result):
        raise DegenerateGeometryError(f"{name} must be finite, got {result}")
    return result


class MaterialType(IntEnum):
    """Surface material tags.

    Only DIFFUSE is shaded. The remaining tags are accepted and stored but
    render black; they are reserved for reflective and refractive surfaces.
    """

    DIFFUSE = 0
    SPECULAR = 1
    FRESNEL = 2
    REFLECT = 3
    REFLECT_AND_REFRACT = 4


@dataclass(frozen=True)
class SphereInfo:
    """A sphere in the scene description.

    Attributes:
        center: The center of the sphere.
        radius: The radius of the sphere, must be positive.
        albedo: Reflectance color, channels in [0, 1] by convention.
        material: The material tag.
    """

    center: tuple[float, float, float]
    radius: float
    albedo: tuple[float, float, float] = (0.5, 0.5, 0.5)
    material: MaterialType = MaterialType.DIFFUSE

    def __post_init__(self) -> None:
        if not (math.isfinite(self.radius) and self.radius > 0.0):
            raise DegenerateGeometryError(f"Sphere radius must be positive, got {self.radius}")
        object.__setattr__(self, "center", _finite_tuple("center", self.center))
        object.__setattr__(self, "albedo", _finite_tuple("albedo", self.albedo))
        object.__setattr__(self, "material", MaterialType(self.material))


@dataclass(frozen=True)
class PointLight:
    """A point light in the scene description.

    Attributes:
        position: World-space position of the light.
        color: Channel-wise radiance, unbounded.
        intensity: Scalar multiplier applied on top of color.
    """

    position: tuple[float, float, float]
    color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    intensity: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", _finite_tuple("position", self.position))
        object.__setattr__(self, "color", _finite_tuple("color", self.color))
        if not math.isfinite(self.intensity):
            raise DegenerateGeometryError(f"Light intensity must be finite, got {self.intensity}")


@dataclass
class SceneConfig:
    """Plain-dict form of a scene, suitable for JSON.

    Attributes:
        spheres: List of sphere configurations.
        lights: List of light configurations.
    """

    spheres: list[dict[str, Any]] = field(default_factory=list)
    lights: list[dict[str, Any]] = field(default_factory=list)


class SceneManager:
    """Host-side scene that mirrors what has been uploaded to the device.

    There is a single device scene, so creating a SceneManager clears any
    previously uploaded spheres and lights.

    Attributes:
        spheres: SphereInfo entries in upload (scan) order.
        lights: PointLight entries in upload order.
        generation: Scene generation this manager uploaded; a later clear by
            any manager makes it stale.
    """

    def __init__(self) -> None:
        self.spheres: list[SphereInfo] = []
        self.lights: list[PointLight] = []
        self.generation = 0
        self.clear()

    def clear(self) -> None:
        """Remove every sphere and light, on host and device."""
        clear_scene()
        self.generation = get_scene_generation()
        self.spheres.clear()
        self.lights.clear()

    @classmethod
    def from_description(
        cls,
        spheres: Iterable[SphereInfo],
        lights: Iterable[PointLight],
    ) -> SceneManager:
        """Build and upload a scene from description entries."""
        scene = cls()
        for sphere in spheres:
            scene.add_sphere_info(sphere)
        for light in lights:
            scene.add_light_info(light)
        logger.debug(
            "Uploaded scene with %d sphere(s) and %d light(s)",
            len(scene.spheres),
            len(scene.lights),
        )
        return scene

    # =========================================================================
    # Primitives
    # =========================================================================

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        albedo: tuple[float, float, float] = (0.5, 0.5, 0.5),
        material: MaterialType = MaterialType.DIFFUSE,
    ) -> int:
        """Add a sphere to the scene.

        Returns:
            The index of the sphere in scan order.

        Raises:
            DegenerateGeometryError: If the radius is not positive.
            RuntimeError: If the maximum number of spheres is exceeded.
        """
        return self.add_sphere_info(SphereInfo(center, radius, albedo, material))

    def add_sphere_info(self, sphere: SphereInfo) -> int:
        index = add_sphere(sphere.center, sphere.radius, sphere.albedo, int(sphere.material))
        self.spheres.append(sphere)
        return index

    def add_light(
        self,
        position: tuple[float, float, float],
        color: tuple[float, float, float] = (1.0, 1.0, 1.0),
        intensity: float = 1.0,
    ) -> int:
        """Add a point light to the scene.

        Returns:
            The index of the light.

        Raises:
            RuntimeError: If the maximum number of lights is exceeded.
        """
        return self.add_light_info(PointLight(position, color, intensity))

    def add_light_info(self, light: PointLight) -> int:
        index = add_light(light.position, light.color, light.intensity)
        self.lights.append(light)
        return index

    def get_sphere_count(self) -> int:
        return get_sphere_count()

    def get_light_count(self) -> int:
        return get_light_count()

    def is_current(self) -> bool:
        """Whether the device still holds exactly this manager's scene."""
        return (
            self.generation == get_scene_generation()
            and get_sphere_count() == len(self.spheres)
            and get_light_count() == len(self.lights)
        )

    # =========================================================================
    # Configuration
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene description as plain dicts."""
        return SceneConfig(
            spheres=[
                {
                    "center": list(s.center),
                    "radius": s.radius,
                    "albedo": list(s.albedo),
                    "material": s.material.name.lower(),
                }
                for s in self.spheres
            ],
            lights=[
                {
                    "position": list(light.position),
                    "color": list(light.color),
                    "intensity": light.intensity,
                }
                for light in self.lights
            ],
        )

    @classmethod
    def from_config(cls, config: SceneConfig | dict[str, Any]) -> SceneManager:
        """Build and upload a scene from a SceneConfig or equivalent dict.

        Material names are case-insensitive member names of MaterialType;
        a missing material means diffuse.

        Raises:
            ValueError: If a material name is unknown.
            DegenerateGeometryError: If a sphere radius is not positive.
        """
        if isinstance(config, dict):
            config = SceneConfig(
                spheres=list(config.get("spheres", [])),
                lights=list(config.get("lights", [])),
            )

        spheres = []
        for entry in config.spheres:
            name = str(entry.get("material", "diffuse")).upper()
            if name not in MaterialType.__members__:
                raise ValueError(f"Unknown material type: {entry.get('material')}")
            spheres.append(
                SphereInfo(
                    center=tuple(entry["center"]),
                    radius=float(entry["radius"]),
                    albedo=tuple(entry.get("albedo", (0.5, 0.5, 0.5))),
                    material=MaterialType[name],
                )
            )
        lights = [
            PointLight(
                position=tuple(entry["position"]),
                color=tuple(entry.get("color", (1.0, 1.0, 1.0))),
                intensity=float(entry.get("intensity", 1.0)),
            )
            for entry in config.lights
        ]
        return cls.from_description(spheres, lights)
