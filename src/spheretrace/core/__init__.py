"""Core rendering module.

Components:
    vector: Host-side Vector3 used for scene authoring and validation
    ray: Ray data structure and device-side vector helpers
    integrator: Hit shading, material dispatch and single-ray tracing
    renderer: Render target and the per-pixel rendering kernel

Only ``vector`` and ``ray`` are imported here. The integrator and renderer
declare Taichi fields at import time and must be imported after ti.init():

    from spheretrace.core.renderer import render
"""

from .ray import (
    Ray,
    cross,
    dot,
    length,
    length_squared,
    make_ray,
    ray_at,
    safe_normalize,
    vec3,
)
from .vector import Vector3

__all__ = [
    "Vector3",
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "length",
    "length_squared",
    "dot",
    "cross",
    "safe_normalize",
]
