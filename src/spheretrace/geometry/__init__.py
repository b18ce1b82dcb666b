"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with geometric ray-sphere intersection

Spheres are the only shape the renderer traces. Intersection routines are
Taichi functions (@ti.func) returning both roots so that the scene resolver
can pick the nearest valid one and shadow queries can treat any hit as an
occluder:

    hit = intersect_sphere(ray_origin, ray_direction, sphere)
"""

from .sphere import Sphere, SphereHit, intersect_sphere, make_sphere, sphere_normal

__all__ = [
    "Sphere",
    "SphereHit",
    "intersect_sphere",
    "make_sphere",
    "sphere_normal",
]
