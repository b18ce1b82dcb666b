"""Taichi-based Whitted-style sphere renderer.

This package renders static scenes of spheres lit by point lights using
Lambertian (diffuse) shading with hard shadows:
- Pinhole camera with one primary ray per pixel
- Closed-form geometric ray-sphere intersection
- Nearest-hit scene resolution by linear scan
- Shadow rays for binary light visibility
- Plain-text PPM (P3) and PNG output

Subpackages:
    core: Vector math, rays, shading dispatch and the pixel loop
    geometry: Sphere primitive and the ray-sphere intersector
    materials: Diffuse (Lambertian) light evaluation
    scene: Scene storage, scene description and the reference scene
    camera: Pinhole camera ray generation
    preview: Image encoding and export
"""

from spheretrace.errors import DegenerateGeometryError

__version__ = "0.1.0"

__all__ = ["DegenerateGeometryError", "__version__"]
