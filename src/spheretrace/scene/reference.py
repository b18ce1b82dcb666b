"""Reference scene: a floor and three diffuse spheres under one light.

The floor is a sphere of radius 10000 whose top sits at y = -4. The camera
is the default pinhole camera at the origin with a 30 degree field of view
rendering 200 x 200 pixels over a black background.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.scene.reference import create_reference_scene
    >>> scene, camera = create_reference_scene()
    >>> len(scene.spheres), len(scene.lights)
    (4, 1)
"""

from spheretrace.camera.pinhole import PinholeCamera
from spheretrace.scene.manager import MaterialType, PointLight, SceneManager, SphereInfo

REFERENCE_SPHERES = (
    # Floor
    SphereInfo((0.0, -10004.0, -20.0), 10000.0, (0.20, 0.20, 0.25), MaterialType.DIFFUSE),
    SphereInfo((2.0, -2.5, -25.0), 1.5, (1.00, 0.75, 0.45), MaterialType.DIFFUSE),
    SphereInfo((-5.0, -1.0, -35.0), 3.0, (0.75, 0.45, 0.45), MaterialType.DIFFUSE),
    SphereInfo((5.0, 1.0, -45.0), 5.0, (0.45, 0.45, 0.75), MaterialType.DIFFUSE),
)

REFERENCE_LIGHTS = (PointLight((-10.0, 20.0, -10.0), (1.0, 1.0, 1.0), 1.0),)

REFERENCE_FOV = 30.0
REFERENCE_WIDTH = 200
REFERENCE_HEIGHT = 200
REFERENCE_BACKGROUND = (0.0, 0.0, 0.0)


def create_reference_camera(
    width: int = REFERENCE_WIDTH,
    height: int = REFERENCE_HEIGHT,
    vfov: float = REFERENCE_FOV,
) -> PinholeCamera:
    """Create the reference camera, optionally at another resolution."""
    return PinholeCamera(vfov=vfov, width=width, height=height)


def create_reference_scene(
    width: int = REFERENCE_WIDTH,
    height: int = REFERENCE_HEIGHT,
    vfov: float = REFERENCE_FOV,
) -> tuple[SceneManager, PinholeCamera]:
    """Upload the reference scene and build its camera.

    Returns:
        A tuple of (scene, camera).
    """
    scene = SceneManager.from_description(REFERENCE_SPHERES, REFERENCE_LIGHTS)
    return scene, create_reference_camera(width, height, vfov)
