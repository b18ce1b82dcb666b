"""Materials module.

Components:
    lambertian: Diffuse direct lighting with hard shadows

The diffuse material is the only one with shading behavior. Material tags
are defined in ``spheretrace.scene.manager.MaterialType``.
"""

from .lambertian import (
    DEFAULT_SHADOW_BIAS,
    eval_lambertian,
    get_shadow_bias,
    set_shadow_bias,
    shade_lambertian,
)

__all__ = [
    "shade_lambertian",
    "eval_lambertian",
    "set_shadow_bias",
    "get_shadow_bias",
    "DEFAULT_SHADOW_BIAS",
]
