"""Preview module for image output.

Components:
    export: PPM (P3) and PNG encoding of finished images

The renderer produces linear HDR float images; export saturates every
channel at 1.0 and rounds to 8 bits. No tone mapping or gamma is applied.

Example:
    >>> from spheretrace.preview import save_image
    >>> save_image(image, "Picture.ppm")
"""

from spheretrace.preview.export import (
    compute_rmse,
    encode_channel,
    encode_ppm,
    image_to_uint8,
    save_image,
    save_png,
    save_ppm,
)

__all__ = [
    "encode_channel",
    "encode_ppm",
    "image_to_uint8",
    "save_ppm",
    "save_png",
    "save_image",
    "compute_rmse",
]
