"""Image export for rendered images.

The renderer hands over a finished (height, width, 3) float image with
unbounded linear values. Each channel is encoded as

    clamp(round(value * 255), 0, 255)

so anything at or above 1.0 saturates to 255. No tone mapping or gamma is
applied.

Supported formats:
    - PPM (plain-text P3)
    - PNG (8-bit via Pillow)

Example:
    >>> from spheretrace.preview.export import save_ppm
    >>> save_ppm(image, "Picture.ppm")
"""

from __future__ import annotations

import math
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

MAX_CHANNEL_VALUE = 255


def _check_image(image: npt.NDArray[np.floating]) -> None:
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (H, W, 3), got {image.shape}")
    if np.isnan(image).any():
        raise ValueError("Image contains NaN values")


def encode_channel(value: float) -> int:
    """Encode one linear channel value as an integer in [0, 255]."""
    if math.isnan(value):
        raise ValueError("Cannot encode NaN")
    scaled = np.floor(value * MAX_CHANNEL_VALUE + 0.5)
    return int(np.clip(scaled, 0, MAX_CHANNEL_VALUE))


def image_to_uint8(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to 8-bit channels.

    Rounds half up and clamps to [0, 255].

    Args:
        image: Image array of shape (H, W, 3).

    Returns:
        Array of shape (H, W, 3) with dtype uint8.

    Raises:
        ValueError: If the shape is wrong or the image contains NaN.
    """
    _check_image(image)
    scaled = np.floor(image.astype(np.float64) * MAX_CHANNEL_VALUE + 0.5)
    return np.clip(scaled, 0, MAX_CHANNEL_VALUE).astype(np.uint8)


def encode_ppm(image: npt.NDArray[np.floating]) -> str:
    """Encode an image as plain-text PPM (P3).

    Layout: a ``P3`` line, a ``<width> <height>`` line, a ``255`` line, then
    every pixel as ``r g b `` in row-major order on a single line, followed
    by one newline.

    Args:
        image: Image array of shape (H, W, 3).

    Returns:
        The PPM document.
    """
    pixels = image_to_uint8(image)
    height, width = pixels.shape[:2]
    body = "".join(f"{r} {g} {b} " for r, g, b in pixels.reshape(-1, 3).tolist())
    return f"P3\n{width} {height}\n{MAX_CHANNEL_VALUE}\n{body}\n"


def save_ppm(image: npt.NDArray[np.floating], filepath: str | Path) -> Path:
    """Save an image as a plain-text PPM file.

    Returns:
        The path written.
    """
    path = Path(filepath)
    path.write_text(encode_ppm(image), encoding="ascii")
    return path


def save_png(image: npt.NDArray[np.floating], filepath: str | Path) -> Path:
    """Save an image as an 8-bit PNG file.

    Returns:
        The path written.
    """
    path = Path(filepath)
    pil_image = PILImage.fromarray(image_to_uint8(image))
    pil_image.save(path)
    return path


def save_image(image: npt.NDArray[np.floating], filepath: str | Path) -> Path:
    """Save an image, choosing the format from the file extension.

    Raises:
        ValueError: If the extension is neither .ppm nor .png.
    """
    suffix = Path(filepath).suffix.lower()
    if suffix == ".ppm":
        return save_ppm(image, filepath)
    if suffix == ".png":
        return save_png(image, filepath)
    raise ValueError(f"Unsupported image format: {suffix or filepath}")


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Compute root mean squared error between two images.

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
