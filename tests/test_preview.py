"""Tests for the preview/export module.

This module tests image encoding and file output including:
- Per-channel encoding (round half up, clamp to [0, 255])
- Plain-text PPM (P3) layout
- PPM and PNG file output
- RMSE computation
"""

import os
import tempfile

import numpy as np
import pytest
from PIL import Image as PILImage


class TestEncodeChannel:
    """Test single-channel encoding."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0.0, 0),
            (1.0, 255),
            (2.5, 255),
            (-0.3, 0),
            (0.5, 128),
            (0.2, 51),
        ],
    )
    def test_encode_channel(self, value, expected):
        from spheretrace.preview.export import encode_channel

        assert encode_channel(value) == expected

    def test_encode_channel_rejects_nan(self):
        from spheretrace.preview.export import encode_channel

        with pytest.raises(ValueError):
            encode_channel(float("nan"))

    def test_infinity_saturates(self):
        from spheretrace.preview.export import encode_channel

        assert encode_channel(float("inf")) == 255
        assert encode_channel(float("-inf")) == 0


class TestImageToUint8:
    """Test whole-image conversion to 8-bit."""

    def test_output_type_and_shape(self):
        from spheretrace.preview.export import image_to_uint8

        image = np.random.rand(8, 5, 3).astype(np.float32)
        result = image_to_uint8(image)

        assert result.dtype == np.uint8
        assert result.shape == (8, 5, 3)

    def test_matches_encode_channel(self):
        from spheretrace.preview.export import encode_channel, image_to_uint8

        values = [0.0, 0.1, 0.25, 0.5, 0.75, 0.999, 1.0, 1.7, -0.4]
        image = np.array(values * 3, dtype=np.float64).reshape(1, len(values), 3)
        result = image_to_uint8(image)

        expected = [encode_channel(v) for v in image.reshape(-1)]
        assert result.reshape(-1).tolist() == expected

    def test_wrong_shape_raises(self):
        from spheretrace.preview.export import image_to_uint8

        with pytest.raises(ValueError, match="shape"):
            image_to_uint8(np.zeros((4, 4), dtype=np.float32))

    def test_nan_raises(self):
        from spheretrace.preview.export import image_to_uint8

        image = np.zeros((2, 2, 3), dtype=np.float32)
        image[1, 0, 2] = np.nan
        with pytest.raises(ValueError, match="NaN"):
            image_to_uint8(image)


class TestEncodePpm:
    """Test the P3 text layout."""

    def test_exact_document(self):
        from spheretrace.preview.export import encode_ppm

        # One row, two pixels
        image = np.array([[[1.0, 0.0, 0.5], [0.2, 2.0, -1.0]]], dtype=np.float64)

        assert encode_ppm(image) == "P3\n2 1\n255\n255 0 128 51 255 0 \n"

    def test_header_uses_width_then_height(self):
        from spheretrace.preview.export import encode_ppm

        document = encode_ppm(np.zeros((3, 7, 3), dtype=np.float32))
        lines = document.split("\n")

        assert lines[0] == "P3"
        assert lines[1] == "7 3"
        assert lines[2] == "255"

    def test_pixels_in_row_major_order(self):
        from spheretrace.preview.export import encode_ppm

        image = np.zeros((2, 2, 3), dtype=np.float32)
        image[0, 1] = (1.0, 1.0, 1.0)  # top-right
        image[1, 0] = (1.0, 0.0, 0.0)  # bottom-left
        body = encode_ppm(image).split("\n")[3]

        assert body == "0 0 0 255 255 255 255 0 0 0 0 0 "

    def test_single_trailing_newline(self):
        from spheretrace.preview.export import encode_ppm

        document = encode_ppm(np.zeros((4, 4, 3), dtype=np.float32))

        assert document.endswith(" \n")
        assert document.count("\n") == 4


class TestSaveFiles:
    """Test PPM and PNG output."""

    def test_save_ppm_writes_document(self, tmp_path):
        from spheretrace.preview.export import encode_ppm, save_ppm

        image = np.random.rand(6, 4, 3).astype(np.float32)
        path = save_ppm(image, tmp_path / "out.ppm")

        assert path == tmp_path / "out.ppm"
        assert path.read_text(encoding="ascii") == encode_ppm(image)

    def test_save_png_creates_file(self):
        from spheretrace.preview.export import image_to_uint8, save_png

        image = np.random.rand(16, 32, 3).astype(np.float32)

        with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as f:
            filepath = f.name

        try:
            save_png(image, filepath)

            assert os.path.exists(filepath)

            img = PILImage.open(filepath)
            assert img.size == (32, 16)
            assert img.mode == "RGB"
            assert np.array_equal(np.asarray(img), image_to_uint8(image))
        finally:
            if os.path.exists(filepath):
                os.remove(filepath)

    @pytest.mark.parametrize("name", ["a.ppm", "a.PPM", "b.png"])
    def test_save_image_dispatches_on_extension(self, tmp_path, name):
        from spheretrace.preview.export import save_image

        path = save_image(np.zeros((2, 2, 3), dtype=np.float32), tmp_path / name)

        assert path.exists()
        if path.suffix.lower() == ".ppm":
            assert path.read_text(encoding="ascii").startswith("P3\n")
        else:
            assert PILImage.open(path).format == "PNG"

    def test_save_image_unknown_extension_raises(self, tmp_path):
        from spheretrace.preview.export import save_image

        with pytest.raises(ValueError, match="Unsupported"):
            save_image(np.zeros((2, 2, 3), dtype=np.float32), tmp_path / "out.jpg")


class TestComputeRmse:
    """Test RMSE computation."""

    def test_rmse_identical_images(self):
        from spheretrace.preview.export import compute_rmse

        image = np.random.rand(10, 10, 3).astype(np.float32)
        assert compute_rmse(image, image) == 0.0

    def test_rmse_different_images(self):
        from spheretrace.preview.export import compute_rmse

        a = np.zeros((10, 10, 3), dtype=np.float32)
        b = np.full((10, 10, 3), 0.5, dtype=np.float32)
        assert abs(compute_rmse(a, b) - 0.5) < 1e-6

    def test_rmse_shape_mismatch_raises(self):
        from spheretrace.preview.export import compute_rmse

        with pytest.raises(ValueError):
            compute_rmse(np.zeros((10, 10, 3)), np.zeros((5, 5, 3)))
