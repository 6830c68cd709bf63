"""
Tests for the Raster class and its file I/O.
"""

import numpy as np
import PIL.Image
import pytest

from pixelchain import Raster, RasterDecodeError, RasterEncodeError


class TestConstruction:
    """Test raster creation and validation."""

    def test_wraps_copy(self):
        """The raster copies its input and reports width and height."""
        pixels = np.zeros((2, 3, 3), dtype=np.uint8)
        raster = Raster(pixels)
        pixels[0, 0] = 255
        assert raster.pixels[0, 0, 0] == 0
        assert raster.size == (3, 2)
        assert raster.width == 3
        assert raster.height == 2

    def test_read_only(self):
        """Pixel data can not be written."""
        raster = Raster.new(2, 2, (10, 20, 30))
        with pytest.raises(ValueError):
            raster.pixels[0, 0, 0] = 1

    @pytest.mark.parametrize("shape", [(4, 4), (4, 4, 4), (0, 4, 3)])
    def test_rejects_bad_shape(self, shape):
        """Only non-empty (H, W, 3) arrays are accepted."""
        with pytest.raises(ValueError):
            Raster(np.zeros(shape, dtype=np.uint8))

    def test_rejects_bad_dtype(self):
        """Only uint8 arrays are accepted."""
        with pytest.raises(ValueError):
            Raster(np.zeros((2, 2, 3), dtype=np.float32))

    def test_new_fills_color(self):
        """new() fills every pixel with the color."""
        raster = Raster.new(3, 2, (1, 2, 3))
        assert raster.pixels.shape == (2, 3, 3)
        assert np.all(raster.pixels == [1, 2, 3])

    def test_empty_sentinel(self):
        """Only a single black pixel counts as empty."""
        empty = Raster.empty()
        assert empty.size == (1, 1)
        assert empty.is_empty
        assert not Raster.new(1, 1, (0, 0, 1)).is_empty
        assert not Raster.new(2, 1).is_empty

    def test_from_float_clamps_and_rounds(self):
        """Float samples are clamped to [0, 255] and rounded."""
        values = np.array([[[-20.0, 127.5, 300.0], [1.4, 1.6, 254.6]]])
        raster = Raster.from_float(values)
        assert raster.pixels[0, 0].tolist() == [0, 128, 255]
        assert raster.pixels[0, 1].tolist() == [1, 2, 255]

    def test_from_channels(self):
        """Three planes stack into one raster."""
        r = np.full((2, 2), 10.0)
        g = np.full((2, 2), 20.0)
        b = np.full((2, 2), 30.0)
        raster = Raster.from_channels(r, g, b)
        assert raster.pixels[1, 1].tolist() == [10, 20, 30]

    def test_from_channels_shape_mismatch(self):
        """Planes of different shapes are rejected."""
        with pytest.raises(ValueError):
            Raster.from_channels(np.zeros((2, 2)), np.zeros((2, 3)), np.zeros((2, 2)))

    def test_channels_roundtrip(self, gradient_raster):
        """channels() gives float planes that rebuild the raster."""
        r, g, b = gradient_raster.channels()
        assert r.dtype == np.float64
        assert Raster.from_channels(r, g, b) == gradient_raster

    def test_split_channels(self, gradient_raster):
        """split_channels() gives uint8 planes."""
        r, g, b = gradient_raster.split_channels()
        assert r.dtype == np.uint8
        np.testing.assert_array_equal(g, gradient_raster.pixels[:, :, 1])


class TestComparison:
    """Test equality and string forms."""

    def test_equality(self, gradient_raster):
        """Rasters compare by size and content."""
        assert gradient_raster == gradient_raster.copy()
        assert gradient_raster != Raster.new(8, 6)
        assert gradient_raster != Raster.new(6, 8)

    def test_copy_is_independent(self, gradient_raster):
        """copy() does not share pixel storage."""
        assert gradient_raster.copy().pixels is not gradient_raster.pixels

    def test_str(self):
        """str() shows the size."""
        assert str(Raster.new(4, 3)) == "Raster (4x3 RGB)"


class TestPil:
    """Test Pillow conversion."""

    def test_to_pil(self, gradient_raster):
        """to_pil() returns an RGB image of the same size."""
        image = gradient_raster.to_pil()
        assert image.mode == "RGB"
        assert image.size == (8, 6)

    def test_from_pil_converts_mode(self):
        """RGBA images drop their alpha channel."""
        image = PIL.Image.new("RGBA", (3, 2), (10, 20, 30, 40))
        raster = Raster.from_pil(image)
        assert raster.size == (3, 2)
        assert raster.pixels[0, 0].tolist() == [10, 20, 30]

    def test_from_pil_grayscale(self):
        """Grayscale images spread to three equal channels."""
        image = PIL.Image.new("L", (2, 2), 77)
        raster = Raster.from_pil(image)
        assert raster.pixels[1, 1].tolist() == [77, 77, 77]


class TestFileIO:
    """Test loading and saving through Pillow."""

    @pytest.mark.parametrize("extension", ["png", "PNG", "bmp", "tif", "tiff"])
    def test_lossless_roundtrip(self, tmp_path, gradient_raster, extension):
        """Lossless formats load back exactly."""
        path = tmp_path / f"image.{extension}"
        gradient_raster.save(path)
        assert Raster.load(path) == gradient_raster

    def test_load_accepts_str(self, image_path, gradient_raster):
        """Paths may be given as strings."""
        assert Raster.load(str(image_path)) == gradient_raster

    def test_jpeg_is_close(self, tmp_path, gray_raster):
        """JPEG output stays within a couple of levels."""
        path = tmp_path / "image.jpg"
        gray_raster.save(path, quality=95)
        loaded = Raster.load(path)
        assert loaded.size == gray_raster.size
        assert np.abs(loaded.pixels.astype(int) - 128).max() <= 2

    def test_load_missing_file(self, tmp_path):
        """Missing files raise RasterDecodeError."""
        with pytest.raises(RasterDecodeError):
            Raster.load(tmp_path / "missing.png")

    def test_load_not_an_image(self, tmp_path):
        """Files that are not images raise RasterDecodeError."""
        path = tmp_path / "notes.png"
        path.write_text("not an image")
        with pytest.raises(RasterDecodeError):
            Raster.load(path)

    def test_save_unsupported_extension(self, tmp_path, gray_raster):
        """Unknown extensions raise RasterEncodeError."""
        with pytest.raises(RasterEncodeError):
            gray_raster.save(tmp_path / "image.xyz")

    def test_save_bad_quality(self, tmp_path, gray_raster):
        """JPEG quality outside [0, 100] is rejected."""
        with pytest.raises(RasterEncodeError):
            gray_raster.save(tmp_path / "image.jpg", quality=150)

    def test_save_missing_directory(self, tmp_path, gray_raster):
        """Writing into a missing directory raises RasterEncodeError."""
        with pytest.raises(RasterEncodeError):
            gray_raster.save(tmp_path / "missing" / "image.png")
