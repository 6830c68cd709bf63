"""
Pytest fixtures for pixelchain tests
"""

import numpy as np
import pytest

from pixelchain import Raster


@pytest.fixture
def gradient_raster() -> Raster:
    """
    Returns a 6x8 raster with distinct, smoothly varying values per channel.
    :return: The raster
    """
    ys, xs = np.mgrid[0:6, 0:8]
    pixels = np.stack([xs * 30, ys * 40, (xs + ys) * 15], axis=2).astype(np.uint8)
    return Raster(pixels)


@pytest.fixture
def noisy_raster() -> Raster:
    """
    Returns a 9x9 raster with pseudo random, reproducible content.
    :return: The raster
    """
    rng = np.random.default_rng(1234)
    return Raster(rng.integers(0, 256, size=(9, 9, 3), dtype=np.uint8))


@pytest.fixture
def gray_raster() -> Raster:
    """
    Returns a 4x4 constant gray raster (128 in all channels).
    :return: The raster
    """
    return Raster.new(4, 4, (128, 128, 128))


@pytest.fixture
def outlier_raster() -> Raster:
    """
    Returns a 7x7 raster of value 50 with a single white pixel in the middle.
    :return: The raster
    """
    pixels = np.full((7, 7, 3), 50, dtype=np.uint8)
    pixels[3, 3] = 255
    return Raster(pixels)


@pytest.fixture
def edge_raster() -> Raster:
    """
    Returns an 8x8 raster, black on the left half and white on the right half.
    :return: The raster
    """
    pixels = np.zeros((8, 8, 3), dtype=np.uint8)
    pixels[:, 4:] = 255
    return Raster(pixels)


@pytest.fixture
def image_path(tmp_path, gradient_raster):
    """
    Writes the gradient raster to a png file.
    :return: The file path
    """
    path = tmp_path / "gradient.png"
    gradient_raster.save(path)
    return path
